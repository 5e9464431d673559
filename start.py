"""Production startup - runs the API with uvicorn on $PORT."""
import os
import sys
from pathlib import Path

import uvicorn

sys.path.insert(0, str(Path(__file__).parent / "src"))

from api.server import app  # noqa: E402

port = int(os.environ.get("PORT", "10000"))

if __name__ == "__main__":
    print(f"[start.py] Starting on port {port}", flush=True)
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")

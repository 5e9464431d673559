#!/usr/bin/env python
"""FastAPI server for the youtools content-creator API."""

import logging
import sys
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

# Add src directory to Python path for imports
src_dir = Path(__file__).parent.parent
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.dependencies import get_config, get_orchestrator, get_resolver, shutdown_services
from api.routers import core, generation, seo, youtube
from utils.config import validate_config
from utils.errors import AdmissionDenied, PipelineError
from utils.logging import clear_request_context, get_logger, set_request_context, setup_logging

logger = logging.getLogger(__name__)
access_logger = get_logger("api.access")


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    setup_logging(config.get("log_level", "INFO"), config.get("log_json", False))

    for error in validate_config(config):
        logger.error(f"Configuration error: {error}")

    # Build the pipeline up front so the first request does not pay for it
    get_resolver()
    get_orchestrator()
    logger.info("youtools API started")
    yield
    await shutdown_services()
    logger.info("youtools API stopped")


app = FastAPI(title="youtools API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().get("cors_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Retry-After", "X-Request-ID"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag every log line of a request with its ID and echo it back."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
    set_request_context(request_id)
    try:
        response = await call_next(request)
        access_logger.info(
            "request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
        )
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        clear_request_context()


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    headers = None
    if isinstance(exc, AdmissionDenied):
        headers = {"Retry-After": str(exc.to_dict()["retry_after"])}
    if exc.status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid input", "details": jsonable_encoder(exc.errors())},
    )


app.include_router(core.router)
app.include_router(youtube.router)
app.include_router(generation.router)
app.include_router(seo.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")

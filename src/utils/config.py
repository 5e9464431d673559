"""Configuration loading and validation for youtools."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Get the project root directory (parent of src)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Load environment variables from .env file in project root
load_dotenv(PROJECT_ROOT / ".env")

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def load_config() -> dict:
    """Load configuration from environment variables."""
    config = {
        # Optional API keys (missing keys disable the matching tier)
        "gemini_api_key": os.getenv("GEMINI_API_KEY", ""),
        "gemini_model": os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        "youtube_api_key": os.getenv("YOUTUBE_API_KEY", ""),
        # Rate limiting: points per window per caller
        "rate_limit_points": int(os.getenv("RATE_LIMIT_POINTS", "120")),
        "rate_limit_window_seconds": float(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "300")),
        # Result caching
        "cache_enabled": _env_bool("CACHE_ENABLED", "true"),
        "cache_max_entries": int(os.getenv("CACHE_MAX_ENTRIES", "800")),
        "cache_ttl_seconds": float(os.getenv("CACHE_TTL_SECONDS", "600")),
        # Upstream timeouts
        "source_timeout_seconds": float(os.getenv("SOURCE_TIMEOUT_SECONDS", "15")),
        "ai_timeout_seconds": float(os.getenv("AI_TIMEOUT_SECONDS", "20")),
        # Metadata sources
        "ytdlp_enabled": _env_bool("YTDLP_ENABLED", "true"),
        "ytdlp_cookies_file": os.getenv("YTDLP_COOKIES_FILE"),
        "scraper_enabled": _env_bool("SCRAPER_ENABLED", "true"),
        # Logging
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "log_json": _env_bool("LOG_JSON", "false"),
        # CORS
        "cors_origins": [
            origin.strip()
            for origin in os.getenv(
                "CORS_ORIGINS", "http://localhost:5173,http://localhost:3000"
            ).split(",")
            if origin.strip()
        ],
    }

    return config


def validate_config(config: dict) -> list[str]:
    """Validate configuration and return list of errors."""
    errors = []

    if config.get("rate_limit_points", 0) <= 0:
        errors.append("RATE_LIMIT_POINTS must be positive")
    if config.get("rate_limit_window_seconds", 0) <= 0:
        errors.append("RATE_LIMIT_WINDOW_SECONDS must be positive")

    if config.get("cache_enabled", True):
        if config.get("cache_max_entries", 0) <= 0:
            errors.append("CACHE_MAX_ENTRIES must be positive when caching is enabled")
        if config.get("cache_ttl_seconds", 0) <= 0:
            errors.append("CACHE_TTL_SECONDS must be positive when caching is enabled")

    for key, env_name in (
        ("source_timeout_seconds", "SOURCE_TIMEOUT_SECONDS"),
        ("ai_timeout_seconds", "AI_TIMEOUT_SECONDS"),
    ):
        if config.get(key, 0) <= 0:
            errors.append(f"{env_name} must be positive")

    # Missing keys only disable tiers, they are not fatal
    if not config.get("gemini_api_key"):
        logger.warning("GEMINI_API_KEY not set, AI generation tier disabled")
    if not config.get("youtube_api_key"):
        logger.warning("YOUTUBE_API_KEY not set, YouTube Data API source disabled")

    return errors

"""Pydantic request/response models for the youtools API."""

from typing import Literal

from pydantic import BaseModel, Field

# Wire mode names; "rb" is rule-based
ModeName = Literal["rb", "ai", "economy"]

# =============================================================================
# Response Models
# =============================================================================


class RootResponse(BaseModel):
    """Root endpoint response."""

    message: str
    version: str

    model_config = {"json_schema_extra": {"examples": [{"message": "youtools API", "version": "1.0.0"}]}}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    ai_configured: bool
    sources: list[str]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "status": "healthy",
                    "ai_configured": False,
                    "sources": ["ytdlp", "html_scraper"],
                }
            ]
        }
    }


class CacheStatsResponse(BaseModel):
    """Result cache statistics."""

    enabled: bool
    total_requests: int
    hits: int
    misses: int
    hit_rate: float
    entry_count: int
    max_entries: int
    default_ttl_seconds: float


class GenerationResponse(BaseModel):
    """Common fields of every generation response."""

    mode: str
    requested_mode: str
    ai_attempted: bool
    bypass_reason: str | None = None
    degraded: bool
    count: int


class TitlesResponse(GenerationResponse):
    """Generated titles."""

    titles: list[str]
    original_text: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "titles": ["🔥 Sourdough Bread - Must See!"],
                    "original_text": "sourdough bread",
                    "mode": "rule-based",
                    "requested_mode": "rule-based",
                    "ai_attempted": False,
                    "bypass_reason": "not_requested",
                    "degraded": False,
                    "count": 1,
                }
            ]
        }
    }


class HashtagsResponse(GenerationResponse):
    """Generated hashtags."""

    hashtags: list[str]


class TagsResponse(GenerationResponse):
    """Generated tags."""

    tags: list[str]


class DescriptionResponse(GenerationResponse):
    """Generated description."""

    description: str


# =============================================================================
# Request Models
# =============================================================================


class RegionCheckRequest(BaseModel):
    """Region availability check."""

    input: str = Field(..., min_length=5, description="Video URL or 11-character ID")
    country: str = Field(..., min_length=2, max_length=2, description="ISO 3166-1 alpha-2 code")


class TitleGenerateRequest(BaseModel):
    """Title generation request."""

    text: str = Field(..., min_length=1, description="Topic or working title")
    mode: ModeName = "rb"


class HashtagGenerateRequest(BaseModel):
    """Hashtag generation request."""

    title: str = ""
    niche: str = ""
    max: int = Field(default=25, ge=5, le=50)
    mode: ModeName = "rb"


class TagGenerateRequest(BaseModel):
    """Tag generation request."""

    title: str = ""
    description: str = ""
    max: int = Field(default=25, ge=5, le=50)
    mode: ModeName = "rb"


class DescriptionGenerateRequest(BaseModel):
    """Description generation request."""

    title: str = Field(..., min_length=1)
    bullets: list[str] = Field(default_factory=list)
    mode: ModeName = "rb"


class KeywordDensityRequest(BaseModel):
    """Keyword density analysis request."""

    text: str = Field(..., min_length=3)
    stopwords: list[str] = Field(default_factory=list)

"""Core routes for the youtools API (root, health check, cache stats)."""

from fastapi import APIRouter, Depends

from api.dependencies import get_ai_service, get_cache, get_resolver
from api.schemas import CacheStatsResponse, HealthResponse, RootResponse
from services.ai_service import AIService
from services.metadata_resolver import MetadataResolver
from utils.cache import ResultCache

router = APIRouter(tags=["Core"])


@router.get(
    "/",
    response_model=RootResponse,
    summary="API root",
    description="Returns API name and version.",
)
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "youtools API", "version": "1.0.0"}


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns server health status and which upstream tiers are configured.",
)
async def health(
    ai_service: AIService = Depends(get_ai_service),
    resolver: MetadataResolver = Depends(get_resolver),
) -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "ai_configured": ai_service.is_configured(),
        "sources": [s.get_source_name() for s in resolver.sources if s.is_configured()],
    }


@router.get(
    "/api/cache/stats",
    response_model=CacheStatsResponse,
    summary="Cache statistics",
    description="Returns hit/miss counters and occupancy of the result cache.",
)
async def cache_stats(cache: ResultCache = Depends(get_cache)) -> dict:
    """Cache statistics endpoint."""
    return cache.get_stats()

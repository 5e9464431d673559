"""Service singletons and dependency injection for the youtools API.

Every pipeline component is built once per process from ``load_config`` and
handed to routes through FastAPI dependencies, so tests can swap any of them
with ``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from api.gate import RequestGate
from services.ai_service import AIService
from services.generation_orchestrator import GenerationOrchestrator
from services.metadata_resolver import MetadataResolver, default_sources
from utils.cache import ResultCache, load_cache_from_config
from utils.config import load_config
from utils.rate_limit import Admission, RateLimiter, load_rate_limiter_from_config

# Service singletons
_config: dict | None = None
_cache: ResultCache | None = None
_rate_limiter: RateLimiter | None = None
_ai_service: AIService | None = None
_resolver: MetadataResolver | None = None
_orchestrator: GenerationOrchestrator | None = None


def get_config() -> dict:
    """Get or load the process configuration."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_cache() -> ResultCache:
    """Get or create the shared result cache."""
    global _cache
    if _cache is None:
        _cache = load_cache_from_config(get_config())
    return _cache


def get_rate_limiter() -> RateLimiter:
    """Get or create the rate limiter."""
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = load_rate_limiter_from_config(get_config())
    return _rate_limiter


def get_ai_service() -> AIService:
    """Get or create the AI service instance."""
    global _ai_service
    if _ai_service is None:
        config = get_config()
        _ai_service = AIService(
            api_key=config.get("gemini_api_key", ""),
            model_name=config.get("gemini_model", "gemini-2.5-flash"),
        )
    return _ai_service


def get_resolver() -> MetadataResolver:
    """Get or create the metadata resolver."""
    global _resolver
    if _resolver is None:
        config = get_config()
        _resolver = MetadataResolver(
            sources=default_sources(config),
            cache=get_cache(),
            timeout=config.get("source_timeout_seconds", 15.0),
        )
    return _resolver


def get_orchestrator() -> GenerationOrchestrator:
    """Get or create the generation orchestrator."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = GenerationOrchestrator(
            ai_service=get_ai_service(),
            cache=get_cache(),
            ai_timeout=get_config().get("ai_timeout_seconds", 20.0),
        )
    return _orchestrator


def get_gate(limiter: RateLimiter = Depends(get_rate_limiter)) -> RequestGate:
    return RequestGate(limiter)


def enforce_rate_limit(request: Request, gate: RequestGate = Depends(get_gate)) -> Admission:
    """Route dependency: admit the caller or raise AdmissionDenied (429)."""
    return gate.check(gate.caller_key(request))


async def shutdown_services() -> None:
    """Release network clients and drop all singletons."""
    global _config, _cache, _rate_limiter, _ai_service, _resolver, _orchestrator
    if _resolver is not None:
        for source in _resolver.sources:
            close = getattr(source, "close", None)
            if close is not None:
                await close()
    if _cache is not None:
        _cache.log_stats()
    _config = _cache = _rate_limiter = _ai_service = _resolver = _orchestrator = None

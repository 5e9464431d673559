"""Content generation routes: titles, hashtags, tags and descriptions."""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import enforce_rate_limit, get_orchestrator
from api.schemas import (
    DescriptionGenerateRequest,
    DescriptionResponse,
    HashtagGenerateRequest,
    HashtagsResponse,
    TagGenerateRequest,
    TagsResponse,
    TitleGenerateRequest,
    TitlesResponse,
)
from models.generation import (
    ContentKind,
    GenerationMode,
    GenerationRequest,
    GenerationResult,
)
from services.generation_orchestrator import GenerationOrchestrator
from services.templates import TITLE_COUNT

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/youtube",
    tags=["Generation"],
    dependencies=[Depends(enforce_rate_limit)],
)


def _summary(result: GenerationResult) -> dict:
    summary = result.to_dict()
    summary.pop("items")
    summary["count"] = len(result.items)
    return summary


@router.post(
    "/title/generate",
    response_model=TitlesResponse,
    summary="Generate titles",
    description="Generates up to five titles, each at most 70 characters.",
)
async def generate_titles(
    body: TitleGenerateRequest,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> dict:
    """Title generation endpoint."""
    result = await orchestrator.generate(
        GenerationRequest(
            kind=ContentKind.TITLES,
            subject=body.text,
            mode=GenerationMode.parse(body.mode),
            max_results=TITLE_COUNT,
        )
    )
    return {"titles": result.items, "original_text": body.text, **_summary(result)}


@router.post(
    "/hashtags/generate",
    response_model=HashtagsResponse,
    summary="Generate hashtags",
    description="Generates hashtags for a title and optional niche.",
)
async def generate_hashtags(
    body: HashtagGenerateRequest,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> dict:
    """Hashtag generation endpoint."""
    result = await orchestrator.generate(
        GenerationRequest(
            kind=ContentKind.HASHTAGS,
            subject=body.title,
            niche=body.niche,
            mode=GenerationMode.parse(body.mode),
            max_results=body.max,
        )
    )
    return {"hashtags": result.items, **_summary(result)}


@router.post(
    "/tags/generate",
    response_model=TagsResponse,
    summary="Generate tags",
    description="Generates search tags from a title and description.",
)
async def generate_tags(
    body: TagGenerateRequest,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> dict:
    """Tag generation endpoint."""
    result = await orchestrator.generate(
        GenerationRequest(
            kind=ContentKind.TAGS,
            subject=body.title,
            description=body.description,
            mode=GenerationMode.parse(body.mode),
            max_results=body.max,
        )
    )
    return {"tags": result.items, **_summary(result)}


@router.post(
    "/description/generate",
    response_model=DescriptionResponse,
    summary="Generate description",
    description="Generates a full video description with optional bullet points.",
)
async def generate_description(
    body: DescriptionGenerateRequest,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> dict:
    """Description generation endpoint."""
    result = await orchestrator.generate(
        GenerationRequest(
            kind=ContentKind.DESCRIPTION,
            subject=body.title,
            bullets=tuple(body.bullets),
            mode=GenerationMode.parse(body.mode),
            max_results=1,
        )
    )
    description = result.items[0] if result.items else ""
    return {"description": description, **_summary(result)}

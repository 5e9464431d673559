"""Video lookup routes: metadata, tags, hashtags and region availability."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from api.dependencies import enforce_rate_limit, get_resolver
from api.schemas import RegionCheckRequest
from services.metadata_resolver import MetadataResolver

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/youtube",
    tags=["YouTube"],
    dependencies=[Depends(enforce_rate_limit)],
)

VideoInput = Annotated[str, Query(min_length=5, description="Video URL or 11-character ID")]


@router.get(
    "/info",
    summary="Video metadata",
    description="Resolves video metadata through the Data API, yt-dlp and page scraping, in order.",
)
async def video_info(
    input: VideoInput,
    resolver: MetadataResolver = Depends(get_resolver),
) -> dict:
    """Video info endpoint."""
    resolution = await resolver.resolve_detailed(input)
    return {
        "cached": resolution.cached,
        "method": resolution.source,
        **resolution.metadata.to_dict(),
    }


@router.get(
    "/tags",
    summary="Video tags",
    description="Returns a video's own tags, or tags extracted from its title and description.",
)
async def video_tags(
    input: VideoInput,
    resolver: MetadataResolver = Depends(get_resolver),
) -> dict:
    """Tag extraction endpoint."""
    extraction = await resolver.extract_tags(input)
    return extraction.to_dict()


@router.get(
    "/hashtags/extract",
    summary="Video hashtags",
    description="Returns hashtags written in a video's description, or generated ones when it has none.",
)
async def video_hashtags(
    input: VideoInput,
    resolver: MetadataResolver = Depends(get_resolver),
) -> dict:
    """Hashtag extraction endpoint."""
    extraction = await resolver.extract_video_hashtags(input)
    return extraction.to_dict()


@router.post(
    "/region-check",
    summary="Region availability",
    description="Checks whether a video can be watched from a country.",
)
async def region_check(
    body: RegionCheckRequest,
    resolver: MetadataResolver = Depends(get_resolver),
) -> dict:
    """Region check endpoint."""
    check = await resolver.check_region(body.input, body.country)
    logger.info(f"Region check {check.metadata.video_id} in {check.country}: {check.available}")
    return check.to_dict()

"""Metadata resolver: ordered fallback over independent metadata sources.

Sources are tried strictly in order (Data API, yt-dlp, page scraper by
default). The first source that yields a metadata record with a non-empty
title wins; its result is cached so repeated lookups within the TTL touch no
source at all.
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Sequence

from models.video import VideoMetadata, extract_video_id
from services.free_generators import free_hashtags
from services.metadata_sources import (
    HTMLScraperSource,
    MetadataSource,
    YouTubeDataAPISource,
    YtDlpSource,
)
from services.templates import rule_based_tags
from services.text_analysis import extract_hashtags
from utils.cache import DERIVED_TTL, INFO_TTL, ResultCache
from utils.errors import UpstreamExhausted, ValidationFailure

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_TIMEOUT = 15.0
EXTRACTED_TAG_COUNT = 25
EXTRACTED_HASHTAG_COUNT = 15


class ResolutionState(str, Enum):
    """Where a resolution is (or ended) in the source chain."""

    TRY_PRIMARY = "try_primary"
    TRY_SECONDARY = "try_secondary"
    TRY_TERTIARY = "try_tertiary"
    RESOLVED = "resolved"
    EXHAUSTED = "exhausted"


_TRY_STATES = (
    ResolutionState.TRY_PRIMARY,
    ResolutionState.TRY_SECONDARY,
    ResolutionState.TRY_TERTIARY,
)


def info_cache_key(video_id: str) -> str:
    return f"yt:info:{video_id}"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one video."""

    metadata: VideoMetadata
    state: ResolutionState
    source: str
    cached: bool = False
    attempts: tuple = ()


@dataclass(frozen=True)
class TagExtraction:
    """Tags of an existing video, from its metadata or extracted from its text."""

    video_id: str
    video_title: str
    tags: List[str]
    source: str  # "video_metadata" or "extracted"
    cached: bool = False

    def to_dict(self) -> dict:
        return {
            "tags": self.tags,
            "count": len(self.tags),
            "videoTitle": self.video_title,
            "source": self.source,
            "cached": self.cached,
        }


@dataclass(frozen=True)
class HashtagExtraction:
    """Hashtags of an existing video."""

    video_id: str
    video_title: str
    hashtags: List[str]
    has_description: bool
    extracted_from_description: bool
    cached: bool = False

    def to_dict(self) -> dict:
        return {
            "hashtags": self.hashtags,
            "count": len(self.hashtags),
            "videoId": self.video_id,
            "videoTitle": self.video_title,
            "hasDescription": self.has_description,
            "extractedFromDescription": self.extracted_from_description,
            "cached": self.cached,
        }


@dataclass(frozen=True)
class RegionCheck:
    """Availability of a video in one country."""

    country: str
    available: bool
    metadata: VideoMetadata
    alternative_countries: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "availability": {
                "available": self.available,
                "reason": "Video is available" if self.available else "Video is restricted in this country",
            },
            "videoInfo": {
                "id": self.metadata.video_id,
                "title": self.metadata.title,
                "author": self.metadata.author,
                "lengthSeconds": self.metadata.duration_seconds,
            },
            "alternativeCountries": self.alternative_countries,
            "country": self.country,
        }


def default_sources(config: dict) -> List[MetadataSource]:
    """Build the default source chain from config."""
    return [
        YouTubeDataAPISource(api_key=config.get("youtube_api_key") or ""),
        YtDlpSource(
            enabled=config.get("ytdlp_enabled", True),
            cookies_file=config.get("ytdlp_cookies_file"),
        ),
        HTMLScraperSource(enabled=config.get("scraper_enabled", True)),
    ]


class MetadataResolver:
    """Resolve video metadata through an ordered chain of sources."""

    def __init__(
        self,
        sources: Sequence[MetadataSource],
        cache: ResultCache,
        timeout: float = DEFAULT_SOURCE_TIMEOUT,
    ):
        """Initialize the resolver.

        Args:
            sources: Sources in priority order
            cache: Shared result cache
            timeout: Per-source timeout in seconds
        """
        self.sources = list(sources)
        self.cache = cache
        self.timeout = timeout

        configured = [s.get_source_name() for s in self.sources if s.is_configured()]
        logger.info(f"Metadata resolver sources: {', '.join(configured) or 'none'}")

    @staticmethod
    def canonical_id(value: Optional[str]) -> str:
        """Canonicalize user input to a video ID.

        Raises:
            ValidationFailure: If the input does not identify a video
        """
        video_id = extract_video_id(value)
        if not video_id:
            raise ValidationFailure("invalid YouTube URL or ID")
        return video_id

    async def resolve(self, value: str) -> VideoMetadata:
        """Resolve an ID or URL to normalized metadata."""
        resolution = await self.resolve_detailed(value)
        return resolution.metadata

    async def resolve_detailed(self, value: str) -> Resolution:
        """Resolve an ID or URL, reporting which source produced the result.

        Args:
            value: Video ID or URL

        Returns:
            Resolution in state RESOLVED

        Raises:
            ValidationFailure: If the input does not identify a video
            UpstreamExhausted: If every source failed
        """
        video_id = self.canonical_id(value)
        key = info_cache_key(video_id)

        cached = self.cache.get(key)
        if cached is not None:
            return Resolution(
                metadata=cached,
                state=ResolutionState.RESOLVED,
                source=cached.source,
                cached=True,
            )

        attempts: list[dict] = []
        for index, source in enumerate(self.sources):
            state = _TRY_STATES[min(index, len(_TRY_STATES) - 1)]
            name = source.get_source_name()

            if not source.is_configured():
                attempts.append({"source": name, "state": state.value, "error": "not configured"})
                continue

            outcome = await self._try_source(source, video_id)
            if isinstance(outcome, VideoMetadata):
                self.cache.put(key, outcome, ttl=INFO_TTL)
                logger.info(f"Resolved {video_id} via {name}")
                return Resolution(
                    metadata=outcome,
                    state=ResolutionState.RESOLVED,
                    source=name,
                    attempts=tuple(attempts),
                )

            logger.warning(f"Source {name} failed for {video_id}: {outcome}")
            attempts.append({"source": name, "state": state.value, "error": outcome})

        logger.error(f"All metadata sources failed for {video_id} ({ResolutionState.EXHAUSTED.value})")
        raise UpstreamExhausted(video_id, attempts)

    async def _try_source(self, source: MetadataSource, video_id: str) -> "VideoMetadata | str":
        """Run one source; return metadata on success or a failure note."""
        try:
            metadata = await asyncio.wait_for(source.attempt(video_id), timeout=self.timeout)
        except asyncio.TimeoutError:
            return f"timed out after {self.timeout}s"
        except Exception as e:
            return str(e) or type(e).__name__

        if not metadata.title:
            return "empty title"
        return metadata

    async def extract_tags(self, value: str) -> TagExtraction:
        """Tags of a video: its own keywords, else tags ranked from title and description."""
        video_id = self.canonical_id(value)
        key = f"yt:tags:{video_id}"

        cached = self.cache.get(key)
        if cached is not None:
            return replace(cached, cached=True)

        metadata = await self.resolve(video_id)
        if metadata.keywords:
            tags, source = list(metadata.keywords), "video_metadata"
        else:
            tags = rule_based_tags(metadata.title, metadata.description, EXTRACTED_TAG_COUNT)
            source = "extracted"

        result = TagExtraction(
            video_id=video_id, video_title=metadata.title, tags=tags, source=source
        )
        self.cache.put(key, result, ttl=DERIVED_TTL)
        return result

    async def extract_video_hashtags(self, value: str) -> HashtagExtraction:
        """Hashtags written in the description, else generated from title and description."""
        video_id = self.canonical_id(value)
        key = f"yt:hashtags:{video_id}"

        cached = self.cache.get(key)
        if cached is not None:
            return replace(cached, cached=True)

        metadata = await self.resolve(video_id)
        hashtags = extract_hashtags(metadata.description)
        from_description = bool(hashtags)
        if not hashtags:
            hashtags = free_hashtags(
                f"{metadata.title} {metadata.description}", "", EXTRACTED_HASHTAG_COUNT
            )

        result = HashtagExtraction(
            video_id=video_id,
            video_title=metadata.title,
            hashtags=hashtags,
            has_description=bool(metadata.description),
            extracted_from_description=from_description,
        )
        self.cache.put(key, result, ttl=DERIVED_TTL)
        return result

    async def check_region(self, value: str, country: str) -> RegionCheck:
        """Check whether a video is watchable from a two-letter country code."""
        country = (country or "").strip().upper()
        if len(country) != 2 or not country.isalpha():
            raise ValidationFailure("country must be a 2-letter code")

        metadata = await self.resolve(value)
        return RegionCheck(
            country=country,
            available=metadata.is_available_in(country),
            metadata=metadata,
            alternative_countries=list(metadata.available_countries or ()),
        )

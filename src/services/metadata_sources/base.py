"""Base abstraction for video metadata sources."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from models.video import VideoMetadata


def to_count(value: Any) -> int:
    """Coerce an upstream number (int, numeric string, None) to a non-negative int."""
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def to_region_codes(value: Optional[Iterable[str]]) -> Optional[tuple[str, ...]]:
    """Normalize a region list; None stays None (unrestricted)."""
    if value is None:
        return None
    return tuple(str(code).upper() for code in value if code)


class MetadataSource(ABC):
    """Abstract base class for metadata sources (Data API, yt-dlp, page scraping).

    Each source returns its own raw payload shape from ``fetch``; ``normalize``
    maps it onto VideoMetadata so the resolver never branches on source identity.
    """

    @abstractmethod
    async def fetch(self, video_id: str) -> dict:
        """Fetch the raw payload for a video.

        Args:
            video_id: Canonical 11-character video ID

        Returns:
            Source-specific payload

        Raises:
            MetadataSourceError: If the source cannot produce a payload
        """

    @abstractmethod
    def normalize(self, payload: dict, video_id: str) -> VideoMetadata:
        """Map a raw payload onto VideoMetadata, defaulting missing fields."""

    @abstractmethod
    def get_source_name(self) -> str:
        """Get the name of this source (e.g., "youtube_data_api", "ytdlp")."""

    def is_configured(self) -> bool:
        """Check if this source has required configuration (API keys, etc.).

        Default implementation returns True (no config required).
        Override in subclasses that require API keys.
        """
        return True

    async def attempt(self, video_id: str) -> VideoMetadata:
        """Fetch and normalize in one step."""
        payload = await self.fetch(video_id)
        return self.normalize(payload, video_id)

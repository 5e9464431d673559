"""Video-related data models."""

import re
from dataclasses import asdict, dataclass, field
from typing import Optional

VIDEO_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{11}$")

# Watch, short, embed and legacy URL shapes
_VIDEO_URL_PATTERNS = [
    re.compile(r"(?:youtube\.com/watch\?(?:.*&)?v=)([A-Za-z0-9_-]{11})"),
    re.compile(r"youtu\.be/([A-Za-z0-9_-]{11})"),
    re.compile(r"youtube\.com/embed/([A-Za-z0-9_-]{11})"),
    re.compile(r"youtube\.com/v/([A-Za-z0-9_-]{11})"),
    re.compile(r"youtube\.com/shorts/([A-Za-z0-9_-]{11})"),
    re.compile(r"youtube\.com/live/([A-Za-z0-9_-]{11})"),
]


def extract_video_id(value: str | None) -> Optional[str]:
    """Canonicalize a YouTube URL or bare ID to the 11-character video ID.

    Args:
        value: Raw user input (ID or URL)

    Returns:
        Video ID, or None if the input does not identify a video
    """
    if not value:
        return None
    value = value.strip()
    if VIDEO_ID_PATTERN.match(value):
        return value
    for pattern in _VIDEO_URL_PATTERNS:
        match = pattern.search(value)
        if match:
            return match.group(1)
    return None


@dataclass(frozen=True)
class VideoMetadata:
    """Normalized metadata for one video, whichever source produced it.

    Every field except ``upload_date`` and ``available_countries`` defaults to an
    empty value, so consumers never branch on missing keys. ``available_countries``
    of None means the video is unrestricted.
    """

    video_id: str
    title: str = ""
    description: str = ""
    author: str = ""
    channel_id: str = ""
    duration_seconds: int = 0
    view_count: int = 0
    keywords: tuple[str, ...] = ()
    upload_date: Optional[str] = None
    available_countries: Optional[tuple[str, ...]] = None
    blocked_countries: tuple[str, ...] = ()
    is_live: bool = False
    thumbnails: tuple[str, ...] = field(default_factory=tuple)
    source: str = ""

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"

    def is_available_in(self, country: str) -> bool:
        """Check whether the video can be watched from a region code."""
        country = country.upper()
        if country in self.blocked_countries:
            return False
        if self.available_countries is None:
            return True
        return country in self.available_countries

    def to_dict(self) -> dict:
        data = asdict(self)
        data["url"] = self.url
        data["keywords"] = list(self.keywords)
        data["thumbnails"] = list(self.thumbnails)
        data["blocked_countries"] = list(self.blocked_countries)
        if self.available_countries is not None:
            data["available_countries"] = list(self.available_countries)
        return data

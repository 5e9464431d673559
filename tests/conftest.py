"""Shared pytest fixtures for youtools tests."""

import json
import sys
from pathlib import Path
from typing import Dict

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from models.video import VideoMetadata  # noqa: E402
from services.metadata_sources.base import MetadataSource  # noqa: E402
from utils.cache import ResultCache  # noqa: E402
from utils.errors import MetadataSourceError  # noqa: E402

VIDEO_ID = "dQw4w9WgXcQ"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSource(MetadataSource):
    """Scriptable metadata source that records every fetch."""

    def __init__(self, name: str, payload: Dict | None = None, error: Exception | None = None,
                 configured: bool = True, delay: float = 0.0):
        self.name = name
        self.payload = payload
        self.error = error
        self.configured = configured
        self.delay = delay
        self.calls: list[str] = []

    def get_source_name(self) -> str:
        return self.name

    def is_configured(self) -> bool:
        return self.configured

    async def fetch(self, video_id: str) -> dict:
        self.calls.append(video_id)
        if self.delay:
            import asyncio

            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.payload is None:
            raise MetadataSourceError(self.name, "no payload")
        return self.payload

    def normalize(self, payload: dict, video_id: str) -> VideoMetadata:
        return VideoMetadata(
            video_id=video_id,
            title=payload.get("title", ""),
            description=payload.get("description", ""),
            keywords=tuple(payload.get("keywords", ())),
            available_countries=payload.get("countries"),
            source=self.name,
        )


@pytest.fixture
def clock() -> FakeClock:
    """Controllable clock for TTL and window tests."""
    return FakeClock()


@pytest.fixture
def make_source():
    """Factory for scriptable metadata sources."""
    return FakeSource


@pytest.fixture
def video_id() -> str:
    return VIDEO_ID


@pytest.fixture
def cache(clock) -> ResultCache:
    """Fresh result cache driven by the fake clock."""
    return ResultCache(max_entries=50, clock=clock)


@pytest.fixture
def sample_config() -> Dict:
    """Sample configuration for testing."""
    return {
        "gemini_api_key": "",
        "gemini_model": "gemini-2.5-flash",
        "youtube_api_key": "",
        "rate_limit_points": 120,
        "rate_limit_window_seconds": 300.0,
        "cache_enabled": True,
        "cache_max_entries": 800,
        "cache_ttl_seconds": 600.0,
        "source_timeout_seconds": 15.0,
        "ai_timeout_seconds": 20.0,
        "ytdlp_enabled": True,
        "ytdlp_cookies_file": None,
        "scraper_enabled": True,
        "log_level": "INFO",
        "log_json": False,
        "cors_origins": ["*"],
    }


@pytest.fixture
def data_api_item() -> Dict:
    """One item of a YouTube Data API videos.list response."""
    return {
        "id": VIDEO_ID,
        "snippet": {
            "title": "Never Gonna Give You Up",
            "description": "The official video. #rickroll #80s",
            "channelTitle": "Rick Astley",
            "channelId": "UCuAXFkgsw1L7xaCfnd5JJOw",
            "publishedAt": "2009-10-25T06:57:33Z",
            "tags": ["rick astley", "never gonna give you up"],
            "liveBroadcastContent": "none",
            "thumbnails": {
                "default": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/default.jpg"},
                "high": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg"},
            },
        },
        "contentDetails": {
            "duration": "PT3M33S",
            "regionRestriction": {"blocked": ["DE"]},
        },
        "statistics": {"viewCount": "1500000000"},
    }


@pytest.fixture
def ytdlp_info() -> Dict:
    """Sanitized yt-dlp extract_info result."""
    return {
        "id": VIDEO_ID,
        "title": "Never Gonna Give You Up",
        "description": "The official video.",
        "uploader": "Rick Astley",
        "channel_id": "UCuAXFkgsw1L7xaCfnd5JJOw",
        "duration": 213,
        "view_count": 1500000000,
        "tags": ["rick astley"],
        "upload_date": "20091025",
        "is_live": False,
        "thumbnails": [{"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg"}],
    }


@pytest.fixture
def player_response() -> Dict:
    """ytInitialPlayerResponse blob embedded in a watch page."""
    return {
        "playabilityStatus": {"status": "OK"},
        "videoDetails": {
            "videoId": VIDEO_ID,
            "title": "Never Gonna Give You Up",
            "shortDescription": "The official video. #rickroll",
            "author": "Rick Astley",
            "channelId": "UCuAXFkgsw1L7xaCfnd5JJOw",
            "lengthSeconds": "213",
            "viewCount": "1500000000",
            "keywords": ["rick astley", "80s"],
            "isLiveContent": False,
            "thumbnail": {"thumbnails": [{"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/hq.jpg"}]},
        },
        "microformat": {
            "playerMicroformatRenderer": {
                "availableCountries": ["US", "gb", "FR"],
                "uploadDate": "2009-10-24",
            }
        },
    }


@pytest.fixture
def watch_page_html(player_response) -> str:
    """Watch page HTML with an embedded player response."""
    return (
        "<html><head><title>Never Gonna Give You Up - YouTube</title></head><body>"
        f"<script>var ytInitialPlayerResponse = {json.dumps(player_response)};var meta = 1;</script>"
        "</body></html>"
    )

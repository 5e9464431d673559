"""YouTube Data API v3 metadata source.

The structured, most reliable source: one ``videos.list`` call (1 quota unit)
returns snippet, contentDetails, statistics and status for a video. Requires
an API key; without one the source reports itself unconfigured and the
resolver skips it.
"""

import asyncio
import logging
import re
import threading
from typing import Optional

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from models.video import VideoMetadata
from services.metadata_sources.base import MetadataSource, to_count, to_region_codes
from utils.errors import MetadataSourceError

logger = logging.getLogger(__name__)

_ISO_DURATION = re.compile(
    r"^P(?:(?P<days>\d+)D)?(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?$"
)


def parse_iso_duration(duration: Optional[str]) -> int:
    """Parse an ISO 8601 duration ("PT5M30S", "P1DT2H") to seconds.

    Args:
        duration: Duration string from contentDetails

    Returns:
        Duration in seconds, 0 when absent or malformed
    """
    if not duration:
        return 0
    match = _ISO_DURATION.match(duration)
    if not match:
        return 0
    parts = {name: int(value or 0) for name, value in match.groupdict().items()}
    return parts["days"] * 86400 + parts["hours"] * 3600 + parts["minutes"] * 60 + parts["seconds"]


class YouTubeDataAPISource(MetadataSource):
    """Metadata from the official YouTube Data API v3."""

    PARTS = "snippet,contentDetails,statistics"

    def __init__(self, api_key: str = ""):
        """Initialize the Data API source.

        Args:
            api_key: YouTube Data API v3 key (empty disables the source)
        """
        self.api_key = api_key
        self._youtube = None
        self._lock = threading.RLock()  # googleapiclient objects are not thread-safe

        if not api_key:
            logger.info("[DataAPI] No API key configured. Set YOUTUBE_API_KEY to enable.")

    def get_source_name(self) -> str:
        return "youtube_data_api"

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _client(self):
        if self._youtube is None:
            self._youtube = build("youtube", "v3", developerKey=self.api_key, cache_discovery=False)
        return self._youtube

    def _fetch_sync(self, video_id: str) -> dict:
        with self._lock:
            try:
                response = self._client().videos().list(part=self.PARTS, id=video_id).execute()
            except HttpError as e:
                raise MetadataSourceError(
                    self.get_source_name(), f"HTTP {e.resp.status} for {video_id}"
                ) from e

        items = response.get("items") or []
        if not items:
            raise MetadataSourceError(self.get_source_name(), f"Video {video_id} not found")
        return items[0]

    async def fetch(self, video_id: str) -> dict:
        if not self.api_key:
            raise MetadataSourceError(self.get_source_name(), "No API key configured")
        logger.debug(f"[DataAPI] Fetching {video_id}")
        return await asyncio.to_thread(self._fetch_sync, video_id)

    def normalize(self, payload: dict, video_id: str) -> VideoMetadata:
        snippet = payload.get("snippet") or {}
        details = payload.get("contentDetails") or {}
        statistics = payload.get("statistics") or {}
        restriction = details.get("regionRestriction") or {}

        thumbnails = tuple(
            thumb["url"]
            for thumb in (snippet.get("thumbnails") or {}).values()
            if isinstance(thumb, dict) and thumb.get("url")
        )

        return VideoMetadata(
            video_id=payload.get("id") or video_id,
            title=snippet.get("title") or "",
            description=snippet.get("description") or "",
            author=snippet.get("channelTitle") or "",
            channel_id=snippet.get("channelId") or "",
            duration_seconds=parse_iso_duration(details.get("duration")),
            view_count=to_count(statistics.get("viewCount")),
            keywords=tuple(snippet.get("tags") or ()),
            upload_date=snippet.get("publishedAt"),
            available_countries=to_region_codes(restriction.get("allowed")),
            blocked_countries=to_region_codes(restriction.get("blocked")) or (),
            is_live=snippet.get("liveBroadcastContent") == "live",
            thumbnails=thumbnails,
            source=self.get_source_name(),
        )

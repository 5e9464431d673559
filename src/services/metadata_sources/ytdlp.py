"""yt-dlp metadata source.

Uses yt-dlp's extractor in info-only mode. Needs no API key and tolerates
most consent and bot walls, so it sits between the Data API and raw page
scraping.
"""

import asyncio
import logging
from typing import Optional

import yt_dlp

from models.video import VideoMetadata
from services.metadata_sources.base import MetadataSource, to_count, to_region_codes
from utils.errors import MetadataSourceError

logger = logging.getLogger(__name__)


class YtDlpSource(MetadataSource):
    """Metadata extracted with yt-dlp (``extract_info`` with ``download=False``)."""

    def __init__(self, enabled: bool = True, cookies_file: Optional[str] = None):
        """Initialize the yt-dlp source.

        Args:
            enabled: Whether this source takes part in resolution
            cookies_file: Optional Netscape cookies file for age-gated videos
        """
        self.enabled = enabled
        self.cookies_file = cookies_file

    def get_source_name(self) -> str:
        return "ytdlp"

    def is_configured(self) -> bool:
        return self.enabled

    def _options(self) -> dict:
        ydl_opts = {
            "quiet": True,
            "no_warnings": True,
            "skip_download": True,
            "noplaylist": True,
        }
        if self.cookies_file:
            ydl_opts["cookiefile"] = self.cookies_file
        return ydl_opts

    def _fetch_sync(self, video_id: str) -> dict:
        url = f"https://www.youtube.com/watch?v={video_id}"
        try:
            with yt_dlp.YoutubeDL(self._options()) as ydl:
                info = ydl.extract_info(url, download=False)
                if not info:
                    raise MetadataSourceError(
                        self.get_source_name(), f"No info returned for {video_id}"
                    )
                return ydl.sanitize_info(info)
        except yt_dlp.DownloadError as e:
            raise MetadataSourceError(self.get_source_name(), str(e)) from e

    async def fetch(self, video_id: str) -> dict:
        logger.debug(f"[yt-dlp] Extracting {video_id}")
        return await asyncio.to_thread(self._fetch_sync, video_id)

    def normalize(self, payload: dict, video_id: str) -> VideoMetadata:
        thumbnails = tuple(
            thumb["url"]
            for thumb in payload.get("thumbnails") or []
            if isinstance(thumb, dict) and thumb.get("url")
        )
        if not thumbnails and payload.get("thumbnail"):
            thumbnails = (payload["thumbnail"],)

        return VideoMetadata(
            video_id=payload.get("id") or video_id,
            title=payload.get("title") or "",
            description=payload.get("description") or "",
            author=payload.get("uploader") or payload.get("channel") or "",
            channel_id=payload.get("channel_id") or "",
            duration_seconds=to_count(payload.get("duration")),
            view_count=to_count(payload.get("view_count")),
            keywords=tuple(payload.get("tags") or ()),
            upload_date=payload.get("upload_date"),
            available_countries=to_region_codes(payload.get("available_countries")),
            is_live=bool(payload.get("is_live")),
            thumbnails=thumbnails,
            source=self.get_source_name(),
        )

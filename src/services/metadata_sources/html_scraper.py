"""Watch-page scraping metadata source.

Last resort when the structured sources fail: downloads the public watch
page and reads the embedded ``ytInitialPlayerResponse`` JSON. Pages without
that blob (consent walls, layout changes) still expose Open Graph tags, which
give at least a title and description.
"""

import json
import logging
import re
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from models.video import VideoMetadata
from services.metadata_sources.base import MetadataSource, to_count, to_region_codes
from utils.errors import MetadataSourceError

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

_PLAYER_RESPONSE_MARKER = re.compile(r"var ytInitialPlayerResponse\s*=\s*")
_BLOCKED_STATUSES = ("UNPLAYABLE", "ERROR")


def parse_player_response(html: str) -> Optional[dict]:
    """Pull the ``ytInitialPlayerResponse`` object out of a watch page.

    Args:
        html: Raw watch page HTML

    Returns:
        Decoded player response, or None if the page does not embed one
    """
    match = _PLAYER_RESPONSE_MARKER.search(html)
    if not match:
        return None
    try:
        player, _ = json.JSONDecoder().raw_decode(html, match.end())
    except json.JSONDecodeError:
        logger.debug("[Scraper] ytInitialPlayerResponse is not valid JSON")
        return None
    return player if isinstance(player, dict) else None


def parse_meta_tags(html: str) -> dict:
    """Read Open Graph / standard meta tags from a watch page."""
    soup = BeautifulSoup(html, "html.parser")

    def meta(attr: str, name: str) -> str:
        tag = soup.find("meta", attrs={attr: name})
        return (tag.get("content") or "").strip() if tag else ""

    title = meta("property", "og:title") or meta("name", "title")
    if not title and soup.title and soup.title.string:
        title = soup.title.string.replace(" - YouTube", "").strip()

    author_tag = soup.find("link", attrs={"itemprop": "name"})
    author = (author_tag.get("content") or "") if author_tag else ""

    return {
        "title": title,
        "description": meta("property", "og:description") or meta("name", "description"),
        "author": author or meta("name", "author"),
    }


class HTMLScraperSource(MetadataSource):
    """Metadata scraped from the public watch page."""

    def __init__(self, enabled: bool = True, client: Optional[httpx.AsyncClient] = None):
        """Initialize the scraper.

        Args:
            enabled: Whether this source takes part in resolution
            client: Optional preconfigured HTTP client (tests inject a mock transport)
        """
        self.enabled = enabled
        self.client = client or httpx.AsyncClient(
            headers=BROWSER_HEADERS, timeout=10.0, follow_redirects=True
        )

    def get_source_name(self) -> str:
        return "html_scraper"

    def is_configured(self) -> bool:
        return self.enabled

    async def fetch(self, video_id: str) -> dict:
        url = WATCH_URL.format(video_id=video_id)
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise MetadataSourceError(self.get_source_name(), f"Timed out fetching {url}") from e
        except httpx.HTTPStatusError as e:
            raise MetadataSourceError(
                self.get_source_name(), f"HTTP {e.response.status_code} for {url}"
            ) from e
        except httpx.HTTPError as e:
            raise MetadataSourceError(self.get_source_name(), f"Request failed: {e}") from e

        html = response.text
        player = parse_player_response(html)
        if player and player.get("videoDetails"):
            return {"player": player}

        logger.debug(f"[Scraper] No player response for {video_id}, falling back to meta tags")
        return {"meta": parse_meta_tags(html)}

    def normalize(self, payload: dict, video_id: str) -> VideoMetadata:
        if "player" in payload:
            return self._from_player(payload["player"], video_id)
        return self._from_meta(payload.get("meta") or {}, video_id)

    def _from_player(self, player: dict, video_id: str) -> VideoMetadata:
        details = player.get("videoDetails") or {}
        microformat = (player.get("microformat") or {}).get("playerMicroformatRenderer") or {}
        status = (player.get("playabilityStatus") or {}).get("status")
        # isLiveContent stays true on finished-stream VODs
        broadcast = microformat.get("liveBroadcastDetails") or {}

        countries = microformat.get("availableCountries") or details.get("availableCountries")
        available = to_region_codes(countries) if countries else None
        # Unplayable with no list means region restricted everywhere we can see
        if available is None and status in _BLOCKED_STATUSES:
            available = ()

        thumbnails = tuple(
            thumb["url"]
            for thumb in (details.get("thumbnail") or {}).get("thumbnails") or []
            if isinstance(thumb, dict) and thumb.get("url")
        )

        return VideoMetadata(
            video_id=details.get("videoId") or video_id,
            title=details.get("title") or "",
            description=details.get("shortDescription") or "",
            author=details.get("author") or "",
            channel_id=details.get("channelId") or "",
            duration_seconds=to_count(details.get("lengthSeconds")),
            view_count=to_count(details.get("viewCount")),
            keywords=tuple(details.get("keywords") or ()),
            upload_date=microformat.get("uploadDate") or microformat.get("publishDate"),
            available_countries=available,
            is_live=bool(broadcast.get("isLiveNow") or details.get("isLive")),
            thumbnails=thumbnails,
            source=self.get_source_name(),
        )

    def _from_meta(self, meta: dict, video_id: str) -> VideoMetadata:
        return VideoMetadata(
            video_id=video_id,
            title=meta.get("title") or "",
            description=meta.get("description") or "",
            author=meta.get("author") or "",
            thumbnails=(f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg",),
            source=self.get_source_name(),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

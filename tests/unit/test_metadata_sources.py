"""Unit tests for metadata source implementations.

- YouTubeDataAPISource: structured Data API v3 items
- YtDlpSource: yt-dlp info dictionaries
- HTMLScraperSource: watch page player response and meta tag fallback
"""

from unittest.mock import MagicMock, patch

import httpx
import pytest
import yt_dlp

from services.metadata_sources.base import MetadataSource, to_count, to_region_codes
from services.metadata_sources.html_scraper import (
    HTMLScraperSource,
    parse_meta_tags,
    parse_player_response,
)
from services.metadata_sources.youtube_data_api import YouTubeDataAPISource, parse_iso_duration
from services.metadata_sources.ytdlp import YtDlpSource
from utils.errors import MetadataSourceError


def _scraper_for(html: str, status_code: int = 200) -> HTMLScraperSource:
    transport = httpx.MockTransport(lambda request: httpx.Response(status_code, text=html))
    return HTMLScraperSource(client=httpx.AsyncClient(transport=transport))


class TestMetadataSourceBase:
    """Tests for the MetadataSource abstract base class."""

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            MetadataSource()

    def test_helpers(self):
        assert to_count("42") == 42
        assert to_count(None) == 0
        assert to_count("n/a") == 0
        assert to_count(-5) == 0
        assert to_region_codes(None) is None
        assert to_region_codes(["us", "GB", ""]) == ("US", "GB")


class TestYouTubeDataAPISource:
    """Tests for YouTubeDataAPISource."""

    def test_not_configured_without_key(self):
        source = YouTubeDataAPISource(api_key="")
        assert source.get_source_name() == "youtube_data_api"
        assert source.is_configured() is False

    @pytest.mark.parametrize(
        "duration,seconds",
        [("PT3M33S", 213), ("PT1H", 3600), ("P1DT2H", 93600), ("PT45S", 45), ("", 0), ("bogus", 0)],
    )
    def test_parse_iso_duration(self, duration, seconds):
        assert parse_iso_duration(duration) == seconds

    def test_normalize(self, data_api_item, video_id):
        metadata = YouTubeDataAPISource(api_key="k").normalize(data_api_item, video_id)

        assert metadata.title == "Never Gonna Give You Up"
        assert metadata.author == "Rick Astley"
        assert metadata.duration_seconds == 213
        assert metadata.view_count == 1500000000
        assert metadata.keywords == ("rick astley", "never gonna give you up")
        assert metadata.available_countries is None
        assert metadata.blocked_countries == ("DE",)
        assert metadata.is_available_in("us") is True
        assert metadata.is_available_in("DE") is False
        assert len(metadata.thumbnails) == 2
        assert metadata.source == "youtube_data_api"

    def test_normalize_missing_fields(self, video_id):
        metadata = YouTubeDataAPISource(api_key="k").normalize({}, video_id)
        assert metadata.video_id == video_id
        assert metadata.title == ""
        assert metadata.keywords == ()

    @pytest.mark.asyncio
    async def test_fetch_returns_first_item(self, data_api_item, video_id):
        youtube = MagicMock()
        youtube.videos.return_value.list.return_value.execute.return_value = {"items": [data_api_item]}

        with patch("services.metadata_sources.youtube_data_api.build", return_value=youtube):
            source = YouTubeDataAPISource(api_key="k")
            payload = await source.fetch(video_id)

        assert payload is data_api_item
        youtube.videos.return_value.list.assert_called_once_with(part=source.PARTS, id=video_id)

    @pytest.mark.asyncio
    async def test_fetch_not_found(self, video_id):
        youtube = MagicMock()
        youtube.videos.return_value.list.return_value.execute.return_value = {"items": []}

        with patch("services.metadata_sources.youtube_data_api.build", return_value=youtube):
            with pytest.raises(MetadataSourceError, match="not found"):
                await YouTubeDataAPISource(api_key="k").fetch(video_id)


class TestYtDlpSource:
    """Tests for YtDlpSource."""

    def test_configuration(self):
        assert YtDlpSource().is_configured() is True
        assert YtDlpSource(enabled=False).is_configured() is False
        assert YtDlpSource(cookies_file="c.txt")._options()["cookiefile"] == "c.txt"

    def test_normalize(self, ytdlp_info, video_id):
        metadata = YtDlpSource().normalize(ytdlp_info, video_id)

        assert metadata.title == "Never Gonna Give You Up"
        assert metadata.author == "Rick Astley"
        assert metadata.duration_seconds == 213
        assert metadata.upload_date == "20091025"
        assert metadata.available_countries is None
        assert metadata.thumbnails == ("https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",)
        assert metadata.source == "ytdlp"

    @pytest.mark.asyncio
    async def test_fetch_wraps_download_error(self, video_id):
        with patch("services.metadata_sources.ytdlp.yt_dlp.YoutubeDL") as mock_ydl:
            instance = mock_ydl.return_value.__enter__.return_value
            instance.extract_info.side_effect = yt_dlp.DownloadError("Video unavailable")

            with pytest.raises(MetadataSourceError, match=r"\[ytdlp\]"):
                await YtDlpSource().fetch(video_id)

    @pytest.mark.asyncio
    async def test_fetch_sanitizes_info(self, ytdlp_info, video_id):
        with patch("services.metadata_sources.ytdlp.yt_dlp.YoutubeDL") as mock_ydl:
            instance = mock_ydl.return_value.__enter__.return_value
            instance.extract_info.return_value = ytdlp_info
            instance.sanitize_info.side_effect = lambda info: info

            payload = await YtDlpSource().fetch(video_id)

        assert payload == ytdlp_info
        instance.extract_info.assert_called_once_with(
            f"https://www.youtube.com/watch?v={video_id}", download=False
        )


class TestHTMLScraperSource:
    """Tests for HTMLScraperSource."""

    def test_parse_player_response(self, watch_page_html, player_response):
        assert parse_player_response(watch_page_html) == player_response
        assert parse_player_response("<html></html>") is None
        assert parse_player_response("var ytInitialPlayerResponse = {broken") is None

    def test_parse_meta_tags(self):
        html = (
            '<html><head><meta property="og:title" content="OG Title">'
            '<meta name="description" content="Plain description">'
            '<link itemprop="name" content="Channel Name"></head></html>'
        )
        assert parse_meta_tags(html) == {
            "title": "OG Title",
            "description": "Plain description",
            "author": "Channel Name",
        }

    def test_parse_meta_tags_title_element(self):
        html = "<html><head><title>Some Video - YouTube</title></head></html>"
        assert parse_meta_tags(html)["title"] == "Some Video"

    @pytest.mark.asyncio
    async def test_fetch_and_normalize_player(self, watch_page_html, video_id):
        source = _scraper_for(watch_page_html)
        metadata = await source.attempt(video_id)
        await source.close()

        assert metadata.title == "Never Gonna Give You Up"
        assert metadata.description == "The official video. #rickroll"
        assert metadata.duration_seconds == 213
        assert metadata.keywords == ("rick astley", "80s")
        assert metadata.available_countries == ("US", "GB", "FR")
        assert metadata.upload_date == "2009-10-24"
        assert metadata.source == "html_scraper"

    def test_unplayable_without_countries_is_restricted(self, player_response, video_id):
        player_response["playabilityStatus"] = {"status": "UNPLAYABLE"}
        player_response["microformat"] = {}

        metadata = HTMLScraperSource(client=MagicMock()).normalize({"player": player_response}, video_id)

        assert metadata.available_countries == ()
        assert metadata.is_available_in("US") is False

    def test_playable_without_countries_is_unrestricted(self, player_response, video_id):
        player_response["microformat"] = {}
        metadata = HTMLScraperSource(client=MagicMock()).normalize({"player": player_response}, video_id)
        assert metadata.available_countries is None

    def test_finished_stream_is_not_live(self, player_response, video_id):
        player_response["videoDetails"]["isLiveContent"] = True
        player_response["microformat"]["playerMicroformatRenderer"]["liveBroadcastDetails"] = {
            "isLiveNow": False,
            "endTimestamp": "2024-01-01T01:00:00+00:00",
        }

        metadata = HTMLScraperSource(client=MagicMock()).normalize({"player": player_response}, video_id)

        assert metadata.is_live is False

    def test_stream_in_progress_is_live(self, player_response, video_id):
        player_response["videoDetails"]["isLiveContent"] = True
        player_response["microformat"]["playerMicroformatRenderer"]["liveBroadcastDetails"] = {"isLiveNow": True}

        metadata = HTMLScraperSource(client=MagicMock()).normalize({"player": player_response}, video_id)

        assert metadata.is_live is True

    @pytest.mark.asyncio
    async def test_meta_fallback(self, video_id):
        html = '<html><head><meta property="og:title" content="Fallback Title"></head></html>'
        source = _scraper_for(html)
        metadata = await source.attempt(video_id)
        await source.close()

        assert metadata.title == "Fallback Title"
        assert metadata.thumbnails == (f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg",)

    @pytest.mark.asyncio
    async def test_http_error_raises_source_error(self, video_id):
        source = _scraper_for("", status_code=429)
        with pytest.raises(MetadataSourceError, match="HTTP 429"):
            await source.fetch(video_id)
        await source.close()

"""Video metadata sources, tried in order by the metadata resolver."""

from services.metadata_sources.base import MetadataSource
from services.metadata_sources.html_scraper import HTMLScraperSource
from services.metadata_sources.youtube_data_api import YouTubeDataAPISource
from services.metadata_sources.ytdlp import YtDlpSource

__all__ = [
    "MetadataSource",
    "YouTubeDataAPISource",
    "YtDlpSource",
    "HTMLScraperSource",
]

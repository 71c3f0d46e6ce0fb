from .exceptions import (
    DownloadDirectoryError,
    ExtractionError,
    InputValidationError,
    LoadError,
    TikTokScraperError,
    UpstreamRateLimitError,
    WatermarkResolutionError,
)
from .models import DownloadSummary, Music, User, Video
from .scraper import TTScraper
from .strategy import FetchStrategy

__all__ = [
    "TTScraper",
    "FetchStrategy",
    "Video",
    "User",
    "Music",
    "DownloadSummary",
    "TikTokScraperError",
    "InputValidationError",
    "LoadError",
    "ExtractionError",
    "WatermarkResolutionError",
    "UpstreamRateLimitError",
    "DownloadDirectoryError",
]

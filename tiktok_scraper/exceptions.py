"""Custom exceptions for the TikTok scraper."""
from typing import Optional


class TikTokScraperError(Exception):
    """Base exception for the TikTok scraper."""

    def __init__(self, message: str, url: Optional[str] = None, error_code: Optional[str] = None):
        self.url = url
        self.error_code = error_code
        super().__init__(message)


class InputValidationError(TikTokScraperError, ValueError):
    """Raised when a required argument is missing or empty."""

    def __init__(self, message: str, argument: Optional[str] = None):
        self.argument = argument
        super().__init__(message, error_code="INVALID_INPUT")


class LoadError(TikTokScraperError):
    """Raised when a page or a headless navigation returned no usable content."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message, url=url, error_code="LOAD_FAILED")


class ExtractionError(TikTokScraperError, ValueError):
    """Raised when the expected embedded state is absent from a page."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message, url=url, error_code="EXTRACTION_FAILED")


class WatermarkResolutionError(TikTokScraperError):
    """Raised when the watermark removal API fails to resolve a video."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message, url=url, error_code="NO_WATERMARK_FAILED")


class UpstreamRateLimitError(WatermarkResolutionError):
    """Raised when the watermark removal API reports its own rate limit."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message, url=url)
        self.error_code = "UPSTREAM_RATE_LIMIT"


class DownloadDirectoryError(TikTokScraperError):
    """Raised when the bulk download directory cannot be cleaned up or created."""

    def __init__(self, message: str, directory: Optional[str] = None):
        self.directory = directory
        super().__init__(message, error_code="DIRECTORY_ERROR")

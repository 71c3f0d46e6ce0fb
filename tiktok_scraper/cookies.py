"""Netscape cookie file support for outbound TikTok requests."""
from http.cookiejar import MozillaCookieJar
from typing import Optional

from .config import config
from .logging_config import configure_logging

logger = configure_logging("tiktok-scraper:cookies", log_level=config.LOG_LEVEL, log_format=config.LOG_FORMAT)


class CookieStore:
    """Loads a Netscape-format cookie file and renders it as a Cookie header."""

    def __init__(self, cookies_path: Optional[str] = None):
        self.cookies_path = cookies_path
        self.jar = MozillaCookieJar()
        self.loaded = False
        if cookies_path:
            self.load(cookies_path)

    def load(self, cookies_path: str) -> None:
        self.jar.load(cookies_path, ignore_discard=True, ignore_expires=True)
        self.cookies_path = cookies_path
        self.loaded = True
        logger.info("Loaded cookie file", path=cookies_path, cookies=len(self.jar))

    def header_value(self) -> str:
        return "; ".join(f"{cookie.name}={cookie.value}" for cookie in self.jar)

    def apply(self, headers: dict) -> dict:
        """Add the Cookie header when a jar was loaded."""
        if self.loaded:
            headers["Cookie"] = self.header_value()
        return headers

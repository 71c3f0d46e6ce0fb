"""
Plain HTTP page fetching with a spoofed desktop-browser header set.
"""
from typing import Any, Dict, Optional

import httpx
from bs4 import BeautifulSoup

from .config import ScraperConfig, config
from .cookies import CookieStore
from .logging_config import configure_logging

logger = configure_logging("tiktok-scraper:fetcher", log_level=config.LOG_LEVEL, log_format=config.LOG_FORMAT)


class PageFetcher:
    """Fetches TikTok pages with keep-alive pools and browser-like headers."""

    def __init__(self, cookie_store: Optional[CookieStore] = None, scraper_config: Optional[ScraperConfig] = None):
        self.config = scraper_config or config
        self.cookie_store = cookie_store or CookieStore()

    def default_headers(self) -> Dict[str, str]:
        headers = {
            "User-Agent": self.config.TIKTOK_USER_AGENT,
            "Accept": "application/json, text/plain, */*",
            "Accept-Encoding": "gzip, deflate, br",
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        }
        return self.cookie_store.apply(headers)

    def default_options(self) -> Dict[str, Any]:
        return {"headers": self.default_headers()}

    def _build_client(self) -> httpx.AsyncClient:
        """Create a client with separate keep-alive pools for http and https."""
        limits = httpx.Limits(
            max_connections=self.config.TIKTOK_MAX_SOCKETS,
            max_keepalive_connections=self.config.TIKTOK_MAX_SOCKETS,
        )
        return httpx.AsyncClient(
            mounts={
                "http://": httpx.AsyncHTTPTransport(limits=limits),
                "https://": httpx.AsyncHTTPTransport(limits=limits),
            },
            timeout=self.config.TIKTOK_REQUEST_TIMEOUT,
            follow_redirects=True,
        )

    async def request(self, url: str, fetch_options: Optional[Dict[str, Any]] = None) -> httpx.Response:
        """
        GET a URL.

        Args:
            url: Target URL
            fetch_options: keyword arguments for ``httpx.AsyncClient.get``. When
                given they replace the default options instead of merging.

        Returns:
            The response, whatever its status code
        """
        options = fetch_options if fetch_options is not None else self.default_options()
        async with self._build_client() as client:
            response = await client.get(url, **options)
        logger.debug("Fetched page", url=url, status_code=response.status_code)
        return response

    async def request_text(self, url: str, fetch_options: Optional[Dict[str, Any]] = None) -> str:
        response = await self.request(url, fetch_options)
        return response.text

    async def request_website(self, url: str, fetch_options: Optional[Dict[str, Any]] = None) -> BeautifulSoup:
        """Fetch a page and return it parsed for tag and selector queries."""
        text = await self.request_text(url, fetch_options)
        return BeautifulSoup(text, "html.parser")

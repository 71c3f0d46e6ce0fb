"""Resolves watermark-free download URLs through TikWM's public API."""
from typing import Optional

import httpx

from .config import ScraperConfig, config
from .exceptions import UpstreamRateLimitError, WatermarkResolutionError
from .logging_config import configure_logging

logger = configure_logging("tiktok-scraper:watermark", log_level=config.LOG_LEVEL, log_format=config.LOG_FORMAT)

RATE_LIMIT_CODE = -1


class WatermarkRemover:
    """Client for the TikWM watermark removal endpoint."""

    def __init__(self, scraper_config: Optional[ScraperConfig] = None):
        self.config = scraper_config or config
        self.api_url = self.config.TIKWM_API_URL
        self.base_url = self.config.TIKWM_BASE_URL.rstrip("/")

    async def resolve(self, link: str) -> str:
        """
        Return a direct, watermark-free download URL for a TikTok video.

        Args:
            link: TikTok video page URL

        Returns:
            Absolute URL on the TikWM host

        Raises:
            UpstreamRateLimitError: TikWM asked us to slow down. Nothing is retried.
            WatermarkResolutionError: non-2xx status, a body that is not a JSON
                object, or no play path in the response
        """
        log = logger.bind(url=link)
        data = {"url": link, "count": "12", "cursor": "0", "web": "1", "hd": "1"}

        async with httpx.AsyncClient(timeout=self.config.TIKTOK_REQUEST_TIMEOUT) as client:
            response = await client.post(
                self.api_url,
                data=data,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )

        if not response.is_success:
            log.error("TikWM request failed", status_code=response.status_code)
            raise WatermarkResolutionError(
                "There was an Error retrieving this video without watermark!",
                url=link,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            log.error("TikWM returned a non-JSON-object body", status_code=response.status_code)
            raise WatermarkResolutionError(
                "TikWM response is not a JSON object",
                url=link,
                status_code=response.status_code,
            )

        if payload.get("code") == RATE_LIMIT_CODE:
            log.warning("TikWM rate limit reached")
            raise UpstreamRateLimitError(
                "API Limit for nowatermark, please wait 1 second and try again!",
                url=link,
            )

        hdplay = (payload.get("data") or {}).get("hdplay")
        if not hdplay:
            raise WatermarkResolutionError(
                f"TikWM response has no play path: {payload.get('msg', 'unknown error')}",
                url=link,
                status_code=response.status_code,
            )

        log.debug("Resolved watermark-free URL", path=hdplay)
        return self.base_url + hdplay

"""Headless Chromium rendering for pages that need a real browser."""
from typing import Optional

from playwright.async_api import async_playwright

from .config import ScraperConfig, config
from .exceptions import LoadError
from .logging_config import configure_logging

logger = configure_logging("tiktok-scraper:renderer", log_level=config.LOG_LEVEL, log_format=config.LOG_FORMAT)

# Sandboxing is disabled so the browser starts inside containers
LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class HeadlessRenderer:
    """Launches one browser per call, loads a page and returns its HTML."""

    def __init__(self, scraper_config: Optional[ScraperConfig] = None):
        self.config = scraper_config or config

    async def render(self, url: str) -> str:
        logger.info("Rendering page with headless browser", url=url)
        async with async_playwright() as playwright:
            browser = await playwright.chromium.launch(
                headless=self.config.TIKTOK_HEADLESS,
                args=LAUNCH_ARGS,
            )
            try:
                page = await browser.new_page()
                response = await page.goto(url, wait_until="domcontentloaded")
                if response is None:
                    raise LoadError("Could not load the desired Page!", url=url)
                return await response.text()
            finally:
                await browser.close()

"""
Chooses between a plain HTTP fetch and a headless render to obtain the
embedded page state.
"""
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .config import config
from .exceptions import ExtractionError
from .extractor import UNIVERSAL_DATA_ID, extract_embedded_state, parse_state
from .fetcher import PageFetcher
from .logging_config import configure_logging
from .renderer import HeadlessRenderer

logger = configure_logging("tiktok-scraper:strategy", log_level=config.LOG_LEVEL, log_format=config.LOG_FORMAT)


class FetchStrategy(str, Enum):
    DIRECT = "direct"
    RENDERED = "rendered"


@dataclass(frozen=True)
class StateResult:
    """Parsed page state tagged with the strategy that produced it."""

    strategy: FetchStrategy
    state: Dict[str, Any]


class FetchStrategySelector:
    """
    Obtains a page's embedded state.

    The direct fetch is tried first; when the rehydration script tag is
    missing or its JSON does not parse, the page is rendered in a headless
    browser instead. ``force`` pins either path.
    """

    def __init__(self, fetcher: PageFetcher, renderer: HeadlessRenderer):
        self.fetcher = fetcher
        self.renderer = renderer

    async def resolve(self, url: str, force: Optional[FetchStrategy] = None) -> StateResult:
        if force is not FetchStrategy.RENDERED:
            state = await self._try_direct(url)
            if state is not None:
                return StateResult(FetchStrategy.DIRECT, state)
            if force is FetchStrategy.DIRECT:
                raise ExtractionError(f"{UNIVERSAL_DATA_ID} not found in direct response", url=url)
            logger.info("Embedded state missing from direct fetch, falling back to headless browser", url=url)

        html = await self.renderer.render(url)
        return StateResult(FetchStrategy.RENDERED, parse_state(extract_embedded_state(html)))

    async def load_state(self, url: str, force: Optional[FetchStrategy] = None) -> Dict[str, Any]:
        result = await self.resolve(url, force)
        return result.state

    async def _try_direct(self, url: str) -> Optional[Dict[str, Any]]:
        soup = await self.fetcher.request_website(url)
        tag = soup.find("script", id=UNIVERSAL_DATA_ID)
        if tag is None or not tag.string:
            return None
        try:
            state = parse_state(tag.string)
        except json.JSONDecodeError as exc:
            logger.warning("Embedded state is not valid JSON", url=url, error=str(exc))
            return None
        if not isinstance(state, dict):
            return None
        return state

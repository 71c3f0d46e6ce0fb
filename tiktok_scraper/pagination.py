"""
Cursor pagination over TikTok's user video listing API.
"""
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .config import ScraperConfig, config
from .fetcher import PageFetcher
from .logging_config import configure_logging
from .schemas import VideoListPage

logger = configure_logging("tiktok-scraper:pagination", log_level=config.LOG_LEVEL, log_format=config.LOG_FORMAT)

LIST_VIDEOS_PATH = "/api/post/item_list/"

PageFetch = Callable[[str, str], Awaitable[VideoListPage]]


class UserVideosClient:
    """Fetches single pages of a user's videos by secret UID."""

    def __init__(self, fetcher: PageFetcher, scraper_config: Optional[ScraperConfig] = None):
        self.fetcher = fetcher
        self.config = scraper_config or config
        self.url = self.config.TIKTOK_BASE_URL.rstrip("/") + LIST_VIDEOS_PATH

    def build_params(self, sec_uid: str, cursor: str) -> Dict[str, str]:
        return {
            "aid": "1988",
            "app_name": "tiktok_web",
            "device_platform": "web_pc",
            "secUid": sec_uid,
            "cursor": cursor,
            "count": str(self.config.TIKTOK_LIST_PAGE_SIZE),
        }

    async def fetch_page(self, sec_uid: str, cursor: str) -> VideoListPage:
        options = self.fetcher.default_options()
        options["params"] = self.build_params(sec_uid, cursor)
        response = await self.fetcher.request(self.url, options)
        response.raise_for_status()
        return VideoListPage.from_response(response.json(), url=self.url)


async def collect_user_videos(fetch_page: PageFetch, sec_uid: str) -> List[Dict[str, Any]]:
    """
    Walk every page of a user's videos.

    The cursor starts empty and follows the server's cursor until the server
    reports no more pages. Pages are requested one after another and any
    failure aborts the whole listing.

    Args:
        fetch_page: coroutine function taking ``(sec_uid, cursor)``
        sec_uid: the user's secret UID

    Returns:
        Raw video entries in page-then-item order
    """
    cursor = ""
    items: List[Dict[str, Any]] = []
    pages = 0

    while True:
        page = await fetch_page(sec_uid, cursor)
        pages += 1
        if page.item_list:
            items.extend(page.item_list)
        cursor = page.cursor or ""
        logger.debug("Fetched video page", page=pages, items=len(items), has_more=page.has_more)
        if not page.has_more:
            break

    logger.info("Collected user videos", pages=pages, videos=len(items))
    return items

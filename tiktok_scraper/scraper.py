"""
Public entry point for scraping TikTok videos, users, music and hashtags.
"""
from typing import List, Optional

from .config import ScraperConfig, config
from .cookies import CookieStore
from .downloader import BulkDownloader
from .exceptions import ExtractionError, InputValidationError, TikTokScraperError
from .extractor import extract_legacy_state
from .fetcher import PageFetcher
from .logging_config import configure_logging
from .mappers import to_hashtag_videos, to_music, to_user, to_video, video_page_url
from .models import DownloadSummary, Music, User, Video
from .pagination import UserVideosClient, collect_user_videos
from .renderer import HeadlessRenderer
from .schemas import ItemStruct, LegacyChallengePayload, UserDetailPayload, VideoDetailPayload
from .strategy import FetchStrategy, FetchStrategySelector
from .watermark import WatermarkRemover

logger = configure_logging("tiktok-scraper:scraper", log_level=config.LOG_LEVEL, log_format=config.LOG_FORMAT)


class TTScraper:
    """
    Scrapes TikTok's public pages.

    Every operation is a coroutine. Components can be injected for testing;
    by default they are built from the given configuration.

    Example:
        async with TTScraper(cookies_path="cookies.txt") as scraper:
            video = await scraper.video("https://www.tiktok.com/@user/video/123")
    """

    def __init__(
        self,
        cookies_path: Optional[str] = None,
        scraper_config: Optional[ScraperConfig] = None,
        fetcher: Optional[PageFetcher] = None,
        renderer: Optional[HeadlessRenderer] = None,
        remover: Optional[WatermarkRemover] = None,
        videos_client: Optional[UserVideosClient] = None,
    ):
        self.config = scraper_config or config
        self.base_url = self.config.TIKTOK_BASE_URL.rstrip("/")
        self.cookie_store = CookieStore(cookies_path or self.config.TIKTOK_COOKIES_PATH)
        self.fetcher = fetcher or PageFetcher(self.cookie_store, self.config)
        self.renderer = renderer or HeadlessRenderer(self.config)
        self.selector = FetchStrategySelector(self.fetcher, self.renderer)
        self.remover = remover or WatermarkRemover(self.config)
        self.videos_client = videos_client or UserVideosClient(self.fetcher, self.config)
        self.downloader = BulkDownloader(self.remover, self.config)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass

    async def video(
        self,
        uri: str,
        resolve_no_watermark: bool = True,
        force: Optional[FetchStrategy] = None,
    ) -> Optional[Video]:
        """
        Scrape a video page.

        Args:
            uri: TikTok video URL
            resolve_no_watermark: also resolve the watermark-free URL through TikWM
            force: pin the fetch strategy

        Returns:
            Video, or None when TikTok reports no such video
        """
        if not uri:
            raise InputValidationError("A video URL must be provided", argument="uri")

        state = await self.selector.load_state(uri, force)
        item = VideoDetailPayload.from_state(state, url=uri).item

        if item.is_missing:
            logger.warning("Could not find the Video on Tiktok!", url=uri)
            return None

        no_watermark_url = await self.no_watermark(uri) if resolve_no_watermark else None
        return to_video(item, no_watermark_url, base_url=self.base_url)

    async def user(self, username: str) -> User:
        """Scrape a user's profile page."""
        if not username:
            raise InputValidationError("Please enter a username", argument="username")

        url = f"{self.base_url}/@{username}"
        state = await self.selector.load_state(url)
        payload = UserDetailPayload.from_state(state, url=url)
        return to_user(payload.user_info)

    async def get_all_videos_from_user(self, username: str, no_watermark: bool = False) -> List[Video]:
        """
        List every video of a user.

        Args:
            username: TikTok username
            no_watermark: resolve a watermark-free URL for every video

        Raises:
            ExtractionError: if the profile has no secret UID
        """
        if not username:
            raise InputValidationError("You must provide a username!", argument="username")

        user = await self.user(username)
        if not user.secret_uid:
            raise ExtractionError("Could not find user UID!", url=f"{self.base_url}/@{username}")

        entries = await collect_user_videos(self.videos_client.fetch_page, user.secret_uid)

        videos: List[Video] = []
        for entry in entries:
            item = ItemStruct.from_entry(entry, url=self.videos_client.url)
            resolved = None
            if no_watermark:
                resolved = await self.no_watermark(
                    video_page_url(item.author_unique_id, item.id, self.base_url) or item.id
                )
            videos.append(to_video(item, resolved, base_url=self.base_url))
        return videos

    async def get_music(self, link: str) -> Music:
        """Scrape the sound used by a video."""
        if not link:
            raise InputValidationError("You must provide a link!", argument="link")

        state = await self.selector.load_state(link)
        item = VideoDetailPayload.from_state(state, url=link).item
        return to_music(item)

    async def hashtag(self, tag: str) -> List[Video]:
        """
        Scrape the videos listed on a hashtag page.

        The hashtag listing is read from the ItemList/ItemModule layout. When
        the current page state does not carry it, the legacy SIGI_STATE
        assignment is read from the raw page instead.
        """
        if not tag:
            raise InputValidationError("You must provide a tag name to complete the search!", argument="tag")

        url = f"{self.base_url}/tag/{tag}"
        try:
            state = await self.selector.load_state(url)
        except ExtractionError as exc:
            logger.info("No rehydration state on hashtag page", tag=tag, error=str(exc))
            state = {}

        if "ItemModule" not in state:
            logger.info("Hashtag state lacks ItemModule, reading legacy page state", tag=tag)
            state = extract_legacy_state(await self.fetcher.request_text(url))

        payload = LegacyChallengePayload.from_state(state, url=url)
        return to_hashtag_videos(payload, base_url=self.base_url)

    async def download_all_videos_from_user(
        self,
        username: str,
        path: Optional[str] = None,
        watermark: bool = False,
    ) -> DownloadSummary:
        """
        Download every video of a user.

        Args:
            username: TikTok username
            path: target directory; defaults to ``<DOWNLOAD_ROOT>/<username>``
            watermark: download the watermark-free variant of each video

        Raises:
            DownloadDirectoryError: if the default directory cannot be reset
        """
        if not username:
            raise InputValidationError("Please enter a username!", argument="username")

        videos = await self.get_all_videos_from_user(username)
        if not videos:
            raise TikTokScraperError(
                "No Videos were found for this username. "
                "Either the videos are private or the user has not videos"
            )

        directory = self.downloader.prepare_directory(username, path)
        return await self.downloader.download(videos, directory, watermark=watermark)

    async def no_watermark(self, link: str) -> str:
        """Return a direct download URL for the video without watermark."""
        if not link:
            raise InputValidationError("You must provide a link!", argument="link")
        return await self.remover.resolve(link)

"""
Sequential bulk download of TikTok videos to a local directory.
"""
import shutil
from pathlib import Path
from typing import Iterable, Optional

import httpx

from .config import ScraperConfig, config
from .exceptions import DownloadDirectoryError, InputValidationError, TikTokScraperError
from .logging_config import configure_logging
from .models import DownloadSummary, Video
from .watermark import WatermarkRemover

logger = configure_logging("tiktok-scraper:downloader", log_level=config.LOG_LEVEL, log_format=config.LOG_FORMAT)


class BulkDownloader:
    """Streams each video's media URL into ``<id>_<resolution>.<format>``."""

    def __init__(self, remover: WatermarkRemover, scraper_config: Optional[ScraperConfig] = None):
        self.remover = remover
        self.config = scraper_config or config

    def prepare_directory(self, username: str, path: Optional[str] = None) -> Path:
        """
        Resolve and create the download directory.

        Without an explicit path the directory is ``<DOWNLOAD_ROOT>/<username>``;
        anything already at that location is removed first.

        Raises:
            InputValidationError: if the username could resolve outside the root
            DownloadDirectoryError: if the existing entry cannot be removed
        """
        if path:
            directory = Path(path)
        else:
            _check_username(username)
            directory = Path(self.config.DOWNLOAD_ROOT) / username
            if directory.exists() or directory.is_symlink():
                logger.warning("A folder with this username exists, that is unusual!", directory=str(directory))
                try:
                    if directory.is_dir() and not directory.is_symlink():
                        shutil.rmtree(directory)
                    else:
                        directory.unlink()
                except OSError as exc:
                    logger.error("Could not remove existing download target", directory=str(directory), error=str(exc))
                    raise DownloadDirectoryError(
                        f"Could not remove {directory}: {exc}", directory=str(directory)
                    ) from exc

        directory.mkdir(parents=True, exist_ok=True)
        return directory

    async def download(self, videos: Iterable[Video], directory: Path, watermark: bool = False) -> DownloadSummary:
        """
        Download videos one after another.

        Args:
            videos: videos to download
            directory: existing target directory
            watermark: resolve a watermark-free URL for each video right before
                streaming it; videos that fail to resolve are skipped

        Returns:
            DownloadSummary with written files and skipped video ids
        """
        videos = list(videos)
        summary = DownloadSummary(directory=str(directory))

        for index, video in enumerate(videos, start=1):
            label = video.description or video.id
            logger.info(f"Downloading Video: {label}, [{index}/{len(videos)}]")

            if watermark:
                try:
                    media_url = await self.remover.resolve(video.url or video.id)
                except (TikTokScraperError, httpx.HTTPError) as exc:
                    logger.warning(f"Could not fetch {label} with no watermark", video_id=video.id, error=str(exc))
                    summary.skipped.append(video.id)
                    continue
            else:
                media_url = video.download_url

            if not media_url:
                logger.warning("Video has no media URL", video_id=video.id)
                summary.skipped.append(video.id)
                continue

            destination = Path(directory) / video.file_name
            await self._stream(media_url, destination)
            summary.files.append(str(destination))

        logger.info(
            "Bulk download finished",
            directory=str(directory),
            downloaded=len(summary.files),
            skipped=len(summary.skipped),
        )
        return summary

    async def _stream(self, url: str, destination: Path) -> None:
        headers = {"User-Agent": self.config.TIKTOK_USER_AGENT}
        async with httpx.AsyncClient(timeout=self.config.TIKTOK_REQUEST_TIMEOUT, follow_redirects=True) as client:
            async with client.stream("GET", url, headers=headers) as response:
                response.raise_for_status()
                with open(destination, "wb") as f:
                    async for chunk in response.aiter_bytes(chunk_size=self.config.DOWNLOAD_CHUNK_SIZE):
                        f.write(chunk)
        logger.debug("Saved video file", path=str(destination))


def _check_username(username: str) -> None:
    if username in ("", ".", "..") or "/" in username or "\\" in username:
        raise InputValidationError(f"Invalid username for a download directory: {username!r}", argument="username")

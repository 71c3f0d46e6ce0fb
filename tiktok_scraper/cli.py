"""
Command line interface for the TikTok scraper.

Usage:
    tiktok-scraper video https://www.tiktok.com/@user/video/123
    tiktok-scraper user someone
    tiktok-scraper download someone --path ./videos --no-watermark
"""
import argparse
import asyncio
import json
import sys
from typing import Any, List, Optional

from .config import config
from .exceptions import TikTokScraperError
from .logging_config import configure_logging, set_log_level
from .scraper import TTScraper
from .strategy import FetchStrategy

logger = configure_logging("tiktok-scraper:cli", log_level=config.LOG_LEVEL, log_format=config.LOG_FORMAT)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tiktok-scraper", description="Scrape public TikTok data")
    parser.add_argument("--cookies", help="Netscape-format cookie file sent with every request")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL for this run")

    subparsers = parser.add_subparsers(dest="command", required=True)

    video = subparsers.add_parser("video", help="Scrape a single video")
    video.add_argument("url")
    video.add_argument("--skip-no-watermark", action="store_true", help="Do not resolve the watermark-free URL")
    video.add_argument(
        "--strategy",
        choices=[strategy.value for strategy in FetchStrategy],
        help="Pin the page fetch strategy",
    )

    user = subparsers.add_parser("user", help="Scrape a user profile")
    user.add_argument("username")

    videos = subparsers.add_parser("videos", help="List every video of a user")
    videos.add_argument("username")
    videos.add_argument("--no-watermark", action="store_true", help="Resolve watermark-free URLs")

    music = subparsers.add_parser("music", help="Scrape the sound used by a video")
    music.add_argument("url")

    hashtag = subparsers.add_parser("hashtag", help="Scrape the videos of a hashtag")
    hashtag.add_argument("tag")

    download = subparsers.add_parser("download", help="Download every video of a user")
    download.add_argument("username")
    download.add_argument("--path", help="Target directory; defaults to DOWNLOAD_ROOT/<username>")
    download.add_argument("--no-watermark", action="store_true", help="Download watermark-free files")

    no_watermark = subparsers.add_parser("nowatermark", help="Resolve a watermark-free download URL")
    no_watermark.add_argument("url")

    return parser


def _serialize(result: Any) -> Any:
    if result is None or isinstance(result, str):
        return result
    if isinstance(result, list):
        return [_serialize(item) for item in result]
    return result.to_dict()


async def run(args: argparse.Namespace) -> Any:
    async with TTScraper(cookies_path=args.cookies) as scraper:
        if args.command == "video":
            force = FetchStrategy(args.strategy) if args.strategy else None
            return await scraper.video(args.url, resolve_no_watermark=not args.skip_no_watermark, force=force)
        if args.command == "user":
            return await scraper.user(args.username)
        if args.command == "videos":
            return await scraper.get_all_videos_from_user(args.username, no_watermark=args.no_watermark)
        if args.command == "music":
            return await scraper.get_music(args.url)
        if args.command == "hashtag":
            return await scraper.hashtag(args.tag)
        if args.command == "download":
            return await scraper.download_all_videos_from_user(
                args.username, path=args.path, watermark=args.no_watermark
            )
        return await scraper.no_watermark(args.url)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.log_level:
        set_log_level(args.log_level)

    try:
        result = asyncio.run(run(args))
    except TikTokScraperError as e:
        logger.error(str(e), error_code=e.error_code, url=e.url)
        return 1

    print(json.dumps(_serialize(result), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Projections from decoded TikTok payloads into result entities.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from .config import config
from .logging_config import configure_logging
from .models import Music, User, Video
from .schemas import (
    AuthorSummary,
    ItemStats,
    ItemStruct,
    LegacyChallengePayload,
    MusicInfo,
    UserInfo,
    VideoInfo,
)

logger = configure_logging("tiktok-scraper:mappers", log_level=config.LOG_LEVEL, log_format=config.LOG_FORMAT)

NO_BIO_LINK = "none"


def format_date(epoch_seconds: Optional[int]) -> Optional[str]:
    """Render epoch seconds as a local ``M/D/YYYY`` date string."""
    if epoch_seconds is None:
        return None
    moment = datetime.fromtimestamp(int(epoch_seconds))
    return f"{moment.month}/{moment.day}/{moment.year}"


def video_page_url(unique_id: Optional[str], video_id: Optional[str], base_url: Optional[str] = None) -> Optional[str]:
    if not unique_id or not video_id:
        return None
    base = (base_url or config.TIKTOK_BASE_URL).rstrip("/")
    return f"{base}/@{unique_id}/video/{video_id}"


def _strip(value: Optional[str]) -> Optional[str]:
    return value.strip() if value is not None else None


def _author(author: Union[AuthorSummary, str, None]) -> Union[Dict[str, Any], str, None]:
    if isinstance(author, AuthorSummary):
        return author.model_dump(by_alias=True, exclude_none=True)
    return author


def to_video(item: ItemStruct, no_watermark_url: Optional[str] = None, base_url: Optional[str] = None) -> Video:
    video = item.video or VideoInfo()
    stats = item.stats or ItemStats()
    return Video(
        id=item.id,
        description=item.desc,
        created_at=format_date(item.create_time),
        height=video.height,
        width=video.width,
        duration=video.duration,
        resolution=video.ratio,
        shares=stats.share_count,
        likes=stats.digg_count,
        comments=stats.comment_count,
        plays=stats.play_count,
        download_url=_strip(video.download_addr),
        cover=video.cover,
        dynamic_cover=video.dynamic_cover,
        play_url=_strip(video.play_addr),
        format=video.format,
        author=_author(item.author),
        url=video_page_url(item.author_unique_id, item.id, base_url),
        no_watermark_url=no_watermark_url,
    )


def to_user(user_info: UserInfo) -> User:
    profile = user_info.user
    stats = user_info.stats
    bio = profile.bio_link or user_info.bio_link
    bio_link = bio.link if bio is not None else None
    create_time = profile.create_time if profile.create_time is not None else user_info.create_time
    return User(
        id=profile.id,
        unique_id=profile.unique_id,
        nickname=profile.nickname,
        avatar=profile.avatar_larger,
        signature=_strip(profile.signature),
        created_at=format_date(create_time),
        verified=profile.verified,
        secret_uid=profile.sec_uid,
        bio_link=bio_link if bio_link is not None else NO_BIO_LINK,
        private_account=profile.private_account,
        followers=stats.follower_count,
        following=stats.following_count,
        hearts=stats.heart,
        video_count=stats.video_count,
    )


def to_music(item: ItemStruct) -> Music:
    music = item.music or MusicInfo()
    return Music(
        id=music.id,
        title=music.title,
        play_url=music.play_url,
        cover_large=music.cover_large,
        cover_thumb=music.cover_thumb,
        author_name=music.author_name,
        duration=music.duration,
        original=music.original,
        album=music.album,
    )


def to_hashtag_videos(payload: LegacyChallengePayload, base_url: Optional[str] = None) -> List[Video]:
    """Map the challenge's item ids to videos through the ItemModule lookup."""
    videos: List[Video] = []
    for video_id in payload.item_list.challenge.ids:
        item = payload.item_module.get(video_id)
        if item is None:
            logger.warning("Hashtag item missing from ItemModule", video_id=video_id)
            continue
        if item.video is not None and item.video.id:
            item = item.model_copy(update={"id": item.video.id})
        videos.append(to_video(item, base_url=base_url))
    return videos

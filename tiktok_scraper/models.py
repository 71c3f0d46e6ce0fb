"""TikTok result entities returned by the scraper."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class Video:
    """A TikTok video with metadata and media URLs."""

    id: str
    description: Optional[str]
    created_at: Optional[str]  # locale date string
    height: Optional[int]
    width: Optional[int]
    duration: Optional[int]  # seconds
    resolution: Optional[str]
    shares: Optional[int]
    likes: Optional[int]
    comments: Optional[int]
    plays: Optional[int]
    download_url: Optional[str]  # platform-hosted, watermarked
    cover: Optional[str]
    dynamic_cover: Optional[str]
    play_url: Optional[str]  # platform-hosted
    format: Optional[str]
    author: Union[Dict[str, Any], str, None] = None
    url: Optional[str] = None
    no_watermark_url: Optional[str] = None  # resolved through TikWM

    @property
    def file_name(self) -> str:
        return f"{self.id}_{self.resolution}.{self.format}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class User:
    """A TikTok user profile."""

    id: Optional[str]
    unique_id: Optional[str]
    nickname: Optional[str]
    avatar: Optional[str]
    signature: Optional[str]
    created_at: Optional[str]
    verified: Optional[bool]
    secret_uid: Optional[str]
    bio_link: str
    private_account: Optional[bool]
    followers: Optional[int]
    following: Optional[int]
    hearts: Optional[int]
    video_count: Optional[int]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Music:
    """The sound used by a TikTok video."""

    id: Optional[str]
    title: Optional[str]
    play_url: Optional[str]
    cover_large: Optional[str]
    cover_thumb: Optional[str]
    author_name: Optional[str]
    duration: Optional[int]
    original: Optional[bool]
    album: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DownloadSummary:
    """Outcome of a bulk download."""

    directory: str
    files: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

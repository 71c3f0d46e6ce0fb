"""Pydantic records for the TikTok payload shapes the scraper reads."""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ExtractionError

DEFAULT_SCOPE = "__DEFAULT_SCOPE__"
VIDEO_DETAIL_SCOPE = "webapp.video-detail"
USER_DETAIL_SCOPE = "webapp.user-detail"


class TikTokPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)


class AuthorSummary(TikTokPayload):
    id: Optional[str] = None
    unique_id: Optional[str] = Field(default=None, alias="uniqueId")
    nickname: Optional[str] = None
    avatar_thumb: Optional[str] = Field(default=None, alias="avatarThumb")
    signature: Optional[str] = None
    verified: Optional[bool] = None
    sec_uid: Optional[str] = Field(default=None, alias="secUid")


class VideoInfo(TikTokPayload):
    id: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None
    duration: Optional[int] = None
    ratio: Optional[str] = None
    cover: Optional[str] = None
    dynamic_cover: Optional[str] = Field(default=None, alias="dynamicCover")
    play_addr: Optional[str] = Field(default=None, alias="playAddr")
    download_addr: Optional[str] = Field(default=None, alias="downloadAddr")
    format: Optional[str] = None


class ItemStats(TikTokPayload):
    share_count: Optional[int] = Field(default=None, alias="shareCount")
    digg_count: Optional[int] = Field(default=None, alias="diggCount")
    comment_count: Optional[int] = Field(default=None, alias="commentCount")
    play_count: Optional[int] = Field(default=None, alias="playCount")


class MusicInfo(TikTokPayload):
    id: Optional[str] = None
    title: Optional[str] = None
    play_url: Optional[str] = Field(default=None, alias="playUrl")
    cover_large: Optional[str] = Field(default=None, alias="coverLarge")
    cover_thumb: Optional[str] = Field(default=None, alias="coverThumb")
    author_name: Optional[str] = Field(default=None, alias="authorName")
    duration: Optional[int] = None
    original: Optional[bool] = None
    album: Optional[str] = None


class ItemStruct(TikTokPayload):
    """A single video item, as found in detail pages, listings and ItemModule."""

    id: Optional[str] = None
    desc: Optional[str] = None
    create_time: Optional[int] = Field(default=None, alias="createTime")
    video: Optional[VideoInfo] = None
    stats: Optional[ItemStats] = None
    music: Optional[MusicInfo] = None
    # Legacy ItemModule entries carry only the author's unique id
    author: Union[AuthorSummary, str, None] = None

    @property
    def is_missing(self) -> bool:
        return not self.id or self.id == "0"

    @property
    def author_unique_id(self) -> Optional[str]:
        if isinstance(self.author, AuthorSummary):
            return self.author.unique_id
        return self.author

    @classmethod
    def from_entry(cls, entry: Any, url: Optional[str] = None) -> "ItemStruct":
        return _decode(cls, entry, url)


class ItemInfo(TikTokPayload):
    item_struct: Optional[ItemStruct] = Field(default=None, alias="itemStruct")


class VideoDetailPayload(TikTokPayload):
    status_code: Optional[int] = Field(default=None, alias="statusCode")
    item_info: Optional[ItemInfo] = Field(default=None, alias="itemInfo")

    @property
    def item(self) -> ItemStruct:
        """The video item; an empty item when the page has none."""
        if self.item_info is None or self.item_info.item_struct is None:
            return ItemStruct()
        return self.item_info.item_struct

    @classmethod
    def from_state(cls, state: Dict[str, Any], url: Optional[str] = None) -> "VideoDetailPayload":
        return _decode(cls, _scope(state, VIDEO_DETAIL_SCOPE, url), url)


class BioLink(TikTokPayload):
    link: Optional[str] = None


class UserProfile(TikTokPayload):
    id: Optional[str] = None
    unique_id: Optional[str] = Field(default=None, alias="uniqueId")
    nickname: Optional[str] = None
    avatar_larger: Optional[str] = Field(default=None, alias="avatarLarger")
    signature: Optional[str] = None
    create_time: Optional[int] = Field(default=None, alias="createTime")
    verified: Optional[bool] = None
    sec_uid: Optional[str] = Field(default=None, alias="secUid")
    private_account: Optional[bool] = Field(default=None, alias="privateAccount")
    bio_link: Optional[BioLink] = Field(default=None, alias="bioLink")


class UserStats(TikTokPayload):
    follower_count: Optional[int] = Field(default=None, alias="followerCount")
    following_count: Optional[int] = Field(default=None, alias="followingCount")
    heart: Optional[int] = None
    video_count: Optional[int] = Field(default=None, alias="videoCount")


class UserInfo(TikTokPayload):
    user: UserProfile = Field(default_factory=UserProfile)
    stats: UserStats = Field(default_factory=UserStats)
    # older pages carry these beside user rather than inside it
    create_time: Optional[int] = Field(default=None, alias="createTime")
    bio_link: Optional[BioLink] = Field(default=None, alias="bioLink")


class UserDetailPayload(TikTokPayload):
    status_code: Optional[int] = Field(default=None, alias="statusCode")
    user_info: UserInfo = Field(alias="userInfo")

    @classmethod
    def from_state(cls, state: Dict[str, Any], url: Optional[str] = None) -> "UserDetailPayload":
        return _decode(cls, _scope(state, USER_DETAIL_SCOPE, url), url)


class VideoListPage(TikTokPayload):
    """One page of the post/item_list API."""

    item_list: Optional[List[Dict[str, Any]]] = Field(default=None, alias="itemList")
    cursor: Optional[str] = None
    has_more: bool = Field(default=False, alias="hasMore")

    @classmethod
    def from_response(cls, data: Any, url: Optional[str] = None) -> "VideoListPage":
        return _decode(cls, data, url)


class LegacyChallenge(TikTokPayload):
    ids: List[str] = Field(default_factory=list, alias="list")


class LegacyItemList(TikTokPayload):
    challenge: LegacyChallenge = Field(default_factory=LegacyChallenge)


class LegacyChallengePayload(TikTokPayload):
    """Hashtag page state in the older ItemList/ItemModule layout."""

    item_list: LegacyItemList = Field(alias="ItemList")
    item_module: Dict[str, ItemStruct] = Field(default_factory=dict, alias="ItemModule")

    @classmethod
    def from_state(cls, state: Dict[str, Any], url: Optional[str] = None) -> "LegacyChallengePayload":
        return _decode(cls, state, url)


def _scope(state: Dict[str, Any], key: str, url: Optional[str]) -> Any:
    try:
        return state[DEFAULT_SCOPE][key]
    except (KeyError, TypeError):
        raise ExtractionError(f"{key} missing from page state", url=url)


def _decode(model, data: Any, url: Optional[str]):
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ExtractionError(f"Unexpected {model.__name__} shape: {exc}", url=url) from exc

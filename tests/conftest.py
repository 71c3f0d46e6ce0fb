"""
Pytest configuration and shared fixtures for tiktok_scraper tests
"""
import json
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest

from tiktok_scraper.config import ScraperConfig
from tiktok_scraper.extractor import UNIVERSAL_DATA_MARKER

CREATE_TIME = 1650000000


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without network access")


def _universal_html(state: Any) -> str:
    body = state if isinstance(state, str) else json.dumps(state)
    return f"<html><head>{UNIVERSAL_DATA_MARKER}{body}</script></head><body></body></html>"


def _legacy_html(state: Dict[str, Any]) -> str:
    return (
        "<html><script>window['SIGI_STATE']="
        f"{json.dumps(state)}"
        ";window['SIGI_RETRY']={\"ItemModule\":1}</script></html>"
    )


@pytest.fixture
def scraper_config(tmp_path):
    """Config isolated from the process environment"""
    return ScraperConfig(
        TIKTOK_BASE_URL="https://www.tiktok.com",
        TIKTOK_USER_AGENT="test-agent/1.0",
        TIKTOK_MAX_SOCKETS=20,
        TIKTOK_LIST_PAGE_SIZE=35,
        TIKTOK_COOKIES_PATH=None,
        TIKTOK_REQUEST_TIMEOUT=None,
        TIKTOK_HEADLESS=True,
        TIKWM_BASE_URL="https://www.tikwm.com",
        TIKWM_API_URL="https://www.tikwm.com/api/",
        DOWNLOAD_ROOT=str(tmp_path),
        DOWNLOAD_CHUNK_SIZE=4,
        LOG_LEVEL="INFO",
        LOG_FORMAT=None,
    )


@pytest.fixture
def item_struct() -> Dict[str, Any]:
    return {
        "id": "7100000000000000001",
        "desc": "  dancing in the rain ",
        "createTime": CREATE_TIME,
        "video": {
            "height": 1024,
            "width": 576,
            "duration": 15,
            "ratio": "720p",
            "cover": "https://p16.tiktokcdn.com/cover.jpeg",
            "dynamicCover": "https://p16.tiktokcdn.com/dynamic.webp",
            "playAddr": " https://v16.tiktokcdn.com/play.mp4 ",
            "downloadAddr": " https://v16.tiktokcdn.com/download.mp4\n",
            "format": "mp4",
        },
        "stats": {"shareCount": 12, "diggCount": 340, "commentCount": 5, "playCount": 9001},
        "music": {
            "id": "6900000000000000000",
            "title": "original sound",
            "playUrl": "https://sf16.tiktokcdn.com/music.mp3",
            "coverLarge": "https://p16.tiktokcdn.com/music_large.jpeg",
            "coverThumb": "https://p16.tiktokcdn.com/music_thumb.jpeg",
            "authorName": "dancer",
            "duration": 15,
            "original": True,
            "album": "",
        },
        "author": {
            "id": "6800000000000000000",
            "uniqueId": "dancer",
            "nickname": "The Dancer",
            "secUid": "MS4wLjABAAAA-dancer",
        },
    }


@pytest.fixture
def video_detail_state(item_struct) -> Dict[str, Any]:
    return {
        "__DEFAULT_SCOPE__": {
            "webapp.video-detail": {
                "statusCode": 0,
                "itemInfo": {"itemStruct": item_struct},
            }
        }
    }


@pytest.fixture
def missing_video_state() -> Dict[str, Any]:
    return {
        "__DEFAULT_SCOPE__": {
            "webapp.video-detail": {
                "statusCode": 10204,
                "itemInfo": {"itemStruct": {"id": "0"}},
            }
        }
    }


@pytest.fixture
def user_detail_state() -> Dict[str, Any]:
    return {
        "__DEFAULT_SCOPE__": {
            "webapp.user-detail": {
                "statusCode": 0,
                "userInfo": {
                    "user": {
                        "id": "6800000000000000000",
                        "uniqueId": "dancer",
                        "nickname": "The Dancer",
                        "avatarLarger": "https://p16.tiktokcdn.com/avatar.jpeg",
                        "signature": " moves only \n",
                        "createTime": CREATE_TIME,
                        "verified": False,
                        "secUid": "MS4wLjABAAAA-dancer",
                        "privateAccount": False,
                        "bioLink": {"link": "linktr.ee/dancer"},
                    },
                    "stats": {
                        "followerCount": 1500,
                        "followingCount": 20,
                        "heart": 42000,
                        "videoCount": 3,
                    },
                },
            }
        }
    }


@pytest.fixture
def legacy_hashtag_state(item_struct) -> Dict[str, Any]:
    second = dict(item_struct, id="7100000000000000002", author="dancer")
    return {
        "ItemList": {"challenge": {"list": ["7100000000000000001", "7100000000000000002", "7199999999999999999"]}},
        "ItemModule": {
            "7100000000000000001": dict(item_struct, author="dancer"),
            "7100000000000000002": second,
        },
    }


@pytest.fixture
def mock_response():
    """Factory for httpx-like response mocks"""

    def _make(status_code: int = 200, json_data: Any = None, text: str = ""):
        response = MagicMock()
        response.status_code = status_code
        response.is_success = 200 <= status_code < 300
        response.json.return_value = json_data
        response.text = text
        response.raise_for_status = MagicMock()
        return response

    return _make


@pytest.fixture
def mock_remover():
    remover = MagicMock()
    remover.resolve = AsyncMock(return_value="https://www.tikwm.com/video/media/hdplay/1.mp4")
    return remover


@pytest.fixture
def universal_html():
    """Wrap a state object the way TikTok embeds it in a page"""
    return _universal_html


@pytest.fixture
def legacy_html():
    """Render a state object in the older SIGI_STATE page layout"""
    return _legacy_html

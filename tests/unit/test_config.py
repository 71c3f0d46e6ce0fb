import os
from unittest.mock import patch

import pytest

from tiktok_scraper.config import (
    PACKAGE_ROOT,
    ScraperConfig,
    get_env_bool,
    get_env_float,
    get_env_int,
)

pytestmark = pytest.mark.unit


class TestEnvHelpers:
    def test_get_env_int(self):
        with patch.dict(os.environ, {"TEST_INT": "42", "TEST_BAD_INT": "many"}):
            assert get_env_int("TEST_INT", 1) == 42
            assert get_env_int("TEST_BAD_INT", 7) == 7
            assert get_env_int("TEST_UNSET_INT", 3) == 3

    def test_get_env_float_blank_is_default(self):
        """Test unset and blank values both fall back."""
        with patch.dict(os.environ, {"TEST_FLOAT": "2.5", "TEST_BLANK": "  "}):
            assert get_env_float("TEST_FLOAT") == 2.5
            assert get_env_float("TEST_BLANK") is None
            assert get_env_float("TEST_UNSET_FLOAT", 1.0) == 1.0

    def test_get_env_bool(self):
        with patch.dict(os.environ, {"TEST_TRUE": "True", "TEST_FALSE": "no"}):
            assert get_env_bool("TEST_TRUE") is True
            assert get_env_bool("TEST_FALSE", True) is False
            assert get_env_bool("TEST_UNSET_BOOL", True) is True


class TestScraperConfig:
    """Defaults and environment overrides."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = ScraperConfig()

        assert config.TIKTOK_BASE_URL == "https://www.tiktok.com"
        assert "Chrome/103" in config.TIKTOK_USER_AGENT
        assert config.TIKTOK_MAX_SOCKETS == 20
        assert config.TIKTOK_LIST_PAGE_SIZE == 35
        assert config.TIKTOK_COOKIES_PATH is None
        assert config.TIKTOK_REQUEST_TIMEOUT is None
        assert config.TIKTOK_HEADLESS is True
        assert config.TIKWM_API_URL == "https://www.tikwm.com/api/"
        assert config.DOWNLOAD_ROOT == str(PACKAGE_ROOT / "downloads")
        assert config.DOWNLOAD_CHUNK_SIZE == 8192
        assert config.LOG_LEVEL == "INFO"
        assert config.LOG_FORMAT is None

    def test_environment_overrides(self):
        env = {
            "TIKTOK_MAX_SOCKETS": "5",
            "TIKTOK_REQUEST_TIMEOUT": "30",
            "TIKTOK_HEADLESS": "false",
            "TIKTOK_COOKIES_PATH": "/tmp/cookies.txt",
            "DOWNLOAD_ROOT": "/data/videos",
        }
        with patch.dict(os.environ, env, clear=True):
            config = ScraperConfig()

        assert config.TIKTOK_MAX_SOCKETS == 5
        assert config.TIKTOK_REQUEST_TIMEOUT == 30.0
        assert config.TIKTOK_HEADLESS is False
        assert config.TIKTOK_COOKIES_PATH == "/tmp/cookies.txt"
        assert config.DOWNLOAD_ROOT == "/data/videos"

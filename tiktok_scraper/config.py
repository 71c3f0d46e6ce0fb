"""
Configuration for the TikTok scraper.
Loads environment variables from a .env file and provides type-safe accessors.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

PACKAGE_ROOT = Path(__file__).resolve().parent


def get_env_var(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable with fallback to default"""
    return os.getenv(key, default)


def get_env_int(key: str, default: int = 0) -> int:
    """Get integer environment variable with fallback to default"""
    value = get_env_var(key, str(default))
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def get_env_float(key: str, default: Optional[float] = None) -> Optional[float]:
    """Get float environment variable; unset or blank values yield the default"""
    value = get_env_var(key, "")
    if not value or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        return default


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable with fallback to default"""
    return get_env_var(key, str(default)).lower() == "true"


@dataclass
class ScraperConfig:
    """Scraper configuration"""

    # TikTok web
    TIKTOK_BASE_URL: str = field(default_factory=lambda: get_env_var("TIKTOK_BASE_URL", "https://www.tiktok.com"))
    TIKTOK_USER_AGENT: str = field(default_factory=lambda: get_env_var(
        "TIKTOK_USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/103.0.5060.134 Safari/537.36",
    ))
    TIKTOK_MAX_SOCKETS: int = field(default_factory=lambda: get_env_int("TIKTOK_MAX_SOCKETS", 20))
    TIKTOK_LIST_PAGE_SIZE: int = field(default_factory=lambda: get_env_int("TIKTOK_LIST_PAGE_SIZE", 35))
    TIKTOK_COOKIES_PATH: Optional[str] = field(default_factory=lambda: get_env_var("TIKTOK_COOKIES_PATH") or None)

    # None disables the timeout entirely
    TIKTOK_REQUEST_TIMEOUT: Optional[float] = field(default_factory=lambda: get_env_float("TIKTOK_REQUEST_TIMEOUT"))

    # Headless browser fallback
    TIKTOK_HEADLESS: bool = field(default_factory=lambda: get_env_bool("TIKTOK_HEADLESS", True))

    # Watermark removal API
    TIKWM_BASE_URL: str = field(default_factory=lambda: get_env_var("TIKWM_BASE_URL", "https://www.tikwm.com"))
    TIKWM_API_URL: str = field(default_factory=lambda: get_env_var("TIKWM_API_URL", "https://www.tikwm.com/api/"))

    # Downloads
    DOWNLOAD_ROOT: str = field(default_factory=lambda: get_env_var("DOWNLOAD_ROOT", str(PACKAGE_ROOT / "downloads")))
    DOWNLOAD_CHUNK_SIZE: int = field(default_factory=lambda: get_env_int("DOWNLOAD_CHUNK_SIZE", 8192))

    # Logging
    LOG_LEVEL: str = field(default_factory=lambda: get_env_var("LOG_LEVEL", "INFO"))
    LOG_FORMAT: Optional[str] = field(default_factory=lambda: get_env_var("LOG_FORMAT") or None)


# Create global config instance
config = ScraperConfig()

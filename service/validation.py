"""Input validation for submitted video URLs"""
from typing import Optional

from core.errors import InvalidVideoUrlError

PLATFORM_DOMAIN = "tiktok.com"


def validate_video_url(url: Optional[str]) -> str:
    """
    Accept any non-empty string containing the TikTok domain.

    This is a substring check, not URL parsing: malformed URLs that
    mention the domain pass.

    Raises:
        InvalidVideoUrlError: URL missing, empty, or not a TikTok link
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidVideoUrlError("A TikTok video URL is required")
    if PLATFORM_DOMAIN not in url:
        raise InvalidVideoUrlError("Invalid TikTok URL")
    return url.strip()

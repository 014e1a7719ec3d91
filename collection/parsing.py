"""Helpers for pulling identifiers and hashtags out of TikTok text"""
import re
from typing import Any, List, Optional

VIDEO_ID_PATTERN = re.compile(r"/video/(\d+)")
HASHTAG_PATTERN = re.compile(r"#(\w+)", re.UNICODE)


def extract_video_id(url: str) -> Optional[str]:
    """Numeric video id from a canonical TikTok URL, or None"""
    match = VIDEO_ID_PATTERN.search(url or "")
    return match.group(1) if match else None


def extract_hashtags(text: Any) -> List[str]:
    """Hashtags in order of appearance; duplicates are kept"""
    if not isinstance(text, str):
        return []
    return HASHTAG_PATTERN.findall(text)


def to_count(value: Any) -> int:
    """Coerce an upstream counter to a non-negative int (0 when unusable)"""
    try:
        count = int(value)
    except (TypeError, ValueError):
        return 0
    return max(count, 0)

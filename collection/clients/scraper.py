import httpx
import json
import logging
import re
from typing import Any, Dict, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from collection.clients.base import AcquisitionStrategy
from collection.parsing import extract_hashtags, to_count
from collection.schemas import StrategyResult

logger = logging.getLogger(__name__)

STATE_SCRIPT_ID = "SIGI_STATE"
STATE_SCRIPT_PATTERN = re.compile(
    r'<script[^>]*\bid="' + STATE_SCRIPT_ID + r'"[^>]*>(.*?)</script>',
    re.DOTALL
)

class ScraperSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    scraper_api_key: Optional[str] = None
    scraper_api_url: str = "https://app.scrapingbee.com/api/v1/"
    scraper_timeout: float = 25.0
    scraper_wait_ms: int = 3000
    scraper_premium_proxy: bool = False
    scraper_country_code: Optional[str] = None
    scraper_extract_state: bool = True

class ScraperStrategy(AcquisitionStrategy):
    """Counters and author data scraped from the rendered TikTok page"""

    name = "scraper"

    def __init__(self, settings: Optional[ScraperSettings] = None, client: Optional[httpx.Client] = None):
        self.settings = settings or ScraperSettings()
        self.client = client or httpx.Client(timeout=self.settings.scraper_timeout)

    def close(self) -> None:
        self.client.close()

    def acquire(self, url: str, trace_id: str) -> StrategyResult:
        if not self.settings.scraper_api_key:
            return StrategyResult.soft_failure(self.name, "Scraper API key not configured")

        try:
            response = self.client.get(
                self.settings.scraper_api_url,
                params=self._build_params(url),
                timeout=self.settings.scraper_timeout
            )
            response.raise_for_status()
        except httpx.TimeoutException:
            return StrategyResult.soft_failure(
                self.name, f"Timed out after {self.settings.scraper_timeout}s"
            )
        except httpx.HTTPStatusError as e:
            return StrategyResult.soft_failure(self.name, f"HTTP {e.response.status_code}")
        except httpx.RequestError as e:
            return StrategyResult.soft_failure(self.name, f"Request error: {e}")

        state_text = self._locate_state(response)
        if state_text is None:
            return StrategyResult.soft_failure(self.name, f"{STATE_SCRIPT_ID} blob not found")

        try:
            state = json.loads(state_text)
        except ValueError as e:
            return StrategyResult.soft_failure(self.name, f"Malformed {STATE_SCRIPT_ID} JSON: {e}")

        data = parse_state(state)
        if data is None:
            return StrategyResult.soft_failure(self.name, "Video stats or author missing from page state")

        video_id = data.pop("_video_id")
        logger.info("Scraped video state", extra={
            "trace_id": trace_id,
            "strategy": self.name,
            "video_id": video_id
        })
        return StrategyResult.success(self.name, data)

    def _build_params(self, url: str) -> Dict[str, Any]:
        """Query parameters for the scraping service"""
        params: Dict[str, Any] = {
            "api_key": self.settings.scraper_api_key,
            "url": url,
            "render_js": "true",
            "wait": self.settings.scraper_wait_ms,
        }
        if self.settings.scraper_extract_state:
            params["extract_rules"] = json.dumps({
                "state": {"selector": f"script#{STATE_SCRIPT_ID}", "output": "text"}
            })
        if self.settings.scraper_premium_proxy:
            params["premium_proxy"] = "true"
        if self.settings.scraper_country_code:
            params["country_code"] = self.settings.scraper_country_code
        return params

    def _locate_state(self, response: httpx.Response) -> Optional[str]:
        """State blob from a pre-extracted field, else from raw markup"""
        content_type = response.headers.get("content-type", "")
        if "json" in content_type:
            try:
                extracted = response.json()
            except ValueError:
                extracted = None
            if isinstance(extracted, dict) and isinstance(extracted.get("state"), str) and extracted["state"]:
                return extracted["state"]

        match = STATE_SCRIPT_PATTERN.search(response.text)
        return match.group(1) if match else None


def _first_key(container: Any) -> Optional[str]:
    if isinstance(container, dict) and container:
        return next(iter(container))
    return None


def parse_state(state: Any) -> Optional[Dict[str, Any]]:
    """Map a parsed SIGI_STATE document onto VideoRecord fields.

    The item is keyed by the video id, which is only known from the
    document itself, so the first key of ``ItemModule`` is used. Returns
    None unless both the stats object and the author object exist.
    """
    if not isinstance(state, dict):
        return None

    items = state.get("ItemModule")
    video_id = _first_key(items)
    if video_id is None:
        return None
    item = items[video_id]
    if not isinstance(item, dict):
        return None

    stats = item.get("stats")
    if not isinstance(stats, dict):
        return None

    user_module = state.get("UserModule")
    if not isinstance(user_module, dict):
        user_module = {}
    users = user_module.get("users")
    author_ref = item.get("author")
    if isinstance(author_ref, dict):
        author = author_ref
    elif isinstance(author_ref, str) and isinstance(users, dict):
        author = users.get(author_ref)
    else:
        author = None
    if not isinstance(author, dict):
        return None

    username = author.get("uniqueId") or (author_ref if isinstance(author_ref, str) else "")
    user_stats = user_module.get("stats")
    author_stats = user_stats.get(username) if isinstance(user_stats, dict) else None
    if not isinstance(author_stats, dict):
        author_stats = item.get("authorStats") if isinstance(item.get("authorStats"), dict) else {}

    description = item.get("desc") if isinstance(item.get("desc"), str) else ""
    challenges = item.get("challenges") if isinstance(item.get("challenges"), list) else []
    hashtags = [c["title"] for c in challenges if isinstance(c, dict) and c.get("title")]
    if not hashtags:
        hashtags = extract_hashtags(description)

    video = item.get("video") if isinstance(item.get("video"), dict) else {}

    return {
        "_video_id": video_id,
        "description": description or None,
        "thumbnail": video.get("cover") or video.get("originCover"),
        "hashtags": hashtags or None,
        "author_username": username or None,
        "author_profile_url": f"https://www.tiktok.com/@{username}" if username else None,
        "author_followers": to_count(author_stats.get("followerCount", author.get("followerCount"))),
        "views": to_count(stats.get("playCount")),
        "likes": to_count(stats.get("diggCount")),
        "comments": to_count(stats.get("commentCount")),
        "shares": to_count(stats.get("shareCount")),
        "saves": to_count(stats.get("collectCount")),
    }

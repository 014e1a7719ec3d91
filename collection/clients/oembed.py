import httpx
import logging
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from collection.clients.base import AcquisitionStrategy
from collection.parsing import extract_hashtags
from collection.schemas import StrategyResult

logger = logging.getLogger(__name__)

class OEmbedSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    tiktok_oembed_url: str = "https://www.tiktok.com/oembed"
    oembed_timeout: float = 10.0

class OEmbedStrategy(AcquisitionStrategy):
    """Baseline metadata from TikTok's public oEmbed endpoint (no counters)"""

    name = "oembed"

    def __init__(self, settings: Optional[OEmbedSettings] = None, client: Optional[httpx.Client] = None):
        self.settings = settings or OEmbedSettings()
        self.client = client or httpx.Client(timeout=self.settings.oembed_timeout)

    def close(self) -> None:
        self.client.close()

    def acquire(self, url: str, trace_id: str) -> StrategyResult:
        try:
            response = self.client.get(self.settings.tiktok_oembed_url, params={"url": url})
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            return StrategyResult.soft_failure(self.name, f"HTTP {e.response.status_code}")
        except httpx.RequestError as e:
            return StrategyResult.soft_failure(self.name, f"Request error: {e}")
        except ValueError as e:
            return StrategyResult.soft_failure(self.name, f"Invalid JSON: {e}")

        if not isinstance(payload, dict):
            return StrategyResult.soft_failure(self.name, "Unexpected oEmbed payload")

        title = payload.get("title") or ""
        if not isinstance(title, str):
            return StrategyResult.soft_failure(self.name, "Malformed oEmbed title")

        logger.info("oEmbed metadata fetched", extra={
            "trace_id": trace_id,
            "strategy": self.name
        })

        # TikTok puts the caption (hashtags included) in the oEmbed title
        return StrategyResult.success(self.name, {
            "title": title,
            "description": title,
            "thumbnail": payload.get("thumbnail_url"),
            "hashtags": extract_hashtags(title),
            "author_username": payload.get("author_unique_id") or payload.get("author_name"),
            "author_profile_url": payload.get("author_url"),
        })

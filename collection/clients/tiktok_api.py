import httpx
import logging
from typing import Any, Dict, List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import ConfigurationError
from collection.clients.base import AcquisitionStrategy
from collection.parsing import extract_video_id, to_count
from collection.schemas import StrategyResult

logger = logging.getLogger(__name__)

# Fields requested from the video query endpoint; _map_video reads these
VIDEO_FIELDS = [
    "id", "title", "video_description", "cover_image_url", "share_url",
    "view_count", "like_count", "comment_count", "share_count",
    "username", "hashtag_names",
]

class TikTokApiSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    tiktok_client_key: Optional[str] = None
    tiktok_client_secret: Optional[str] = None
    tiktok_token_url: str = "https://open.tiktokapis.com/v2/oauth/token/"
    tiktok_video_query_url: str = "https://open.tiktokapis.com/v2/video/query/"
    tiktok_api_timeout: float = 10.0

class OfficialApiStrategy(AcquisitionStrategy):
    """Video data from the official TikTok API (client-credentials flow)"""

    name = "official_api"

    def __init__(self, settings: Optional[TikTokApiSettings] = None, client: Optional[httpx.Client] = None):
        self.settings = settings or TikTokApiSettings()
        self.client = client or httpx.Client(timeout=self.settings.tiktok_api_timeout)

    def close(self) -> None:
        self.client.close()

    def acquire(self, url: str, trace_id: str) -> StrategyResult:
        if not self.settings.tiktok_client_key or not self.settings.tiktok_client_secret:
            logger.error("TikTok API credentials missing", extra={
                "trace_id": trace_id,
                "strategy": self.name
            })
            raise ConfigurationError(
                "TIKTOK_CLIENT_KEY and TIKTOK_CLIENT_SECRET must be set to use the official API"
            )

        video_id = extract_video_id(url)
        if video_id is None:
            return StrategyResult.soft_failure(self.name, "No video id in URL")

        try:
            access_token = self._fetch_access_token()
            video = self._query_video(access_token, video_id)
        except httpx.HTTPStatusError as e:
            return StrategyResult.soft_failure(self.name, f"HTTP {e.response.status_code}")
        except httpx.RequestError as e:
            return StrategyResult.soft_failure(self.name, f"Request error: {e}")
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            return StrategyResult.soft_failure(self.name, f"Unexpected API payload: {e}")

        if video is None:
            return StrategyResult.soft_failure(self.name, f"Video {video_id} not returned by API")

        logger.info("Official API video fetched", extra={
            "trace_id": trace_id,
            "strategy": self.name,
            "video_id": video_id
        })
        return StrategyResult.success(self.name, self._map_video(video))

    def _fetch_access_token(self) -> str:
        """Exchange the client key/secret for a bearer token"""
        response = self.client.post(
            self.settings.tiktok_token_url,
            data={
                "client_key": self.settings.tiktok_client_key,
                "client_secret": self.settings.tiktok_client_secret,
                "grant_type": "client_credentials",
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"}
        )
        response.raise_for_status()
        token = response.json()["access_token"]
        if not token:
            raise ValueError("empty access_token")
        return token

    def _query_video(self, access_token: str, video_id: str) -> Optional[Dict[str, Any]]:
        """Query a single video by id; None when the API returns nothing"""
        response = self.client.post(
            self.settings.tiktok_video_query_url,
            params={"fields": ",".join(VIDEO_FIELDS)},
            json={"filters": {"video_ids": [video_id]}},
            headers={"Authorization": f"Bearer {access_token}"}
        )
        response.raise_for_status()
        payload = response.json()

        error = payload.get("error") or {}
        if error.get("code") not in (None, "", "ok"):
            raise ValueError(f"API error {error.get('code')}: {error.get('message', '')}")

        videos: List[Dict[str, Any]] = (payload.get("data") or {}).get("videos") or []
        if not videos:
            return None
        if not isinstance(videos[0], dict):
            raise ValueError("video entry is not an object")
        return videos[0]

    def _map_video(self, video: Dict[str, Any]) -> Dict[str, Any]:
        """Translate API field names into VideoRecord fields"""
        username = video.get("username") or ""
        hashtags = video.get("hashtag_names")
        return {
            "title": video.get("title") or video.get("video_description"),
            "description": video.get("video_description"),
            "thumbnail": video.get("cover_image_url"),
            "hashtags": list(hashtags) if isinstance(hashtags, list) else None,
            "author_username": username or None,
            "author_profile_url": f"https://www.tiktok.com/@{username}" if username else None,
            "views": to_count(video.get("view_count")),
            "likes": to_count(video.get("like_count")),
            "comments": to_count(video.get("comment_count")),
            "shares": to_count(video.get("share_count")),
        }

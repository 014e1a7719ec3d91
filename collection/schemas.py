"""Normalized video record and per-strategy results"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class VideoRecord(BaseModel):
    """Metadata and public counters for one TikTok video"""
    url: str
    title: str = ""
    description: str = ""
    thumbnail: Optional[str] = None
    hashtags: List[str] = Field(default_factory=list)

    author_username: str = ""
    author_profile_url: Optional[str] = None
    author_followers: int = Field(default=0, ge=0)

    views: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)
    shares: int = Field(default=0, ge=0)
    saves: int = Field(default=0, ge=0)

    @classmethod
    def empty(cls, url: str) -> "VideoRecord":
        """All-defaults record used as the acquisition baseline"""
        return cls(url=url)

    def merged(self, partial: Dict[str, Any]) -> "VideoRecord":
        """Return a copy with the partial's fields overwriting ours.

        Shallow merge: lists and nested values are replaced, never combined.
        ``None`` values and unknown keys in the partial are ignored.
        """
        update = {
            key: value for key, value in partial.items()
            if value is not None and key in type(self).model_fields and key != "url"
        }
        return self.model_validate({**self.model_dump(), **update})


class StrategyResult(BaseModel):
    """Outcome of one acquisition strategy: data, or a soft-failure reason"""
    strategy: str
    data: Optional[Dict[str, Any]] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None

    @classmethod
    def success(cls, strategy: str, data: Dict[str, Any]) -> "StrategyResult":
        return cls(strategy=strategy, data=data)

    @classmethod
    def soft_failure(cls, strategy: str, reason: str) -> "StrategyResult":
        return cls(strategy=strategy, reason=reason)

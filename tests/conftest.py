"""Common test fixtures for all test modules"""
import json
import pytest
from typing import Any, Dict, List, Optional
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.db import Base
from core.models import VideoAnalysis  # noqa: F401
from collection.clients.base import AcquisitionStrategy
from collection.schemas import StrategyResult
from service.persistence import AnalysisSink

VIDEO_URL = "https://www.tiktok.com/@chef.lina/video/7301234567890123456"


class FakeStrategy(AcquisitionStrategy):
    """Strategy returning canned data and counting calls"""

    def __init__(self, name: str, data: Optional[Dict[str, Any]] = None,
                 reason: str = "no data", error: Optional[Exception] = None):
        self.name = name
        self.data = data
        self.reason = reason
        self.error = error
        self.calls: List[str] = []
        self.closed = False

    def acquire(self, url: str, trace_id: str) -> StrategyResult:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        if self.data is None:
            return StrategyResult.soft_failure(self.name, self.reason)
        return StrategyResult.success(self.name, dict(self.data))

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_strategy():
    """The FakeStrategy class, for building acquisition chains in tests"""
    return FakeStrategy


@pytest.fixture
def video_url():
    return VIDEO_URL


@pytest.fixture
def sigi_state():
    """Minimal SIGI_STATE document as embedded in a TikTok video page"""
    return {
        "ItemModule": {
            "7301234567890123456": {
                "id": "7301234567890123456",
                "desc": "Crispy garlic noodles in 10 minutes #cooking #noodles #easyrecipe",
                "author": "chef.lina",
                "video": {"cover": "https://p16.tiktokcdn.com/cover.jpeg"},
                "challenges": [
                    {"title": "cooking"},
                    {"title": "noodles"},
                    {"title": "easyrecipe"}
                ],
                "stats": {
                    "playCount": 1000,
                    "diggCount": 100,
                    "commentCount": 50,
                    "shareCount": 30,
                    "collectCount": 20
                }
            }
        },
        "UserModule": {
            "users": {
                "chef.lina": {"uniqueId": "chef.lina", "nickname": "Lina Cooks"}
            },
            "stats": {
                "chef.lina": {"followerCount": 48200}
            }
        }
    }


@pytest.fixture
def sigi_page(sigi_state):
    """Raw page markup containing the state blob"""
    return (
        "<html><head><title>TikTok</title></head><body>"
        '<script id="SIGI_STATE" type="application/json">'
        f"{json.dumps(sigi_state)}"
        "</script></body></html>"
    )


@pytest.fixture
def oembed_payload():
    return {
        "version": "1.0",
        "type": "video",
        "title": "Crispy garlic noodles in 10 minutes #cooking #noodles",
        "author_url": "https://www.tiktok.com/@chef.lina",
        "author_name": "Lina Cooks",
        "author_unique_id": "chef.lina",
        "thumbnail_url": "https://p16.tiktokcdn.com/oembed-thumb.jpeg",
        "provider_name": "TikTok"
    }


@pytest.fixture
def session_factory():
    """In-memory SQLite session factory with the schema created"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def sink(session_factory):
    return AnalysisSink(session_factory)

"""Ordered fallback chain producing one complete VideoRecord per URL"""
import logging
import time
from typing import Annotated, Callable, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, NoDecode

from core.errors import ConfigurationError
from collection.clients.base import AcquisitionStrategy
from collection.clients.oembed import OEmbedStrategy
from collection.clients.scraper import ScraperStrategy
from collection.clients.tiktok_api import OfficialApiStrategy
from collection.schemas import VideoRecord

logger = logging.getLogger(__name__)

STRATEGY_FACTORIES: Dict[str, Callable[[], AcquisitionStrategy]] = {
    OEmbedStrategy.name: OEmbedStrategy,
    ScraperStrategy.name: ScraperStrategy,
    OfficialApiStrategy.name: OfficialApiStrategy,
}

class AcquisitionSettings(BaseSettings):
    """Which strategies run, in priority order"""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    acquisition_strategies: Annotated[List[str], NoDecode] = ["oembed", "scraper"]

    @field_validator("acquisition_strategies", mode="before")
    @classmethod
    def split_names(cls, v):
        if isinstance(v, str):
            return [name.strip() for name in v.split(",") if name.strip()]
        return v


def build_strategies(names: Sequence[str]) -> List[AcquisitionStrategy]:
    """Instantiate strategies by configured name, keeping the given order"""
    strategies = []
    for name in names:
        factory = STRATEGY_FACTORIES.get(name)
        if factory is None:
            raise ConfigurationError(
                f"Unknown acquisition strategy '{name}'. "
                f"Expected one of: {', '.join(STRATEGY_FACTORIES)}"
            )
        strategies.append(factory())
    return strategies


class VideoAcquirer:
    """Runs each strategy once, in order, folding results over a baseline record"""

    def __init__(self, strategies: Sequence[AcquisitionStrategy]):
        self.strategies = list(strategies)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        for strategy in self.strategies:
            strategy.close()

    def acquire(self, url: str, trace_id: str) -> Tuple[VideoRecord, List[str]]:
        """Return the merged record and the names of strategies that contributed.

        Soft failures leave the record as it was. ConfigurationError from a
        strategy propagates and aborts the request.
        """
        record = VideoRecord.empty(url)
        sources: List[str] = []

        for strategy in self.strategies:
            start_time = time.time()
            result = strategy.acquire(url, trace_id)
            latency_ms = int((time.time() - start_time) * 1000)

            if not result.ok:
                logger.warning(f"Strategy {strategy.name} yielded no data: {result.reason}", extra={
                    "trace_id": trace_id,
                    "strategy": strategy.name,
                    "latency_ms": latency_ms
                })
                continue

            try:
                record = record.merged(result.data)
            except ValidationError as e:
                logger.warning(f"Strategy {strategy.name} returned invalid fields: {e}", extra={
                    "trace_id": trace_id,
                    "strategy": strategy.name
                })
                continue

            sources.append(strategy.name)
            logger.info(f"Strategy {strategy.name} merged", extra={
                "trace_id": trace_id,
                "strategy": strategy.name,
                "latency_ms": latency_ms
            })

        return record, sources


def create_acquirer(settings: Optional[AcquisitionSettings] = None) -> VideoAcquirer:
    """Build the acquirer from environment configuration"""
    settings = settings or AcquisitionSettings()
    return VideoAcquirer(build_strategies(settings.acquisition_strategies))

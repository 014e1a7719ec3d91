"""Abstract acquisition strategy interface"""
from abc import ABC, abstractmethod
from collection.schemas import StrategyResult


class AcquisitionStrategy(ABC):
    """One upstream able to produce all or part of a VideoRecord"""

    name: str = "strategy"

    @abstractmethod
    def acquire(self, url: str, trace_id: str) -> StrategyResult:
        """Fetch a partial record for ``url``.

        Upstream trouble must come back as ``StrategyResult.soft_failure``;
        only ``ConfigurationError`` may be raised.
        """
        pass

    def close(self) -> None:
        """Release any pooled connections"""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

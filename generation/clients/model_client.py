"""Abstract model client interface for SEO/niche classification"""
from abc import ABC, abstractmethod
from typing import List
from generation.schemas.seo import SeoAnalysis

class SeoModelClient(ABC):
    """Abstract base class for caption classifiers"""

    @abstractmethod
    def classify(self, description: str, hashtags: List[str], trace_id: str) -> SeoAnalysis:
        """Score the caption and hashtags; must not raise"""
        pass

    def close(self) -> None:
        pass

class StaticSeoClient(SeoModelClient):
    """Fallback used when no classifier credential is configured"""

    def classify(self, description: str, hashtags: List[str], trace_id: str) -> SeoAnalysis:
        return SeoAnalysis.unconfigured()

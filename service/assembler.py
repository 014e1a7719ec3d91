"""Builds the nested analysis payload from pipeline outputs"""
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from analysis.metrics import Metrics
from analysis.retention import RetentionPoint, average_retention
from collection.schemas import VideoRecord
from generation.schemas.seo import SeoAnalysis
from service.dto import (
    AnalysisDTO, AuthorDTO, FormattedStatsDTO, RetentionDTO, StatsDTO, VideoDTO
)


def format_count(num: int) -> str:
    """Compact display form: 999, 1.2K, 3.4M, 1.0B"""
    if num >= 1_000_000_000:
        return f"{num / 1_000_000_000:.1f}B"
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return str(num)


def assemble_analysis(
    record: VideoRecord,
    metrics: Metrics,
    curve: Sequence[RetentionPoint],
    seo: SeoAnalysis,
    *,
    sources: Optional[List[str]] = None,
    now: Optional[datetime] = None
) -> AnalysisDTO:
    """
    Merge pipeline outputs into one AnalysisDTO.

    The timestamp is taken here, at assembly time. ``id`` stays None until
    the persistence sink reports one.
    """
    timestamp = (now or datetime.now(timezone.utc)).isoformat()

    counters = {
        "views": record.views,
        "likes": record.likes,
        "comments": record.comments,
        "shares": record.shares,
        "saves": record.saves,
    }

    return AnalysisDTO(
        timestamp=timestamp,
        video=VideoDTO(
            url=record.url,
            title=record.title or "",
            description=record.description or "",
            thumbnail=record.thumbnail,
            hashtags=list(record.hashtags),
            author=AuthorDTO(
                username=record.author_username or "",
                profile_url=record.author_profile_url,
                followers=record.author_followers or 0
            )
        ),
        stats=StatsDTO(
            **counters,
            formatted=FormattedStatsDTO(**{k: format_count(v) for k, v in counters.items()})
        ),
        metrics=metrics,
        seo=seo,
        retention=RetentionDTO(
            curve=list(curve),
            average_retention=average_retention(curve)
        ),
        sources=list(sources or [])
    )

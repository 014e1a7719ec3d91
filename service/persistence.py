"""Insert-only persistence sink for assembled analyses"""
import json
import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from core.models import VideoAnalysis
from service.dto import AnalysisDTO

logger = logging.getLogger(__name__)


def to_row(analysis: AnalysisDTO) -> VideoAnalysis:
    """Flatten an analysis into a video_analyses row"""
    video, stats, metrics = analysis.video, analysis.stats, analysis.metrics
    return VideoAnalysis(
        tiktok_url=video.url,
        title=video.title,
        description=video.description,
        thumbnail_url=video.thumbnail,
        author_username=video.author.username,
        author_profile_url=video.author.profile_url,
        author_followers=video.author.followers,
        views_count=stats.views,
        likes_count=stats.likes,
        comments_count=stats.comments,
        shares_count=stats.shares,
        saves_count=stats.saves,
        engagement_rate=metrics.engagement_rate,
        likes_ratio=metrics.likes_ratio,
        comments_ratio=metrics.comments_ratio,
        shares_ratio=metrics.shares_ratio,
        saves_ratio=metrics.saves_ratio,
        total_engagements=metrics.total_engagements,
        viral_score=metrics.viral_score,
        retention_rate=metrics.retention_rate,
        average_retention=analysis.retention.average_retention,
        seo_score=analysis.seo.score,
        seo_niche=analysis.seo.niche,
        seo_recommendations=json.dumps(analysis.seo.recommendations, ensure_ascii=False),
        hashtags=json.dumps(video.hashtags, ensure_ascii=False),
        retention_curve=json.dumps(
            [point.model_dump(by_alias=True) for point in analysis.retention.curve]
        ),
    )


class AnalysisSink:
    """Writes one row per analysis; failures never reach the caller"""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def save(self, analysis: AnalysisDTO, trace_id: str) -> Optional[int]:
        """Insert the analysis and return its id, or None if the write failed"""
        try:
            session = self.session_factory()
        except Exception as e:
            logger.error(f"Failed to open database session: {e}", extra={
                "trace_id": trace_id,
                "error_type": type(e).__name__
            })
            return None

        try:
            row = to_row(analysis)
            session.add(row)
            session.commit()
            session.refresh(row)

            logger.info("Analysis saved", extra={"trace_id": trace_id})
            return row.id

        except Exception as e:
            session.rollback()
            logger.error(f"Failed to save analysis: {e}", extra={
                "trace_id": trace_id,
                "error_type": type(e).__name__
            })
            return None

        finally:
            session.close()

from sqlalchemy import Column, String, Text, BIGINT, Integer, Float, TIMESTAMP, Index
from sqlalchemy.sql import func
from core.db import Base

class VideoAnalysis(Base):
    """One row per analyzed TikTok video (insert-only)"""
    __tablename__ = "video_analyses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tiktok_url = Column(Text, nullable=False, comment="Submitted TikTok URL")
    title = Column(Text, comment="Video title")
    description = Column(Text, comment="Video caption")
    thumbnail_url = Column(Text, comment="Cover image URL")
    author_username = Column(String(255), comment="Author unique id")
    author_profile_url = Column(Text, comment="Author profile URL")
    author_followers = Column(BIGINT, default=0, comment="Author follower count")

    views_count = Column(BIGINT, default=0)
    likes_count = Column(BIGINT, default=0)
    comments_count = Column(BIGINT, default=0)
    shares_count = Column(BIGINT, default=0)
    saves_count = Column(BIGINT, default=0)

    engagement_rate = Column(Float, default=0, comment="Engagements per 100 views")
    likes_ratio = Column(Float, default=0)
    comments_ratio = Column(Float, default=0)
    shares_ratio = Column(Float, default=0)
    saves_ratio = Column(Float, default=0)
    total_engagements = Column(BIGINT, default=0)
    viral_score = Column(Integer, default=0, comment="Heuristic score 0-100")
    retention_rate = Column(Float, default=0, comment="Estimated retention, capped at 90")
    average_retention = Column(Float, default=0, comment="Mean of the retention curve")

    seo_score = Column(Integer, comment="Classifier score 0-100")
    seo_niche = Column(Text, comment="Classifier niche label")
    seo_recommendations = Column(Text, comment="Recommendations as JSON array")
    hashtags = Column(Text, comment="Hashtags as JSON array")
    retention_curve = Column(Text, comment="Retention curve points as JSON array")

    created_at = Column(TIMESTAMP(timezone=True), nullable=False,
                        server_default=func.now(), comment="Insert time (UTC)")

    __table_args__ = (
        Index('idx_video_analyses_created', 'created_at'),
    )

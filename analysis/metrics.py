"""Engagement ratios and the viral score heuristic"""
from core.schemas import CamelModel


class Metrics(CamelModel):
    """Derived engagement metrics; percentages are on a 0-100 scale"""
    engagement_rate: float = 0
    likes_ratio: float = 0
    comments_ratio: float = 0
    shares_ratio: float = 0
    saves_ratio: float = 0
    total_engagements: int = 0
    viral_score: int = 0
    retention_rate: float = 0


def _percent(part: int, views: int) -> float:
    return round(part / views * 100, 2)


def viral_score(engagement_rate: float, views: int) -> int:
    """Base 50 plus one engagement tier bonus and one reach tier bonus, capped at 100"""
    score = 50

    if engagement_rate > 15:
        score += 30
    elif engagement_rate > 10:
        score += 20
    elif engagement_rate > 5:
        score += 10

    if views > 1_000_000:
        score += 20
    elif views > 100_000:
        score += 10

    return min(100, score)


def calculate_metrics(views: int, likes: int, comments: int, shares: int, saves: int = 0) -> Metrics:
    """Compute ratios against views. Zero views yields all-zero metrics."""
    if views == 0:
        return Metrics()

    total_engagements = likes + comments + shares + saves
    engagement_rate = total_engagements / views * 100

    return Metrics(
        engagement_rate=round(engagement_rate, 2),
        likes_ratio=_percent(likes, views),
        comments_ratio=_percent(comments, views),
        shares_ratio=_percent(shares, views),
        saves_ratio=_percent(saves, views),
        total_engagements=total_engagements,
        viral_score=viral_score(engagement_rate, views),
        retention_rate=round(min(90, engagement_rate * 4), 1),
    )

"""Illustrative viewer-retention curve derived from the engagement rate.

The curve is a formula, not a measurement: a base level is picked from the
engagement rate, then decays linearly by up to 60% over the video length,
never dropping below 10%.
"""
from typing import List, Sequence

from core.schemas import CamelModel

CURVE_STEP_PERCENT = 10
RETENTION_FLOOR = 10.0


class RetentionPoint(CamelModel):
    time_percent: int
    retention: float


def base_retention(engagement_rate: float) -> float:
    return min(85.0, max(30.0, engagement_rate * 5))


def generate_retention_curve(engagement_rate: float) -> List[RetentionPoint]:
    """11 points at 0, 10, ..., 100 percent of the video; non-increasing"""
    base = base_retention(engagement_rate)
    return [
        RetentionPoint(
            time_percent=i,
            retention=round(max(RETENTION_FLOOR, base * (1 - 0.6 * i / 100)), 1)
        )
        for i in range(0, 101, CURVE_STEP_PERCENT)
    ]


def average_retention(curve: Sequence[RetentionPoint]) -> float:
    """Mean retention of the curve; 0 for an empty curve"""
    if not curve:
        return 0.0
    return round(sum(point.retention for point in curve) / len(curve), 1)

"""Unit tests for engagement metrics and the retention curve"""
import pytest

from analysis.metrics import Metrics, calculate_metrics, viral_score
from analysis.retention import (
    RetentionPoint, average_retention, base_retention, generate_retention_curve
)


class TestCalculateMetrics:
    """Ratios, engagement rate and viral score"""

    def test_reference_counters(self):
        """1000 views with 200 engagements"""
        metrics = calculate_metrics(views=1000, likes=100, comments=50, shares=30, saves=20)

        assert metrics.total_engagements == 200
        assert metrics.engagement_rate == 20.00
        assert metrics.likes_ratio == 10.00
        assert metrics.comments_ratio == 5.00
        assert metrics.shares_ratio == 3.00
        assert metrics.saves_ratio == 2.00
        assert metrics.viral_score == 80  # 50 + 30, no reach bonus at 1000 views
        assert metrics.retention_rate == 80.0

    @pytest.mark.parametrize("likes,comments,shares,saves", [
        (0, 0, 0, 0),
        (10, 5, 2, 1),
        (1_000_000, 0, 0, 0),
    ])
    def test_zero_views_yield_all_zero(self, likes, comments, shares, saves):
        """No division by zero; every field is 0"""
        metrics = calculate_metrics(views=0, likes=likes, comments=comments, shares=shares, saves=saves)

        assert metrics == Metrics()
        assert metrics.engagement_rate == 0
        assert metrics.total_engagements == 0
        assert metrics.viral_score == 0
        assert metrics.retention_rate == 0

    def test_saves_default_to_zero(self):
        metrics = calculate_metrics(views=200, likes=10, comments=5, shares=5)

        assert metrics.total_engagements == 20
        assert metrics.saves_ratio == 0
        assert metrics.engagement_rate == 10.0

    def test_ratios_rounded_to_two_decimals(self):
        metrics = calculate_metrics(views=3, likes=1, comments=0, shares=0)

        assert metrics.likes_ratio == 33.33
        assert metrics.engagement_rate == 33.33

    def test_ratios_are_not_clamped(self):
        """Engagements can exceed views; percentages go above 100"""
        metrics = calculate_metrics(views=10, likes=30, comments=0, shares=0)

        assert metrics.likes_ratio == 300.0
        assert metrics.retention_rate == 90.0

    def test_retention_rate_capped_at_90(self):
        metrics = calculate_metrics(views=100, likes=50, comments=0, shares=0)
        assert metrics.retention_rate == 90.0

    def test_retention_rate_rounded_to_one_decimal(self):
        metrics = calculate_metrics(views=3000, likes=1, comments=0, shares=0)
        assert metrics.retention_rate == round(1 / 3000 * 100 * 4, 1)

    def test_camel_case_serialization(self):
        data = calculate_metrics(views=1000, likes=100, comments=50, shares=30, saves=20).model_dump(by_alias=True)

        assert set(data) == {
            "engagementRate", "likesRatio", "commentsRatio", "sharesRatio",
            "savesRatio", "totalEngagements", "viralScore", "retentionRate"
        }


class TestViralScore:
    """Tiered bonuses, additive across tracks, capped at 100"""

    @pytest.mark.parametrize("engagement_rate,views,expected", [
        (0.0, 1, 50),
        (5.0, 1, 50),       # tier thresholds are strict
        (5.01, 1, 60),
        (10.5, 1, 70),
        (15.5, 1, 80),
        (0.0, 100_000, 50),
        (0.0, 100_001, 60),
        (0.0, 1_000_001, 70),
        (12.0, 500_000, 80),
        (20.0, 2_000_000, 100),
    ])
    def test_tiers(self, engagement_rate, views, expected):
        assert viral_score(engagement_rate, views) == expected

    def test_never_exceeds_100(self):
        assert viral_score(99.0, 10_000_000) == 100

    def test_high_reach_video(self):
        metrics = calculate_metrics(views=2_500_000, likes=210_000, comments=4_500, shares=8_000)

        assert metrics.engagement_rate == 8.9
        assert metrics.viral_score == 80  # 50 + 10 + 20


class TestRetentionCurve:
    """Formula-derived decay curve"""

    @pytest.mark.parametrize("engagement_rate", [0.0, 3.0, 8.4, 12.0, 17.0, 250.0])
    def test_shape(self, engagement_rate):
        curve = generate_retention_curve(engagement_rate)

        assert len(curve) == 11
        assert [p.time_percent for p in curve] == list(range(0, 101, 10))

        values = [p.retention for p in curve]
        assert all(a >= b for a, b in zip(values, values[1:])), "curve must be non-increasing"
        assert all(v >= 10 for v in values)

        base = base_retention(engagement_rate)
        assert values[-1] == round(max(10, base * 0.4), 1)

    def test_base_retention_clamped(self):
        assert base_retention(0) == 30
        assert base_retention(10) == 50
        assert base_retention(100) == 85

    def test_first_point_is_base(self):
        curve = generate_retention_curve(10.0)
        assert curve[0].retention == 50.0
        assert curve[-1].retention == 20.0

    def test_floor_reached_for_low_base(self):
        """Base 30 decays to 12 at the end, still above the floor"""
        curve = generate_retention_curve(0.0)
        assert curve[-1].retention == 12.0

    def test_deterministic(self):
        assert generate_retention_curve(7.3) == generate_retention_curve(7.3)

    def test_point_serialization(self):
        point = generate_retention_curve(10.0)[1]
        assert point.model_dump(by_alias=True) == {"timePercent": 10, "retention": 47.0}


class TestAverageRetention:

    def test_empty_curve_is_zero(self):
        assert average_retention([]) == 0.0

    def test_mean_of_values(self):
        curve = [
            RetentionPoint(time_percent=0, retention=50.0),
            RetentionPoint(time_percent=10, retention=40.0),
        ]
        assert average_retention(curve) == 45.0

    def test_generated_curve_mean(self):
        curve = generate_retention_curve(10.0)
        expected = round(sum(p.retention for p in curve) / 11, 1)
        assert average_retention(curve) == expected

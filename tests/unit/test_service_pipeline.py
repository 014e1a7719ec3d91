"""Unit tests for URL validation, response assembly, persistence and the pipeline"""
import json
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from core.errors import ConfigurationError, InvalidVideoUrlError
from core.models import VideoAnalysis
from analysis.metrics import calculate_metrics
from analysis.retention import generate_retention_curve
from collection.acquirer import VideoAcquirer
from collection.schemas import VideoRecord
from generation.clients.model_client import StaticSeoClient
from generation.schemas.seo import SeoAnalysis
from service.analysis_service import analyze_video
from service.assembler import assemble_analysis, format_count
from service.dto import AnalyzeRequestDTO
from service.persistence import AnalysisSink
from service.validation import validate_video_url

SCRAPED = {
    "description": "Crispy garlic noodles #cooking #noodles",
    "hashtags": ["cooking", "noodles", "easyrecipe"],
    "author_username": "chef.lina",
    "author_followers": 48200,
    "views": 1000,
    "likes": 100,
    "comments": 50,
    "shares": 30,
    "saves": 20,
}


class RecordingSeoClient(StaticSeoClient):
    def __init__(self):
        self.calls = []

    def classify(self, description, hashtags, trace_id):
        self.calls.append((description, list(hashtags)))
        return SeoAnalysis(score=64, niche="cooking", recommendations=["Post at dinner time"])


class BrokenSink(AnalysisSink):
    def __init__(self):
        def factory():
            raise OperationalError("INSERT", {}, Exception("database is down"))
        super().__init__(factory)


class TestValidateVideoUrl:

    @pytest.mark.parametrize("url", [
        "https://www.tiktok.com/@chef.lina/video/7301234567890123456",
        "https://vm.tiktok.com/ZMabc123/",
        "  https://www.tiktok.com/@x/video/1  ",
        "not-a-url-but-mentions-tiktok.com",
    ])
    def test_accepts_domain_substring(self, url):
        assert validate_video_url(url) == url.strip()

    @pytest.mark.parametrize("url", [None, "", "   ", "https://www.youtube.com/watch?v=abc", 123])
    def test_rejects(self, url):
        with pytest.raises(InvalidVideoUrlError):
            validate_video_url(url)


class TestFormatCount:

    @pytest.mark.parametrize("value,expected", [
        (0, "0"), (999, "999"), (1000, "1.0K"), (1540, "1.5K"),
        (2_500_000, "2.5M"), (1_000_000_000, "1.0B"),
    ])
    def test_format(self, value, expected):
        assert format_count(value) == expected


class TestAssembleAnalysis:

    def build(self, video_url, now=None, **record_fields):
        record = VideoRecord(url=video_url, **{**SCRAPED, **record_fields})
        metrics = calculate_metrics(record.views, record.likes, record.comments, record.shares, record.saves)
        curve = generate_retention_curve(metrics.engagement_rate)
        return assemble_analysis(record, metrics, curve, SeoAnalysis.unconfigured(), sources=["scraper"], now=now)

    def test_payload_shape(self, video_url):
        now = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)
        data = self.build(video_url, now=now).model_dump(by_alias=True)

        assert data["id"] is None
        assert data["timestamp"] == "2026-10-19T09:30:00+00:00"
        assert set(data) == {"id", "timestamp", "video", "stats", "metrics", "seo", "retention", "sources"}
        assert data["video"]["author"] == {"username": "chef.lina", "profileUrl": None, "followers": 48200}
        assert data["stats"]["views"] == 1000
        assert data["stats"]["formatted"]["views"] == "1.0K"
        assert data["metrics"]["engagementRate"] == 20.0
        assert data["metrics"]["viralScore"] == 80
        assert len(data["retention"]["curve"]) == 11
        assert data["retention"]["curve"][0] == {"timePercent": 0, "retention": 85.0}
        assert data["sources"] == ["scraper"]

    def test_average_retention(self, video_url):
        analysis = self.build(video_url)
        values = [p.retention for p in analysis.retention.curve]

        assert analysis.retention.average_retention == round(sum(values) / len(values), 1)

    def test_empty_curve_average_is_zero(self, video_url):
        record = VideoRecord.empty(video_url)
        analysis = assemble_analysis(record, calculate_metrics(0, 0, 0, 0), [], SeoAnalysis.unconfigured())

        assert analysis.retention.average_retention == 0
        assert analysis.retention.curve == []

    def test_timestamp_taken_at_assembly(self, video_url):
        before = datetime.now(timezone.utc)
        analysis = self.build(video_url)

        assert datetime.fromisoformat(analysis.timestamp) >= before

    def test_defaults_for_empty_record(self, video_url):
        record = VideoRecord.empty(video_url)
        data = assemble_analysis(
            record, calculate_metrics(0, 0, 0, 0), generate_retention_curve(0), SeoAnalysis.unconfigured()
        ).model_dump(by_alias=True)

        assert data["video"]["title"] == ""
        assert data["video"]["hashtags"] == []
        assert data["video"]["author"]["username"] == ""
        assert all(data["stats"][k] == 0 for k in ("views", "likes", "comments", "shares", "saves"))
        assert all(v == 0 for v in data["metrics"].values())


class TestAnalysisSink:

    def test_save_returns_id_and_flattens(self, sink, session_factory, video_url):
        analysis = TestAssembleAnalysis().build(video_url)
        saved_id = sink.save(analysis, "test_trace")

        assert saved_id is not None
        with session_factory() as session:
            row = session.get(VideoAnalysis, saved_id)
            assert row.tiktok_url == video_url
            assert row.views_count == 1000
            assert row.saves_count == 20
            assert row.engagement_rate == 20.0
            assert row.viral_score == 80
            assert json.loads(row.hashtags) == ["cooking", "noodles", "easyrecipe"]
            assert len(json.loads(row.retention_curve)) == 11
            assert json.loads(row.retention_curve)[0] == {"timePercent": 0, "retention": 85.0}
            assert json.loads(row.seo_recommendations) == analysis.seo.recommendations

    def test_each_save_inserts_a_new_row(self, sink, session_factory, video_url):
        analysis = TestAssembleAnalysis().build(video_url)
        first = sink.save(analysis, "t1")
        second = sink.save(analysis, "t2")

        assert first != second
        with session_factory() as session:
            assert session.query(VideoAnalysis).count() == 2

    def test_failure_returns_none(self, video_url):
        analysis = TestAssembleAnalysis().build(video_url)
        assert BrokenSink().save(analysis, "test_trace") is None

    def test_commit_failure_returns_none(self, session_factory, video_url):
        from core.db import Base
        Base.metadata.drop_all(session_factory.kw["bind"])

        analysis = TestAssembleAnalysis().build(video_url)
        assert AnalysisSink(session_factory).save(analysis, "test_trace") is None


class TestAnalyzeVideo:
    """End-to-end pipeline with fake upstreams"""

    def test_success(self, video_url, fake_strategy, sink):
        seo_client = RecordingSeoClient()
        acquirer = VideoAcquirer([
            fake_strategy("oembed", {"title": "Garlic noodles", "thumbnail": "https://thumb"}),
            fake_strategy("scraper", SCRAPED),
        ])

        response = analyze_video(
            AnalyzeRequestDTO(url=video_url),
            trace_id="test_trace", acquirer=acquirer, seo_client=seo_client, sink=sink
        )

        assert response.success is True
        analysis = response.analysis
        assert analysis.id is not None
        assert analysis.video.title == "Garlic noodles"
        assert analysis.video.hashtags == ["cooking", "noodles", "easyrecipe"]
        assert analysis.metrics.engagement_rate == 20.0
        assert analysis.seo.niche == "cooking"
        assert analysis.sources == ["oembed", "scraper"]
        assert seo_client.calls == [(SCRAPED["description"], SCRAPED["hashtags"])]

    def test_invalid_url_makes_no_upstream_calls(self, fake_strategy, sink):
        strategy = fake_strategy("oembed", {"title": "x"})
        seo_client = RecordingSeoClient()

        with pytest.raises(InvalidVideoUrlError):
            analyze_video(
                AnalyzeRequestDTO(url="https://www.instagram.com/reel/abc"),
                trace_id="test_trace", acquirer=VideoAcquirer([strategy]),
                seo_client=seo_client, sink=sink
            )

        assert strategy.calls == []
        assert seo_client.calls == []

    def test_all_strategies_fail_still_succeeds(self, video_url, fake_strategy, sink):
        acquirer = VideoAcquirer([fake_strategy("oembed"), fake_strategy("scraper")])

        response = analyze_video(
            AnalyzeRequestDTO(url=video_url),
            trace_id="test_trace", acquirer=acquirer, seo_client=StaticSeoClient(), sink=sink
        )

        assert response.success is True
        stats = response.analysis.stats
        assert (stats.views, stats.likes, stats.comments, stats.shares, stats.saves) == (0, 0, 0, 0, 0)
        assert response.analysis.metrics.viral_score == 0

    def test_persistence_failure_only_drops_id(self, video_url, fake_strategy):
        acquirer = VideoAcquirer([fake_strategy("scraper", SCRAPED)])

        response = analyze_video(
            AnalyzeRequestDTO(url=video_url),
            trace_id="test_trace", acquirer=acquirer, seo_client=StaticSeoClient(), sink=BrokenSink()
        )

        assert response.success is True
        assert response.analysis.id is None
        assert response.analysis.metrics.engagement_rate == 20.0

    def test_configuration_error_propagates(self, video_url, fake_strategy, sink):
        acquirer = VideoAcquirer([fake_strategy("official_api", error=ConfigurationError("no keys"))])

        with pytest.raises(ConfigurationError):
            analyze_video(
                AnalyzeRequestDTO(url=video_url),
                trace_id="test_trace", acquirer=acquirer, seo_client=StaticSeoClient(), sink=sink
            )

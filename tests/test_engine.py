"""
Tests for the Insights Engine
"""

import pytest

from konterra_insights.insights.engine import NetworkInsightsEngine
from konterra_insights.models.results import HealthTrend, RiskType, WeakLinkIssue
from konterra_insights.utils.config import Config, IntroductionsConfig


@pytest.fixture
def engine():
    return NetworkInsightsEngine()


class TestAnalyze:
    """Tests for the full snapshot analysis."""

    def test_sample_report(self, engine, sample_snapshot, reference_date):
        report = engine.analyze(sample_snapshot, reference_date=reference_date)

        assert report.generated_at == reference_date
        assert report.metrics.total_connections == 4
        assert report.metrics.network_density == pytest.approx(4 / 15)
        assert report.metrics.average_strength == pytest.approx(3.5)
        assert report.metrics.bidirectional_ratio == pytest.approx(0.75)
        assert report.metrics.connected_contacts_ratio == pytest.approx(5 / 6)

        assert [c.size for c in report.clusters] == [3, 2]
        assert [c.id for c in report.isolated_contacts] == ["erin"]
        assert report.bridges == []
        assert report.reach.direct_reach == 5
        assert [d.country for d in report.geo_density] == ["Germany", "UK"]

    def test_introductions(self, engine, sample_snapshot, reference_date):
        report = engine.analyze(sample_snapshot, reference_date=reference_date)

        assert len(report.introductions) == 1
        suggestion = report.introductions[0]
        assert {suggestion.contact_a.id, suggestion.contact_b.id} == {"dave", "erin"}
        assert suggestion.score == 35
        assert suggestion.reasons == ["Shared tags: engineer", "Same city: London"]

    def test_weak_connections(self, engine, sample_snapshot, reference_date):
        report = engine.analyze(sample_snapshot, reference_date=reference_date)

        assert [(w.connection.id, w.issue) for w in report.weak_connections] == [
            ("dave->frank", WeakLinkIssue.NO_RECENT_INTERACTION),
            ("bob->carol", WeakLinkIssue.LOW_STRENGTH),
            ("bob->carol", WeakLinkIssue.ONE_DIRECTIONAL),
        ]

    def test_risks_and_summary(self, engine, sample_snapshot, reference_date):
        report = engine.analyze(sample_snapshot, reference_date=reference_date)

        assert {r.type for r in report.risks} == {
            RiskType.UNBALANCED_FAVOR,
            RiskType.ISOLATED_HIGH_VALUE,
        }
        assert report.summary.actionable_count == 3
        assert report.summary.health_trend == HealthTrend.IMPROVING

    def test_idempotent(self, engine, sample_snapshot, reference_date):
        first = engine.analyze(sample_snapshot, reference_date=reference_date)
        second = engine.analyze(sample_snapshot, reference_date=reference_date)

        assert first.model_dump() == second.model_dump()

    def test_summary_matches_report(self, engine, sample_snapshot, reference_date):
        report = engine.analyze(sample_snapshot, reference_date=reference_date)
        summary = engine.summarize(
            sample_snapshot.contacts,
            sample_snapshot.connections,
            sample_snapshot.interactions,
            sample_snapshot.favors,
            reference_date=reference_date,
        )

        assert summary == report.summary

    def test_empty_snapshot(self, engine, reference_date):
        from konterra_insights.models.entities import NetworkSnapshot

        report = engine.analyze(NetworkSnapshot(), reference_date=reference_date)

        assert report.clusters == []
        assert report.introductions == []
        assert report.risks == []
        assert report.reach.total == 0


class TestConfiguredEngine:
    """Tests for configuration flowing into the analyzers."""

    def test_stricter_introductions(self, sample_snapshot, reference_date):
        config = Config(introductions=IntroductionsConfig(min_reasons=3, min_score=50))
        report = NetworkInsightsEngine(config).analyze(sample_snapshot, reference_date=reference_date)

        assert report.introductions == []

    def test_hub_limit(self, sample_snapshot, reference_date):
        config = Config()
        config.hubs.limit = 2
        report = NetworkInsightsEngine(config).analyze(sample_snapshot, reference_date=reference_date)

        assert len(report.hubs) == 2
        assert all(h.degree == 2 for h in report.hubs)


class TestDashboardStats:
    """Tests for the dashboard statistics bundle."""

    def test_keys_and_values(self, engine, sample_snapshot, reference_date):
        stats = engine.dashboard_stats(sample_snapshot, reference_date=reference_date)

        assert stats["total_contacts"] == 6
        assert stats["countries_covered"] == 3
        assert stats["cities_covered"] == 4
        assert stats["top_countries"][0] == {"country": "Germany", "count": 3}
        # nobody has last_contacted_at set
        assert stats["stale_contacts"] == 6
        assert stats["overdue_follow_ups"] == 0
        assert len(stats["monthly_trend"]) == 6
        assert 0 <= stats["health_score"] <= 100

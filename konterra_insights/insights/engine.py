"""
Insights Engine

Runs every analyzer over a network snapshot with shared configuration.
"""

import logging
from datetime import datetime
from typing import Optional

from konterra_insights.insights import dashboard
from konterra_insights.insights.activity import health_trend, monthly_trend, resolve_reference_date
from konterra_insights.insights.clusters import detect_clusters, find_isolated_contacts
from konterra_insights.insights.hubs import find_bridge_contacts, find_hubs
from konterra_insights.insights.introductions import IntroductionScorer, suggest_introductions
from konterra_insights.insights.metrics import (
    compute_network_metrics,
    connection_type_breakdown,
    strength_distribution,
)
from konterra_insights.insights.reach import geographic_connection_density, network_reach_analysis
from konterra_insights.insights.risk import RiskAnalyzer, find_weak_connections
from konterra_insights.insights.summary import build_summary
from konterra_insights.models.entities import (
    Contact,
    ContactConnection,
    Favor,
    Interaction,
    NetworkSnapshot,
)
from konterra_insights.models.results import InsightsReport, InsightsSummary
from konterra_insights.utils.config import Config

logger = logging.getLogger(__name__)


class NetworkInsightsEngine:
    """Computes the full set of insights for a snapshot.

    The engine keeps only its configuration; every call recomputes from the
    inputs it is given.
    """

    def __init__(self, config: Optional[Config] = None):
        """Initialize engine.

        Args:
            config: Loaded configuration (defaults if omitted)
        """
        self.config = config or Config()
        self.scorer = IntroductionScorer(
            weights=self.config.introductions.weights,
            min_reasons=self.config.introductions.min_reasons,
            min_score=self.config.introductions.min_score,
        )
        self.risk_analyzer = RiskAnalyzer(
            thresholds=self.config.risk.thresholds,
            default_strength=self.config.graph.default_strength,
        )

    @property
    def default_strength(self) -> int:
        return self.config.graph.default_strength

    def _trend(self, interactions: list[Interaction], reference_date: Optional[datetime]):
        trend = self.config.trend
        return health_trend(
            interactions,
            window_days=trend.window_days,
            improving_ratio=trend.improving_ratio,
            declining_ratio=trend.declining_ratio,
            reference_date=reference_date,
        )

    def summarize(
        self,
        contacts: list[Contact],
        connections: list[ContactConnection],
        interactions: list[Interaction],
        favors: list[Favor],
        reference_date: Optional[datetime] = None,
    ) -> InsightsSummary:
        """Headline metrics, insight, actionable count and trend."""
        metrics = compute_network_metrics(contacts, connections, self.default_strength)
        risks = self.risk_analyzer.analyze(
            contacts, connections, interactions, favors, reference_date=reference_date,
        )
        suggestions = suggest_introductions(
            contacts,
            connections,
            limit=self.config.introductions.summary_limit,
            scorer=self.scorer,
        )
        return build_summary(metrics, risks, suggestions, self._trend(interactions, reference_date))

    def analyze(
        self,
        snapshot: NetworkSnapshot,
        reference_date: Optional[datetime] = None,
    ) -> InsightsReport:
        """Compute every insight for a snapshot.

        Args:
            snapshot: Contacts, connections, interactions and favors
            reference_date: Date to measure time windows from (default: now)

        Returns:
            InsightsReport with all analyzer outputs
        """
        cfg = self.config
        contacts = snapshot.contacts
        connections = snapshot.connections
        interactions = snapshot.interactions
        reference_date = resolve_reference_date(reference_date)

        metrics = compute_network_metrics(contacts, connections, self.default_strength)
        clusters = detect_clusters(
            contacts,
            connections,
            shared_tag_ratio=cfg.clusters.shared_tag_ratio,
            shared_country_ratio=cfg.clusters.shared_country_ratio,
            default_strength=self.default_strength,
        )
        risks = self.risk_analyzer.analyze(
            contacts,
            connections,
            interactions,
            snapshot.favors,
            clusters=clusters,
            reference_date=reference_date,
        )
        suggestions = suggest_introductions(
            contacts, connections, limit=cfg.introductions.limit, scorer=self.scorer,
        )
        summary = build_summary(
            metrics,
            risks,
            suggestions[:cfg.introductions.summary_limit],
            self._trend(interactions, reference_date),
        )

        report = InsightsReport(
            generated_at=reference_date,
            summary=summary,
            type_breakdown=connection_type_breakdown(connections, self.default_strength),
            strength_distribution=strength_distribution(connections, self.default_strength),
            hubs=find_hubs(contacts, connections, cfg.hubs.limit, self.default_strength),
            clusters=clusters,
            isolated_contacts=find_isolated_contacts(contacts, connections),
            bridges=find_bridge_contacts(contacts, connections, clusters),
            introductions=suggestions,
            weak_connections=find_weak_connections(
                contacts,
                connections,
                interactions,
                low_strength_max=cfg.weak_links.low_strength_max,
                high_strength_min=cfg.weak_links.high_strength_min,
                recent_days=cfg.weak_links.recent_days,
                default_strength=self.default_strength,
                reference_date=reference_date,
            ),
            risks=risks,
            reach=network_reach_analysis(contacts, connections),
            geo_density=geographic_connection_density(contacts, connections),
        )

        logger.info(
            f"Analyzed {len(contacts)} contacts and {len(connections)} connections: "
            f"{len(clusters)} clusters, {len(risks)} risks, {len(suggestions)} suggestions"
        )

        return report

    def dashboard_stats(
        self,
        snapshot: NetworkSnapshot,
        reference_date: Optional[datetime] = None,
    ) -> dict:
        """Contact-level statistics for the dashboard widgets."""
        cfg = self.config.dashboard
        contacts = snapshot.contacts
        return {
            "total_contacts": dashboard.total_contacts(contacts),
            "countries_covered": dashboard.countries_covered(contacts),
            "cities_covered": dashboard.cities_covered(contacts),
            "top_countries": dashboard.top_countries(contacts, cfg.top_countries),
            "stale_contacts": len(dashboard.stale_contacts(contacts, cfg.stale_days, reference_date)),
            "overdue_follow_ups": len(dashboard.overdue_follow_ups(contacts, reference_date)),
            "rating_distribution": dashboard.rating_distribution(contacts),
            "relationship_breakdown": dashboard.relationship_breakdown(contacts),
            "health_score": dashboard.network_health_score(contacts, reference_date),
            "monthly_trend": monthly_trend(snapshot.interactions, cfg.trend_months, reference_date),
        }

"""
Insights Summary

Rolls metrics, risks and introduction suggestions into one headline.
"""

import logging
from datetime import datetime
from typing import Optional

from konterra_insights.insights.activity import health_trend
from konterra_insights.insights.introductions import suggest_introductions
from konterra_insights.insights.metrics import compute_network_metrics
from konterra_insights.insights.risk import compute_risk_alerts
from konterra_insights.models.results import (
    HealthTrend,
    InsightsSummary,
    IntroductionSuggestion,
    NetworkMetrics,
    RiskAlert,
    Severity,
)
from konterra_insights.models.entities import (
    Contact,
    ContactConnection,
    Favor,
    Interaction,
)

logger = logging.getLogger(__name__)

SUMMARY_SUGGESTIONS = 5


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count > 1 else ''}"


def top_insight(
    metrics: NetworkMetrics,
    risks: list[RiskAlert],
    suggestions: list[IntroductionSuggestion],
) -> str:
    """Pick the single most pressing message for the user."""
    high = sum(1 for r in risks if r.severity == Severity.HIGH)
    if high:
        return f"{_plural(high, 'high-priority risk')} detected in your network"
    if suggestions:
        return f"{_plural(len(suggestions), 'potential introduction')} could strengthen your network"
    if metrics.connected_contacts_ratio < 0.5:
        uncovered = round((1 - metrics.connected_contacts_ratio) * 100)
        return f"{uncovered}% of contacts have no connections mapped"
    return "Network is well-connected with no critical issues"


def build_summary(
    metrics: NetworkMetrics,
    risks: list[RiskAlert],
    suggestions: list[IntroductionSuggestion],
    trend: HealthTrend,
) -> InsightsSummary:
    """Assemble a summary from already computed parts."""
    actionable = (
        sum(1 for r in risks if r.severity in (Severity.HIGH, Severity.MEDIUM))
        + len(suggestions)
    )
    return InsightsSummary(
        metrics=metrics,
        top_insight=top_insight(metrics, risks, suggestions),
        actionable_count=actionable,
        health_trend=trend,
    )


def compute_insights_summary(
    contacts: list[Contact],
    connections: list[ContactConnection],
    interactions: list[Interaction],
    favors: list[Favor],
    reference_date: Optional[datetime] = None,
) -> InsightsSummary:
    """One-call summary with default settings.

    Suggestions are capped at five for the headline count.
    """
    metrics = compute_network_metrics(contacts, connections)
    risks = compute_risk_alerts(contacts, connections, interactions, favors, reference_date)
    suggestions = suggest_introductions(contacts, connections, limit=SUMMARY_SUGGESTIONS)
    trend = health_trend(interactions, reference_date=reference_date)

    return build_summary(metrics, risks, suggestions, trend)

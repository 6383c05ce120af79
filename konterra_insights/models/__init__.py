"""
Data Models

Pydantic models for network entities and analysis results.
"""

from konterra_insights.models.entities import (
    Contact,
    ContactConnection,
    ConnectionType,
    Interaction,
    InteractionType,
    Favor,
    FavorDirection,
    RelationshipType,
    NetworkSnapshot,
)
from konterra_insights.models.results import (
    NetworkMetrics,
    ConnectionTypeStats,
    StrengthBucket,
    Hub,
    Cluster,
    BridgeContact,
    IntroductionSuggestion,
    WeakConnectionAlert,
    WeakLinkIssue,
    RiskAlert,
    RiskType,
    Severity,
    ReachAnalysis,
    CountryDensity,
    HealthTrend,
    InsightsSummary,
    InsightsReport,
)

__all__ = [
    "Contact",
    "ContactConnection",
    "ConnectionType",
    "Interaction",
    "InteractionType",
    "Favor",
    "FavorDirection",
    "RelationshipType",
    "NetworkSnapshot",
    "NetworkMetrics",
    "ConnectionTypeStats",
    "StrengthBucket",
    "Hub",
    "Cluster",
    "BridgeContact",
    "IntroductionSuggestion",
    "WeakConnectionAlert",
    "WeakLinkIssue",
    "RiskAlert",
    "RiskType",
    "Severity",
    "ReachAnalysis",
    "CountryDensity",
    "HealthTrend",
    "InsightsSummary",
    "InsightsReport",
]

"""
Network Analysis Engine

Pure analyzers over snapshots of contacts, connections, interactions and
favors. Nothing here performs I/O or keeps state between calls.
"""

from konterra_insights.insights.metrics import (
    compute_network_metrics,
    connection_type_breakdown,
    strength_distribution,
)
from konterra_insights.insights.clusters import detect_clusters, find_isolated_contacts
from konterra_insights.insights.hubs import find_hubs, find_bridge_contacts
from konterra_insights.insights.introductions import IntroductionScorer, suggest_introductions
from konterra_insights.insights.risk import (
    RiskAnalyzer,
    find_weak_connections,
    compute_risk_alerts,
)
from konterra_insights.insights.reach import (
    network_reach_analysis,
    geographic_connection_density,
)
from konterra_insights.insights.summary import compute_insights_summary
from konterra_insights.insights.engine import NetworkInsightsEngine

__all__ = [
    "compute_network_metrics",
    "connection_type_breakdown",
    "strength_distribution",
    "detect_clusters",
    "find_isolated_contacts",
    "find_hubs",
    "find_bridge_contacts",
    "IntroductionScorer",
    "suggest_introductions",
    "RiskAnalyzer",
    "find_weak_connections",
    "compute_risk_alerts",
    "network_reach_analysis",
    "geographic_connection_density",
    "compute_insights_summary",
    "NetworkInsightsEngine",
]

"""
Network Metrics

Aggregate statistics over the connection graph.
"""

import logging

from konterra_insights.insights.graph import (
    NEUTRAL_STRENGTH,
    effective_strength,
    linked_contact_ids,
)
from konterra_insights.models.entities import Contact, ContactConnection
from konterra_insights.models.results import (
    ConnectionTypeStats,
    NetworkMetrics,
    StrengthBucket,
)

logger = logging.getLogger(__name__)


def compute_network_metrics(
    contacts: list[Contact],
    connections: list[ContactConnection],
    default_strength: int = NEUTRAL_STRENGTH,
) -> NetworkMetrics:
    """Compute density, strength and coverage ratios.

    Density is measured against undirected pairs, n*(n-1)/2. With fewer
    than two contacts the denominator is pinned to 1.
    """
    n = len(contacts)
    max_possible = n * (n - 1) / 2 if n > 1 else 1
    total = len(connections)

    if total:
        strengths = [effective_strength(c, default_strength) for c in connections]
        average_strength = sum(strengths) / total
        bidirectional_ratio = sum(1 for c in connections if c.bidirectional) / total
    else:
        average_strength = 0.0
        bidirectional_ratio = 0.0

    if n:
        # Same notion of "connected" as find_isolated_contacts
        connected_ratio = len(linked_contact_ids(contacts, connections)) / n
    else:
        connected_ratio = 0.0

    return NetworkMetrics(
        total_connections=total,
        network_density=min(total / max_possible, 1.0) if n > 1 else 0.0,
        average_strength=average_strength,
        bidirectional_ratio=bidirectional_ratio,
        connected_contacts_ratio=connected_ratio,
    )


def connection_type_breakdown(
    connections: list[ContactConnection],
    default_strength: int = NEUTRAL_STRENGTH,
) -> list[ConnectionTypeStats]:
    """Count and average strength per connection type, most common first."""
    groups: dict = {}
    for conn in connections:
        count, total = groups.get(conn.connection_type, (0, 0))
        groups[conn.connection_type] = (
            count + 1,
            total + effective_strength(conn, default_strength),
        )

    stats = [
        ConnectionTypeStats(type=ctype, count=count, avg_strength=total / count)
        for ctype, (count, total) in groups.items()
    ]
    stats.sort(key=lambda s: s.count, reverse=True)
    return stats


def strength_distribution(
    connections: list[ContactConnection],
    default_strength: int = NEUTRAL_STRENGTH,
) -> list[StrengthBucket]:
    """Number of connections at each strength level 1 through 5."""
    counts = {level: 0 for level in range(1, 6)}
    for conn in connections:
        counts[effective_strength(conn, default_strength)] += 1
    return [StrengthBucket(strength=level, count=counts[level]) for level in counts]

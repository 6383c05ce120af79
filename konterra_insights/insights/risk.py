"""
Weak Link and Risk Analysis

Flags fragile connections and contacts whose position or history puts the
network at risk.
"""

import logging
from datetime import datetime
from typing import Optional

from konterra_insights.insights.activity import (
    group_by_contact,
    has_recent,
    resolve_reference_date,
    window_counts,
)
from konterra_insights.insights.clusters import detect_clusters, find_isolated_contacts
from konterra_insights.insights.graph import (
    NEUTRAL_STRENGTH,
    build_contact_map,
    build_degree_map,
    effective_strength,
)
from konterra_insights.insights.hubs import find_bridge_contacts, find_hubs
from konterra_insights.models.entities import (
    Contact,
    ContactConnection,
    Favor,
    FavorDirection,
    Interaction,
)
from konterra_insights.models.results import (
    Cluster,
    RiskAlert,
    RiskType,
    Severity,
    WeakConnectionAlert,
    WeakLinkIssue,
)

logger = logging.getLogger(__name__)


ISSUE_PRIORITY = {
    WeakLinkIssue.NO_RECENT_INTERACTION: 0,
    WeakLinkIssue.LOW_STRENGTH: 1,
    WeakLinkIssue.ONE_DIRECTIONAL: 2,
}

SEVERITY_ORDER = {
    Severity.HIGH: 0,
    Severity.MEDIUM: 1,
    Severity.LOW: 2,
}

DEFAULT_RISK_THRESHOLDS = {
    "bridge_min_clusters": 2,
    "bridge_high_clusters": 3,
    "hub_pool": 10,
    "hub_min_degree": 3,
    "hub_high_degree": 5,
    "cooling_window_days": 30,
    "favor_min_degree": 2,
    "favor_min_imbalance": 3,
    "favor_high_imbalance": 5,
    "isolated_min_rating": 4,
    "isolated_min_influence": 4,
}


def find_weak_connections(
    contacts: list[Contact],
    connections: list[ContactConnection],
    interactions: list[Interaction],
    low_strength_max: int = 2,
    high_strength_min: int = 4,
    recent_days: int = 90,
    default_strength: int = NEUTRAL_STRENGTH,
    reference_date: Optional[datetime] = None,
) -> list[WeakConnectionAlert]:
    """Flag connections that are weak, neglected or one-sided.

    One connection can raise several alerts. Connections with an unknown
    endpoint are skipped.

    Args:
        contacts: All contacts in the network
        connections: All contact-to-contact connections
        interactions: Interaction history used for recency
        low_strength_max: Strength at or below which a link is weak
        high_strength_min: Strength at or above which neglect is flagged
        recent_days: Window that counts as recent contact
        default_strength: Strength assumed for unrated connections
        reference_date: Date to measure recency from (default: now)

    Returns:
        Alerts grouped by issue: neglected, then weak, then one-directional
    """
    reference_date = resolve_reference_date(reference_date)
    contact_map = build_contact_map(contacts)
    by_contact = group_by_contact(interactions)
    alerts: list[WeakConnectionAlert] = []

    for conn in connections:
        source = contact_map.get(conn.source_contact_id)
        target = contact_map.get(conn.target_contact_id)
        if source is None or target is None:
            continue

        strength = effective_strength(conn, default_strength)

        # Weak tie
        if strength <= low_strength_max:
            alerts.append(WeakConnectionAlert(
                connection=conn,
                source=source,
                target=target,
                issue=WeakLinkIssue.LOW_STRENGTH,
                detail=f"Connection strength is only {strength}/5",
            ))

        # Strong tie that nobody has touched lately
        if strength >= high_strength_min:
            source_recent = has_recent(by_contact.get(source.id, []), recent_days, reference_date)
            target_recent = has_recent(by_contact.get(target.id, []), recent_days, reference_date)
            if not source_recent and not target_recent:
                alerts.append(WeakConnectionAlert(
                    connection=conn,
                    source=source,
                    target=target,
                    issue=WeakLinkIssue.NO_RECENT_INTERACTION,
                    detail=(
                        f"Strong connection ({strength}/5) but no interaction with "
                        f"either contact in {recent_days} days"
                    ),
                ))

        # Only one side recorded the relationship
        if not conn.bidirectional:
            alerts.append(WeakConnectionAlert(
                connection=conn,
                source=source,
                target=target,
                issue=WeakLinkIssue.ONE_DIRECTIONAL,
                detail=f"One-directional {conn.connection_type.value} connection",
            ))

    alerts.sort(key=lambda a: ISSUE_PRIORITY[a.issue])
    return alerts


class RiskAnalyzer:
    """Detects structural and behavioural risks for individual contacts."""

    def __init__(
        self,
        thresholds: Optional[dict[str, int]] = None,
        default_strength: int = NEUTRAL_STRENGTH,
    ):
        """Initialize analyzer with configuration.

        Args:
            thresholds: Overrides for DEFAULT_RISK_THRESHOLDS
            default_strength: Strength assumed for unrated connections
        """
        self.thresholds = DEFAULT_RISK_THRESHOLDS.copy()
        if thresholds:
            for key, value in thresholds.items():
                if key in self.thresholds:
                    self.thresholds[key] = value
                else:
                    logger.warning(f"Unknown risk threshold: {key}")
        self.default_strength = default_strength

    def single_points_of_failure(
        self,
        contacts: list[Contact],
        connections: list[ContactConnection],
        clusters: list[Cluster],
    ) -> list[RiskAlert]:
        t = self.thresholds
        alerts = []
        for bridge in find_bridge_contacts(contacts, connections, clusters):
            if bridge.clusters_connected < t["bridge_min_clusters"]:
                continue
            alerts.append(RiskAlert(
                type=RiskType.SINGLE_POINT_OF_FAILURE,
                severity=(
                    Severity.HIGH
                    if bridge.clusters_connected >= t["bridge_high_clusters"]
                    else Severity.MEDIUM
                ),
                contact=bridge.contact,
                description=(
                    f"Bridges {bridge.clusters_connected} clusters. If this connection "
                    f"weakens, parts of your network become disconnected."
                ),
            ))
        return alerts

    def cooling_hubs(
        self,
        contacts: list[Contact],
        connections: list[ContactConnection],
        interactions: list[Interaction],
        reference_date: Optional[datetime] = None,
    ) -> list[RiskAlert]:
        t = self.thresholds
        by_contact = group_by_contact(interactions)
        hubs = find_hubs(contacts, connections, t["hub_pool"], self.default_strength)

        alerts = []
        # Only well-connected hubs matter here
        for hub in hubs:
            if hub.degree < t["hub_min_degree"]:
                continue
            current, prior = window_counts(
                by_contact.get(hub.contact.id, []),
                t["cooling_window_days"],
                reference_date,
            )
            # Needs activity in the prior window to call it cooling
            if prior > 0 and current < prior:
                alerts.append(RiskAlert(
                    type=RiskType.COOLING_HUB,
                    severity=Severity.HIGH if hub.degree >= t["hub_high_degree"] else Severity.MEDIUM,
                    contact=hub.contact,
                    description=(
                        f"Key hub ({hub.degree} connections) shows declining engagement: "
                        f"{current} interactions this month vs {prior} last month."
                    ),
                ))
        return alerts

    def unbalanced_favors(
        self,
        contacts: list[Contact],
        connections: list[ContactConnection],
        favors: list[Favor],
    ) -> list[RiskAlert]:
        t = self.thresholds
        contact_map = build_contact_map(contacts)
        degrees = build_degree_map(connections)

        # Tally given vs received per contact
        ledger: dict[str, list[int]] = {}
        for favor in favors:
            given_received = ledger.setdefault(favor.contact_id, [0, 0])
            if favor.direction == FavorDirection.GIVEN:
                given_received[0] += 1
            else:
                given_received[1] += 1

        alerts = []
        for contact_id, (given, received) in ledger.items():
            contact = contact_map.get(contact_id)
            if contact is None or degrees.get(contact_id, 0) < t["favor_min_degree"]:
                continue

            # Ignore small imbalances
            imbalance = abs(given - received)
            if imbalance < t["favor_min_imbalance"]:
                continue

            direction, other = ("giving", "receiving") if given > received else ("receiving", "giving")
            alerts.append(RiskAlert(
                type=RiskType.UNBALANCED_FAVOR,
                severity=Severity.HIGH if imbalance >= t["favor_high_imbalance"] else Severity.MEDIUM,
                contact=contact,
                description=(
                    f"Significant favor imbalance with a well-connected contact: "
                    f"{direction} {imbalance} more than {other}."
                ),
            ))
        return alerts

    def isolated_high_value(
        self,
        contacts: list[Contact],
        connections: list[ContactConnection],
    ) -> list[RiskAlert]:
        t = self.thresholds
        alerts = []
        for contact in find_isolated_contacts(contacts, connections):
            rating = contact.rating or 0
            influence = contact.influence_level or 0
            if rating < t["isolated_min_rating"] and influence < t["isolated_min_influence"]:
                continue
            alerts.append(RiskAlert(
                type=RiskType.ISOLATED_HIGH_VALUE,
                severity=Severity.MEDIUM,
                contact=contact,
                description=(
                    f"High-value contact (rating {rating}/5, influence {influence}/10) has "
                    f"no connections to your network. Consider introducing them."
                ),
            ))
        return alerts

    def analyze(
        self,
        contacts: list[Contact],
        connections: list[ContactConnection],
        interactions: list[Interaction],
        favors: list[Favor],
        clusters: Optional[list[Cluster]] = None,
        reference_date: Optional[datetime] = None,
    ) -> list[RiskAlert]:
        """Run every risk check and order the result by severity.

        Args:
            contacts: All contacts in the network
            connections: All contact-to-contact connections
            interactions: Interaction history
            favors: Favor history
            clusters: Precomputed clusters for the same inputs
            reference_date: Date to measure windows from (default: now)

        Returns:
            Alerts sorted high, medium, low
        """
        # Reuse the caller's clusters when given
        if clusters is None:
            clusters = detect_clusters(contacts, connections, default_strength=self.default_strength)

        alerts = (
            self.single_points_of_failure(contacts, connections, clusters)
            + self.cooling_hubs(contacts, connections, interactions, reference_date)
            + self.unbalanced_favors(contacts, connections, favors)
            + self.isolated_high_value(contacts, connections)
        )
        alerts.sort(key=lambda a: SEVERITY_ORDER[a.severity])

        logger.info(f"Computed {len(alerts)} risk alerts for {len(contacts)} contacts")

        return alerts


def compute_risk_alerts(
    contacts: list[Contact],
    connections: list[ContactConnection],
    interactions: list[Interaction],
    favors: list[Favor],
    reference_date: Optional[datetime] = None,
) -> list[RiskAlert]:
    """Risk alerts with default thresholds, most severe first."""
    return RiskAnalyzer().analyze(
        contacts,
        connections,
        interactions,
        favors,
        reference_date=reference_date,
    )

"""
Hub and Bridge Detection

Per-contact structural importance: degree centrality and cross-cluster
bridging.
"""

import logging
from typing import Optional

from konterra_insights.insights.clusters import detect_clusters
from konterra_insights.insights.graph import (
    NEUTRAL_STRENGTH,
    build_contact_map,
    build_degree_map,
    effective_strength,
)
from konterra_insights.models.entities import Contact, ContactConnection
from konterra_insights.models.results import BridgeContact, Cluster, Hub

logger = logging.getLogger(__name__)


def find_hubs(
    contacts: list[Contact],
    connections: list[ContactConnection],
    limit: int = 5,
    default_strength: int = NEUTRAL_STRENGTH,
) -> list[Hub]:
    """Rank contacts by degree and return the top ``limit``.

    Args:
        contacts: All contacts in the network
        connections: All contact-to-contact connections
        limit: Maximum hubs to return
        default_strength: Strength assumed for unrated connections

    Returns:
        Hubs sorted by degree, highest first
    """
    contact_map = build_contact_map(contacts)
    degrees = build_degree_map(connections)

    strengths: dict[str, list[int]] = {}
    types: dict[str, dict] = {}
    for conn in connections:
        strength = effective_strength(conn, default_strength)
        for cid in (conn.source_contact_id, conn.target_contact_id):
            strengths.setdefault(cid, []).append(strength)
            types.setdefault(cid, {})[conn.connection_type] = None

    hubs = [
        Hub(
            contact=contact_map[cid],
            degree=degree,
            avg_strength=sum(strengths[cid]) / len(strengths[cid]),
            connection_types=list(types[cid]),
        )
        for cid, degree in degrees.items()
        if cid in contact_map
    ]
    hubs.sort(key=lambda h: h.degree, reverse=True)
    return hubs[:limit]


def find_bridge_contacts(
    contacts: list[Contact],
    connections: list[ContactConnection],
    clusters: Optional[list[Cluster]] = None,
) -> list[BridgeContact]:
    """Find contacts with edges reaching into more than one cluster.

    Args:
        contacts: All contacts in the network
        connections: All contact-to-contact connections
        clusters: Precomputed clusters for the same inputs (detected if omitted)

    Returns:
        Bridges sorted by clusters touched, then degree, highest first
    """
    if clusters is None:
        clusters = detect_clusters(contacts, connections)
    if len(clusters) < 2:
        return []

    cluster_of: dict[str, int] = {}
    for cluster in clusters:
        for member in cluster.contacts:
            cluster_of[member.id] = cluster.id

    contact_map = build_contact_map(contacts)
    degrees = build_degree_map(connections)
    touched: dict[str, set[int]] = {}

    for conn in connections:
        cluster_a = cluster_of.get(conn.source_contact_id)
        cluster_b = cluster_of.get(conn.target_contact_id)
        if cluster_a is None or cluster_b is None or cluster_a == cluster_b:
            continue
        for cid in (conn.source_contact_id, conn.target_contact_id):
            touched.setdefault(cid, set()).update((cluster_a, cluster_b))

    bridges = [
        BridgeContact(
            contact=contact_map[cid],
            clusters_connected=len(cluster_ids),
            degree=degrees.get(cid, 0),
        )
        for cid, cluster_ids in touched.items()
        if cid in contact_map
    ]
    bridges.sort(key=lambda b: (b.clusters_connected, b.degree), reverse=True)

    logger.debug(f"Found {len(bridges)} bridge contacts across {len(clusters)} clusters")

    return bridges

"""
Cluster Detection

Partitions contacts into connected components with union-find and
describes what each component has in common.
"""

import logging
import math
from typing import Optional

from konterra_insights.insights.graph import (
    NEUTRAL_STRENGTH,
    UnionFind,
    build_contact_map,
    effective_strength,
    linked_contact_ids,
)
from konterra_insights.models.entities import (
    Contact,
    ContactConnection,
    ConnectionType,
)
from konterra_insights.models.results import Cluster

logger = logging.getLogger(__name__)


def _dominant_type(connections: list[ContactConnection]) -> Optional[ConnectionType]:
    """Most frequent connection type; ties go to the first type seen."""
    counts: dict[ConnectionType, int] = {}
    for conn in connections:
        counts[conn.connection_type] = counts.get(conn.connection_type, 0) + 1

    dominant = None
    max_count = 0
    for ctype, count in counts.items():
        if count > max_count:
            dominant, max_count = ctype, count
    return dominant


def _shared_tags(members: list[Contact], ratio: float) -> list[str]:
    threshold = math.ceil(len(members) * ratio)
    counts: dict[str, int] = {}
    for member in members:
        for tag in member.tags:
            counts[tag] = counts.get(tag, 0) + 1
    return [tag for tag, count in counts.items() if count >= threshold]


def _shared_country(members: list[Contact], ratio: float) -> Optional[str]:
    threshold = math.ceil(len(members) * ratio)
    counts: dict[str, int] = {}
    for member in members:
        if member.country:
            counts[member.country] = counts.get(member.country, 0) + 1
    for country, count in counts.items():
        if count >= threshold:
            return country
    return None


def detect_clusters(
    contacts: list[Contact],
    connections: list[ContactConnection],
    shared_tag_ratio: float = 0.5,
    shared_country_ratio: float = 0.6,
    default_strength: int = NEUTRAL_STRENGTH,
) -> list[Cluster]:
    """Find connected components of two or more contacts.

    Edges are treated as undirected here: any connection merges its
    endpoints. Connections pointing at unknown contacts are skipped.

    Args:
        contacts: All contacts in the network
        connections: All contact-to-contact connections
        shared_tag_ratio: Fraction of members that must carry a tag
        shared_country_ratio: Fraction of members that must share a country
        default_strength: Strength assumed for unrated connections

    Returns:
        Clusters ordered by member count, largest first
    """
    contact_map = build_contact_map(contacts)
    components = UnionFind(contact_map)

    skipped = 0
    for conn in connections:
        if conn.source_contact_id in components and conn.target_contact_id in components:
            components.union(conn.source_contact_id, conn.target_contact_id)
        else:
            skipped += 1
    if skipped:
        logger.debug(f"Skipped {skipped} connections with unknown endpoints")

    clusters: list[Cluster] = []
    for member_ids in components.groups().values():
        if len(member_ids) < 2:
            continue

        members = [contact_map[cid] for cid in member_ids]
        member_set = set(member_ids)
        internal = [
            c for c in connections
            if c.source_contact_id in member_set and c.target_contact_id in member_set
        ]
        avg_strength = (
            sum(effective_strength(c, default_strength) for c in internal) / len(internal)
            if internal else 0.0
        )

        clusters.append(Cluster(
            id=len(clusters),
            contacts=members,
            internal_connections=len(internal),
            avg_strength=avg_strength,
            dominant_type=_dominant_type(internal),
            shared_tags=_shared_tags(members, shared_tag_ratio),
            shared_country=_shared_country(members, shared_country_ratio),
        ))

    clusters.sort(key=lambda c: c.size, reverse=True)

    logger.debug(f"Detected {len(clusters)} clusters among {len(contacts)} contacts")

    return clusters


def find_isolated_contacts(
    contacts: list[Contact],
    connections: list[ContactConnection],
) -> list[Contact]:
    """Contacts with no connection to another known contact, in input order.

    These are exactly the contacts that ``detect_clusters`` leaves out.
    """
    linked = linked_contact_ids(contacts, connections)
    return [c for c in contacts if c.id not in linked]

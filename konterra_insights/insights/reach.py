"""
Reach and Geography

Multi-hop reachability and per-country connection density.
"""

import logging

from konterra_insights.insights.graph import (
    build_adjacency_map,
    connected_contact_ids,
)
from konterra_insights.models.entities import Contact, ContactConnection
from konterra_insights.models.results import CountryDensity, ReachAnalysis

logger = logging.getLogger(__name__)


def network_reach_analysis(
    contacts: list[Contact],
    connections: list[ContactConnection],
) -> ReachAnalysis:
    """Expand outward from every connected contact, up to three hops.

    Direct reach is every known edge endpoint. Each further ring holds known
    contacts walkable from the previous ring and not already counted.
    """
    adjacency = build_adjacency_map(connections)
    known = {c.id for c in contacts}

    direct = connected_contact_ids(connections) & known

    second: set[str] = set()
    for cid in direct:
        second.update(n for n in adjacency.get(cid, ()) if n in known and n not in direct)

    third: set[str] = set()
    for cid in second:
        third.update(
            n for n in adjacency.get(cid, ())
            if n in known and n not in direct and n not in second
        )

    return ReachAnalysis(
        direct_reach=len(direct),
        second_degree=len(second),
        third_degree=len(third),
    )


def geographic_connection_density(
    contacts: list[Contact],
    connections: list[ContactConnection],
) -> list[CountryDensity]:
    """Connection density among contacts of each country.

    Countries with fewer than two contacts are left out.

    Returns:
        Countries sorted by contact count, largest first
    """
    by_country: dict[str, set[str]] = {}
    for contact in contacts:
        if contact.country:
            by_country.setdefault(contact.country, set()).add(contact.id)

    result = []
    for country, ids in by_country.items():
        if len(ids) < 2:
            continue
        internal = sum(
            1 for c in connections
            if c.source_contact_id in ids and c.target_contact_id in ids
        )
        max_possible = len(ids) * (len(ids) - 1) / 2
        result.append(CountryDensity(
            country=country,
            contacts=len(ids),
            connections=internal,
            density=internal / max_possible,
        ))

    result.sort(key=lambda d: d.contacts, reverse=True)
    return result

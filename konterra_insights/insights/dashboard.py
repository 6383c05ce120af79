"""
Dashboard Metrics

Contact-level statistics: coverage, staleness, follow-ups and an overall
health score.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from konterra_insights.insights.activity import resolve_reference_date
from konterra_insights.models.entities import Contact

logger = logging.getLogger(__name__)

ACTIVE_DAYS = 90


def total_contacts(contacts: list[Contact]) -> int:
    return len(contacts)


def countries_covered(contacts: list[Contact]) -> int:
    return len({c.country for c in contacts if c.country})


def cities_covered(contacts: list[Contact]) -> int:
    return len({c.city for c in contacts if c.city})


def top_countries(contacts: list[Contact], limit: int = 10) -> list[dict]:
    """Most common countries with their contact counts."""
    counts: dict[str, int] = {}
    for contact in contacts:
        if contact.country:
            counts[contact.country] = counts.get(contact.country, 0) + 1
    ranked = sorted(counts.items(), key=lambda x: x[1], reverse=True)
    return [{"country": country, "count": count} for country, count in ranked[:limit]]


def _last_contacted(contact: Contact) -> datetime:
    return contact.last_contacted_at or datetime.min


def stale_contacts(
    contacts: list[Contact],
    days: int,
    reference_date: Optional[datetime] = None,
) -> list[Contact]:
    """Contacts not reached in ``days``, longest-neglected first.

    Contacts never reached count as stale.
    """
    reference_date = resolve_reference_date(reference_date)
    cutoff = reference_date - timedelta(days=days)
    stale = [c for c in contacts if _last_contacted(c) < cutoff]
    return sorted(stale, key=_last_contacted)


def overdue_follow_ups(
    contacts: list[Contact],
    reference_date: Optional[datetime] = None,
) -> list[Contact]:
    """Contacts whose planned follow-up date has passed, earliest first."""
    reference_date = resolve_reference_date(reference_date)
    overdue = [
        c for c in contacts
        if c.next_follow_up is not None and c.next_follow_up < reference_date
    ]
    return sorted(overdue, key=lambda c: c.next_follow_up)


def rating_distribution(contacts: list[Contact]) -> dict[int, int]:
    """Contacts per star rating 1-5; unrated contacts are not counted."""
    dist = {rating: 0 for rating in range(1, 6)}
    for contact in contacts:
        if contact.rating in dist:
            dist[contact.rating] += 1
    return dist


def relationship_breakdown(contacts: list[Contact]) -> list[dict]:
    """Contacts per relationship type, most common first."""
    counts: dict[str, int] = {}
    for contact in contacts:
        if contact.relationship_type:
            key = contact.relationship_type.value
            counts[key] = counts.get(key, 0) + 1
    ranked = sorted(counts.items(), key=lambda x: x[1], reverse=True)
    return [{"type": rtype, "count": count} for rtype, count in ranked]


def network_health_score(
    contacts: list[Contact],
    reference_date: Optional[datetime] = None,
) -> int:
    """Score from 0 to 100 for how well the network is being maintained.

    Weighted blend:
        40% contacts reached in the last 90 days
        30% average rating of rated contacts
        20% country diversity (saturates at 10 countries)
        10% share of contacts without an overdue follow-up
    """
    if not contacts:
        return 0

    reference_date = resolve_reference_date(reference_date)
    active_window = timedelta(days=ACTIVE_DAYS)
    n = len(contacts)

    active = sum(
        1 for c in contacts
        if c.last_contacted_at is not None and reference_date - c.last_contacted_at < active_window
    )
    active_ratio = active / n

    rated = [c.rating for c in contacts if c.rating]
    avg_rating = sum(rated) / len(rated) / 5 if rated else 0.0

    diversity = min(countries_covered(contacts) / 10, 1.0)

    overdue = len(overdue_follow_ups(contacts, reference_date))
    no_overdue_ratio = 1 - min(overdue / n, 1.0)

    return round(
        active_ratio * 40
        + avg_rating * 30
        + diversity * 20
        + no_overdue_ratio * 10
    )

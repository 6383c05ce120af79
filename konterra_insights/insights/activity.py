"""
Interaction Activity

Time-window counting over interaction history, shared by the risk analyzer
and the summary.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from konterra_insights.models.entities import Interaction, to_naive_utc
from konterra_insights.models.results import HealthTrend

logger = logging.getLogger(__name__)


def resolve_reference_date(reference_date: Optional[datetime] = None) -> datetime:
    """Return the reference date as naive UTC, defaulting to the current time.

    Entity dates are stored as naive UTC, so every window must be measured
    from a naive UTC "now" as well.
    """
    if reference_date is None:
        return datetime.now(timezone.utc).replace(tzinfo=None)
    return to_naive_utc(reference_date)


def group_by_contact(interactions: Iterable[Interaction]) -> dict[str, list[Interaction]]:
    """Bucket interactions by contact ID."""
    grouped: dict[str, list[Interaction]] = {}
    for interaction in interactions:
        grouped.setdefault(interaction.contact_id, []).append(interaction)
    return grouped


def has_recent(
    interactions: Iterable[Interaction],
    days: int,
    reference_date: Optional[datetime] = None,
) -> bool:
    """Whether any interaction is younger than ``days``."""
    reference_date = resolve_reference_date(reference_date)
    window = timedelta(days=days)
    return any(reference_date - i.date < window for i in interactions)


def window_counts(
    interactions: Iterable[Interaction],
    window_days: int = 30,
    reference_date: Optional[datetime] = None,
) -> tuple[int, int]:
    """Count interactions in the trailing window and the one before it.

    The current window is ``age < window``; the prior window is
    ``window <= age < 2 * window``.

    Returns:
        Tuple of (current, prior)
    """
    reference_date = resolve_reference_date(reference_date)
    window = timedelta(days=window_days)

    current = prior = 0
    for interaction in interactions:
        age = reference_date - interaction.date
        if age < window:
            current += 1
        elif age < window * 2:
            prior += 1
    return current, prior


def health_trend(
    interactions: Iterable[Interaction],
    window_days: int = 30,
    improving_ratio: float = 1.1,
    declining_ratio: float = 0.9,
    reference_date: Optional[datetime] = None,
) -> HealthTrend:
    """Compare the trailing window with the prior one.

    Comparison is multiplicative, so an empty prior window never divides
    by zero: 0 vs 0 is stable, anything vs 0 is improving.
    """
    current, prior = window_counts(interactions, window_days, reference_date)
    if current > prior * improving_ratio:
        return HealthTrend.IMPROVING
    if current < prior * declining_ratio:
        return HealthTrend.DECLINING
    return HealthTrend.STABLE


def recent_activity(interactions: list[Interaction], limit: int = 15) -> list[Interaction]:
    """Newest interactions first."""
    return sorted(interactions, key=lambda i: i.date, reverse=True)[:limit]


def monthly_trend(
    interactions: list[Interaction],
    months: int = 6,
    reference_date: Optional[datetime] = None,
) -> list[dict]:
    """Interaction counts per calendar month, oldest month first.

    Labels read like ``Jan 25``.
    """
    reference_date = resolve_reference_date(reference_date)

    starts = []
    year, month = reference_date.year, reference_date.month
    for _ in range(months):
        starts.append(datetime(year, month, 1))
        year, month = (year - 1, 12) if month == 1 else (year, month - 1)
    starts.reverse()

    result = []
    for start in starts:
        end = datetime(start.year + 1, 1, 1) if start.month == 12 else datetime(start.year, start.month + 1, 1)
        count = sum(1 for i in interactions if start <= i.date < end)
        result.append({"month": start.strftime("%b %y"), "count": count})
    return result

"""
Pytest Configuration and Shared Fixtures
"""

import pytest
from datetime import datetime, timedelta

from konterra_insights.models.entities import (
    Contact,
    ContactConnection,
    ConnectionType,
    Favor,
    FavorDirection,
    Interaction,
    InteractionType,
    NetworkSnapshot,
    RelationshipType,
)


REFERENCE_DATE = datetime(2025, 6, 1, 12, 0)


def make_connection(
    source: str,
    target: str,
    strength=3,
    bidirectional: bool = True,
    connection_type: ConnectionType = ConnectionType.KNOWS,
) -> ContactConnection:
    """Build a connection between two contact IDs."""
    return ContactConnection(
        source_contact_id=source,
        target_contact_id=target,
        strength=strength,
        bidirectional=bidirectional,
        connection_type=connection_type,
    )


def make_interactions(contact_id: str, days_ago: list[int]) -> list[Interaction]:
    """One interaction per entry, dated ``days_ago`` before REFERENCE_DATE."""
    return [
        Interaction(
            contact_id=contact_id,
            type=InteractionType.MEETING,
            date=REFERENCE_DATE - timedelta(days=d),
        )
        for d in days_ago
    ]


def make_favors(contact_id: str, given: int, received: int) -> list[Favor]:
    return (
        [Favor(contact_id=contact_id, direction=FavorDirection.GIVEN) for _ in range(given)]
        + [Favor(contact_id=contact_id, direction=FavorDirection.RECEIVED) for _ in range(received)]
    )


@pytest.fixture
def reference_date() -> datetime:
    """Fixed 'now' for time-window tests."""
    return REFERENCE_DATE


@pytest.fixture
def abc_contacts() -> list[Contact]:
    """Three bare contacts A, B and C."""
    return [
        Contact(id="a", name="Alice"),
        Contact(id="b", name="Bob"),
        Contact(id="c", name="Carol"),
    ]


@pytest.fixture
def sample_contacts() -> list[Contact]:
    """A small network spread over three countries."""
    return [
        Contact(
            id="alice",
            name="Alice Johnson",
            company="Acme",
            city="Berlin",
            country="Germany",
            tags=["investor", "founder"],
            personal_interests=["sailing"],
            relationship_type=RelationshipType.BUSINESS,
            rating=5,
            influence_level=8,
        ),
        Contact(
            id="bob",
            name="Bob Williams",
            company="Acme",
            city="Berlin",
            country="Germany",
            tags=["investor"],
            relationship_type=RelationshipType.BUSINESS,
            rating=3,
        ),
        Contact(
            id="carol",
            name="Carol Davis",
            company="BigCo",
            city="Munich",
            country="Germany",
            tags=["founder"],
            relationship_type=RelationshipType.FRIEND,
        ),
        Contact(
            id="dave",
            name="Dave Brown",
            city="London",
            country="UK",
            tags=["engineer"],
        ),
        Contact(
            id="erin",
            name="Erin Miller",
            city="London",
            country="UK",
            tags=["engineer"],
            rating=4,
        ),
        Contact(
            id="frank",
            name="Frank Moore",
            city="Paris",
            country="France",
        ),
    ]


@pytest.fixture
def sample_connections() -> list[ContactConnection]:
    """Two components: alice/bob/carol and dave/frank. Erin stays isolated."""
    return [
        make_connection("alice", "bob", 5, True, ConnectionType.WORKS_WITH),
        make_connection("bob", "carol", 2, False, ConnectionType.KNOWS),
        make_connection("carol", "alice", 3, True, ConnectionType.KNOWS),
        make_connection("dave", "frank", 4, True, ConnectionType.INTRODUCED_BY),
    ]


@pytest.fixture
def sample_snapshot(sample_contacts, sample_connections) -> NetworkSnapshot:
    """Snapshot with recent activity on the Berlin side only."""
    interactions = (
        make_interactions("alice", [5, 12, 40])
        + make_interactions("bob", [70])
        + make_interactions("dave", [200])
    )
    favors = make_favors("alice", given=4, received=0)
    return NetworkSnapshot(
        contacts=sample_contacts,
        connections=sample_connections,
        interactions=interactions,
        favors=favors,
    )

"""
Graph Builder

Adjacency, degree and component structures derived from a connection list.
"""

import logging
from typing import Iterable, Optional

from konterra_insights.models.entities import Contact, ContactConnection

logger = logging.getLogger(__name__)

NEUTRAL_STRENGTH = 3

AdjacencyMap = dict[str, set[str]]


def effective_strength(
    connection: ContactConnection,
    default: int = NEUTRAL_STRENGTH,
) -> int:
    """Strength used by every analyzer.

    Missing, zero or out-of-range values read as the neutral default.
    """
    strength = connection.strength
    if strength is None or not 1 <= strength <= 5:
        return default
    return strength


def build_contact_map(contacts: Iterable[Contact]) -> dict[str, Contact]:
    """Index contacts by ID."""
    return {c.id: c for c in contacts}


def build_adjacency_map(connections: Iterable[ContactConnection]) -> AdjacencyMap:
    """Map each contact to the neighbors it can walk to.

    A one-directional edge is only walkable from source to target;
    bidirectional edges are walkable both ways. Both endpoints always get
    an entry, even if it stays empty.
    """
    adjacency: AdjacencyMap = {}
    for conn in connections:
        adjacency.setdefault(conn.source_contact_id, set())
        adjacency.setdefault(conn.target_contact_id, set())
        adjacency[conn.source_contact_id].add(conn.target_contact_id)
        if conn.bidirectional:
            adjacency[conn.target_contact_id].add(conn.source_contact_id)
    return adjacency


def build_degree_map(connections: Iterable[ContactConnection]) -> dict[str, int]:
    """Count how many edges touch each contact, regardless of direction."""
    degrees: dict[str, int] = {}
    for conn in connections:
        degrees[conn.source_contact_id] = degrees.get(conn.source_contact_id, 0) + 1
        degrees[conn.target_contact_id] = degrees.get(conn.target_contact_id, 0) + 1
    return degrees


def connected_contact_ids(connections: Iterable[ContactConnection]) -> set[str]:
    """IDs appearing as an endpoint of at least one edge."""
    ids: set[str] = set()
    for conn in connections:
        ids.add(conn.source_contact_id)
        ids.add(conn.target_contact_id)
    return ids


def linked_contact_ids(
    contacts: Iterable[Contact],
    connections: Iterable[ContactConnection],
) -> set[str]:
    """Known contacts joined to another known contact by at least one edge.

    Self-loops and edges to unknown IDs do not link anyone.
    """
    known = {c.id for c in contacts}
    return connected_contact_ids(
        c for c in connections
        if c.source_contact_id != c.target_contact_id
        and c.source_contact_id in known
        and c.target_contact_id in known
    )


def edge_key(a: str, b: str) -> tuple[str, str]:
    """Order-independent key for a pair of contact IDs."""
    return (a, b) if a <= b else (b, a)


class UnionFind:
    """Disjoint sets over contact IDs with path compression and union by rank.

    ``find`` is iterative (path halving), so very long chains never touch
    the recursion limit.
    """

    def __init__(self, ids: Optional[Iterable[str]] = None):
        self.parent: dict[str, str] = {}
        self.rank: dict[str, int] = {}
        for item in ids or ():
            self.add(item)

    def add(self, item: str) -> None:
        if item not in self.parent:
            self.parent[item] = item
            self.rank[item] = 0

    def __contains__(self, item: str) -> bool:
        return item in self.parent

    def find(self, item: str) -> str:
        parent = self.parent
        while parent[item] != item:
            parent[item] = parent[parent[item]]
            item = parent[item]
        return item

    def union(self, a: str, b: str) -> bool:
        """Merge the sets holding ``a`` and ``b``. Returns False if already joined."""
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return False
        if self.rank[root_a] < self.rank[root_b]:
            root_a, root_b = root_b, root_a
        self.parent[root_b] = root_a
        if self.rank[root_a] == self.rank[root_b]:
            self.rank[root_a] += 1
        return True

    def groups(self) -> dict[str, list[str]]:
        """Members keyed by root, in insertion order of first member."""
        result: dict[str, list[str]] = {}
        for item in self.parent:
            result.setdefault(self.find(item), []).append(item)
        return result

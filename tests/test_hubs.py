"""
Tests for Hub and Bridge Detection
"""

import pytest

from konterra_insights.insights.clusters import detect_clusters
from konterra_insights.insights.hubs import find_bridge_contacts, find_hubs
from konterra_insights.models.entities import Contact, ConnectionType
from konterra_insights.models.results import Cluster

from conftest import make_connection


class TestFindHubs:
    """Tests for find_hubs."""

    def test_ranked_by_degree(self, sample_contacts, sample_connections):
        hubs = find_hubs(sample_contacts, sample_connections)

        assert [h.contact.id for h in hubs[:3]] == ["alice", "bob", "carol"]
        assert hubs[0].degree == 2
        assert len(hubs) == 5  # erin has no edges

    def test_limit(self, sample_contacts, sample_connections):
        assert len(find_hubs(sample_contacts, sample_connections, limit=2)) == 2

    def test_avg_strength_and_types(self, sample_contacts, sample_connections):
        alice = find_hubs(sample_contacts, sample_connections)[0]

        assert alice.avg_strength == pytest.approx(4.0)  # (5 + 3) / 2
        assert alice.connection_types == [ConnectionType.WORKS_WITH, ConnectionType.KNOWS]

    def test_unknown_ids_skipped(self):
        hubs = find_hubs([Contact(id="a")], [make_connection("a", "ghost")])
        assert [h.contact.id for h in hubs] == ["a"]

    def test_empty(self, abc_contacts):
        assert find_hubs(abc_contacts, []) == []


class TestFindBridgeContacts:
    """Tests for find_bridge_contacts."""

    def test_no_bridges_with_single_cluster(self, abc_contacts):
        connections = [make_connection("a", "b"), make_connection("b", "c")]
        assert len(detect_clusters(abc_contacts, connections)) == 1
        assert find_bridge_contacts(abc_contacts, connections) == []

    def test_no_bridges_without_clusters(self, abc_contacts):
        assert find_bridge_contacts(abc_contacts, []) == []

    def test_components_have_no_cross_edges(self, sample_contacts, sample_connections):
        """Union-find merges every edge, so detected components never bridge."""
        assert find_bridge_contacts(sample_contacts, sample_connections) == []

    def test_cross_cluster_edges_from_supplied_clusters(self):
        contacts = [Contact(id=x) for x in "abcdef"]
        by_id = {c.id: c for c in contacts}
        clusters = [
            Cluster(id=0, contacts=[by_id["a"], by_id["b"]]),
            Cluster(id=1, contacts=[by_id["c"], by_id["d"]]),
            Cluster(id=2, contacts=[by_id["e"], by_id["f"]]),
        ]
        connections = [
            make_connection("a", "b"),
            make_connection("a", "c"),
            make_connection("a", "e"),
            make_connection("d", "f"),
        ]

        bridges = find_bridge_contacts(contacts, connections, clusters)

        assert bridges[0].contact.id == "a"
        assert bridges[0].clusters_connected == 3
        assert bridges[0].degree == 3
        assert {b.contact.id for b in bridges} == {"a", "c", "e", "d", "f"}
        assert all(b.clusters_connected == 2 for b in bridges[1:])

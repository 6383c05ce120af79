"""
Tests for Cluster Detection
"""

import pytest

from konterra_insights.insights.clusters import detect_clusters, find_isolated_contacts
from konterra_insights.models.entities import Contact, ConnectionType

from conftest import make_connection


class TestDetectClusters:
    """Tests for detect_clusters."""

    def test_no_connections_no_clusters(self, abc_contacts):
        """Three unconnected contacts produce no clusters and are all isolated."""
        assert detect_clusters(abc_contacts, []) == []
        assert find_isolated_contacts(abc_contacts, []) == abc_contacts

    def test_direction_is_ignored(self, abc_contacts):
        """A<->B plus B->C forms one cluster of three."""
        connections = [
            make_connection("a", "b", 5, True),
            make_connection("b", "c", 1, False),
        ]
        clusters = detect_clusters(abc_contacts, connections)

        assert len(clusters) == 1
        assert clusters[0].member_ids == {"a", "b", "c"}
        assert clusters[0].internal_connections == 2
        assert clusters[0].avg_strength == pytest.approx(3.0)

    def test_sorted_by_size(self, sample_contacts, sample_connections):
        clusters = detect_clusters(sample_contacts, sample_connections)

        assert [c.size for c in clusters] == [3, 2]
        assert clusters[0].member_ids == {"alice", "bob", "carol"}
        assert clusters[1].member_ids == {"dave", "frank"}

    def test_never_returns_singletons(self, sample_contacts, sample_connections):
        for cluster in detect_clusters(sample_contacts, sample_connections):
            assert cluster.size >= 2

    def test_clusters_and_isolated_partition_contacts(self, sample_contacts, sample_connections):
        connections = sample_connections + [
            make_connection("erin", "ghost"),
            make_connection("frank", "frank"),
        ]
        clustered = [
            c.id for cluster in detect_clusters(sample_contacts, connections)
            for c in cluster.contacts
        ]
        isolated = [c.id for c in find_isolated_contacts(sample_contacts, connections)]

        assert not set(clustered) & set(isolated)
        assert sorted(clustered + isolated) == sorted(c.id for c in sample_contacts)

    def test_dangling_connections_skipped(self, abc_contacts):
        clusters = detect_clusters(abc_contacts, [make_connection("a", "ghost")])
        assert clusters == []

    def test_dominant_type_first_max_wins(self, abc_contacts):
        connections = [
            make_connection("a", "b", connection_type=ConnectionType.REPORTS_TO),
            make_connection("b", "c", connection_type=ConnectionType.KNOWS),
        ]
        cluster = detect_clusters(abc_contacts, connections)[0]
        assert cluster.dominant_type == ConnectionType.REPORTS_TO

    def test_dominant_type_majority(self, abc_contacts):
        connections = [
            make_connection("a", "b", connection_type=ConnectionType.REPORTS_TO),
            make_connection("b", "c", connection_type=ConnectionType.KNOWS),
            make_connection("c", "a", connection_type=ConnectionType.KNOWS),
        ]
        cluster = detect_clusters(abc_contacts, connections)[0]
        assert cluster.dominant_type == ConnectionType.KNOWS

    def test_shared_tags_and_country(self, sample_contacts, sample_connections):
        berlin = detect_clusters(sample_contacts, sample_connections)[0]

        # investor: alice, bob (2 of 3 >= ceil(1.5)); founder: alice, carol
        assert set(berlin.shared_tags) == {"investor", "founder"}
        assert berlin.shared_country == "Germany"

    def test_no_shared_country_below_threshold(self, sample_contacts, sample_connections):
        dave_frank = detect_clusters(sample_contacts, sample_connections)[1]
        # UK and France each hold one of two members, below ceil(1.2) = 2
        assert dave_frank.shared_country is None

    def test_idempotent(self, sample_contacts, sample_connections):
        first = detect_clusters(sample_contacts, sample_connections)
        second = detect_clusters(sample_contacts, sample_connections)
        assert first == second


class TestFindIsolatedContacts:
    """Tests for find_isolated_contacts."""

    def test_isolated_in_input_order(self, sample_contacts, sample_connections):
        isolated = find_isolated_contacts(sample_contacts, sample_connections)
        assert [c.id for c in isolated] == ["erin"]

    def test_self_loop_does_not_connect(self):
        contacts = [Contact(id="solo")]
        assert find_isolated_contacts(contacts, [make_connection("solo", "solo")]) == contacts

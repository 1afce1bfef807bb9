"""Unit tests for the commuter friendship graph."""

import random

from commutesim.social_network import SocialGraph


class TestSocialGraph:
    def test_add_node(self):
        g = SocialGraph()
        g.add_node("alice")
        assert "alice" in g.nodes

    def test_add_edge_is_undirected(self):
        g = SocialGraph()
        g.add_edge("alice", "bob")
        assert g.neighbors("alice") == {"bob"}
        assert g.neighbors("bob") == {"alice"}
        assert g.edge_count == 1

    def test_self_loop_ignored(self):
        g = SocialGraph()
        g.add_edge("alice", "alice")
        assert g.neighbors("alice") == set()
        assert "alice" in g.nodes

    def test_remove_edge(self):
        g = SocialGraph()
        g.add_edge("a", "b")
        g.remove_edge("b", "a")
        assert not g.has_edge("a", "b")
        assert g.edge_count == 0

    def test_neighbors_returns_copy(self):
        g = SocialGraph()
        g.add_edge("a", "b")
        g.neighbors("a").add("z")
        assert g.neighbors("a") == {"b"}

    def test_degree_unknown_node(self):
        assert SocialGraph().degree("ghost") == 0


class TestSocialGraphGenerators:
    def test_complete(self):
        names = ["a", "b", "c", "d"]
        g = SocialGraph.complete(names)
        for name in names:
            assert g.degree(name) == 3
        assert g.edge_count == 6

    def test_random_erdos_renyi(self):
        names = [f"n{i}" for i in range(20)]
        g = SocialGraph.random_erdos_renyi(names, p=0.5, rng=random.Random(42))
        assert g.edge_count > 0
        assert g.nodes == set(names)

    def test_random_deterministic(self):
        names = [f"n{i}" for i in range(10)]
        g1 = SocialGraph.random_erdos_renyi(names, p=0.5, rng=random.Random(42))
        g2 = SocialGraph.random_erdos_renyi(names, p=0.5, rng=random.Random(42))
        assert all(g1.neighbors(n) == g2.neighbors(n) for n in names)

    def test_small_world_preserves_edge_count(self):
        names = [f"n{i}" for i in range(20)]
        g = SocialGraph.small_world(names, k=4, p_rewire=0.3, rng=random.Random(42))
        assert g.nodes == set(names)
        assert g.edge_count == 40

    def test_small_world_no_rewire_is_ring(self):
        names = [f"n{i}" for i in range(6)]
        g = SocialGraph.small_world(names, k=2, p_rewire=0.0, rng=random.Random(1))
        assert g.neighbors("n0") == {"n1", "n5"}

    def test_small_world_tiny(self):
        g = SocialGraph.small_world(["a", "b"], k=2, rng=random.Random(42))
        assert g.has_edge("a", "b")

"""Social graph of friendships between commuters.

An undirected graph keyed by commuter name. This is a pure data
structure: a Population reads it once to fill each commuter's
``social_network`` set.
"""

from __future__ import annotations

import logging
import random

logger = logging.getLogger(__name__)


class SocialGraph:
    """Undirected graph of commuter friendships.

    Adjacency sets are keyed by commuter name, giving O(1) neighbour
    queries. Self-loops are ignored.
    """

    def __init__(self) -> None:
        self._adjacency: dict[str, set[str]] = {}

    @property
    def nodes(self) -> set[str]:
        """All node names in the graph."""
        return set(self._adjacency)

    @property
    def edge_count(self) -> int:
        """Total number of undirected edges."""
        return sum(len(friends) for friends in self._adjacency.values()) // 2

    def add_node(self, name: str) -> None:
        """Add a node (commuter name) to the graph."""
        self._adjacency.setdefault(name, set())

    def add_edge(self, a: str, b: str) -> None:
        """Connect two commuters."""
        self.add_node(a)
        self.add_node(b)
        if a == b:
            return
        self._adjacency[a].add(b)
        self._adjacency[b].add(a)

    def remove_edge(self, a: str, b: str) -> None:
        """Disconnect two commuters if connected."""
        self._adjacency.get(a, set()).discard(b)
        self._adjacency.get(b, set()).discard(a)

    def has_edge(self, a: str, b: str) -> bool:
        return b in self._adjacency.get(a, ())

    def neighbors(self, name: str) -> set[str]:
        """Return names of commuters connected to *name*."""
        return set(self._adjacency.get(name, ()))

    def degree(self, name: str) -> int:
        return len(self._adjacency.get(name, ()))

    # -----------------------------------------------------------------
    # Graph generators
    # -----------------------------------------------------------------

    @classmethod
    def complete(cls, names: list[str]) -> SocialGraph:
        """Fully connected graph."""
        g = cls()
        for name in names:
            g.add_node(name)
        for i, a in enumerate(names):
            for b in names[i + 1 :]:
                g.add_edge(a, b)
        return g

    @classmethod
    def random_erdos_renyi(
        cls,
        names: list[str],
        p: float = 0.1,
        rng: random.Random | None = None,
    ) -> SocialGraph:
        """Erdos-Renyi random graph: each pair is connected with probability p."""
        rng = rng or random.Random()
        g = cls()
        for name in names:
            g.add_node(name)
        for i, a in enumerate(names):
            for b in names[i + 1 :]:
                if rng.random() < p:
                    g.add_edge(a, b)
        return g

    @classmethod
    def small_world(
        cls,
        names: list[str],
        k: int = 4,
        p_rewire: float = 0.1,
        rng: random.Random | None = None,
    ) -> SocialGraph:
        """Watts-Strogatz small-world graph.

        Starts with a ring lattice where each node connects to its k
        nearest neighbours, then rewires each lattice edge with
        probability p.

        Args:
            names: Node names.
            k: Number of nearest neighbours in the ring (rounded down to even).
            p_rewire: Probability of rewiring each edge.
            rng: Random number generator for determinism.
        """
        rng = rng or random.Random()
        n = len(names)
        if n < 3:
            return cls.complete(names)

        k = min(k, n - 1)
        half_k = k // 2

        g = cls()
        for name in names:
            g.add_node(name)

        # Ring lattice
        for i in range(n):
            for j in range(1, half_k + 1):
                g.add_edge(names[i], names[(i + j) % n])

        # Rewire
        for i in range(n):
            for j in range(1, half_k + 1):
                if rng.random() >= p_rewire:
                    continue
                source = names[i]
                old_target = names[(i + j) % n]
                candidates = [
                    names[c]
                    for c in range(n)
                    if c != i and not g.has_edge(source, names[c])
                ]
                if not candidates:
                    continue
                g.remove_edge(source, old_target)
                g.add_edge(source, rng.choice(candidates))

        logger.debug("Built small-world graph: %d nodes, %d edges", n, g.edge_count)
        return g

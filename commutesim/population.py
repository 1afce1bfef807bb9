"""Population registry and factory for commuters.

The Population owns every Commuter, keyed by name. Commuters refer to
each other only by name, and the Population resolves those names when a
commuter needs to read its friends or neighbours.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Iterator, Mapping

from commutesim.commuter import Commuter, EffortTable
from commutesim.groups import Neighbourhood, Subculture
from commutesim.modes import JourneyType, TransportMode
from commutesim.social_network import SocialGraph
from commutesim.stats import PopulationStats
from commutesim.traits import TraitDistribution, UniformTraitDistribution

logger = logging.getLogger(__name__)


@dataclass
class DemographicSegment:
    """Description of a sub-population segment.

    Attributes:
        name: Segment label (e.g. "suburban_families").
        fraction: Proportion of total population (0 to 1).
        subculture: Subculture shared by every commuter in the segment.
        neighbourhood: Neighbourhood shared by every commuter in the segment.
        perceived_effort: Effort table given to each commuter.
        trait_distribution: Distribution for sampling psychological traits.
        commute_lengths: Relative frequency of each commute length.
        initial_modes: Relative frequency of each initial mode. The initial
            norm and habit equal the initial mode.
        days_in_habit_average: Passed through to each commuter.
        seed: Optional seed for the segment's RNG.
    """

    name: str
    fraction: float
    subculture: Subculture
    neighbourhood: Neighbourhood
    perceived_effort: EffortTable
    trait_distribution: TraitDistribution | None = None
    commute_lengths: Mapping[JourneyType, float] = field(
        default_factory=lambda: {JourneyType.SHORT: 1.0}
    )
    initial_modes: Mapping[TransportMode, float] = field(
        default_factory=lambda: {mode: 1.0 for mode in TransportMode}
    )
    days_in_habit_average: int = 30
    seed: int | None = None


class Population:
    """Arena of commuters indexed by name.

    Args:
        commuters: Commuters to register.
        social_graph: Optional friendship graph to wire up immediately.
    """

    def __init__(
        self,
        commuters: list[Commuter] | None = None,
        social_graph: SocialGraph | None = None,
    ):
        self._commuters: dict[str, Commuter] = {}
        self.social_graph = social_graph or SocialGraph()
        for commuter in commuters or []:
            self.add(commuter)
        if social_graph is not None:
            self.connect_social_network(social_graph)

    # -----------------------------------------------------------------
    # Registry
    # -----------------------------------------------------------------

    def add(self, commuter: Commuter) -> Commuter:
        """Register a commuter and give it name lookup into this population.

        Raises:
            ValueError: If the name is taken, or the commuter has no
                perceived effort for its own commute length.
        """
        if commuter.name in self._commuters:
            raise ValueError(f"Duplicate commuter name '{commuter.name}'")
        if not commuter.has_effort_for_commute():
            raise ValueError(
                f"Commuter '{commuter.name}' has no perceived effort for "
                f"commute length {commuter.commute_length!r}"
            )
        commuter.resolver = self.get
        self._commuters[commuter.name] = commuter
        self.social_graph.add_node(commuter.name)
        return commuter

    def get(self, name: str) -> Commuter:
        """Return the commuter with the given name.

        Raises:
            KeyError: If no such commuter is registered.
        """
        return self._commuters[name]

    def __getitem__(self, name: str) -> Commuter:
        return self._commuters[name]

    def __contains__(self, name: object) -> bool:
        return name in self._commuters

    def __iter__(self) -> Iterator[Commuter]:
        return iter(self._commuters.values())

    def __len__(self) -> int:
        return len(self._commuters)

    @property
    def size(self) -> int:
        return len(self._commuters)

    @property
    def names(self) -> list[str]:
        return list(self._commuters)

    @property
    def commuters(self) -> list[Commuter]:
        return list(self._commuters.values())

    # -----------------------------------------------------------------
    # Relationships
    # -----------------------------------------------------------------

    def connect_social_network(self, graph: SocialGraph) -> None:
        """Replace every commuter's social network with its friends in ``graph``.

        Raises:
            ValueError: If the graph references an unregistered commuter.
        """
        unknown = graph.nodes - set(self._commuters)
        if unknown:
            raise ValueError(f"Social graph references unknown commuters: {sorted(unknown)}")
        self.social_graph = graph
        for name, commuter in self._commuters.items():
            commuter.social_network = graph.neighbors(name)

    def connect_neighbours(
        self,
        max_neighbours: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Make commuters sharing a Neighbourhood each other's neighbours.

        Args:
            max_neighbours: If given, each commuter knows at most this many
                of its fellow residents, chosen at random.
            rng: Random number generator used when sampling.
        """
        rng = rng or random.Random()
        residents: dict[Neighbourhood, list[str]] = {}
        for commuter in self._commuters.values():
            residents.setdefault(commuter.neighbourhood, []).append(commuter.name)

        for commuter in self._commuters.values():
            others = sorted(
                name for name in residents[commuter.neighbourhood] if name != commuter.name
            )
            if max_neighbours is not None and len(others) > max_neighbours:
                others = rng.sample(others, max_neighbours)
            commuter.neighbours = set(others)

    # -----------------------------------------------------------------
    # Aggregates
    # -----------------------------------------------------------------

    def mode_counts(self) -> dict[TransportMode, int]:
        """Number of commuters currently using each mode."""
        counts = {mode: 0 for mode in TransportMode}
        for commuter in self._commuters.values():
            counts[commuter.current_mode] += 1
        return counts

    def norm_counts(self) -> dict[TransportMode, int]:
        """Number of commuters holding each mode as their norm."""
        counts = {mode: 0 for mode in TransportMode}
        for commuter in self._commuters.values():
            counts[commuter.norm] += 1
        return counts

    @property
    def stats(self) -> PopulationStats:
        """Frozen snapshot of aggregate statistics across all commuters."""
        total_days = 0
        total_norm_changes = 0
        for commuter in self._commuters.values():
            commuter_stats = commuter.stats
            total_days += commuter_stats.days_simulated
            total_norm_changes += commuter_stats.norm_changes
        return PopulationStats(
            size=self.size,
            total_days=total_days,
            total_norm_changes=total_norm_changes,
            mode_counts=self.mode_counts(),
            norm_counts=self.norm_counts(),
        )

    # -----------------------------------------------------------------
    # Factories
    # -----------------------------------------------------------------

    @classmethod
    def from_segments(
        cls,
        total_size: int,
        segments: list[DemographicSegment],
        graph_type: str = "small_world",
        seed: int | None = None,
        name_prefix: str = "commuter",
        max_neighbours: int | None = None,
    ) -> Population:
        """Create a population from demographic segments.

        Each segment contributes ``floor(fraction * total_size)`` commuters.
        Remaining commuters are assigned to the largest segment. The social
        graph is generated over all commuters and neighbours are linked by
        shared neighbourhood.

        Args:
            total_size: Total number of commuters.
            segments: Segment definitions with fractions summing to at most
                1.0. A shortfall goes to the largest segment.
            graph_type: One of "small_world", "complete", "random".
            seed: Random seed for reproducibility.
            name_prefix: Prefix for commuter names.
            max_neighbours: Cap on neighbours per commuter.
        """
        if total_size < 0:
            raise ValueError(f"total_size must be >= 0, got {total_size}")
        if not segments:
            raise ValueError("from_segments needs at least one segment")
        negative = [seg.name for seg in segments if seg.fraction < 0]
        if negative:
            raise ValueError(f"Segment fractions must be >= 0, got negative for {negative}")
        total_fraction = sum(seg.fraction for seg in segments)
        if total_fraction > 1.0 + 1e-9:
            raise ValueError(f"Segment fractions must sum to at most 1.0, got {total_fraction}")

        rng = random.Random(seed)

        sizes = [int(seg.fraction * total_size) for seg in segments]
        remainder = total_size - sum(sizes)
        if remainder > 0:
            sizes[sizes.index(max(sizes))] += remainder

        population = cls()
        index = 0
        for seg, seg_size in zip(segments, sizes):
            seg_rng = random.Random(seg.seed if seg.seed is not None else rng.randint(0, 2**31))
            dist = seg.trait_distribution or UniformTraitDistribution()
            lengths, length_weights = zip(*seg.commute_lengths.items())
            modes, mode_weights = zip(*seg.initial_modes.items())

            for _ in range(seg_size):
                mode = seg_rng.choices(modes, weights=mode_weights, k=1)[0]
                population.add(Commuter(
                    name=f"{name_prefix}_{index}",
                    subculture=seg.subculture,
                    neighbourhood=seg.neighbourhood,
                    commute_length=seg_rng.choices(lengths, weights=length_weights, k=1)[0],
                    perceived_effort=seg.perceived_effort,
                    current_mode=mode,
                    traits=dist.sample(seg_rng),
                    days_in_habit_average=seg.days_in_habit_average,
                ))
                index += 1

            logger.debug("Segment '%s': %d commuters", seg.name, seg_size)

        population.connect_social_network(_build_graph(population.names, graph_type, rng))
        population.connect_neighbours(max_neighbours=max_neighbours, rng=rng)
        logger.info(
            "Built population of %d commuters from %d segments", population.size, len(segments)
        )
        return population


def _build_graph(names: list[str], graph_type: str, rng: random.Random) -> SocialGraph:
    """Build a social graph of the specified type."""
    if graph_type == "complete":
        return SocialGraph.complete(names)
    elif graph_type == "random":
        return SocialGraph.random_erdos_renyi(names, p=0.1, rng=rng)
    elif graph_type == "small_world":
        k = min(4, len(names) - 1) if len(names) > 1 else 0
        if k < 2:
            return SocialGraph.complete(names)
        return SocialGraph.small_world(names, k=k, p_rewire=0.1, rng=rng)
    raise ValueError(f"Unknown graph_type '{graph_type}'")

"""The commuter: one actor's daily mode choice and norm formation.

A Commuter keeps its own mode history and reads, but never writes, the
state of the commuters it knows and the groups it belongs to. Every
decision is a pointwise sum of mode-weighted influences reduced by
argmax.

Each decision comes in two halves so a driver can run a population in
lock-step: ``propose_*`` computes the outcome without side effects and
``commit_*`` applies it. ``choose()`` and ``update_norm()`` do both.
"""

from __future__ import annotations

import logging
from typing import Callable, Collection, Iterable, Mapping

from commutesim.errors import MissingEffortDataError
from commutesim.groups import Neighbourhood, Subculture
from commutesim.modes import ACTIVE_MODES, JourneyType, TransportMode, Weather
from commutesim.stats import CommuterStats
from commutesim.traits import CommuterTraits
from commutesim.weights import (
    ModeWeights,
    accumulate,
    argmax,
    habit_weights,
    scale,
)

logger = logging.getLogger(__name__)

EffortTable = Mapping[JourneyType, Mapping[TransportMode, float]]
Resolver = Callable[[str], "Commuter"]

# Bonus (or penalty) to active-mode weather resistance when the weather is
# the same as yesterday.
RESOLVE_STEP = 0.1


def count_in_subgroup(members: Collection[Commuter], weight: float) -> ModeWeights:
    """Share of ``members`` per habit mode, multiplied by ``weight``.

    An empty group yields an empty mapping.
    """
    size = len(members)
    if size == 0:
        return {}
    counts: dict[TransportMode, int] = {}
    for member in members:
        counts[member.habit] = counts.get(member.habit, 0) + 1
    return {mode: count * weight / size for mode, count in counts.items()}


class Commuter:
    """A commuter choosing how to get to work each day.

    Args:
        name: Stable identifier, unique within a population.
        subculture: Shared subculture the commuter belongs to.
        neighbourhood: Shared neighbourhood the commuter lives in.
        commute_length: Distance bucket of the commute.
        perceived_effort: Effort (0-1) of each mode per journey type. Must
            contain ``commute_length`` for mode choice to succeed.
        current_mode: Initial mode of travel. Also seeds the mode log.
        habit: Initial habit (defaults to ``current_mode``).
        norm: Initial norm (defaults to ``current_mode``).
        traits: Psychological parameters. Individual traits may also be
            given as keyword arguments, overriding ``traits``.
        days_in_habit_average: Accepted for configuration compatibility;
            not used by the decision logic.
        resolver: Looks up other commuters by name. Populations install
            this when the commuter is added.
    """

    def __init__(
        self,
        name: str,
        subculture: Subculture,
        neighbourhood: Neighbourhood,
        commute_length: JourneyType,
        perceived_effort: EffortTable,
        current_mode: TransportMode,
        habit: TransportMode | None = None,
        norm: TransportMode | None = None,
        traits: CommuterTraits | None = None,
        days_in_habit_average: int = 30,
        resolver: Resolver | None = None,
        **trait_values: float,
    ):
        self.name = name
        self.subculture = subculture
        self.neighbourhood = neighbourhood
        self.commute_length = JourneyType.parse(commute_length)
        self.perceived_effort = _copy_effort(perceived_effort)
        self.traits = (traits or CommuterTraits()).with_overrides(**trait_values)
        self.days_in_habit_average = days_in_habit_average
        self.resolver = resolver

        self.current_mode = TransportMode.parse(current_mode)
        self.habit = TransportMode.parse(habit) if habit is not None else self.current_mode
        self.norm = TransportMode.parse(norm) if norm is not None else self.current_mode

        self.social_network: set[str] = set()
        self.neighbours: set[str] = set()

        # Seeded so habit weighting always has at least one entry.
        self._log: list[TransportMode] = [self.current_mode]

        self._norm_updates = 0
        self._norm_changes = 0
        self._days_by_mode: dict[TransportMode, int] = {}

    # -----------------------------------------------------------------
    # Traits
    # -----------------------------------------------------------------

    @property
    def weather_sensitivity(self) -> float:
        return self.traits.weather_sensitivity

    @property
    def autonomy(self) -> float:
        return self.traits.autonomy

    @property
    def consistency(self) -> float:
        return self.traits.consistency

    @property
    def suggestibility(self) -> float:
        return self.traits.suggestibility

    @property
    def social_connectivity(self) -> float:
        return self.traits.social_connectivity

    @property
    def subculture_connectivity(self) -> float:
        return self.traits.subculture_connectivity

    @property
    def neighbourhood_connectivity(self) -> float:
        return self.traits.neighbourhood_connectivity

    # -----------------------------------------------------------------
    # History and statistics
    # -----------------------------------------------------------------

    @property
    def log(self) -> tuple[TransportMode, ...]:
        """Chosen modes, oldest first. Index 0 is the seeded initial mode."""
        return tuple(self._log)

    @property
    def stats(self) -> CommuterStats:
        """Frozen snapshot of commuter statistics."""
        return CommuterStats(
            days_simulated=len(self._log) - 1,
            norm_updates=self._norm_updates,
            norm_changes=self._norm_changes,
            days_by_mode=dict(self._days_by_mode),
        )

    def habit_weights(self) -> ModeWeights:
        """Recency-weighted summary of the mode log."""
        return habit_weights(self._log)

    # -----------------------------------------------------------------
    # Norm update
    # -----------------------------------------------------------------

    def scores_for_norm(self) -> ModeWeights:
        """Combined influence behind the next norm update.

        Sums social network and neighbour habit shares, subculture
        desirability, the current norm weighted by autonomy, and the
        unscaled habit weights.
        """
        suggestibility = self.suggestibility
        social_vals = count_in_subgroup(
            self._members(self.social_network),
            self.social_connectivity * suggestibility,
        )
        neighbour_vals = count_in_subgroup(
            self._members(self.neighbours),
            self.neighbourhood_connectivity * suggestibility,
        )
        subculture_vals = scale(
            self.subculture.desirability,
            self.subculture_connectivity * suggestibility,
        )
        norm_vals = {self.norm: self.autonomy}
        return accumulate(
            social_vals, neighbour_vals, subculture_vals, norm_vals, self.habit_weights()
        )

    def propose_norm(self) -> TransportMode:
        """Compute the updated norm without changing any state."""
        scores = self.scores_for_norm()
        proposed = argmax(scores)
        logger.debug("[%s] norm scores %s -> %s", self.name, _fmt(scores), proposed.name)
        return proposed

    def commit_norm(self, norm: TransportMode) -> None:
        """Set the norm. Nothing else is touched."""
        norm = TransportMode.parse(norm)
        self._norm_updates += 1
        if norm != self.norm:
            self._norm_changes += 1
            logger.debug("[%s] norm %s -> %s", self.name, self.norm.name, norm.name)
        self.norm = norm

    def update_norm(self) -> TransportMode:
        """Recompute and commit the norm. Returns the new norm."""
        norm = self.propose_norm()
        self.commit_norm(norm)
        return norm

    # -----------------------------------------------------------------
    # Mode choice
    # -----------------------------------------------------------------

    def scores_for_mode(self, weather: Weather, change_in_weather: bool) -> ModeWeights:
        """Combined appeal of each mode for today.

        The current mode is treated as the habit it becomes once today's
        choice is committed. Terms are added, including the weather
        modifier on bad days.

        Raises:
            MissingEffortDataError: If there is no effort entry for the
                commuter's commute length.
        """
        weather = Weather.parse(weather)
        habit = self.current_mode

        norm_val = {self.norm: self.autonomy}
        habit_val = scale(self.habit_weights(), self.consistency)
        intermediate = accumulate(norm_val, habit_val, self.neighbourhood.supportiveness)

        effort = {mode: 1.0 - value for mode, value in self._effort_for_commute().items()}

        if weather == Weather.GOOD:
            return accumulate(intermediate, effort)

        if change_in_weather:
            resolve = 0.0
        elif habit in ACTIVE_MODES:
            resolve = RESOLVE_STEP
        else:
            resolve = -RESOLVE_STEP

        active = 1.0 - self.weather_sensitivity + resolve
        weather_modifier = {
            TransportMode.CYCLE: active,
            TransportMode.WALK: active,
            TransportMode.CAR: 1.0,
            TransportMode.PUBLIC_TRANSPORT: 1.0,
        }
        return accumulate(intermediate, weather_modifier, effort)

    def propose_mode(self, weather: Weather, change_in_weather: bool) -> TransportMode:
        """Compute today's mode without changing any state."""
        scores = self.scores_for_mode(weather, change_in_weather)
        proposed = argmax(scores)
        logger.debug("[%s] mode scores %s -> %s", self.name, _fmt(scores), proposed.name)
        return proposed

    def commit_mode(self, mode: TransportMode) -> None:
        """Record today's mode.

        Yesterday's mode becomes the habit, the new mode is appended to
        the log and becomes the current mode.
        """
        mode = TransportMode.parse(mode)
        self.habit = self.current_mode
        self._log.append(mode)
        self.current_mode = mode
        self._days_by_mode[mode] = self._days_by_mode.get(mode, 0) + 1

    def choose(self, weather: Weather, change_in_weather: bool) -> TransportMode:
        """Choose and commit today's mode. Returns the chosen mode."""
        mode = self.propose_mode(weather, change_in_weather)
        self.commit_mode(mode)
        return mode

    # -----------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------

    def has_effort_for_commute(self) -> bool:
        return self.commute_length in self.perceived_effort

    def _effort_for_commute(self) -> Mapping[TransportMode, float]:
        try:
            return self.perceived_effort[self.commute_length]
        except KeyError:
            raise MissingEffortDataError(self.name, self.commute_length) from None

    def _members(self, names: Iterable[str]) -> list[Commuter]:
        names = list(names)
        if not names:
            return []
        if self.resolver is None:
            raise RuntimeError(
                f"Commuter '{self.name}' has connections but no resolver; "
                "add it to a Population first"
            )
        return [self.resolver(name) for name in names]

    def __repr__(self) -> str:
        return (
            f"Commuter(name={self.name!r}, current_mode={self.current_mode.name}, "
            f"habit={self.habit.name}, norm={self.norm.name}, days={len(self._log) - 1})"
        )


def _copy_effort(perceived_effort: EffortTable) -> dict[JourneyType, dict[TransportMode, float]]:
    table: dict[JourneyType, dict[TransportMode, float]] = {}
    for journey, efforts in perceived_effort.items():
        row: dict[TransportMode, float] = {}
        for mode, value in efforts.items():
            value = float(value)
            if not 0.0 <= value <= 1.0:
                raise ValueError(
                    f"perceived effort for {journey}/{mode} must be in [0, 1], got {value}"
                )
            row[TransportMode.parse(mode)] = value
        table[JourneyType.parse(journey)] = row
    return table


def _fmt(weights: Mapping[TransportMode, float]) -> str:
    return "{" + ", ".join(f"{m.name}: {v:.3f}" for m, v in sorted(weights.items())) + "}"

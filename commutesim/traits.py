"""Psychological parameters for commuters.

Provides the CommuterTraits bundle and distributions for sampling traits
across a population.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, fields, replace
from typing import Protocol, runtime_checkable

# Legal range per trait. Suggestibility scales social influence, so values
# above 1 amplify it.
TRAIT_RANGES: dict[str, tuple[float, float]] = {
    "weather_sensitivity": (0.0, 1.0),
    "autonomy": (0.0, 1.0),
    "consistency": (0.0, 1.0),
    "suggestibility": (0.0, 2.0),
    "social_connectivity": (0.0, 1.0),
    "subculture_connectivity": (0.0, 1.0),
    "neighbourhood_connectivity": (0.0, 1.0),
}


@dataclass(frozen=True)
class CommuterTraits:
    """Immutable psychological parameter set for one commuter.

    Attributes:
        weather_sensitivity: How much bad weather deters active modes (0-1).
        autonomy: Weight of the commuter's own norm (0-1).
        consistency: Weight of the commuter's habit (0-1).
        suggestibility: Multiplier on social, subculture and neighbourhood
            influence (0-2). 1 leaves them unchanged.
        social_connectivity: How connected the commuter is to their social network.
        subculture_connectivity: How connected the commuter is to their subculture.
        neighbourhood_connectivity: How connected the commuter is to their neighbourhood.
    """

    weather_sensitivity: float = 0.5
    autonomy: float = 0.5
    consistency: float = 0.5
    suggestibility: float = 1.0
    social_connectivity: float = 0.5
    subculture_connectivity: float = 0.5
    neighbourhood_connectivity: float = 0.5

    def __post_init__(self) -> None:
        for f in fields(self):
            lo, hi = TRAIT_RANGES[f.name]
            value = getattr(self, f.name)
            if not lo <= value <= hi:
                raise ValueError(f"{f.name} must be in [{lo}, {hi}], got {value}")

    @classmethod
    def clamped(cls, **values: float) -> CommuterTraits:
        """Build traits, clamping each given value into its legal range."""
        return cls(**{
            name: _clamp(float(value), *TRAIT_RANGES[name])
            for name, value in values.items()
        })

    def with_overrides(self, **values: float) -> CommuterTraits:
        """Return a copy with some traits replaced."""
        return replace(self, **values)


@runtime_checkable
class TraitDistribution(Protocol):
    """Protocol for sampling CommuterTraits from a distribution."""

    def sample(self, rng: random.Random) -> CommuterTraits:
        """Return a new CommuterTraits sampled from this distribution."""
        ...


class NormalTraitDistribution:
    """Per-trait normal distribution, clamped to each trait's range.

    Traits without a given mean use the CommuterTraits default. Traits
    without a given standard deviation use a quarter of their mean.

    Args:
        means: Mean value per trait.
        stds: Standard deviation per trait.
    """

    def __init__(
        self,
        means: dict[str, float] | None = None,
        stds: dict[str, float] | None = None,
    ):
        unknown = set(means or {}) | set(stds or {})
        unknown -= set(TRAIT_RANGES)
        if unknown:
            raise ValueError(f"Unknown traits: {sorted(unknown)}")
        defaults = CommuterTraits()
        self._means = {name: getattr(defaults, name) for name in TRAIT_RANGES}
        self._means.update(means or {})
        self._stds = {name: 0.25 * abs(mean) for name, mean in self._means.items()}
        self._stds.update(stds or {})

    def sample(self, rng: random.Random) -> CommuterTraits:
        return CommuterTraits.clamped(**{
            name: rng.gauss(mean, self._stds[name])
            for name, mean in self._means.items()
        })


class UniformTraitDistribution:
    """Uniform distribution across each trait's legal range."""

    def sample(self, rng: random.Random) -> CommuterTraits:
        return CommuterTraits(**{
            name: rng.uniform(lo, hi) for name, (lo, hi) in TRAIT_RANGES.items()
        })


def _clamp(v: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, v))

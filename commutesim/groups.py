"""Shared group entities that commuters belong to.

A Subculture and a Neighbourhood are referenced by many commuters at
once and never mutated by them. Their weight mappings are frozen behind
read-only views on construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from commutesim.modes import TransportMode


def _freeze(weights: Mapping) -> Mapping[TransportMode, float]:
    return MappingProxyType(
        {TransportMode.parse(mode): float(value) for mode, value in weights.items()}
    )


@dataclass(frozen=True, eq=False)
class Subculture:
    """A demographic subculture.

    Attributes:
        name: Label for the subculture.
        desirability: How desirable each mode is within the subculture.
            Values need not sum to 1.
    """

    name: str
    desirability: Mapping[TransportMode, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "desirability", _freeze(self.desirability))


@dataclass(frozen=True, eq=False)
class Neighbourhood:
    """The area a commuter lives in.

    Attributes:
        name: Label for the neighbourhood.
        supportiveness: How well the local infrastructure supports each mode.
    """

    name: str
    supportiveness: Mapping[TransportMode, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "supportiveness", _freeze(self.supportiveness))

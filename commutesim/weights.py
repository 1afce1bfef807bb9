"""Mode-weighted mappings: the accumulator, habit weighting and argmax.

Every decision in the package is expressed as one or more
``{TransportMode: float}`` mappings that are summed pointwise and then
reduced to a single mode. The helpers here are the only place those
operations are implemented.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from commutesim.modes import TransportMode

ModeWeights = dict[TransportMode, float]


def accumulate(*weights: Mapping[TransportMode, float]) -> ModeWeights:
    """Pointwise sum of mode-weighted mappings.

    A mode absent from a mapping contributes 0. The result contains every
    mode present in at least one input.

    Example:
        >>> accumulate({TransportMode.CAR: 1.0}, {TransportMode.CAR: 0.5, TransportMode.WALK: 0.2})
        {<TransportMode.CAR: 1>: 1.5, <TransportMode.WALK: 3>: 0.2}
    """
    total: ModeWeights = {}
    for mapping in weights:
        for mode, value in mapping.items():
            total[mode] = total.get(mode, 0.0) + value
    return total


def scale(weights: Mapping[TransportMode, float], factor: float) -> ModeWeights:
    """Multiply every weight by ``factor``."""
    return {mode: value * factor for mode, value in weights.items()}


def weight_function(n: float) -> float:
    """Recency weight ``2 / (n + 1)`` for a history of length ``n``."""
    return 2.0 / (n + 1.0)


def habit_weights(log: Sequence[TransportMode]) -> ModeWeights:
    """Summarise a mode history with exponentially decaying recency weights.

    The newest entry gets ``f(n)``; each step back multiplies the weight by
    ``1 - f(n)``. The oldest entry always contributes exactly 1.0 instead of
    its decayed weight. The result is a weighted sum, so the total grows
    with the length of the history.

    Args:
        log: Chosen modes, oldest first. Must not be empty.

    Raises:
        ValueError: If ``log`` is empty.
    """
    n = len(log)
    if n == 0:
        raise ValueError("habit_weights requires a non-empty log")

    ratio = 1.0 - weight_function(n)
    weight = weight_function(n)
    total: ModeWeights = {}
    for t in range(n - 1, 0, -1):
        total = accumulate(total, {log[t]: weight})
        weight *= ratio
    return accumulate(total, {log[0]: 1.0})


def argmax(weights: Mapping[TransportMode, float]) -> TransportMode:
    """Return the highest-weighted mode.

    Ties resolve to the mode that comes first in ``TransportMode`` order
    (CAR < CYCLE < WALK < PUBLIC_TRANSPORT), independent of the mapping's
    iteration order.

    Raises:
        ValueError: If ``weights`` is empty.
    """
    if not weights:
        raise ValueError("argmax of an empty mode mapping")
    ordered: Iterable[TransportMode] = sorted(weights)
    return max(ordered, key=lambda mode: weights[mode])

"""Statistics dataclasses for commuters and populations."""

from __future__ import annotations

from dataclasses import dataclass, field

from commutesim.modes import TransportMode


@dataclass(frozen=True)
class CommuterStats:
    """Per-commuter statistics snapshot.

    Attributes:
        days_simulated: Number of mode choices committed.
        norm_updates: Number of norm updates committed.
        norm_changes: Norm updates that changed the norm.
        days_by_mode: Count of committed choices per mode.
    """

    days_simulated: int = 0
    norm_updates: int = 0
    norm_changes: int = 0
    days_by_mode: dict[TransportMode, int] = field(default_factory=dict)


@dataclass(frozen=True)
class PopulationStats:
    """Aggregate statistics across a population of commuters.

    Attributes:
        size: Number of commuters.
        total_days: Sum of committed choices across all commuters.
        total_norm_changes: Sum of norm changes across all commuters.
        mode_counts: Current mode of each commuter, counted per mode.
        norm_counts: Current norm of each commuter, counted per mode.
    """

    size: int = 0
    total_days: int = 0
    total_norm_changes: int = 0
    mode_counts: dict[TransportMode, int] = field(default_factory=dict)
    norm_counts: dict[TransportMode, int] = field(default_factory=dict)

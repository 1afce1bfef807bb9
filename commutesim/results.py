"""Per-day records and result analysis for commute simulations.

SimulationResult collects one DayRecord per simulated day and offers
tabular export (pandas) and mode-share plotting (matplotlib).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd

from commutesim.modes import TransportMode, Weather

if TYPE_CHECKING:
    from matplotlib.figure import Figure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayRecord:
    """What happened on one simulated day.

    Attributes:
        day: Day index, starting at 1.
        weather: Weather supplied for the day.
        change_in_weather: Whether the weather differed from the previous day.
        norm_updated: Whether norms were updated on this day.
        mode_counts: Commuters per chosen mode, all modes present.
        norm_counts: Commuters per norm after the day, all modes present.
    """

    day: int
    weather: Weather
    change_in_weather: bool
    norm_updated: bool
    mode_counts: dict[TransportMode, int] = field(default_factory=dict)
    norm_counts: dict[TransportMode, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.mode_counts.values())

    def mode_share(self) -> dict[TransportMode, float]:
        """Fraction of commuters per mode. All zeros for an empty population."""
        total = self.total
        if total == 0:
            return {mode: 0.0 for mode in TransportMode}
        return {mode: self.mode_counts.get(mode, 0) / total for mode in TransportMode}


@dataclass
class SimulationResult:
    """Outcome of a CommuteSimulation run.

    Attributes:
        records: One DayRecord per simulated day, in order.
    """

    records: list[DayRecord] = field(default_factory=list)

    @property
    def days(self) -> int:
        return len(self.records)

    def mode_share(self, day: int = -1) -> dict[TransportMode, float]:
        """Mode share on a given record index (default: the last day).

        Raises:
            IndexError: If no such day was recorded.
        """
        return self.records[day].mode_share()

    def to_dataframe(self) -> pd.DataFrame:
        """One row per day, indexed by day.

        Columns: ``weather``, ``change_in_weather``, ``norm_updated``, one
        count column per mode (lower-case mode name) and one ``norm_<mode>``
        column per mode.
        """
        columns = ["weather", "change_in_weather", "norm_updated"]
        columns += [mode.name.lower() for mode in TransportMode]
        columns += [f"norm_{mode.name.lower()}" for mode in TransportMode]

        rows = []
        for record in self.records:
            row = {
                "day": record.day,
                "weather": record.weather.value,
                "change_in_weather": record.change_in_weather,
                "norm_updated": record.norm_updated,
            }
            for mode in TransportMode:
                row[mode.name.lower()] = record.mode_counts.get(mode, 0)
                row[f"norm_{mode.name.lower()}"] = record.norm_counts.get(mode, 0)
            rows.append(row)

        if not rows:
            return pd.DataFrame(columns=columns, index=pd.Index([], name="day"))
        return pd.DataFrame(rows).set_index("day")[columns]

    def summary(self) -> str:
        """Human-readable summary of the run."""
        if not self.records:
            return "No days simulated."
        first, last = self.records[0], self.records[-1]
        bad_days = sum(1 for r in self.records if r.weather == Weather.BAD)
        lines = [
            f"Days simulated: {self.days} ({bad_days} bad weather)",
            f"Commuters: {last.total}",
            "Mode share (first day -> last day):",
        ]
        first_share, last_share = first.mode_share(), last.mode_share()
        for mode in TransportMode:
            lines.append(
                f"  {mode.name.lower():<17}{first_share[mode]:>7.1%} -> {last_share[mode]:>7.1%}"
            )
        return "\n".join(lines)

    def plot_mode_share(self, path: str | Path | None = None) -> Figure:
        """Stacked area plot of daily mode share.

        Args:
            path: If given, the figure is saved there.

        Returns:
            The matplotlib Figure.
        """
        from matplotlib.figure import Figure

        df = self.to_dataframe()
        mode_columns = [mode.name.lower() for mode in TransportMode]
        totals = df[mode_columns].sum(axis=1).replace(0, 1)
        shares = df[mode_columns].div(totals, axis=0)

        fig = Figure(figsize=(10, 5))
        ax = fig.add_subplot()
        ax.stackplot(shares.index, *(shares[c] for c in mode_columns), labels=mode_columns)
        bad_days = df.index[df["weather"] == Weather.BAD.value]
        for day in bad_days:
            ax.axvspan(day - 0.5, day + 0.5, color="grey", alpha=0.15, linewidth=0)
        ax.set_xlabel("Day")
        ax.set_ylabel("Mode share")
        ax.set_ylim(0, 1)
        ax.set_title("Commuting mode share (shaded: bad weather)")
        ax.legend(loc="upper left", bbox_to_anchor=(1.01, 1.0))
        fig.tight_layout()

        if path is not None:
            path = Path(path)
            path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(path, dpi=150)
            logger.info("Saved mode-share plot to %s", path)
        return fig

"""Day-by-day driver for a population of commuters.

Each simulated day runs in two phases. In the first, every commuter
proposes its mode (and, on norm days, its norm) from the state everyone
had at the end of the previous day. In the second, all proposals are
committed. No commuter can observe another's change from the same day.
"""

from __future__ import annotations

import logging
import random

from commutesim.errors import MissingEffortDataError
from commutesim.modes import TransportMode, Weather
from commutesim.population import Population
from commutesim.results import DayRecord, SimulationResult
from commutesim.weather import MarkovWeather, WeatherModel, change_in_weather

logger = logging.getLogger(__name__)


class CommuteSimulation:
    """Advances a population through simulated days.

    Args:
        population: The commuters to simulate.
        weather_model: Source of daily weather (default: MarkovWeather()).
        norm_interval: Norms are updated on every day divisible by this
            interval. 0 disables norm updates.
        seed: Random seed for the weather model.
    """

    def __init__(
        self,
        population: Population,
        weather_model: WeatherModel | None = None,
        norm_interval: int = 7,
        seed: int | None = None,
    ):
        if norm_interval < 0:
            raise ValueError(f"norm_interval must be >= 0, got {norm_interval}")
        self.population = population
        self.weather_model = weather_model if weather_model is not None else MarkovWeather()
        self.norm_interval = norm_interval
        self._rng = random.Random(seed)
        self._day = 0
        self._last_weather: Weather | None = None
        # Drawn but not yet committed; reused if the day is retried.
        self._pending_weather: Weather | None = None
        self.result = SimulationResult()

    @property
    def day(self) -> int:
        """Number of days simulated so far."""
        return self._day

    def is_norm_day(self, day: int) -> bool:
        return self.norm_interval > 0 and day % self.norm_interval == 0

    def step(self) -> DayRecord:
        """Simulate one day and return its record.

        Raises:
            MissingEffortDataError: If a commuter lacks effort data for its
                commute. No commuter's state is changed for that day, and
                the next call retries it with the same weather.
        """
        day = self._day + 1
        if self._pending_weather is None:
            self._pending_weather = self.weather_model.next_day(self._rng)
        weather = self._pending_weather
        changed = change_in_weather(weather, self._last_weather)
        norm_day = self.is_norm_day(day)

        # Phase 1: compute from yesterday's state, no mutation.
        proposed_modes: dict[str, TransportMode] = {}
        proposed_norms: dict[str, TransportMode] = {}
        for commuter in self.population:
            try:
                proposed_modes[commuter.name] = commuter.propose_mode(weather, changed)
            except MissingEffortDataError:
                logger.error("Day %d: mode choice failed for '%s'", day, commuter.name)
                raise
            if norm_day:
                proposed_norms[commuter.name] = commuter.propose_norm()

        # Phase 2: commit.
        for commuter in self.population:
            commuter.commit_mode(proposed_modes[commuter.name])
            if norm_day:
                commuter.commit_norm(proposed_norms[commuter.name])

        self._day = day
        self._last_weather = weather
        self._pending_weather = None

        record = DayRecord(
            day=day,
            weather=weather,
            change_in_weather=changed,
            norm_updated=norm_day,
            mode_counts=self.population.mode_counts(),
            norm_counts=self.population.norm_counts(),
        )
        self.result.records.append(record)
        logger.debug(
            "Day %d (%s%s): %s",
            day,
            weather.value,
            ", changed" if changed else "",
            {mode.name: count for mode, count in record.mode_counts.items()},
        )
        return record

    def run(self, days: int) -> SimulationResult:
        """Simulate ``days`` further days and return the accumulated result."""
        if days < 0:
            raise ValueError(f"days must be >= 0, got {days}")
        logger.info(
            "Running %d days for %d commuters (norm interval %d)",
            days, self.population.size, self.norm_interval,
        )
        for _ in range(days):
            self.step()
        logger.info("Finished at day %d", self._day)
        return self.result

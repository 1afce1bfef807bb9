"""Daily weather sources for the simulation driver."""

from __future__ import annotations

import random
from typing import Protocol, Sequence, runtime_checkable

from commutesim.modes import Weather


@runtime_checkable
class WeatherModel(Protocol):
    """Protocol for producing one day's weather at a time."""

    def next_day(self, rng: random.Random) -> Weather:
        """Return the weather for the next simulated day."""
        ...


class FixedWeather:
    """Cycles through a fixed sequence of weather.

    Args:
        sequence: Weather for consecutive days; repeats when exhausted.
    """

    def __init__(self, sequence: Sequence[Weather | str]):
        if not sequence:
            raise ValueError("FixedWeather needs at least one day of weather")
        self._sequence = [Weather.parse(w) for w in sequence]
        self._index = 0

    def next_day(self, rng: random.Random) -> Weather:
        weather = self._sequence[self._index % len(self._sequence)]
        self._index += 1
        return weather


class MarkovWeather:
    """Two-state weather chain.

    Args:
        p_good_to_bad: Probability a good day is followed by a bad one.
        p_bad_to_good: Probability a bad day is followed by a good one.
        initial: Weather on the first day.
    """

    def __init__(
        self,
        p_good_to_bad: float = 0.3,
        p_bad_to_good: float = 0.5,
        initial: Weather = Weather.GOOD,
    ):
        for label, p in (("p_good_to_bad", p_good_to_bad), ("p_bad_to_good", p_bad_to_good)):
            if not 0.0 <= p <= 1.0:
                raise ValueError(f"{label} must be in [0, 1], got {p}")
        self.p_good_to_bad = p_good_to_bad
        self.p_bad_to_good = p_bad_to_good
        self._initial = Weather.parse(initial)
        self._last: Weather | None = None

    def next_day(self, rng: random.Random) -> Weather:
        if self._last is None:
            self._last = self._initial
        elif self._last == Weather.GOOD:
            if rng.random() < self.p_good_to_bad:
                self._last = Weather.BAD
        elif rng.random() < self.p_bad_to_good:
            self._last = Weather.GOOD
        return self._last


def change_in_weather(today: Weather, yesterday: Weather | None) -> bool:
    """Whether today's weather differs from yesterday's.

    The first simulated day has no yesterday and counts as unchanged.
    """
    if yesterday is None:
        return False
    return today != yesterday

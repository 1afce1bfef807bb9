"""Weather shock commuting example.

Builds a two-segment town (an active city centre and car-oriented
suburbs), runs it through a stretch of Markov weather, then through a
week of bad weather, and compares mode shares before and after.

Usage:
    python examples/weather_shock.py [--days 90] [--size 200] [--seed 42] [--plot out.png]
"""

from __future__ import annotations

import argparse
from pathlib import Path

from commutesim import (
    CommuteSimulation,
    DemographicSegment,
    FixedWeather,
    JourneyType,
    MarkovWeather,
    Neighbourhood,
    NormalTraitDistribution,
    Population,
    Subculture,
    TransportMode,
    Weather,
    enable_console_logging,
)

CAR = TransportMode.CAR
CYCLE = TransportMode.CYCLE
WALK = TransportMode.WALK
PT = TransportMode.PUBLIC_TRANSPORT


# =============================================================================
# Scenario definition
# =============================================================================


PERCEIVED_EFFORT = {
    JourneyType.LOCAL: {CAR: 0.3, CYCLE: 0.2, WALK: 0.1, PT: 0.4},
    JourneyType.SHORT: {CAR: 0.2, CYCLE: 0.4, WALK: 0.6, PT: 0.4},
    JourneyType.MEDIUM: {CAR: 0.2, CYCLE: 0.6, WALK: 0.9, PT: 0.3},
    JourneyType.LONG: {CAR: 0.1, CYCLE: 0.9, WALK: 1.0, PT: 0.3},
}

CENTRE = Neighbourhood(name="centre", supportiveness={CYCLE: 0.4, WALK: 0.5, PT: 0.6, CAR: 0.1})
SUBURBS = Neighbourhood(name="suburbs", supportiveness={CAR: 0.7, PT: 0.2, CYCLE: 0.1})

SEGMENTS = [
    DemographicSegment(
        name="city_centre",
        fraction=0.4,
        subculture=Subculture(name="active", desirability={CYCLE: 0.8, WALK: 0.6, PT: 0.3}),
        neighbourhood=CENTRE,
        perceived_effort=PERCEIVED_EFFORT,
        trait_distribution=NormalTraitDistribution(means={"weather_sensitivity": 0.3}),
        commute_lengths={JourneyType.LOCAL: 1.0, JourneyType.SHORT: 2.0},
        initial_modes={CYCLE: 2.0, WALK: 1.0, PT: 1.0, CAR: 1.0},
    ),
    DemographicSegment(
        name="suburbs",
        fraction=0.6,
        subculture=Subculture(name="drivers", desirability={CAR: 0.9, PT: 0.2}),
        neighbourhood=SUBURBS,
        perceived_effort=PERCEIVED_EFFORT,
        trait_distribution=NormalTraitDistribution(means={"weather_sensitivity": 0.7}),
        commute_lengths={JourneyType.SHORT: 1.0, JourneyType.MEDIUM: 2.0, JourneyType.LONG: 1.0},
        initial_modes={CAR: 3.0, PT: 1.0, CYCLE: 0.5},
    ),
]


def _print_shares(label: str, shares: dict[TransportMode, float]) -> None:
    parts = ", ".join(f"{mode.name.lower()}={share:.1%}" for mode, share in shares.items())
    print(f"  {label:<18} {parts}")


# =============================================================================
# Main
# =============================================================================


def main():
    parser = argparse.ArgumentParser(description="Weather shock commuting simulation")
    parser.add_argument("--days", type=int, default=90, help="Days of ordinary weather")
    parser.add_argument("--size", type=int, default=200, help="Number of commuters")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--plot", type=Path, default=None, help="Write a mode share chart here")
    parser.add_argument("--verbose", action="store_true", help="Log at INFO level")
    args = parser.parse_args()

    if args.verbose:
        enable_console_logging(level="INFO")

    population = Population.from_segments(
        total_size=args.size,
        segments=SEGMENTS,
        seed=args.seed,
        max_neighbours=8,
    )

    print("=" * 60)
    print("WEATHER SHOCK")
    print("=" * 60)
    print(f"Commuters: {population.size}")

    sim = CommuteSimulation(population, MarkovWeather(0.25, 0.5), norm_interval=7, seed=args.seed)
    sim.run(args.days)
    before = sim.result.mode_share()

    sim.weather_model = FixedWeather([Weather.BAD])
    sim.run(7)
    during = sim.result.mode_share()

    sim.weather_model = FixedWeather([Weather.GOOD])
    sim.run(14)
    after = sim.result.mode_share()

    print()
    _print_shares("Before the storm:", before)
    _print_shares("After 7 bad days:", during)
    _print_shares("Two weeks later:", after)
    print()
    print(sim.result.summary())

    if args.plot is not None:
        sim.result.plot_mode_share(args.plot)
        print(f"\nSaved mode share chart to {args.plot}")


if __name__ == "__main__":
    main()

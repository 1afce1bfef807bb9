"""commutesim: daily commuting-mode choice under social influence and weather.

Each Commuter picks one of four transport modes per simulated day from its
norm, habit, neighbourhood support, weather and perceived effort, and
periodically revises its norm from its friends, neighbours and subculture.
A Population owns the commuters and CommuteSimulation drives them day by
day.
"""

import logging

from commutesim.modes import ACTIVE_MODES, JourneyType, TransportMode, Weather
from commutesim.weights import (
    ModeWeights,
    accumulate,
    argmax,
    habit_weights,
    scale,
    weight_function,
)
from commutesim.groups import Neighbourhood, Subculture
from commutesim.errors import MissingEffortDataError
from commutesim.traits import (
    CommuterTraits,
    NormalTraitDistribution,
    TraitDistribution,
    UniformTraitDistribution,
)
from commutesim.commuter import Commuter, count_in_subgroup
from commutesim.social_network import SocialGraph
from commutesim.population import DemographicSegment, Population
from commutesim.weather import FixedWeather, MarkovWeather, WeatherModel, change_in_weather
from commutesim.stats import CommuterStats, PopulationStats
from commutesim.results import DayRecord, SimulationResult
from commutesim.simulation import CommuteSimulation
from commutesim.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)

# Silent unless the application enables logging.
logging.getLogger("commutesim").addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Modes
    "ACTIVE_MODES",
    "JourneyType",
    "TransportMode",
    "Weather",
    # Weights
    "ModeWeights",
    "accumulate",
    "argmax",
    "habit_weights",
    "scale",
    "weight_function",
    # Groups
    "Neighbourhood",
    "Subculture",
    # Errors
    "MissingEffortDataError",
    # Traits
    "CommuterTraits",
    "NormalTraitDistribution",
    "TraitDistribution",
    "UniformTraitDistribution",
    # Commuter
    "Commuter",
    "count_in_subgroup",
    # Social
    "SocialGraph",
    # Population
    "DemographicSegment",
    "Population",
    # Weather
    "FixedWeather",
    "MarkovWeather",
    "WeatherModel",
    "change_in_weather",
    # Stats and results
    "CommuterStats",
    "PopulationStats",
    "DayRecord",
    "SimulationResult",
    # Simulation
    "CommuteSimulation",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]

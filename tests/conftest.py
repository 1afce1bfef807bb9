"""
Shared pytest fixtures for commutesim tests.
"""

import logging
from pathlib import Path

import pytest

from commutesim import (
    Commuter,
    JourneyType,
    Neighbourhood,
    Subculture,
    TransportMode,
)


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Returns the root test_output directory. Created once per test session.
    Files here persist after tests complete for easy access.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Returns a directory for the current test to write output files.
    Directory structure: test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_dir = test_output_root / module_name / request.node.name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture(autouse=True)
def reset_commutesim_logging():
    """Reset the commutesim logger to its library default around each test."""
    logger = logging.getLogger("commutesim")

    def _reset():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    _reset()
    yield
    _reset()


ZERO_SUPPORT = {mode: 0.0 for mode in TransportMode}

SHORT_EFFORT = {
    JourneyType.SHORT: {
        TransportMode.CAR: 0.2,
        TransportMode.CYCLE: 0.8,
        TransportMode.WALK: 0.9,
        TransportMode.PUBLIC_TRANSPORT: 0.5,
    }
}


@pytest.fixture
def subculture() -> Subculture:
    return Subculture(name="mainstream", desirability=ZERO_SUPPORT)


@pytest.fixture
def neighbourhood() -> Neighbourhood:
    return Neighbourhood(name="flat", supportiveness=ZERO_SUPPORT)


@pytest.fixture
def make_commuter(subculture, neighbourhood):
    """Factory for commuters with neutral groups and a short commute.

    Keyword arguments override any constructor argument or trait.
    """
    counter = iter(range(10_000))

    def _make(**kwargs) -> Commuter:
        params = {
            "name": f"c{next(counter)}",
            "subculture": subculture,
            "neighbourhood": neighbourhood,
            "commute_length": JourneyType.SHORT,
            "perceived_effort": SHORT_EFFORT,
            "current_mode": TransportMode.CAR,
        }
        params.update(kwargs)
        return Commuter(**params)

    return _make

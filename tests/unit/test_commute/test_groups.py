"""Unit tests for shared group entities."""

import pytest

from commutesim.groups import Neighbourhood, Subculture
from commutesim.modes import TransportMode


class TestSubculture:
    def test_keys_parsed(self):
        s = Subculture(name="cyclists", desirability={"cycle": 0.9, TransportMode.CAR: 0.1})
        assert s.desirability[TransportMode.CYCLE] == 0.9
        assert s.desirability[TransportMode.CAR] == 0.1

    def test_desirability_read_only(self):
        s = Subculture(name="s", desirability={TransportMode.CAR: 1.0})
        with pytest.raises(TypeError):
            s.desirability[TransportMode.CAR] = 0.0  # type: ignore[index]

    def test_source_mapping_changes_not_visible(self):
        source = {TransportMode.WALK: 0.5}
        s = Subculture(name="s", desirability=source)
        source[TransportMode.WALK] = 2.0
        assert s.desirability[TransportMode.WALK] == 0.5

    def test_frozen(self):
        s = Subculture(name="s")
        with pytest.raises(AttributeError):
            s.name = "other"  # type: ignore[misc]


class TestNeighbourhood:
    def test_supportiveness(self):
        n = Neighbourhood(name="centre", supportiveness={"walk": 0.8})
        assert dict(n.supportiveness) == {TransportMode.WALK: 0.8}

    def test_identity_semantics(self):
        a = Neighbourhood(name="same")
        b = Neighbourhood(name="same")
        assert a != b
        assert len({a, b}) == 2

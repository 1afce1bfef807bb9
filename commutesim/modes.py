"""Enumerations shared by every commuting component.

``TransportMode`` is closed: all weighted mappings in the package are keyed
by its four members. Declaration order doubles as the fixed total order
used to break ties between equally scored modes.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class _ParseMixin:
    """Case-insensitive lookup by member name."""

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        key = str(value).strip().upper().replace(" ", "_").replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            valid = ", ".join(m.name.lower() for m in cls)
            raise ValueError(f"Unknown {cls.__name__} '{value}', expected one of: {valid}") from None


class TransportMode(_ParseMixin, IntEnum):
    """The four commuting methods, in tie-break order."""

    CAR = 1
    CYCLE = 2
    WALK = 3
    PUBLIC_TRANSPORT = 4


ACTIVE_MODES = frozenset({TransportMode.CYCLE, TransportMode.WALK})


class JourneyType(_ParseMixin, Enum):
    """Commute distance bucket, used as a perceived-effort lookup key."""

    LOCAL = "local"
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class Weather(_ParseMixin, Enum):
    """Daily weather supplied by the driver."""

    GOOD = "good"
    BAD = "bad"

"""Exceptions raised by commuter decision logic."""

from __future__ import annotations


class MissingEffortDataError(KeyError):
    """A commuter has no perceived-effort entry for its own commute length.

    Raised from mode choice. Populations check effort tables when a
    commuter is added, so seeing this at run time means a commuter was
    driven outside a validated population.
    """

    def __init__(self, commuter: str, commute_length) -> None:
        super().__init__(commute_length)
        self.commuter = commuter
        self.commute_length = commute_length

    def __str__(self) -> str:
        return (
            f"Commuter '{self.commuter}' has no perceived effort for "
            f"commute length {self.commute_length!r}"
        )

# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Exceptions raised by the match simulator.

Every error here signals either bad input (an unknown id, an invalid league
file) or a hole in rule coverage. None of them are meant to be caught inside
the simulation loop.
"""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for all simulator errors."""


class NoEventProducedError(SimulationError):
    """Raised when every provider in the chain declined to emit an event."""

    def __init__(self, inning: int, top: bool, tick: int):
        self.inning = inning
        self.top = top
        self.tick = tick
        half = "top" if top else "bottom"
        super().__init__(
            f"no provider produced an event ({half} {inning}, tick {tick})"
        )


class UnknownSubKindError(SimulationError):
    """Raised when an event carries a sub-kind code with no rule behind it."""

    def __init__(self, event_tag: str, field: str, value: object):
        self.event_tag = event_tag
        self.field = field
        self.value = value
        super().__init__(f"{event_tag}: unrecognised {field} {value!r}")


class EntityNotFoundError(SimulationError, KeyError):
    """Raised when a roster lookup names an id that does not exist."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} not found: {entity_id}")

    def __str__(self) -> str:
        return self.args[0]


class LeagueValidationError(SimulationError):
    """Raised when a league file fails schema validation."""

    def __init__(self, message: str, details: list[str] | None = None):
        self.details = details or []
        super().__init__(message)

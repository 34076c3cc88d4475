"""Error kinds shared by the simulation core and its outer surfaces.

Two families that must never be conflated:

- InvalidSimulationParameters: a numerically impossible simulation set-up
  (zero time-to-kill, non-positive decay rate, ...).  Raised at
  registration or decay-rate computation time so it never reaches the loop.
- InputParseError: malformed external input (command-line numbers, plan
  files) caught before anything is handed to the engine.
"""

from __future__ import annotations


class InvalidSimulationParameters(ValueError):
    """Raised when simulation inputs would divide by zero or never terminate."""


class InputParseError(ValueError):
    """Raised when external numeric configuration cannot be parsed."""

    def __init__(self, source: str, value: object, reason: str = "") -> None:
        self.source = source
        self.value = value
        message = f"Cannot parse {source}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)

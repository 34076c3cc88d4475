"""CurrencyManager — mission economy and its feedback into pressure decay.

The pressure engine only sees the narrow EconomyFeedback surface: one
``currency_pressure`` term folded into the decay-rate formula, and two
credit calls made whenever a virtual spawn dies.  Everything else here
(wave budgets, per-wavespawn payouts, spreads) is used by the wave pacer.

Currency pressure
-----------------
Money in the players' hands turns into upgrades, so a richer team clears
threat faster::

    currency_pressure = currency * currency_pressure_factor

Every spawn death is credited to ``currency`` and, separately, to
``approximated_additional_currency`` - the running total the simulated wave
has dropped so far.  The tally is zeroed at the start and end of every wave.
"""

from __future__ import annotations

import logging
import random
from typing import Protocol

from wavesim.errors import InvalidSimulationParameters

logger = logging.getLogger(__name__)


class EconomyFeedback(Protocol):
    """What the pressure engine needs from the economy."""

    def get_currency_pressure(self) -> float: ...

    def add_currency(self, amount: int) -> None: ...

    def add_approximated_additional_currency(self, amount: int) -> None: ...


def _roll(rng: random.Random, base: int, spread: int) -> int:
    """Uniform integer in [base - spread, base + spread], floored at 0."""
    if spread <= 0:
        return max(0, base)
    return max(0, rng.randint(base - spread, base + spread))


class CurrencyManager:
    """Tracks mission currency and hands out wave / wavespawn payouts."""

    def __init__(
        self,
        currency: int = 1200,
        currency_per_wave: int = 1000,
        currency_per_wave_spread: int = 0,
        currency_per_wavespawn: int = 100,
        currency_per_wavespawn_spread: int = 0,
        currency_per_wavespawn_limit: int = 0,
        currency_pressure_factor: float = 0.25,
    ) -> None:
        self.currency = currency
        self.approximated_additional_currency = 0
        self.currency_per_wave = currency_per_wave
        self.currency_per_wave_spread = currency_per_wave_spread
        self.currency_per_wavespawn = currency_per_wavespawn
        self.currency_per_wavespawn_spread = currency_per_wavespawn_spread
        self.currency_per_wavespawn_limit = currency_per_wavespawn_limit
        self.currency_pressure_factor = currency_pressure_factor
        self.wave_currency_remaining = 0

    @classmethod
    def from_settings(cls, settings) -> CurrencyManager:
        return cls(
            currency=settings.starting_currency,
            currency_per_wave=settings.currency_per_wave,
            currency_per_wave_spread=settings.currency_per_wave_spread,
            currency_per_wavespawn=settings.currency_per_wavespawn,
            currency_per_wavespawn_spread=settings.currency_per_wavespawn_spread,
            currency_per_wavespawn_limit=settings.currency_per_wavespawn_limit,
            currency_pressure_factor=settings.currency_pressure_factor,
        )

    # ------------------------------------------------------------------
    # EconomyFeedback
    # ------------------------------------------------------------------

    def get_currency_pressure(self) -> float:
        return self.currency * self.currency_pressure_factor

    def add_currency(self, amount: int) -> None:
        if amount < 0:
            raise InvalidSimulationParameters(f"Currency credit must be >= 0, got {amount}")
        self.currency += amount

    def add_approximated_additional_currency(self, amount: int) -> None:
        if amount < 0:
            raise InvalidSimulationParameters(f"Currency credit must be >= 0, got {amount}")
        self.approximated_additional_currency += amount

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_currency(self, amount: int) -> None:
        self.currency = amount

    def set_currency_per_wave(self, amount: int) -> None:
        self.currency_per_wave = amount

    def set_currency_per_wave_spread(self, spread: int) -> None:
        self.currency_per_wave_spread = spread

    def set_currency_per_wavespawn(self, amount: int) -> None:
        self.currency_per_wavespawn = amount

    def set_currency_per_wavespawn_spread(self, spread: int) -> None:
        self.currency_per_wavespawn_spread = spread

    def set_currency_per_wavespawn_limit(self, limit: int) -> None:
        self.currency_per_wavespawn_limit = limit

    # ------------------------------------------------------------------
    # Wave budget
    # ------------------------------------------------------------------

    def begin_wave(self, rng: random.Random) -> int:
        """Roll this wave's currency budget and reset the dropped tally."""
        self.approximated_additional_currency = 0
        self.wave_currency_remaining = _roll(rng, self.currency_per_wave, self.currency_per_wave_spread)
        logger.debug(f"Wave budget: {self.wave_currency_remaining} (bank {self.currency})")
        return self.wave_currency_remaining

    def allocate_wavespawn_currency(self, rng: random.Random) -> int:
        """Take one wavespawn's total payout out of the wave budget."""
        amount = _roll(rng, self.currency_per_wavespawn, self.currency_per_wavespawn_spread)
        if self.currency_per_wavespawn_limit > 0:
            amount = min(amount, self.currency_per_wavespawn_limit)
        amount = min(amount, self.wave_currency_remaining)
        self.wave_currency_remaining -= amount
        return amount

    def refund_wave_currency(self, amount: int) -> None:
        """Return an unused part of an allocation to the wave budget."""
        if amount < 0:
            raise InvalidSimulationParameters(f"Currency refund must be >= 0, got {amount}")
        self.wave_currency_remaining += amount

    def end_wave(self) -> int:
        """Close the wave; returns the currency its spawns dropped."""
        dropped = self.approximated_additional_currency
        self.approximated_additional_currency = 0
        self.wave_currency_remaining = 0
        return dropped

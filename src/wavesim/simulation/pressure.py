"""PressureManager — discrete-time threat model used to pace waves.

Answers "how long would this group of spawns keep the players busy"
without simulating combat.  Each registered VirtualWavespawn produces
VirtualSpawns on its own schedule; each live spawn pushes a constant
amount of pressure per tick until its lifetime runs out, while the
players bleed pressure off at the decay rate.

Tick order (step_through_time)::

    1. wavespawns count down and materialize due spawns
    2. spawns age; dead ones pay out currency and leave, live ones add pps
    3. pressure -= decay_rate * multiplier_in_time / (active_spawns * 0.2 + 1)

Materializing a spawn adds its pps to the pressure straight away, and the
same spawn adds it again on its first surviving tick.

The decay rate is NOT kept in sync automatically.  Call
calculate_pressure_decay_rate() after changing currency, players or any
multiplier and before the next step.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Any

from wavesim.errors import InvalidSimulationParameters

from .currency import EconomyFeedback
from .spawns import VirtualSpawn, VirtualWavespawn

logger = logging.getLogger(__name__)

# Each simultaneously active spawn slows decay by this fraction
_ACTIVE_SPAWN_DAMPING = 0.2


class PressureManager:
    """Owns the live wavespawns/spawns and the pressure scalar."""

    def __init__(
        self,
        currency: EconomyFeedback,
        *,
        players: int = 4,
        base_pressure_decay_rate: float = 600.0,
        pressure_decay_rate_multiplier: float = 0.0175,
        pressure_decay_rate_multiplier_in_time: float = 3.0,
        bot_path_length: float = 1.0,
        pps_factor_tfbot: float = 1.0,
        pps_factor_tank: float = 0.05,
        player_exponent: float = 1.0,
    ) -> None:
        self._currency = currency
        self._pressure: float = 0.0
        self._pressure_decay_rate: float = 0.0
        self._players = players
        self.base_pressure_decay_rate = base_pressure_decay_rate
        self.pressure_decay_rate_multiplier = pressure_decay_rate_multiplier
        self.pressure_decay_rate_multiplier_in_time = pressure_decay_rate_multiplier_in_time
        self.bot_path_length = bot_path_length
        self.pps_factor_tfbot = pps_factor_tfbot
        self.pps_factor_tank = pps_factor_tank
        self.player_exponent = player_exponent
        self._wavespawns: list[VirtualWavespawn] = []
        self._spawns: list[VirtualSpawn] = []

    @classmethod
    def from_settings(cls, currency: EconomyFeedback, settings) -> PressureManager:
        return cls(
            currency,
            players=settings.players,
            base_pressure_decay_rate=settings.base_pressure_decay_rate,
            pressure_decay_rate_multiplier=settings.pressure_decay_rate_multiplier,
            pressure_decay_rate_multiplier_in_time=settings.pressure_decay_rate_multiplier_in_time,
            bot_path_length=settings.bot_path_length,
            pps_factor_tfbot=settings.pps_factor_tfbot,
            pps_factor_tank=settings.pps_factor_tank,
            player_exponent=settings.player_exponent,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def pressure(self) -> float:
        return self._pressure

    @property
    def pressure_decay_rate(self) -> float:
        return self._pressure_decay_rate

    @property
    def pressure_decay_rate_per_player(self) -> float:
        effective = self.effective_players
        if effective <= 0:
            return 0.0
        return self._pressure_decay_rate / effective

    @property
    def players(self) -> int:
        return self._players

    @property
    def effective_players(self) -> float:
        """players ** player_exponent (linear when the exponent is 1).

        0.0 when there are no players; the power is only defined for a
        positive head count.
        """
        if self._players <= 0:
            return 0.0
        return float(self._players) ** self.player_exponent

    @property
    def active_spawns(self) -> int:
        return len(self._spawns)

    @property
    def wavespawns(self) -> tuple[VirtualWavespawn, ...]:
        return tuple(self._wavespawns)

    @property
    def spawns(self) -> tuple[VirtualSpawn, ...]:
        return tuple(self._spawns)

    def snapshot(self) -> dict[str, Any]:
        return {
            "pressure": self._pressure,
            "pressure_decay_rate": self._pressure_decay_rate,
            "pressure_decay_rate_per_player": self.pressure_decay_rate_per_player,
            "players": self._players,
            "effective_players": self.effective_players,
            "active_spawns": len(self._spawns),
            "wavespawns": len(self._wavespawns),
        }

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_players(self, players: int) -> None:
        self._players = players

    def set_player_exponent(self, exponent: float) -> None:
        self.player_exponent = exponent

    def set_bot_path_length(self, length: float) -> None:
        self.bot_path_length = length

    def set_pressure_decay_rate_multiplier(self, multiplier: float) -> None:
        self.pressure_decay_rate_multiplier = multiplier

    def multiply_pressure_decay_rate_multiplier(self, factor: float) -> None:
        self.pressure_decay_rate_multiplier *= factor

    def set_pressure_decay_rate_multiplier_in_time(self, multiplier: float) -> None:
        self.pressure_decay_rate_multiplier_in_time = multiplier

    def reset_pressure(self) -> None:
        self._pressure = 0.0

    def calculate_pressure_decay_rate(self) -> float:
        """Recompute the decay rate from currency, players and multipliers."""
        if self._players <= 0:
            raise InvalidSimulationParameters(f"players must be positive, got {self._players}")
        rate = (
            (self._currency.get_currency_pressure() + self.base_pressure_decay_rate)
            * self.effective_players
            * self.pressure_decay_rate_multiplier
            * self.bot_path_length
        )
        if not rate > 0.0:
            raise InvalidSimulationParameters(
                f"Pressure decay rate must be positive, got {rate} "
                f"(players={self._players}, multiplier={self.pressure_decay_rate_multiplier}, "
                f"bot_path_length={self.bot_path_length})"
            )
        self._pressure_decay_rate = rate
        return rate

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_virtual_wavespawn(self, ws: VirtualWavespawn) -> None:
        """Register a spawner; its first instance appears immediately."""
        self._validate(ws)
        owned = replace(ws)
        self._wavespawns.append(owned)
        self.add_virtual_spawn(owned)
        logger.debug(
            f"Registered wavespawn {ws.name or '<unnamed>'}: "
            f"{ws.spawns_remaining} scheduled every {ws.wait_between_spawns}"
        )

    def add_virtual_spawn(self, ws: VirtualWavespawn) -> VirtualSpawn:
        """Materialize one instance of ``ws`` and front-load its pressure."""
        if ws.time_to_kill <= 0:
            raise InvalidSimulationParameters(f"time_to_kill must be positive, got {ws.time_to_kill}")
        rounded_time_to_kill = max(1, math.ceil(ws.time_to_kill))
        pressure_per_second = ws.effective_pressure / rounded_time_to_kill
        pps_multiplier = self.pps_factor_tank if ws.is_tank else self.pps_factor_tfbot

        spawn = VirtualSpawn(
            remaining_lifetime=rounded_time_to_kill,
            pressure_per_second=pressure_per_second * pps_multiplier,
            effective_pressure=ws.effective_pressure,
            currency_value=ws.currency_per_spawn,
        )
        self._spawns.append(spawn)
        self._pressure += spawn.pressure_per_second
        return spawn

    def _validate(self, ws: VirtualWavespawn) -> None:
        if ws.time_to_kill <= 0:
            raise InvalidSimulationParameters(f"time_to_kill must be positive, got {ws.time_to_kill}")
        if ws.effective_pressure <= 0:
            raise InvalidSimulationParameters(
                f"effective_pressure must be positive, got {ws.effective_pressure}"
            )
        if ws.spawns_remaining < 0:
            raise InvalidSimulationParameters(
                f"spawns_remaining must be >= 0, got {ws.spawns_remaining}"
            )
        if ws.spawns_remaining > 0 and ws.wait_between_spawns <= 0:
            raise InvalidSimulationParameters(
                f"wait_between_spawns must be positive when spawns remain, got {ws.wait_between_spawns}"
            )
        if ws.currency_per_spawn < 0:
            raise InvalidSimulationParameters(
                f"currency_per_spawn must be >= 0, got {ws.currency_per_spawn}"
            )
        if (self.pps_factor_tank if ws.is_tank else self.pps_factor_tfbot) <= 0:
            raise InvalidSimulationParameters("pressure-per-second factor must be positive")

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def step_through_time(self, t: int) -> int:
        """Advance ticks until pressure is exhausted; returns the updated tick.

        Requires a positive decay rate whenever there is pressure to burn
        off.  New pressure may be generated on the way; the loop stops the
        first time a tick ends with ``pressure <= 0``.
        """
        if self._pressure > 0.0 and not self.pressure_decay_per_tick(0) > 0.0:
            raise InvalidSimulationParameters(
                "Pressure decay must be positive before stepping; "
                "call calculate_pressure_decay_rate() first and keep "
                "pressure_decay_rate_multiplier_in_time above zero"
            )

        start = t
        while self._pressure > 0.0:
            t += 1
            self._spawn_due()
            self._pressure += self._age_spawns()
            self._pressure -= self.pressure_decay_per_tick()

        logger.debug(f"Stepped {t - start} ticks to t={t} ({len(self._spawns)} spawns still active)")
        return t

    def pressure_decay_per_tick(self, active_spawns: int | None = None) -> float:
        """Pressure removed in one tick; a busier field decays more slowly."""
        if active_spawns is None:
            active_spawns = len(self._spawns)
        return (
            self._pressure_decay_rate
            * self.pressure_decay_rate_multiplier_in_time
            / (active_spawns * _ACTIVE_SPAWN_DAMPING + 1)
        )

    def _spawn_due(self) -> None:
        for ws in self._wavespawns:
            ws.time_until_next_spawn -= 1.0
            while ws.spawns_remaining > 0 and ws.time_until_next_spawn <= 0.0:
                ws.spawns_remaining -= 1
                ws.time_until_next_spawn += ws.wait_between_spawns
                self.add_virtual_spawn(ws)

    def _age_spawns(self) -> float:
        """Age every live spawn by one tick; returns the pressure they add."""
        increase = 0.0
        survivors: list[VirtualSpawn] = []
        for spawn in self._spawns:
            spawn.decrement_time()
            if spawn.is_dead:
                self._collect(spawn.currency_value)
            else:
                increase += spawn.pressure_per_second
                survivors.append(spawn)
        self._spawns = survivors
        return increase

    def _collect(self, amount: int) -> None:
        self._currency.add_currency(amount)
        self._currency.add_approximated_additional_currency(amount)

    # ------------------------------------------------------------------
    # Wave boundaries
    # ------------------------------------------------------------------

    def flush_remaining(self) -> int:
        """Pay out every live and still-scheduled spawn, then clear.

        Used when a wave is closed: the remaining enemies will still be
        killed in the real game, so their currency is counted.
        """
        total = 0
        for spawn in self._spawns:
            total += spawn.currency_value
        for ws in self._wavespawns:
            total += ws.spawns_remaining * ws.currency_per_spawn
        if total:
            self._collect(total)
        self.clear()
        return total

    def clear(self) -> None:
        """Drop all wavespawns and spawns and zero the pressure."""
        self._wavespawns.clear()
        self._spawns.clear()
        self._pressure = 0.0

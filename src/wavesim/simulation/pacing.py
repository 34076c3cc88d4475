"""WavePacer — drives the pressure engine to lay out waves over time.

The pacer never decides WHAT spawns; the caller hands it candidate
wavespawns per wave.  It decides WHEN each one starts: a wavespawn is
registered, the engine runs until the pressure it created is burnt off,
and the next wavespawn starts at that tick.  A wave closes when its time
budget or wavespawn cap is reached.

Currency feedback: every step pays out dead spawns, which raises the
currency pressure, so the decay rate is recomputed after each step.
"""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Sequence

from wavesim.errors import InvalidSimulationParameters

from .currency import CurrencyManager
from .pressure import PressureManager
from .spawns import VirtualWavespawn

logger = logging.getLogger(__name__)


@dataclass
class ScheduledWavespawn:
    """A wavespawn together with the tick it starts at."""
    start_tick: int
    wavespawn: VirtualWavespawn

    def to_dict(self) -> dict[str, Any]:
        return {"start_tick": self.start_tick, **self.wavespawn.to_dict()}


@dataclass
class WaveReport:
    """Outcome of pacing a single wave."""
    wave: int
    name: str
    ticks: int
    currency_budget: int
    currency_dropped: int
    pressure_decay_rate: float
    scheduled: list[ScheduledWavespawn] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "wave": self.wave,
            "name": self.name,
            "ticks": self.ticks,
            "currency_budget": self.currency_budget,
            "currency_dropped": self.currency_dropped,
            "pressure_decay_rate": self.pressure_decay_rate,
            "wavespawns": [s.to_dict() for s in self.scheduled],
        }


@dataclass
class MissionReport:
    name: str
    players: int
    waves: list[WaveReport] = field(default_factory=list)
    final_currency: int = 0

    @property
    def total_ticks(self) -> int:
        return sum(w.ticks for w in self.waves)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "players": self.players,
            "total_ticks": self.total_ticks,
            "final_currency": self.final_currency,
            "waves": [w.to_dict() for w in self.waves],
        }


class WavePacer:
    """Schedules caller-supplied wavespawns using the pressure engine."""

    def __init__(
        self,
        pressure: PressureManager,
        currency: CurrencyManager,
        *,
        max_time: int = 300,
        max_wavespawns: int = 0,
        rng: random.Random | None = None,
    ) -> None:
        if max_time <= 0:
            raise InvalidSimulationParameters(f"max_time must be positive, got {max_time}")
        self.pressure = pressure
        self.currency = currency
        self.max_time = max_time
        self.max_wavespawns = max_wavespawns
        self.rng = rng or random.Random()
        self._wave = 0

    def plan_wave(self, candidates: Sequence[VirtualWavespawn], name: str = "") -> WaveReport:
        """Schedule ``candidates`` (cycled in order) into one wave."""
        if not candidates:
            raise InvalidSimulationParameters("A wave needs at least one candidate wavespawn")

        self._wave += 1
        pm = self.pressure
        pm.clear()
        budget = self.currency.begin_wave(self.rng)
        pm.calculate_pressure_decay_rate()

        report = WaveReport(
            wave=self._wave,
            name=name or f"Wave {self._wave}",
            ticks=0,
            currency_budget=budget,
            currency_dropped=0,
            pressure_decay_rate=pm.pressure_decay_rate,
        )

        t = 0
        for candidate in itertools.cycle(candidates):
            if t >= self.max_time:
                break
            if self.max_wavespawns and len(report.scheduled) >= self.max_wavespawns:
                break
            ws = self._with_currency(candidate)
            pm.add_virtual_wavespawn(ws)
            report.scheduled.append(ScheduledWavespawn(start_tick=t, wavespawn=ws))
            t = pm.step_through_time(t)
            pm.calculate_pressure_decay_rate()

        pm.flush_remaining()
        report.ticks = t
        report.currency_dropped = self.currency.end_wave()
        report.pressure_decay_rate = pm.calculate_pressure_decay_rate()
        logger.info(
            f"{report.name}: {len(report.scheduled)} wavespawns over {t} ticks, "
            f"{report.currency_dropped} currency dropped"
        )
        return report

    def plan_mission(
        self, waves: Iterable[Sequence[VirtualWavespawn]], name: str = "mission",
        wave_names: Sequence[str] | None = None,
    ) -> MissionReport:
        mission = MissionReport(name=name, players=self.pressure.players)
        for i, candidates in enumerate(waves):
            wave_name = wave_names[i] if wave_names and i < len(wave_names) else ""
            mission.waves.append(self.plan_wave(candidates, name=wave_name))
        mission.final_currency = self.currency.currency
        return mission

    def _with_currency(self, candidate: VirtualWavespawn) -> VirtualWavespawn:
        """Copy the candidate, giving it a share of the wave budget if unpaid."""
        if candidate.currency_per_spawn > 0:
            return replace(candidate)
        total = self.currency.allocate_wavespawn_currency(self.rng)
        per_spawn, leftover = divmod(total, candidate.total_count)
        if leftover:
            self.currency.refund_wave_currency(leftover)
        return replace(candidate, currency_per_spawn=per_spawn)

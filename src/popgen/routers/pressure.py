"""Pressure simulation API endpoints.

Stateless: every request builds its own economy, pressure engine and
pacer from the server settings plus the request's overrides.
"""

import random

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from popgen import create_pacer
from popgen.config import Settings
from wavesim.errors import InvalidSimulationParameters
from wavesim.simulation import CurrencyManager, PressureManager, VirtualWavespawn

router = APIRouter(prefix="/api/pressure", tags=["pressure"])


class WavespawnIn(BaseModel):
    name: str = ""
    total_count: int = Field(default=1, ge=1)
    wait_between_spawns: float = 0.0
    time_until_next_spawn: float | None = None
    time_to_kill: float
    effective_pressure: float
    currency_per_spawn: int = 0
    is_tank: bool = False

    def to_wavespawn(self) -> VirtualWavespawn:
        return VirtualWavespawn(
            time_until_next_spawn=(
                self.time_until_next_spawn
                if self.time_until_next_spawn is not None
                else self.wait_between_spawns
            ),
            wait_between_spawns=self.wait_between_spawns,
            spawns_remaining=self.total_count - 1,
            time_to_kill=self.time_to_kill,
            effective_pressure=self.effective_pressure,
            currency_per_spawn=self.currency_per_spawn,
            is_tank=self.is_tank,
            name=self.name,
        )


class WaveIn(BaseModel):
    name: str = ""
    wavespawns: list[WavespawnIn]


class EngineOverrides(BaseModel):
    """Optional per-request overrides of the server settings."""
    players: int | None = Field(default=None, ge=1)
    player_exponent: float | None = None
    difficulty: float | None = None
    pressure_decay_rate_multiplier: float | None = None
    bot_path_length: float | None = None
    starting_currency: int | None = None
    max_time: int | None = Field(default=None, gt=0)
    max_wavespawns: int | None = Field(default=None, ge=0)
    seed: int | None = None

    def apply(self, base: Settings) -> Settings:
        updates = self.model_dump(exclude_none=True)
        if "difficulty" in updates:
            updates["pressure_decay_rate_multiplier_in_time"] = updates.pop("difficulty")
        return base.model_copy(update=updates)


class SimulateRequest(EngineOverrides):
    name: str = "mission"
    waves: list[WaveIn]


class DecayRateRequest(EngineOverrides):
    currency: int | None = None


def _base_settings() -> Settings:
    from popgen.config import settings
    return settings


@router.post("/simulate")
async def simulate(req: SimulateRequest):
    """Pace the submitted waves and return the mission report."""
    settings = req.apply(_base_settings())
    pacer = create_pacer(settings, rng=random.Random(settings.seed))
    try:
        report = pacer.plan_mission(
            [[ws.to_wavespawn() for ws in w.wavespawns] for w in req.waves],
            name=req.name,
            wave_names=[w.name for w in req.waves],
        )
    except InvalidSimulationParameters as e:
        raise HTTPException(status_code=422, detail=str(e))
    return report.to_dict()


@router.post("/decay-rate")
async def decay_rate(req: DecayRateRequest):
    """Compute the pressure decay rate for a parameter set."""
    settings = req.apply(_base_settings())
    currency = CurrencyManager.from_settings(settings)
    if req.currency is not None:
        currency.set_currency(req.currency)
    pm = PressureManager.from_settings(currency, settings)
    try:
        pm.calculate_pressure_decay_rate()
    except InvalidSimulationParameters as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {
        "pressure_decay_rate": pm.pressure_decay_rate,
        "pressure_decay_rate_per_player": pm.pressure_decay_rate_per_player,
        "effective_players": pm.effective_players,
        "players": pm.players,
        "currency_pressure": currency.get_currency_pressure(),
    }

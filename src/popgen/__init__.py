"""POPGEN — balanced wave pacing for cooperative defense missions.

Factory function wires the currency manager, pressure engine and wave
pacer together from a settings object.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from wavesim.simulation import WavePacer


def create_pacer(settings=None, rng: random.Random | None = None) -> "WavePacer":
    """Create a WavePacer with its own economy and pressure engine.

    Args:
        settings: Pydantic settings object (from popgen.config) or None for
            the module-level defaults.
        rng: Random source for currency spreads.  Seeded from
            ``settings.seed`` when omitted.

    Returns:
        A WavePacer whose ``pressure`` and ``currency`` are freshly built.
    """
    from wavesim.simulation import CurrencyManager, PressureManager, WavePacer

    if settings is None:
        from popgen.config import settings

    currency = CurrencyManager.from_settings(settings)
    pressure = PressureManager.from_settings(currency, settings)
    return WavePacer(
        pressure,
        currency,
        max_time=settings.max_time,
        max_wavespawns=settings.max_wavespawns,
        rng=rng or random.Random(settings.seed),
    )

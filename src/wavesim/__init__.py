"""Wave pressure simulation core.

Pure computation apart from the plan loader: the pressure engine, its
virtual spawns, the mission economy feeding back into decay, and the wave
pacer built on top.
"""

from wavesim.errors import InputParseError, InvalidSimulationParameters

__all__ = ["InputParseError", "InvalidSimulationParameters"]

"""Simulation subsystem — pressure engine, virtual spawns, economy, pacing."""
from .currency import CurrencyManager, EconomyFeedback
from .loader import MissionPlan, WavePlan, load_mission_plan
from .pacing import MissionReport, ScheduledWavespawn, WavePacer, WaveReport
from .pressure import PressureManager
from .spawns import VirtualSpawn, VirtualWavespawn

__all__ = [
    "CurrencyManager",
    "EconomyFeedback",
    "MissionPlan",
    "MissionReport",
    "PressureManager",
    "ScheduledWavespawn",
    "VirtualSpawn",
    "VirtualWavespawn",
    "WavePacer",
    "WavePlan",
    "WaveReport",
    "load_mission_plan",
]

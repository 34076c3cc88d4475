"""Virtual spawn value entities used by the pressure engine.

A VirtualWavespawn describes a spawner: how many instances it still has to
produce, how often, and the threat/economic profile of one instance.  A
VirtualSpawn is one simulated enemy — it only exists for its pressure and
currency contribution, never as a full game unit.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from wavesim.errors import InputParseError


@dataclass
class VirtualWavespawn:
    """Spawner definition registered into the pressure engine."""

    time_until_next_spawn: float     # ticks until the next scheduled instance
    wait_between_spawns: float       # ticks between instances
    spawns_remaining: int            # scheduled instances still to come
    time_to_kill: float              # expected lifetime of one instance
    effective_pressure: float        # total threat one instance adds
    currency_per_spawn: int = 0
    is_tank: bool = False
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VirtualWavespawn:
        wait = float(data["wait_between_spawns"])
        is_tank = data.get("is_tank", False)
        if not isinstance(is_tank, bool):
            raise InputParseError("is_tank", is_tank, "expected true or false")
        if "spawns_remaining" in data:
            remaining = int(data["spawns_remaining"])
        else:
            # total_count includes the instance materialized at registration
            remaining = max(0, int(data["total_count"]) - 1)
        return cls(
            time_until_next_spawn=float(data.get("time_until_next_spawn", wait)),
            wait_between_spawns=wait,
            spawns_remaining=remaining,
            time_to_kill=float(data["time_to_kill"]),
            effective_pressure=float(data["effective_pressure"]),
            currency_per_spawn=int(data.get("currency_per_spawn", 0)),
            is_tank=is_tank,
            name=str(data.get("name", "")),
        )

    @property
    def total_count(self) -> int:
        """Instances this spawner produces, counting the registration spawn."""
        return self.spawns_remaining + 1


@dataclass
class VirtualSpawn:
    """One simulated enemy instance with a countdown lifetime."""

    remaining_lifetime: int
    pressure_per_second: float
    effective_pressure: float
    currency_value: int

    def decrement_time(self) -> None:
        self.remaining_lifetime -= 1

    @property
    def is_dead(self) -> bool:
        return self.remaining_lifetime <= 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

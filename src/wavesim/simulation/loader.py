"""Mission plan files — candidate wavespawns per wave, as JSON.

Format::

    {
      "name": "mannworks_pressure",
      "waves": [
        {
          "name": "Opening",
          "wavespawns": [
            {"name": "scouts", "total_count": 8, "wait_between_spawns": 4,
             "time_to_kill": 3.5, "effective_pressure": 40},
            {"name": "tank", "total_count": 1, "wait_between_spawns": 0,
             "time_to_kill": 60, "effective_pressure": 4000, "is_tank": true}
          ]
        }
      ]
    }

Each wavespawn accepts either ``spawns_remaining`` or ``total_count``
(which includes the instance spawned on registration).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from wavesim.errors import InputParseError

from .spawns import VirtualWavespawn


@dataclass
class WavePlan:
    name: str
    wavespawns: list[VirtualWavespawn]


@dataclass
class MissionPlan:
    name: str
    waves: list[WavePlan] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "waves": [
                {"name": w.name, "wavespawns": [ws.to_dict() for ws in w.wavespawns]}
                for w in self.waves
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "plan") -> MissionPlan:
        if not isinstance(data, dict) or not isinstance(data.get("waves"), list):
            raise InputParseError(source, data, "expected an object with a 'waves' list")

        waves = []
        for i, w in enumerate(data["waves"]):
            if not isinstance(w, dict) or not isinstance(w.get("wavespawns"), list):
                raise InputParseError(f"{source} wave {i + 1}", w, "expected a 'wavespawns' list")
            wavespawns = []
            for j, ws in enumerate(w["wavespawns"]):
                try:
                    wavespawns.append(VirtualWavespawn.from_dict(ws))
                except (KeyError, TypeError, ValueError, AttributeError) as e:
                    raise InputParseError(
                        f"{source} wave {i + 1} wavespawn {j + 1}", ws, str(e)
                    ) from e
            waves.append(WavePlan(name=str(w.get("name", f"Wave {i + 1}")), wavespawns=wavespawns))

        return cls(name=str(data.get("name", "mission")), waves=waves)


def load_mission_plan(path: str | Path) -> MissionPlan:
    """Load and parse a mission plan JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise InputParseError(str(path), e.object[e.start:e.end], "not valid UTF-8") from e
    except json.JSONDecodeError as e:
        raise InputParseError(str(path), e.doc[:80], e.msg) from e
    return MissionPlan.from_dict(data, source=str(path))

"""Tests for mission plan loading."""

from __future__ import annotations

import json
import random
from pathlib import Path

import pytest

from wavesim.errors import InputParseError
from wavesim.simulation import CurrencyManager, PressureManager, WavePacer
from wavesim.simulation.loader import MissionPlan, load_mission_plan

pytestmark = pytest.mark.unit

_PLAN = {
    "name": "mannworks_pressure",
    "waves": [
        {
            "name": "Opening",
            "wavespawns": [
                {"name": "scouts", "total_count": 8, "wait_between_spawns": 4,
                 "time_to_kill": 3.5, "effective_pressure": 40},
                {"name": "tank", "total_count": 1, "wait_between_spawns": 0,
                 "time_to_kill": 60, "effective_pressure": 4000, "is_tank": True},
            ],
        },
        {"wavespawns": [
            {"spawns_remaining": 3, "wait_between_spawns": 5,
             "time_to_kill": 6, "effective_pressure": 90, "currency_per_spawn": 20},
        ]},
    ],
}


class TestLoadMissionPlan:
    def test_loads_file(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps(_PLAN))
        plan = load_mission_plan(path)
        assert plan.name == "mannworks_pressure"
        assert len(plan.waves) == 2
        assert plan.waves[0].name == "Opening"
        assert plan.waves[1].name == "Wave 2"
        scouts, tank = plan.waves[0].wavespawns
        assert scouts.spawns_remaining == 7
        assert tank.is_tank
        assert plan.waves[1].wavespawns[0].currency_per_spawn == 20

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text("{not json")
        with pytest.raises(InputParseError):
            load_mission_plan(path)

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_bytes(b'{"name": "\xff\xfe", "waves": []}')
        with pytest.raises(InputParseError, match="UTF-8"):
            load_mission_plan(path)

    def test_missing_waves(self):
        with pytest.raises(InputParseError):
            MissionPlan.from_dict({"name": "x"})

    def test_wave_without_wavespawns(self):
        with pytest.raises(InputParseError):
            MissionPlan.from_dict({"waves": [{"name": "empty"}]})

    def test_bad_number_reports_location(self):
        data = {"waves": [{"wavespawns": [
            {"total_count": 2, "wait_between_spawns": "soon",
             "time_to_kill": 1, "effective_pressure": 1},
        ]}]}
        with pytest.raises(InputParseError, match="wave 1 wavespawn 1"):
            MissionPlan.from_dict(data)

    def test_missing_field(self):
        data = {"waves": [{"wavespawns": [{"total_count": 2, "wait_between_spawns": 1}]}]}
        with pytest.raises(InputParseError):
            MissionPlan.from_dict(data)

    def test_tank_flag_must_be_boolean(self):
        data = {"waves": [{"wavespawns": [
            {"total_count": 1, "wait_between_spawns": 0, "time_to_kill": 10,
             "effective_pressure": 500, "is_tank": "false"},
        ]}]}
        with pytest.raises(InputParseError, match="wave 1 wavespawn 1"):
            MissionPlan.from_dict(data)

    def test_to_dict_reloads(self):
        plan = MissionPlan.from_dict(_PLAN)
        again = MissionPlan.from_dict(plan.to_dict())
        assert again == plan


class TestShippedScenario:
    def test_mannworks_plan_paces(self):
        path = Path(__file__).resolve().parents[2] / "scenarios" / "mannworks.json"
        plan = load_mission_plan(path)
        cm = CurrencyManager()
        pacer = WavePacer(PressureManager(cm), cm, max_time=120, rng=random.Random(0))
        report = pacer.plan_mission([w.wavespawns for w in plan.waves], name=plan.name)
        assert len(report.waves) == 3
        assert all(w.ticks >= 120 for w in report.waves)

"""Unit tests for the pressure API router (/api/pressure/*).

Uses FastAPI TestClient against a minimal app — no real server needed.
"""
from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from popgen.routers.pressure import router


def _client():
    app = FastAPI()
    app.include_router(router)
    return TestClient(app)


def _wave(**overrides):
    ws = {"name": "bots", "total_count": 4, "wait_between_spawns": 2,
          "time_to_kill": 3, "effective_pressure": 200}
    ws.update(overrides)
    return {"name": "Wave A", "wavespawns": [ws]}


@pytest.mark.unit
class TestDecayRate:
    """POST /api/pressure/decay-rate"""

    def test_reference_values(self):
        resp = _client().post("/api/pressure/decay-rate", json={"currency": 0})
        assert resp.status_code == 200
        data = resp.json()
        assert data["pressure_decay_rate"] == pytest.approx(42.0)
        assert data["pressure_decay_rate_per_player"] == pytest.approx(10.5)
        assert data["players"] == 4

    def test_player_override(self):
        resp = _client().post("/api/pressure/decay-rate", json={"currency": 0, "players": 2})
        assert resp.json()["pressure_decay_rate"] == pytest.approx(21.0)

    def test_zero_players_is_validation_error(self):
        resp = _client().post("/api/pressure/decay-rate", json={"players": 0})
        assert resp.status_code == 422

    def test_non_positive_rate_rejected(self):
        resp = _client().post("/api/pressure/decay-rate", json={"bot_path_length": 0})
        assert resp.status_code == 422


@pytest.mark.unit
class TestSimulate:
    """POST /api/pressure/simulate"""

    def test_returns_mission_report(self):
        resp = _client().post("/api/pressure/simulate", json={
            "name": "api_mission", "max_time": 30, "seed": 1, "waves": [_wave()],
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["name"] == "api_mission"
        assert len(data["waves"]) == 1
        wave = data["waves"][0]
        assert wave["name"] == "Wave A"
        assert wave["ticks"] >= 30
        assert wave["wavespawns"][0]["start_tick"] == 0
        assert wave["wavespawns"][0]["spawns_remaining"] == 3

    def test_difficulty_override_shortens_waves(self):
        client = _client()
        easy = client.post("/api/pressure/simulate", json={
            "max_wavespawns": 1, "difficulty": 1.0, "seed": 1, "waves": [_wave()],
        }).json()
        hard = client.post("/api/pressure/simulate", json={
            "max_wavespawns": 1, "difficulty": 6.0, "seed": 1, "waves": [_wave()],
        }).json()
        assert hard["waves"][0]["ticks"] < easy["waves"][0]["ticks"]

    def test_zero_time_to_kill_rejected(self):
        resp = _client().post("/api/pressure/simulate", json={"waves": [_wave(time_to_kill=0)]})
        assert resp.status_code == 422

    def test_empty_wave_rejected(self):
        resp = _client().post("/api/pressure/simulate", json={
            "waves": [{"name": "empty", "wavespawns": []}],
        })
        assert resp.status_code == 422

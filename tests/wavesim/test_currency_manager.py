"""Unit tests for the CurrencyManager economy."""

from __future__ import annotations

import random

import pytest

from wavesim.errors import InvalidSimulationParameters
from wavesim.simulation.currency import CurrencyManager

pytestmark = pytest.mark.unit


class TestCurrencyPressure:
    def test_scales_with_bank(self):
        cm = CurrencyManager(currency=1000, currency_pressure_factor=0.25)
        assert cm.get_currency_pressure() == pytest.approx(250.0)

    def test_zero_factor_disables_feedback(self):
        cm = CurrencyManager(currency=5000, currency_pressure_factor=0.0)
        assert cm.get_currency_pressure() == 0.0

    def test_credit_raises_pressure(self):
        cm = CurrencyManager(currency=0, currency_pressure_factor=0.5)
        cm.add_currency(100)
        assert cm.get_currency_pressure() == pytest.approx(50.0)

    def test_approximated_tally_is_separate(self):
        cm = CurrencyManager(currency=0)
        cm.add_approximated_additional_currency(40)
        assert cm.approximated_additional_currency == 40
        assert cm.currency == 0

    def test_negative_credit_rejected(self):
        cm = CurrencyManager()
        with pytest.raises(InvalidSimulationParameters):
            cm.add_currency(-1)
        with pytest.raises(InvalidSimulationParameters):
            cm.add_approximated_additional_currency(-1)


class TestWaveBudget:
    def test_fixed_budget_without_spread(self):
        cm = CurrencyManager(currency_per_wave=800)
        assert cm.begin_wave(random.Random(1)) == 800
        assert cm.wave_currency_remaining == 800

    def test_spread_stays_in_range(self):
        cm = CurrencyManager(currency_per_wave=800, currency_per_wave_spread=100)
        rng = random.Random(3)
        for _ in range(50):
            assert 700 <= cm.begin_wave(rng) <= 900

    def test_budget_never_negative(self):
        cm = CurrencyManager(currency_per_wave=10, currency_per_wave_spread=100)
        rng = random.Random(5)
        for _ in range(50):
            assert cm.begin_wave(rng) >= 0

    def test_begin_wave_resets_tally(self):
        cm = CurrencyManager()
        cm.add_approximated_additional_currency(50)
        cm.begin_wave(random.Random(0))
        assert cm.approximated_additional_currency == 0

    def test_allocation_deducts_from_budget(self):
        cm = CurrencyManager(currency_per_wave=250, currency_per_wavespawn=100)
        rng = random.Random(0)
        cm.begin_wave(rng)
        assert [cm.allocate_wavespawn_currency(rng) for _ in range(4)] == [100, 100, 50, 0]
        assert cm.wave_currency_remaining == 0

    def test_allocation_limit(self):
        cm = CurrencyManager(currency_per_wavespawn=300, currency_per_wavespawn_limit=120)
        rng = random.Random(0)
        cm.begin_wave(rng)
        assert cm.allocate_wavespawn_currency(rng) == 120

    def test_refund_returns_to_budget(self):
        cm = CurrencyManager(currency_per_wave=250, currency_per_wavespawn=100)
        rng = random.Random(0)
        cm.begin_wave(rng)
        cm.allocate_wavespawn_currency(rng)
        cm.refund_wave_currency(1)
        assert cm.wave_currency_remaining == 151
        with pytest.raises(InvalidSimulationParameters):
            cm.refund_wave_currency(-1)

    def test_end_wave_returns_dropped(self):
        cm = CurrencyManager()
        cm.begin_wave(random.Random(0))
        cm.add_approximated_additional_currency(30)
        cm.add_approximated_additional_currency(45)
        assert cm.end_wave() == 75
        assert cm.approximated_additional_currency == 0
        assert cm.wave_currency_remaining == 0

    def test_setters(self):
        cm = CurrencyManager()
        cm.set_currency(10)
        cm.set_currency_per_wave(20)
        cm.set_currency_per_wave_spread(3)
        cm.set_currency_per_wavespawn(4)
        cm.set_currency_per_wavespawn_spread(1)
        cm.set_currency_per_wavespawn_limit(2)
        assert (cm.currency, cm.currency_per_wave, cm.currency_per_wave_spread) == (10, 20, 3)
        assert (
            cm.currency_per_wavespawn,
            cm.currency_per_wavespawn_spread,
            cm.currency_per_wavespawn_limit,
        ) == (4, 1, 2)

"""Tests for investor_dashboard/data/synthetic.py."""

from datetime import date

import numpy as np
import pytest

from investor_dashboard.data.synthetic import (
    KNOWN_PRICES,
    M2_CHANGE_RANGE,
    TREASURY_ANCHOR,
    TREASURY_NOISE,
    SyntheticGenerator,
)


def assert_ascending(points):
    dates = [p.date for p in points]
    assert dates == sorted(dates)
    assert len(set(dates)) == len(dates)


# --- index_series ---

def test_index_series_length_and_dates(today):
    points = SyntheticGenerator(1).index_series(5920, 45, days=250, today=today)
    assert len(points) == 251
    assert points[-1].date == today.isoformat()
    assert_ascending(points)


def test_index_series_first_visible_point_has_all_averages(today):
    points = SyntheticGenerator(1).index_series(5920, 45, days=30, today=today)
    assert all(p.sma20 is not None and p.sma60 is not None and p.sma120 is not None for p in points)


def test_index_series_steps_are_bounded(today):
    points = SyntheticGenerator(2).index_series(19150, 180, days=400, today=today)
    steps = np.diff([p.value for p in points])
    # rounding to cents can add at most a cent either side
    assert np.all(np.abs(steps) <= 90 + 0.01)


def test_index_series_is_reproducible(today):
    first = SyntheticGenerator(42).index_series(5920, 45, days=100, today=today)
    second = SyntheticGenerator(42).index_series(5920, 45, days=100, today=today)
    assert first == second


def test_index_series_differs_across_seeds(today):
    first = SyntheticGenerator(1).index_series(5920, 45, days=100, today=today)
    second = SyntheticGenerator(2).index_series(5920, 45, days=100, today=today)
    assert first != second


# --- treasury_series / m2_change_series ---

def test_treasury_series_is_monthly_around_anchor(today):
    points = SyntheticGenerator(5).treasury_series(today)
    assert len(points) == 121
    assert points[0].date == "2015-06-15"
    assert points[-1].date == today.isoformat()
    assert_ascending(points)
    low = round(TREASURY_ANCHOR - TREASURY_NOISE, 2)
    high = round(TREASURY_ANCHOR + TREASURY_NOISE, 2)
    assert all(low <= p.value <= high for p in points)


def test_m2_change_series_range(today):
    points = SyntheticGenerator(5).m2_change_series(today)
    assert len(points) == 121
    assert_ascending(points)
    low, high = M2_CHANGE_RANGE
    assert all(low <= p.value <= high for p in points)


def test_monthly_dates_clamp_month_end():
    points = SyntheticGenerator(0).treasury_series(date(2025, 3, 31))
    assert "2025-02-28" in [p.date for p in points]


# --- stock_detail ---

def test_stock_detail_history_ends_at_price(today):
    detail = SyntheticGenerator(9).stock_detail("NVDA", today)
    assert len(detail.history) == 31
    assert detail.price == KNOWN_PRICES["NVDA"]
    assert detail.history[-1].value == detail.price
    assert detail.history[-1].date == today.isoformat()
    assert_ascending(detail.history)


def test_stock_detail_change_matches_history(today):
    for seed in range(20):
        detail = SyntheticGenerator(seed).stock_detail("AAPL", today)
        first = detail.history[0].value
        last = detail.history[-1].value
        assert detail.change == pytest.approx(last - first, abs=0.005)
        assert detail.change_percent == pytest.approx((last - first) / first * 100, abs=0.005)


def test_stock_detail_uppercases_symbol(today):
    detail = SyntheticGenerator(1).stock_detail("tsla", today)
    assert detail.symbol == "TSLA"
    assert detail.name == "TSLA Corp"


def test_tech_fundamentals_ranges(today):
    for seed in range(20):
        detail = SyntheticGenerator(seed).stock_detail("MSFT", today)
        assert 30 <= detail.per <= 60
        assert 10 <= detail.pbr <= 25
        assert 0 <= detail.dividend_yield <= 1


def test_unknown_symbol_uses_non_tech_ranges(today):
    for seed in range(20):
        detail = SyntheticGenerator(seed).stock_detail("KO", today)
        assert 30 <= detail.price <= 180
        assert 10 <= detail.per <= 25
        assert 1 <= detail.pbr <= 4
        assert 1 <= detail.dividend_yield <= 5


def test_stock_detail_is_reproducible(today):
    assert SyntheticGenerator(3).stock_detail("KO", today) == SyntheticGenerator(3).stock_detail("KO", today)


# --- spawn ---

def test_spawned_generators_are_independent_and_reproducible(today):
    a1, a2 = SyntheticGenerator(10).spawn(2)
    b1, b2 = SyntheticGenerator(10).spawn(2)
    assert a1.m2_change_series(today) == b1.m2_change_series(today)
    assert a2.m2_change_series(today) == b2.m2_change_series(today)
    assert a1.m2_change_series(today) != a2.m2_change_series(today)


def test_accepts_existing_numpy_generator(today):
    rng = np.random.default_rng(4)
    assert SyntheticGenerator(rng).rng is rng

"""Tests for moving averages, deltas and range windows."""

from datetime import date, timedelta

import numpy as np
import pytest

from investor_dashboard.errors import InsufficientHistory
from investor_dashboard.indicators import (
    SMA_WINDOWS,
    calculate_smas,
    derive_deltas,
    filter_by_range,
    range_cutoff,
)
from investor_dashboard.models import Observation, TimeRange


def daily_series(start: date, days: int, values=None) -> list[Observation]:
    values = values if values is not None else [float(i) for i in range(days)]
    return [
        Observation((start + timedelta(days=i)).isoformat(), float(v))
        for i, v in enumerate(values)
    ]


# --- calculate_smas ---

def test_sma_defined_counts_match_window():
    values = np.random.default_rng(7).uniform(90, 110, size=150)
    points = calculate_smas(daily_series(date(2024, 1, 1), 150, values))

    n = len(points)
    assert sum(p.sma20 is not None for p in points) == n - 19
    assert sum(p.sma60 is not None for p in points) == n - 59
    assert sum(p.sma120 is not None for p in points) == n - 119


def test_sma_undefined_before_window_fills():
    points = calculate_smas(daily_series(date(2024, 1, 1), 130))
    assert points[18].sma20 is None
    assert points[19].sma20 is not None
    assert points[58].sma60 is None
    assert points[59].sma60 is not None
    assert points[118].sma120 is None
    assert points[119].sma120 is not None


def test_sma_equals_exact_trailing_mean():
    values = np.random.default_rng(11).uniform(4000, 6000, size=200)
    points = calculate_smas(daily_series(date(2020, 1, 1), 200, values))

    for window in SMA_WINDOWS:
        for i in range(window - 1, len(points)):
            expected = float(np.mean(values[i - window + 1:i + 1]))
            assert getattr(points[i], f"sma{window}") == pytest.approx(expected, rel=1e-9)


def test_sma_keeps_dates_and_values():
    series = daily_series(date(2024, 1, 1), 25)
    points = calculate_smas(series)
    assert [(p.date, p.value) for p in points] == [(o.date, o.value) for o in series]


def test_sma_short_series_has_no_averages():
    points = calculate_smas(daily_series(date(2024, 1, 1), 5))
    assert all(p.sma20 is None and p.sma60 is None and p.sma120 is None for p in points)


def test_sma_empty():
    assert calculate_smas([]) == []


# --- derive_deltas ---

def test_m2_levels_to_monthly_change():
    levels = [
        Observation("2024-01-01", 100.0),
        Observation("2024-02-01", 103.0),
        Observation("2024-03-01", 101.0),
    ]
    assert derive_deltas(levels) == [
        Observation("2024-02-01", 3.0),
        Observation("2024-03-01", -2.0),
    ]


def test_delta_length_and_telescoping_sum():
    values = np.random.default_rng(3).uniform(20000, 21000, size=60)
    levels = daily_series(date(2020, 1, 1), 60, values)
    deltas = derive_deltas(levels)

    assert len(deltas) == len(levels) - 1
    assert sum(d.value for d in deltas) == pytest.approx(
        levels[-1].value - levels[0].value, abs=0.005 * len(deltas)
    )


def test_delta_rounds_to_cents():
    levels = [Observation("2024-01-01", 1.0), Observation("2024-02-01", 1.23456)]
    assert derive_deltas(levels)[0].value == 0.23


@pytest.mark.parametrize("count", [0, 1])
def test_delta_needs_two_points(count):
    levels = daily_series(date(2024, 1, 1), count)
    with pytest.raises(InsufficientHistory):
        derive_deltas(levels)


# --- filter_by_range ---

def test_one_year_window_starts_day_after_cutoff():
    today = date(2025, 6, 15)
    series = daily_series(today - timedelta(days=3650), 3651)
    result = filter_by_range(series, "1Y", today)

    first = date.fromisoformat(result[0].date)
    assert first - range_cutoff("1Y", today) == timedelta(days=1)
    assert abs(first - date(2024, 6, 15)) <= timedelta(days=1)
    assert result[-1].date == today.isoformat()


def test_windows_nest():
    today = date(2025, 6, 15)
    series = daily_series(today - timedelta(days=3650), 3651)

    one = filter_by_range(series, TimeRange.ONE_YEAR, today)
    five = filter_by_range(series, TimeRange.FIVE_YEARS, today)
    assert len(one) < len(five) <= len(series)
    assert one == five[-len(one):]


def test_range_result_is_ordered_subsequence():
    today = date(2025, 6, 15)
    series = daily_series(today - timedelta(days=800), 801)
    result = filter_by_range(series, "1Y", today)
    dates = [p.date for p in result]
    assert dates == sorted(dates)
    assert set(dates) <= {p.date for p in series}


def test_cutoff_date_itself_is_excluded():
    today = date(2025, 6, 15)
    series = [Observation("2024-06-15", 1.0), Observation("2024-06-16", 2.0)]
    assert filter_by_range(series, "1Y", today) == [Observation("2024-06-16", 2.0)]


def test_unparseable_dates_are_kept():
    today = date(2025, 6, 15)
    series = [Observation("2010-01-01", 1.0), Observation("06-14", 2.0)]
    assert filter_by_range(series, "1Y", today) == [Observation("06-14", 2.0)]


def test_filter_does_not_mutate_input():
    today = date(2025, 6, 15)
    series = daily_series(today - timedelta(days=1000), 1001)
    snapshot = list(series)
    filter_by_range(series, "1Y", today)
    filter_by_range(series, "10Y", today)
    assert series == snapshot


def test_filter_empty_series():
    assert filter_by_range([], "5Y") == []


def test_unknown_range_tag_raises():
    with pytest.raises(ValueError):
        filter_by_range([Observation("2024-01-01", 1.0)], "3Y")


def test_time_range_years():
    assert [r.years for r in TimeRange] == [1, 5, 10]

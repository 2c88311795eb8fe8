"""Trailing time-window projection of a series."""

from collections.abc import Sequence
from datetime import date
from typing import TypeVar

import pandas as pd

from investor_dashboard.models import TimeRange


T = TypeVar("T")


def range_cutoff(time_range: TimeRange | str, today: date | None = None) -> date:
    """Date that is the requested number of calendar years before today."""
    span = TimeRange(time_range)
    anchor = pd.Timestamp(today or date.today())
    return (anchor - pd.DateOffset(years=span.years)).date()


def filter_by_range(
    points: Sequence[T], time_range: TimeRange | str, today: date | None = None
) -> list[T]:
    """
    Keep points dated strictly after the window's cutoff.

    Points whose date does not parse are kept so they still show on a chart.
    The input is never modified.
    """
    if not points:
        return []

    cutoff = range_cutoff(time_range, today)
    kept = []
    for point in points:
        try:
            point_date = date.fromisoformat(point.date)
        except (TypeError, ValueError):
            kept.append(point)
            continue
        if point_date > cutoff:
            kept.append(point)
    return kept

"""Derived series calculations."""

from investor_dashboard.indicators.delta import derive_deltas
from investor_dashboard.indicators.moving_average import SMA_WINDOWS, calculate_smas
from investor_dashboard.indicators.range_filter import filter_by_range, range_cutoff

__all__ = ["SMA_WINDOWS", "calculate_smas", "derive_deltas", "filter_by_range", "range_cutoff"]

"""Dashboard state and refresh orchestration."""

from investor_dashboard.state.store import (
    SERIES_KEYS,
    MarketStateStore,
    add_symbol,
    refresh_market_state,
    remove_symbol,
    windowed_series,
)

__all__ = [
    "SERIES_KEYS",
    "MarketStateStore",
    "add_symbol",
    "refresh_market_state",
    "remove_symbol",
    "windowed_series",
]

"""Dashboard configuration."""

from investor_dashboard.config.settings import (
    DEFAULT_RANGES,
    DEFAULT_WATCHLIST,
    FRED_SERIES,
    PROXY_URLS,
    Settings,
)

__all__ = ["Settings", "FRED_SERIES", "DEFAULT_WATCHLIST", "DEFAULT_RANGES", "PROXY_URLS"]

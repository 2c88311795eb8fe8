"""Market data models."""

from investor_dashboard.models.market_data import (
    DataSources,
    IndexPoint,
    MacroPoint,
    MarketState,
    Observation,
    StockDetail,
    TimeRange,
)

__all__ = [
    "DataSources",
    "IndexPoint",
    "MacroPoint",
    "MarketState",
    "Observation",
    "StockDetail",
    "TimeRange",
]

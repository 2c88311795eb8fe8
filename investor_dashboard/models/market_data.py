"""Data models for market data."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Observation:
    """Single dated value from a series."""

    date: str  # ISO-8601 calendar date
    value: float


# Treasury yield levels and M2 changes carry no derived fields
MacroPoint = Observation


@dataclass(frozen=True)
class IndexPoint:
    """Equity index observation with trailing moving averages."""

    date: str
    value: float
    sma20: float | None = None
    sma60: float | None = None
    sma120: float | None = None


@dataclass(frozen=True)
class StockDetail:
    """Watchlist entry for a single ticker."""

    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    per: float
    pbr: float
    dividend_yield: float
    history: list[Observation]


class TimeRange(str, Enum):
    """Trailing window selectable for each chart."""

    ONE_YEAR = "1Y"
    FIVE_YEARS = "5Y"
    TEN_YEARS = "10Y"

    @property
    def years(self) -> int:
        return int(self.value[:-1])


@dataclass(frozen=True)
class DataSources:
    """Per-series provenance: True when the series came from FRED."""

    sp500: bool = False
    nasdaq: bool = False
    treasury_10y: bool = False
    m2_supply: bool = False

    @property
    def all_live(self) -> bool:
        return self.sp500 and self.nasdaq and self.treasury_10y and self.m2_supply


@dataclass(frozen=True)
class MarketState:
    """Everything the dashboard renders.

    Created empty with ``loading=True`` and replaced wholesale on refresh.
    """

    sp500: list[IndexPoint] = field(default_factory=list)
    nasdaq: list[IndexPoint] = field(default_factory=list)
    treasury_10y: list[MacroPoint] = field(default_factory=list)
    m2_supply: list[MacroPoint] = field(default_factory=list)
    watchlist: list[StockDetail] = field(default_factory=list)
    loading: bool = True
    sources: DataSources = field(default_factory=DataSources)

    def has_symbol(self, symbol: str) -> bool:
        return any(stock.symbol == symbol for stock in self.watchlist)

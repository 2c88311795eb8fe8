"""Market state orchestration.

Refresh and watchlist edits are pure functions from one ``MarketState`` to
the next. ``MarketStateStore`` only owns the current state and the per-chart
range selection on behalf of the UI.
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Protocol

from investor_dashboard.config import DEFAULT_RANGES, DEFAULT_WATCHLIST
from investor_dashboard.data.fred_fetcher import Live, SeriesResult
from investor_dashboard.data.synthetic import SyntheticGenerator
from investor_dashboard.errors import InsufficientHistory
from investor_dashboard.indicators import calculate_smas, derive_deltas, filter_by_range
from investor_dashboard.models import (
    DataSources,
    IndexPoint,
    MacroPoint,
    MarketState,
    TimeRange,
)


logger = logging.getLogger(__name__)


SERIES_KEYS: tuple[str, ...] = ("sp500", "nasdaq", "treasury_10y", "m2_supply")

# Synthetic index parameters: (base value, per-step volatility, days)
SP500_FALLBACK = (5920.0, 45.0, 2600)
NASDAQ_FALLBACK = (19150.0, 180.0, 2600)


class SeriesSource(Protocol):
    async def fetch_series(self, series_id: str) -> SeriesResult: ...


async def load_index(
    source: SeriesSource,
    series_id: str,
    fallback: tuple[float, float, int],
    generator: SyntheticGenerator,
    today: date | None = None,
) -> tuple[list[IndexPoint], bool]:
    """Live index with SMAs, or a synthetic walk. Second item is True when live."""
    result = await source.fetch_series(series_id)
    if isinstance(result, Live):
        return calculate_smas(result.observations), True

    logger.warning(f"Using synthetic {series_id}: {result.reason}")
    base_value, volatility, days = fallback
    return generator.index_series(base_value, volatility, days, today), False


async def load_treasury(
    source: SeriesSource,
    generator: SyntheticGenerator,
    today: date | None = None,
) -> tuple[list[MacroPoint], bool]:
    """Live 10-year yield levels, or synthetic yields."""
    result = await source.fetch_series("DGS10")
    if isinstance(result, Live):
        return list(result.observations), True

    logger.warning(f"Using synthetic DGS10: {result.reason}")
    return generator.treasury_series(today), False


async def load_m2_change(
    source: SeriesSource,
    generator: SyntheticGenerator,
    today: date | None = None,
) -> tuple[list[MacroPoint], bool]:
    """Monthly M2 change derived from live levels, or synthetic changes."""
    result = await source.fetch_series("M2SL")
    if isinstance(result, Live):
        try:
            return derive_deltas(result.observations), True
        except InsufficientHistory as e:
            logger.warning(f"Using synthetic M2SL: {e}")
    else:
        logger.warning(f"Using synthetic M2SL: {result.reason}")
    return generator.m2_change_series(today), False


async def refresh_market_state(
    state: MarketState,
    source: SeriesSource,
    generator: SyntheticGenerator,
    today: date | None = None,
) -> MarketState:
    """
    Reload every macro series concurrently and resynthesize the watchlist.

    The four series load inside one task group and the new state is built
    only after all of them settle. Remote failures never escape: they become
    synthetic series with a False provenance flag.
    """
    sp500_rng, nasdaq_rng, treasury_rng, m2_rng = generator.spawn(4)

    async with asyncio.TaskGroup() as tg:
        sp500 = tg.create_task(load_index(source, "SP500", SP500_FALLBACK, sp500_rng, today))
        nasdaq = tg.create_task(load_index(source, "NASDAQCOM", NASDAQ_FALLBACK, nasdaq_rng, today))
        treasury = tg.create_task(load_treasury(source, treasury_rng, today))
        m2 = tg.create_task(load_m2_change(source, m2_rng, today))

    symbols = [stock.symbol for stock in state.watchlist] or list(DEFAULT_WATCHLIST)
    watchlist = [generator.stock_detail(symbol, today) for symbol in symbols]

    sp500_points, sp500_live = sp500.result()
    nasdaq_points, nasdaq_live = nasdaq.result()
    treasury_points, treasury_live = treasury.result()
    m2_points, m2_live = m2.result()

    sources = DataSources(
        sp500=sp500_live,
        nasdaq=nasdaq_live,
        treasury_10y=treasury_live,
        m2_supply=m2_live,
    )
    logger.info(f"Refresh complete, live series: {sources}")

    return MarketState(
        sp500=sp500_points,
        nasdaq=nasdaq_points,
        treasury_10y=treasury_points,
        m2_supply=m2_points,
        watchlist=watchlist,
        loading=False,
        sources=sources,
    )


def add_symbol(
    state: MarketState,
    symbol: str,
    generator: SyntheticGenerator,
    today: date | None = None,
) -> MarketState:
    """Prepend a synthetic record for a new ticker. Blank or known tickers are no-ops."""
    symbol = symbol.strip().upper()
    if not symbol or state.has_symbol(symbol):
        return state

    detail = generator.stock_detail(symbol, today)
    return replace(state, watchlist=[detail, *state.watchlist])


def remove_symbol(state: MarketState, symbol: str) -> MarketState:
    """Drop a ticker from the watchlist if present."""
    symbol = symbol.strip().upper()
    if not state.has_symbol(symbol):
        return state
    return replace(
        state,
        watchlist=[stock for stock in state.watchlist if stock.symbol != symbol],
    )


def windowed_series(
    state: MarketState,
    key: str,
    time_range: TimeRange | str,
    today: date | None = None,
) -> list:
    """Range-filtered view of one macro series."""
    if key not in SERIES_KEYS:
        raise KeyError(f"Unknown series: {key}")
    return filter_by_range(getattr(state, key), time_range, today)


def _default_ranges() -> dict[str, TimeRange]:
    return {key: TimeRange(tag) for key, tag in DEFAULT_RANGES.items()}


@dataclass
class MarketStateStore:
    """Holds the dashboard's current state and chart windows."""

    source: SeriesSource
    generator: SyntheticGenerator
    state: MarketState = field(default_factory=MarketState)
    ranges: dict[str, TimeRange] = field(default_factory=_default_ranges)

    async def refresh(self, today: date | None = None) -> MarketState:
        self.state = await refresh_market_state(self.state, self.source, self.generator, today)
        return self.state

    def add_symbol(self, symbol: str, today: date | None = None) -> MarketState:
        self.state = add_symbol(self.state, symbol, self.generator, today)
        return self.state

    def remove_symbol(self, symbol: str) -> MarketState:
        self.state = remove_symbol(self.state, symbol)
        return self.state

    def set_range(self, key: str, time_range: TimeRange | str) -> None:
        if key not in SERIES_KEYS:
            raise KeyError(f"Unknown series: {key}")
        self.ranges[key] = TimeRange(time_range)

    def series(self, key: str, today: date | None = None) -> list:
        """Series ``key`` restricted to its selected window."""
        return windowed_series(self.state, key, self.ranges[key], today)

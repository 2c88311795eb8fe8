"""Synthetic stand-in data for when FRED is unreachable.

Every generator returns the same shapes as the live pipeline (ascending ISO
dates, no missing required fields), so downstream code cannot tell the two
apart. Provenance is tracked separately in ``DataSources``.
"""

from datetime import date

import numpy as np
import pandas as pd

from investor_dashboard.indicators.moving_average import calculate_smas
from investor_dashboard.models import IndexPoint, MacroPoint, Observation, StockDetail


# Dropped after SMA calculation so the first visible point has a 120-day average
WARMUP_DAYS = 120

MACRO_MONTHS = 120
TREASURY_ANCHOR = 4.231
TREASURY_NOISE = 0.25
M2_CHANGE_RANGE = (-20.0, 60.0)  # billions

STOCK_HISTORY_DAYS = 30
TECH_SYMBOLS = frozenset({"AAPL", "NVDA", "TSLA", "MSFT", "GOOGL"})
KNOWN_PRICES: dict[str, float] = {
    "AAPL": 230.0,
    "NVDA": 145.0,
    "TSLA": 350.0,
    "MSFT": 420.0,
    "GOOGL": 180.0,
}

# (low, high) draws for symbols missing from KNOWN_PRICES
TECH_PRICE_RANGE = (100.0, 600.0)
OTHER_PRICE_RANGE = (30.0, 180.0)

# Fundamentals ranges keyed by is_tech
PER_RANGE = {True: (30.0, 60.0), False: (10.0, 25.0)}
PBR_RANGE = {True: (10.0, 25.0), False: (1.0, 4.0)}
DIVIDEND_RANGE = {True: (0.0, 1.0), False: (1.0, 5.0)}


def _iso(ts: pd.Timestamp) -> str:
    return ts.strftime("%Y-%m-%d")


def _monthly_dates(months: int, today: date) -> list[str]:
    anchor = pd.Timestamp(today)
    return [_iso(anchor - pd.DateOffset(months=i)) for i in range(months, -1, -1)]


def _daily_dates(days: int, today: date) -> list[str]:
    anchor = pd.Timestamp(today)
    return [_iso(anchor - pd.Timedelta(days=i)) for i in range(days, -1, -1)]


class SyntheticGenerator:
    """Generates plausible series from an injectable random source."""

    def __init__(self, rng: np.random.Generator | int | None = None) -> None:
        if isinstance(rng, np.random.Generator):
            self.rng = rng
        else:
            self.rng = np.random.default_rng(rng)

    def spawn(self, n: int) -> list["SyntheticGenerator"]:
        """Independent child generators, one per concurrent task."""
        return [SyntheticGenerator(child) for child in self.rng.spawn(n)]

    def _uniform(self, low: float, high: float) -> float:
        return float(self.rng.uniform(low, high))

    def index_series(
        self,
        base_value: float,
        volatility: float,
        days: int = 250,
        today: date | None = None,
    ) -> list[IndexPoint]:
        """
        Random-walk equity index ending today, with SMAs attached.

        The walk covers ``days + WARMUP_DAYS`` days back to today; the warm-up
        prefix is dropped after the averages are computed.
        """
        today = today or date.today()
        dates = _daily_dates(days + WARMUP_DAYS, today)

        steps = self.rng.uniform(-volatility / 2, volatility / 2, size=len(dates))
        walk = []
        current = base_value
        for step in steps:
            current += float(step)
            walk.append(round(current, 2))

        observations = [Observation(date=d, value=v) for d, v in zip(dates, walk)]
        return calculate_smas(observations)[WARMUP_DAYS:]

    def treasury_series(self, today: date | None = None) -> list[MacroPoint]:
        """Monthly 10-year yield noise around a fixed anchor."""
        dates = _monthly_dates(MACRO_MONTHS, today or date.today())
        noise = self.rng.uniform(-TREASURY_NOISE, TREASURY_NOISE, size=len(dates))
        return [
            MacroPoint(date=d, value=round(TREASURY_ANCHOR + float(n), 2))
            for d, n in zip(dates, noise)
        ]

    def m2_change_series(self, today: date | None = None) -> list[MacroPoint]:
        """Monthly M2 change, independent draws biased positive."""
        dates = _monthly_dates(MACRO_MONTHS, today or date.today())
        low, high = M2_CHANGE_RANGE
        changes = self.rng.uniform(low, high, size=len(dates))
        return [MacroPoint(date=d, value=round(float(c), 2)) for d, c in zip(dates, changes)]

    def stock_detail(self, symbol: str, today: date | None = None) -> StockDetail:
        """
        Synthetic quote, fundamentals and 31-day history for a ticker.

        The history walks from 95% of the base price and is pinned to the base
        price on its last day, so ``price`` equals the final history value.
        """
        symbol = symbol.upper()
        is_tech = symbol in TECH_SYMBOLS
        base_price = KNOWN_PRICES.get(symbol)
        if base_price is None:
            low, high = TECH_PRICE_RANGE if is_tech else OTHER_PRICE_RANGE
            base_price = self._uniform(low, high)

        dates = _daily_dates(STOCK_HISTORY_DAYS, today or date.today())
        history = []
        current = base_price * 0.95
        for i, d in enumerate(dates):
            current += self._uniform(-base_price * 0.01, base_price * 0.01)
            if i == len(dates) - 1:
                current = base_price
            history.append(Observation(date=d, value=round(current, 2)))

        first = history[0].value
        last = history[-1].value
        change = last - first

        return StockDetail(
            symbol=symbol,
            name=f"{symbol} Corp",
            price=last,
            change=round(change, 2),
            change_percent=round(change / first * 100, 2),
            per=round(self._uniform(*PER_RANGE[is_tech]), 2),
            pbr=round(self._uniform(*PBR_RANGE[is_tech]), 2),
            dividend_yield=round(self._uniform(*DIVIDEND_RANGE[is_tech]), 2),
            history=history,
        )

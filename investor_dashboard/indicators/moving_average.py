"""Trailing simple moving averages for equity index series."""

from collections.abc import Sequence

import pandas as pd

from investor_dashboard.models import IndexPoint, Observation


SMA_WINDOWS: tuple[int, ...] = (20, 60, 120)


def calculate_smas(observations: Sequence[Observation | IndexPoint]) -> list[IndexPoint]:
    """
    Attach 20/60/120-point trailing means to every observation.

    A window is None until the series holds that many points. Every call
    recomputes from scratch over the full input.
    """
    if not observations:
        return []

    values = pd.Series([obs.value for obs in observations], dtype="float64")
    averages = {
        window: values.rolling(window=window, min_periods=window).mean()
        for window in SMA_WINDOWS
    }

    def at(window: int, i: int) -> float | None:
        mean = averages[window].iloc[i]
        return None if pd.isna(mean) else float(mean)

    return [
        IndexPoint(
            date=obs.date,
            value=obs.value,
            sma20=at(20, i),
            sma60=at(60, i),
            sma120=at(120, i),
        )
        for i, obs in enumerate(observations)
    ]

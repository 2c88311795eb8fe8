"""Month-over-month change from level series."""

from collections.abc import Sequence

import pandas as pd

from investor_dashboard.errors import InsufficientHistory
from investor_dashboard.models import MacroPoint, Observation


def derive_deltas(levels: Sequence[Observation]) -> list[MacroPoint]:
    """
    First difference of an ascending level series, rounded to cents.

    Each output point is dated at the later of its two inputs.

    Raises:
        InsufficientHistory: fewer than two levels
    """
    if len(levels) < 2:
        raise InsufficientHistory(required=2, available=len(levels))

    values = pd.Series([obs.value for obs in levels], dtype="float64")
    changes = values.diff().iloc[1:].round(2)

    return [
        MacroPoint(date=obs.date, value=float(change))
        for obs, change in zip(levels[1:], changes)
    ]

"""Exceptions raised inside the market data pipeline.

None of these reach the dashboard as failures: fetch and history errors are
absorbed by synthetic substitution, analysis errors become fixed prose.
"""


class DashboardError(Exception):
    """Base class for pipeline errors."""


class FetchFailure(DashboardError):
    """A remote series could not be retrieved through an access path."""

    def __init__(self, series_id: str, reason: str) -> None:
        super().__init__(f"{series_id}: {reason}")
        self.series_id = series_id
        self.reason = reason


class InsufficientHistory(DashboardError):
    """Too few points to derive a series."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(f"need at least {required} points, got {available}")
        self.required = required
        self.available = available


class AIAnalysisFailure(DashboardError):
    """The narrative model could not produce an analysis."""

"""Data fetching, normalization and synthesis."""

from .fred_fetcher import FredFetcher, Live, SeriesResult, Unavailable
from .normalize import normalize_observations
from .synthetic import SyntheticGenerator

__all__ = [
    "FredFetcher",
    "Live",
    "SeriesResult",
    "Unavailable",
    "normalize_observations",
    "SyntheticGenerator",
]

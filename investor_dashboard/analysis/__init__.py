"""AI narrative analysis."""

from investor_dashboard.analysis.narrative import (
    ANALYSIS_FAILURE_MESSAGE,
    EMPTY_ANALYSIS_MESSAGE,
    MarketAnalyst,
    build_analysis_context,
)

__all__ = [
    "ANALYSIS_FAILURE_MESSAGE",
    "EMPTY_ANALYSIS_MESSAGE",
    "MarketAnalyst",
    "build_analysis_context",
]

"""
Analytics module - Statistics over collections of running activities.

This module provides:
- Activity summarizer (totals, averages, bests, distance buckets)
- Stateless trend helpers (regression slope, coefficient of variation)
"""
from runstr.services.analytics.summary import (
    ActivitySummarizer,
    classify_distance,
    summarize,
)
from runstr.services.analytics.trend import (
    TrendResult,
    classify_pace_trend,
    coefficient_of_variation,
    linear_regression_slope,
)

__all__ = [
    # Summarizer
    "ActivitySummarizer",
    "classify_distance",
    "summarize",
    # Trend
    "TrendResult",
    "classify_pace_trend",
    "coefficient_of_variation",
    "linear_regression_slope",
]

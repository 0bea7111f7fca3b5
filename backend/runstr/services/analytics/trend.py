"""
Trend helpers - stateless statistics over (timestamp, value) series.
"""
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

CONSISTENCY_THRESHOLD = 0.10
MIN_TREND_POINTS = 3


@dataclass(frozen=True)
class TrendResult:
    """Pace trend classification."""
    improving: bool = False
    consistent: bool = False


def linear_regression_slope(points: Sequence[Tuple[float, float]]) -> float:
    """
    Ordinary least-squares slope of y against x.

    Returns 0 when there are fewer than two points or all x values are equal.
    """
    n = len(points)
    if n < 2:
        return 0.0

    mean_x = sum(x for x, _ in points) / n
    mean_y = sum(y for _, y in points) / n

    numerator = sum((x - mean_x) * (y - mean_y) for x, y in points)
    denominator = sum((x - mean_x) ** 2 for x, _ in points)

    if denominator == 0:
        return 0.0

    return numerator / denominator


def coefficient_of_variation(values: Sequence[float]) -> float:
    """Population standard deviation over mean; 0 for empty or zero-mean input."""
    n = len(values)
    if n == 0:
        return 0.0

    mean = sum(values) / n
    if mean == 0:
        return 0.0

    variance = sum((v - mean) ** 2 for v in values) / n
    return math.sqrt(variance) / mean


def classify_pace_trend(series: Sequence[Tuple[float, float]]) -> TrendResult:
    """
    Classify a (timestamp_ms, pace_seconds) series.

    A falling pace over time is improving; a coefficient of variation under
    10% is consistent. Fewer than three points yields no classification.
    """
    if len(series) < MIN_TREND_POINTS:
        return TrendResult()

    ordered: List[Tuple[float, float]] = sorted(series, key=lambda point: point[0])
    slope = linear_regression_slope(ordered)
    variation = coefficient_of_variation([pace for _, pace in ordered])

    return TrendResult(
        improving=slope < 0,
        consistent=variation < CONSISTENCY_THRESHOLD,
    )

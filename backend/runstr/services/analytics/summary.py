"""
Activity Summarizer - Totals, averages, bests and trend over many activities.

All distances are compared in kilometers and all paces in seconds per
kilometer, whatever unit each activity was written in.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from runstr.core.errors import EmptyActivityListError
from runstr.core.logging import get_logger
from runstr.models.activity import (
    Activity,
    ActivitySummary,
    Averages,
    BestEffort,
    Bests,
    Period,
    Totals,
    Trend,
)
from runstr.models.units import (
    distance_to_km,
    format_clock,
    format_number,
    format_seconds_per_km,
    pace_to_seconds_per_km,
)
from runstr.services.analytics.trend import classify_pace_trend

logger = get_logger(__name__)

SHORT_RUN_KM = 5
LONG_RUN_KM = 10


def classify_distance(distance_km: float) -> str:
    """Bucket a distance: under 5 km short, under 10 km medium, else long."""
    if distance_km >= LONG_RUN_KM:
        return "long"
    if distance_km >= SHORT_RUN_KM:
        return "medium"
    return "short"


@dataclass
class _Accumulator:
    """Running totals and best-value trackers for one summary pass."""
    total_distance: float = 0.0
    total_duration: int = 0
    total_pace: float = 0.0
    valid_pace_count: int = 0

    best_pace: float = float("inf")
    best_pace_index: Optional[int] = None
    longest_distance: float = 0.0
    longest_distance_index: Optional[int] = None
    longest_duration: int = 0
    longest_duration_index: Optional[int] = None

    activity_types: Dict[str, int] = field(default_factory=dict)
    trend_series: List[Tuple[float, float]] = field(default_factory=list)


class ActivitySummarizer:
    """
    Computes an ActivitySummary from a list of activities.

    Usage:
        summarizer = ActivitySummarizer()
        summary = summarizer.summarize(activities)
    """

    def summarize(self, activities: Optional[Sequence[Activity]]) -> ActivitySummary:
        """
        Summarize activities.

        Args:
            activities: Activities in caller order; best-effort indexes refer
                to positions in this sequence

        Returns:
            ActivitySummary

        Raises:
            EmptyActivityListError: If activities is missing or empty
        """
        if not activities:
            raise EmptyActivityListError()

        count = len(activities)
        acc = _Accumulator()

        for index, activity in enumerate(activities):
            self._accumulate(acc, index, activity)

        summary = ActivitySummary(
            totalActivities=count,
            period=self._period(activities),
            totals=self._totals(acc),
            averages=self._averages(acc, count),
            best=self._bests(acc, activities),
            trend=self._trend(acc, count),
            activityTypes=acc.activity_types,
        )

        logger.info(
            "Summarized activities",
            activity_count=count,
            paced_count=acc.valid_pace_count,
            total_distance_km=round(acc.total_distance, 2),
            improving=summary.trend.improving,
            consistent=summary.trend.consistent,
        )

        return summary

    # ========================================
    # Accumulation
    # ========================================

    def _accumulate(self, acc: _Accumulator, index: int, activity: Activity) -> None:
        data = activity.extractedData

        if data.distance is not None:
            distance_km = distance_to_km(data.distance.value, data.distance.unit)
            acc.total_distance += distance_km

            if distance_km > acc.longest_distance:
                acc.longest_distance = distance_km
                acc.longest_distance_index = index

            bucket = classify_distance(distance_km)
            acc.activity_types[bucket] = acc.activity_types.get(bucket, 0) + 1

        if data.duration is not None:
            seconds = data.duration.totalSeconds
            acc.total_duration += seconds

            if seconds > acc.longest_duration:
                acc.longest_duration = seconds
                acc.longest_duration_index = index

        pace = data.effective_pace
        if pace is not None:
            pace_seconds = pace_to_seconds_per_km(pace.total_seconds, pace.unit)
            acc.total_pace += pace_seconds
            acc.valid_pace_count += 1

            if pace_seconds < acc.best_pace:
                acc.best_pace = pace_seconds
                acc.best_pace_index = index

            if activity.timestamp is not None:
                acc.trend_series.append((activity.timestamp_ms, pace_seconds))

    # ========================================
    # Summary sections
    # ========================================

    def _period(self, activities: Sequence[Activity]) -> Period:
        timestamps = sorted(a.timestamp for a in activities if a.timestamp is not None)
        if not timestamps:
            return Period()
        return Period(start=timestamps[0], end=timestamps[-1])

    def _totals(self, acc: _Accumulator) -> Totals:
        return Totals(
            distance=acc.total_distance,
            distanceFormatted=f"{acc.total_distance:.2f} km",
            duration=acc.total_duration,
            durationFormatted=format_clock(acc.total_duration),
        )

    def _averages(self, acc: _Accumulator, count: int) -> Averages:
        avg_distance = acc.total_distance / count if count else 0.0
        avg_duration = acc.total_duration / count if count else 0.0
        avg_pace = acc.total_pace / acc.valid_pace_count if acc.valid_pace_count else 0.0

        return Averages(
            distance=avg_distance,
            distanceFormatted=f"{avg_distance:.2f} km",
            duration=avg_duration,
            durationFormatted=format_clock(avg_duration),
            pace=avg_pace,
            paceFormatted=format_seconds_per_km(avg_pace),
        )

    def _bests(self, acc: _Accumulator, activities: Sequence[Activity]) -> Bests:
        bests = Bests()

        if acc.best_pace_index is not None:
            pace = activities[acc.best_pace_index].extractedData.effective_pace
            bests.pace = BestEffort(activityIndex=acc.best_pace_index, value=pace.formatted)

        if acc.longest_distance_index is not None:
            distance = activities[acc.longest_distance_index].extractedData.distance
            bests.distance = BestEffort(
                activityIndex=acc.longest_distance_index,
                value=f"{format_number(distance.value)} {distance.unit}",
            )

        if acc.longest_duration_index is not None:
            duration = activities[acc.longest_duration_index].extractedData.duration
            bests.duration = BestEffort(
                activityIndex=acc.longest_duration_index,
                value=duration.formatted,
            )

        return bests

    def _trend(self, acc: _Accumulator, count: int) -> Trend:
        if count < 3:
            return Trend()
        result = classify_pace_trend(acc.trend_series)
        return Trend(improving=result.improving, consistent=result.consistent)


_default_summarizer = ActivitySummarizer()


def summarize(activities: Optional[Sequence[Activity]]) -> ActivitySummary:
    """Summarize activities with the shared summarizer."""
    return _default_summarizer.summarize(activities)

"""Tests for the activity summarizer and trend helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from runstr.core.errors import EmptyActivityListError
from runstr.models.activity import Activity
from runstr.models.units import KM_PER_MILE, distance_to_km, normalize_distance_unit
from runstr.services.analytics import (
    ActivitySummarizer,
    classify_distance,
    classify_pace_trend,
    coefficient_of_variation,
    linear_regression_slope,
    summarize,
)
from runstr.services.extraction import parse_note

BASE_TIME = datetime(2024, 3, 1, 7, 0, tzinfo=timezone.utc)


def _activity(text: str, day: int | None = None) -> Activity:
    note = parse_note(text).model_dump()
    if day is not None:
        note["timestamp"] = (BASE_TIME + timedelta(days=day)).isoformat()
    return Activity.model_validate(note)


def _paced(pace_seconds: int, day: int | None, unit: str = "km") -> Activity:
    return Activity.model_validate(
        {
            "timestamp": None if day is None else (BASE_TIME + timedelta(days=day)).isoformat(),
            "extractedData": {
                "pace": {
                    "minutes": pace_seconds // 60,
                    "seconds": pace_seconds % 60,
                    "unit": unit,
                }
            },
        }
    )


@pytest.fixture
def three_runs() -> list[Activity]:
    return [
        _activity("Ran 5km in 25:30", day=0),
        _activity("Ran 8km in 40:45", day=2),
        _activity("Ran 10km in 50:20", day=4),
    ]


@pytest.mark.parametrize("activities", [None, []])
def test_empty_activity_list_raises(activities) -> None:
    with pytest.raises(EmptyActivityListError):
        summarize(activities)


def test_reference_three_runs(three_runs: list[Activity]) -> None:
    summary = summarize(three_runs)

    assert summary.totalActivities == 3
    assert summary.totals.distance == pytest.approx(23.0)
    assert summary.totals.distanceFormatted == "23.00 km"
    assert summary.totals.duration == 1530 + 2445 + 3020
    assert summary.activityTypes == {"medium": 2, "long": 1}
    assert summary.trend.improving is True
    assert summary.trend.consistent is True


def test_period_spans_earliest_and_latest(three_runs: list[Activity]) -> None:
    shuffled = [three_runs[2], three_runs[0], three_runs[1]]

    summary = summarize(shuffled)

    assert summary.period.start == BASE_TIME
    assert summary.period.end == BASE_TIME + timedelta(days=4)


def test_bests_reference_caller_positions(three_runs: list[Activity]) -> None:
    summary = summarize(three_runs)

    # Paces: 5:06, 5:05, 5:02 per km
    assert summary.best.pace.activityIndex == 2
    assert summary.best.pace.value == "5:02/km"
    assert summary.best.distance.activityIndex == 2
    assert summary.best.distance.value == "10 km"
    assert summary.best.duration.activityIndex == 2
    assert summary.best.duration.value == "00:50:20"


def test_single_activity_averages_match_the_activity() -> None:
    summary = summarize([_activity("Ran 5km in 25:30", day=0)])

    assert summary.averages.distance == pytest.approx(5.0)
    assert summary.averages.duration == pytest.approx(1530)
    assert summary.averages.pace == pytest.approx(306)
    assert summary.averages.durationFormatted == "00:25:30"
    assert summary.averages.paceFormatted == "5:06/km"
    assert summary.trend.improving is False
    assert summary.trend.consistent is False


def test_miles_are_normalized_to_km() -> None:
    summary = summarize([_activity("Ran 2 miles in 16:00")])

    assert summary.totals.distance == pytest.approx(2 * KM_PER_MILE)
    # 8:00/mi is 480 s/mi, or 480 * 0.621371 s/km
    assert summary.averages.pace == pytest.approx(480 * 0.621371)
    assert summary.best.distance.value == "2 mi"
    assert summary.activityTypes == {"short": 1}


def test_averages_divide_by_all_activities() -> None:
    activities = [
        _activity("Ran 10km in 50:00"),
        _activity("Stretching, felt good"),
    ]

    summary = summarize(activities)

    assert summary.averages.distance == pytest.approx(5.0)
    assert summary.averages.duration == pytest.approx(1500)
    assert summary.averages.pace == pytest.approx(300)
    assert summary.activityTypes == {"long": 1}


def test_no_paces_gives_zero_average_pace() -> None:
    summary = summarize([_activity("Ran 5km today")])

    assert summary.averages.pace == 0
    assert summary.averages.paceFormatted == "0:00/km"
    assert summary.best.pace is None
    assert summary.best.duration is None


def test_best_pace_ties_keep_first_occurrence() -> None:
    summary = summarize([_paced(300, 0), _paced(290, 1), _paced(290, 2)])

    assert summary.best.pace.activityIndex == 1


def test_flat_pace_is_consistent_but_not_improving() -> None:
    summary = summarize([_paced(300, 0), _paced(300, 1), _paced(300, 2)])

    assert summary.trend.consistent is True
    assert summary.trend.improving is False


def test_slowing_erratic_pace_is_neither() -> None:
    summary = summarize([_paced(240, 0), _paced(330, 1), _paced(420, 2)])

    assert summary.trend.improving is False
    assert summary.trend.consistent is False


def test_trend_needs_three_timestamped_paces() -> None:
    activities = [_paced(330, 0), _paced(300, 1), _paced(270, None), _paced(250, None)]

    summary = summarize(activities)

    assert summary.trend.improving is False
    assert summary.trend.consistent is False


def test_summary_serializes_to_json_ready_dict(three_runs: list[Activity]) -> None:
    dumped = summarize(three_runs).model_dump(mode="json")

    assert dumped["period"]["start"].startswith("2024-03-01T07:00:00")
    assert dumped["best"]["distance"] == {"activityIndex": 2, "value": "10 km"}
    assert set(dumped["trend"]) == {"improving", "consistent"}


def test_naive_timestamps_are_treated_as_utc() -> None:
    activity = Activity.model_validate({"timestamp": "2024-03-01T07:00:00"})

    assert activity.timestamp == BASE_TIME


def test_summarizer_instances_are_independent(three_runs: list[Activity]) -> None:
    first = ActivitySummarizer().summarize(three_runs)
    second = ActivitySummarizer().summarize(three_runs)

    assert first == second


@pytest.mark.parametrize(
    "distance_km, bucket",
    [(0.5, "short"), (4.99, "short"), (5, "medium"), (9.99, "medium"), (10, "long"), (42.2, "long")],
)
def test_classify_distance(distance_km, bucket) -> None:
    assert classify_distance(distance_km) == bucket


def test_unit_normalization_is_idempotent() -> None:
    assert distance_to_km(7.5, "km") == 7.5
    assert normalize_distance_unit(normalize_distance_unit("Miles")) == "mi"
    assert distance_to_km(1, "mi") == KM_PER_MILE


def test_regression_slope() -> None:
    assert linear_regression_slope([(0, 10), (1, 8), (2, 6)]) == pytest.approx(-2)
    assert linear_regression_slope([(5, 1), (5, 2), (5, 3)]) == 0
    assert linear_regression_slope([(0, 1)]) == 0


def test_coefficient_of_variation() -> None:
    assert coefficient_of_variation([300, 300, 300]) == 0
    assert coefficient_of_variation([]) == 0
    assert coefficient_of_variation([0, 0]) == 0
    assert coefficient_of_variation([90, 110]) == pytest.approx(0.1)


def test_classify_pace_trend_sorts_by_time() -> None:
    result = classify_pace_trend([(3000, 290), (1000, 310), (2000, 300)])

    assert result.improving is True
    assert result.consistent is True


def test_trend_compares_mixed_units_as_seconds_per_km() -> None:
    # 8:00/mi is about 298 s/km, so the series runs 298, 310, 300 and is not falling
    activities = [_paced(480, 0, unit="mi"), _paced(310, 1), _paced(300, 2)]

    summary = summarize(activities)

    assert summary.trend.improving is False
    assert summary.trend.consistent is True
    assert summary.best.pace.activityIndex == 0

"""Tests for running-note field extraction."""

import pytest

from runstr.core.errors import EmptyInputError
from runstr.models.measurement import MeasurementSet, PaceSource
from runstr.services.extraction import NoteParser, extract, parse_note


@pytest.fixture
def parser() -> NoteParser:
    return NoteParser()


def test_reference_note() -> None:
    data = extract("Ran 5km in 25:30, felt great, sunny weather")

    assert data.distance.value == 5
    assert data.distance.unit == "km"
    assert data.duration.totalSeconds == 1530
    assert data.duration.formatted == "00:25:30"
    assert data.calculated_pace.minutes == 5
    assert data.calculated_pace.seconds == 6
    assert data.calculated_pace.unit == "km"
    assert data.calculated_pace.formatted == "5:06/km"
    assert data.explicit_pace is None
    assert data.weather == ["sunny"]
    assert data.mood == ["great"]


@pytest.mark.parametrize("text", ["", None])
def test_empty_input_raises(text) -> None:
    with pytest.raises(EmptyInputError):
        extract(text)


def test_serialized_keys_for_derived_pace() -> None:
    dumped = extract("Ran 5km in 25:30").model_dump()

    assert "calculatedPace" in dumped
    assert "pace" not in dumped
    assert "pace_reading" not in dumped
    assert "elevation" not in dumped


def test_explicit_pace_suppresses_derived_pace() -> None:
    data = extract("Easy 10 km run in 52:00 at 5:12/km")

    assert data.pace_reading.source == PaceSource.EXPLICIT
    assert data.explicit_pace.formatted == "5:12/km"
    assert data.calculated_pace is None

    dumped = data.model_dump()
    assert dumped["pace"]["minutes"] == 5
    assert "calculatedPace" not in dumped


def test_pace_clock_value_is_added_to_duration() -> None:
    # Every clock value counts, including one written as a pace
    data = extract("Ran 5km in 25:30 at 5:06/km")

    assert data.duration.totalSeconds == 1530 + 306
    assert data.duration.formatted == "00:30:36"
    assert data.explicit_pace.formatted == "5:06/km"


@pytest.mark.parametrize(
    "text, total_seconds",
    [
        ("Ran 10 miles in 1 hr 20 min", 4800),
        ("2 hrs on the trails", 7200),
        ("1h 5 mins easy", 3900),
    ],
)
def test_hour_unit_spellings(parser: NoteParser, text, total_seconds) -> None:
    assert parser.parse_duration(text).totalSeconds == total_seconds


def test_hour_abbreviation_feeds_derived_pace() -> None:
    data = extract("Ran 10 miles in 1 hr 20 min")

    # 4800 / 10 = 480 seconds per mile
    assert data.calculated_pace.formatted == "8:00/mi"


def test_pace_with_per_mile(parser: NoteParser) -> None:
    pace = parser.parse_pace("held 8:05 per mile the whole way")

    assert pace.minutes == 8
    assert pace.seconds == 5
    assert pace.unit == "mi"
    assert pace.formatted == "8:05/mi"


def test_no_derived_pace_without_duration() -> None:
    data = extract("Ran 5km along the river")

    assert data.distance is not None
    assert data.duration is None
    assert data.pace_reading is None


@pytest.mark.parametrize(
    "text, value, unit",
    [
        ("ran 3.1 miles", 3.1, "mi"),
        ("ran 10 kilometers", 10.0, "km"),
        ("ran 1 mile", 1.0, "mi"),
        ("ran 21.1KM", 21.1, "km"),
    ],
)
def test_distance_units_are_normalized(parser: NoteParser, text, value, unit) -> None:
    distance = parser.parse_distance(text)

    assert distance.value == pytest.approx(value)
    assert distance.unit == unit


def test_minutes_are_not_read_as_miles(parser: NoteParser) -> None:
    assert parser.parse_distance("stretched for 10 minutes") is None


def test_durations_are_summed_across_mentions() -> None:
    # Separate mentions add up rather than being kept apart
    data = extract("warmed up 10 minutes, ran for 45:30")

    assert data.duration.totalSeconds == 10 * 60 + 45 * 60 + 30
    assert data.duration.formatted == "00:55:30"


def test_long_clock_duration(parser: NoteParser) -> None:
    duration = parser.parse_duration("half marathon done in 1:45:07")

    assert duration.hours == 1
    assert duration.minutes == 45
    assert duration.seconds == 7
    assert duration.totalSeconds == 6307


def test_spelled_out_duration(parser: NoteParser) -> None:
    duration = parser.parse_duration("1 hour 5 mins 30 seconds on the trail")

    assert duration.totalSeconds == 3600 + 300 + 30
    assert duration.formatted == "01:05:30"


def test_elevation_and_heart_rate() -> None:
    data = extract("Hill repeats, 250 m elevation gain, avg 152 bpm")

    assert data.elevation.value == 250
    assert data.elevation.unit == "meters"
    assert data.heartRate == 152


def test_elevation_in_feet(parser: NoteParser) -> None:
    elevation = parser.parse_elevation("800 ft climb before the turnaround")

    assert elevation.value == 800
    assert elevation.unit == "feet"


def test_heart_rate_phrase(parser: NoteParser) -> None:
    assert parser.parse_heart_rate("kept 145 heart rate") == 145


def test_weather_and_mood_keep_order_and_duplicates() -> None:
    data = extract("Cold start, then SUNNY. Legs felt good, then hard, then good again. Cold finish.")

    assert data.weather == ["cold", "sunny", "cold"]
    assert data.mood == ["good", "hard", "good"]


def test_vocabulary_matches_whole_words_only() -> None:
    data = extract("took a cooldown shot after the hardly uneasy walk")

    assert data.weather is None
    assert data.mood is None


def test_zero_distance_has_no_derived_pace() -> None:
    data = extract("0 km, 10 minutes of drills")

    assert data.distance.value == 0
    assert data.duration.totalSeconds == 600
    assert data.pace_reading is None


def test_derived_pace_in_miles_is_floored() -> None:
    data = extract("3 miles in 25:00")

    # 1500 / 3 = 500 seconds per mile
    assert data.calculated_pace.minutes == 8
    assert data.calculated_pace.seconds == 20
    assert data.calculated_pace.unit == "mi"


def test_parse_note_wraps_raw_content() -> None:
    note = parse_note("Ran 5km in 25:30")

    dumped = note.model_dump()
    assert dumped["rawContent"] == "Ran 5km in 25:30"
    assert dumped["extractedData"]["distance"] == {"value": 5.0, "unit": "km"}


def test_measurement_set_reads_wire_keys() -> None:
    data = MeasurementSet.model_validate(
        {
            "distance": {"value": 2, "unit": "miles"},
            "time": {"hours": 0, "minutes": 16, "seconds": 0, "totalSeconds": 960, "formatted": "00:16:00"},
            "pace": {"minutes": 8, "seconds": 0, "unit": "mile", "formatted": "8:00/mi"},
            "calculatedPace": {"minutes": 7, "seconds": 59, "unit": "mi", "formatted": "7:59/mi"},
        }
    )

    assert data.distance.unit == "mi"
    assert data.duration.totalSeconds == 960
    assert data.explicit_pace.minutes == 8
    assert data.calculated_pace is None

"""
Note Parser - Extracts running measurements from free-text notes.

Recognizes:
- Distance (km / miles)
- Duration (clock times and spelled-out hours/minutes/seconds, summed)
- Pace (M:SS per km or mile)
- Elevation gain
- Heart rate
- Weather and mood words
"""
import re
from typing import List, Optional

from runstr.core.errors import EmptyInputError
from runstr.core.logging import get_logger
from runstr.models.measurement import (
    Distance,
    Duration,
    Elevation,
    MeasurementSet,
    Pace,
    PaceReading,
    PaceSource,
    ParsedNote,
)
from runstr.models.units import format_pace, normalize_distance_unit

logger = get_logger(__name__)

_UNIT_WORDS = r"km|kilometers?|mi|miles?"

DISTANCE_PATTERN = re.compile(
    rf"(\d+(?:\.\d+)?)\s*({_UNIT_WORDS})\b",
    re.IGNORECASE,
)

DURATION_PATTERN = re.compile(
    r"(?P<h>\d+):(?P<hm>\d+):(?P<hs>\d+)"
    r"|(?P<m>\d+):(?P<ms>\d+)"
    r"|(?P<hours>\d+)\s*(?:h|hrs?|hours?)\b"
    r"|(?P<minutes>\d+)\s*(?:mins?|minutes?)\b"
    r"|(?P<seconds>\d+)\s*(?:s|secs?|seconds?)\b",
    re.IGNORECASE,
)

PACE_PATTERN = re.compile(
    rf"(\d+):(\d+)(?:\s*/\s*|\s+per\s+)({_UNIT_WORDS})\b",
    re.IGNORECASE,
)

ELEVATION_PATTERN = re.compile(
    r"(\d+(?:\.\d+)?)\s*(m|meters|metres|ft|feet)\s+(?:elevation|elev|climb|gain)",
    re.IGNORECASE,
)

HEART_RATE_PATTERN = re.compile(
    r"(\d+)\s*(?:bpm|heart\s+rate)\b",
    re.IGNORECASE,
)

WEATHER_WORDS = (
    "sunny", "cloudy", "rainy", "snowy", "windy",
    "hot", "cold", "warm", "cool", "humid",
)

MOOD_WORDS = (
    "great", "good", "okay", "ok", "bad", "terrible", "amazing", "excellent",
    "difficult", "hard", "easy", "challenging", "tough", "struggled",
)

WEATHER_PATTERN = re.compile(rf"\b(?:{'|'.join(WEATHER_WORDS)})\b", re.IGNORECASE)
MOOD_PATTERN = re.compile(rf"\b(?:{'|'.join(MOOD_WORDS)})\b", re.IGNORECASE)

class NoteParser:
    """
    Turns a note into a MeasurementSet.

    Every field is extracted independently; a field whose pattern does not
    match is left out. When distance and duration are both known and the
    note does not state a pace, one is derived from them.
    """

    def extract(self, text: Optional[str]) -> MeasurementSet:
        """
        Extract measurements from a note.

        Args:
            text: Note content

        Returns:
            MeasurementSet with the detected fields

        Raises:
            EmptyInputError: If text is missing or empty
        """
        if not text:
            raise EmptyInputError()

        distance = self.parse_distance(text)
        duration = self.parse_duration(text)
        pace = self.parse_pace(text)

        pace_reading = None
        if pace is not None:
            pace_reading = PaceReading(source=PaceSource.EXPLICIT, pace=pace)
        elif distance is not None and duration is not None:
            derived = self.derive_pace(distance, duration)
            if derived is not None:
                pace_reading = PaceReading(source=PaceSource.DERIVED, pace=derived)

        measurements = MeasurementSet(
            distance=distance,
            duration=duration,
            pace_reading=pace_reading,
            elevation=self.parse_elevation(text),
            heartRate=self.parse_heart_rate(text),
            weather=self._match_words(WEATHER_PATTERN, text),
            mood=self._match_words(MOOD_PATTERN, text),
        )

        logger.debug(
            "Extracted note measurements",
            fields=sorted(measurements.model_dump().keys()),
            content_length=len(text),
        )

        return measurements

    def parse(self, content: Optional[str]) -> ParsedNote:
        """Extract measurements and keep the raw text alongside them."""
        extracted = self.extract(content)
        return ParsedNote(rawContent=content, extractedData=extracted)

    # ========================================
    # Field parsers
    # ========================================

    def parse_distance(self, text: str) -> Optional[Distance]:
        match = DISTANCE_PATTERN.search(text)
        if not match:
            return None
        return Distance(value=float(match.group(1)), unit=match.group(2))

    def parse_duration(self, text: str) -> Optional[Duration]:
        """
        Sum every duration mention in the note.

        "warmed up 10 minutes, ran 45:30" yields 55:30: separate mentions
        are added together rather than kept apart. A clock value written as
        a pace ("5:06/km") is counted too.
        """
        matches = list(DURATION_PATTERN.finditer(text))
        if not matches:
            return None

        total_seconds = 0
        for match in matches:
            if match.group("h") is not None:
                total_seconds += (
                    int(match.group("h")) * 3600
                    + int(match.group("hm")) * 60
                    + int(match.group("hs"))
                )
            elif match.group("m") is not None:
                total_seconds += int(match.group("m")) * 60 + int(match.group("ms"))
            elif match.group("hours") is not None:
                total_seconds += int(match.group("hours")) * 3600
            elif match.group("minutes") is not None:
                total_seconds += int(match.group("minutes")) * 60
            elif match.group("seconds") is not None:
                total_seconds += int(match.group("seconds"))

        return Duration.from_seconds(total_seconds)

    def parse_pace(self, text: str) -> Optional[Pace]:
        match = PACE_PATTERN.search(text)
        if not match:
            return None
        minutes = int(match.group(1))
        seconds = int(match.group(2))
        unit = normalize_distance_unit(match.group(3))
        return Pace(
            minutes=minutes,
            seconds=seconds,
            unit=unit,
            formatted=format_pace(minutes, seconds, unit),
        )

    def parse_elevation(self, text: str) -> Optional[Elevation]:
        match = ELEVATION_PATTERN.search(text)
        if not match:
            return None
        return Elevation(value=float(match.group(1)), unit=match.group(2))

    def parse_heart_rate(self, text: str) -> Optional[int]:
        match = HEART_RATE_PATTERN.search(text)
        if not match:
            return None
        return int(match.group(1))

    def derive_pace(self, distance: Distance, duration: Duration) -> Optional[Pace]:
        """Pace from total time over distance, floored to whole seconds."""
        if distance.value <= 0:
            return None

        pace_seconds = duration.totalSeconds / distance.value
        minutes = int(pace_seconds // 60)
        seconds = int(pace_seconds % 60)

        return Pace(
            minutes=minutes,
            seconds=seconds,
            unit=distance.unit,
            formatted=format_pace(minutes, seconds, distance.unit),
        )

    def _match_words(self, pattern: re.Pattern, text: str) -> Optional[List[str]]:
        words = [match.group(0).lower() for match in pattern.finditer(text)]
        return words or None

_default_parser = NoteParser()

def extract(text: Optional[str]) -> MeasurementSet:
    """Extract measurements from a note with the shared parser."""
    return _default_parser.extract(text)

def parse_note(content: Optional[str]) -> ParsedNote:
    """Parse a note into ``{rawContent, extractedData}``."""
    return _default_parser.parse(content)

"""
Measurement Set models - typed values extracted from one running note.
"""
from enum import Enum
from typing import Any, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_serializer,
    model_validator,
)

from runstr.models.units import (
    DistanceUnit,
    ElevationUnit,
    format_clock,
    format_pace,
    normalize_distance_unit,
    normalize_elevation_unit,
)


class Distance(BaseModel):
    """Distance as written in the note."""
    value: float
    unit: DistanceUnit

    @field_validator("unit", mode="before")
    @classmethod
    def normalize_unit(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_distance_unit(value)
        return value


class Duration(BaseModel):
    """Total elapsed time."""
    hours: int
    minutes: int
    seconds: int
    totalSeconds: int
    formatted: str

    @classmethod
    def from_seconds(cls, total_seconds: int) -> "Duration":
        return cls(
            hours=total_seconds // 3600,
            minutes=(total_seconds % 3600) // 60,
            seconds=total_seconds % 60,
            totalSeconds=total_seconds,
            formatted=format_clock(total_seconds),
        )


class Pace(BaseModel):
    """Time per distance unit."""
    minutes: int
    seconds: int
    unit: DistanceUnit
    formatted: str = ""

    @field_validator("unit", mode="before")
    @classmethod
    def normalize_unit(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_distance_unit(value)
        return value

    @model_validator(mode="after")
    def fill_formatted(self) -> "Pace":
        if not self.formatted:
            self.formatted = format_pace(self.minutes, self.seconds, self.unit)
        return self

    @property
    def total_seconds(self) -> int:
        """Seconds per unit of distance."""
        return self.minutes * 60 + self.seconds


class Elevation(BaseModel):
    """Elevation gain."""
    value: float
    unit: ElevationUnit

    @field_validator("unit", mode="before")
    @classmethod
    def normalize_unit(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_elevation_unit(value)
        return value


class PaceSource(str, Enum):
    """Where a pace value came from."""
    EXPLICIT = "explicit"
    DERIVED = "derived"


class PaceReading(BaseModel):
    """A pace tagged with its source; a note carries at most one."""
    source: PaceSource
    pace: Pace


class MeasurementSet(BaseModel):
    """
    Values found in a running note. Every field is optional.

    On the wire the pace reading appears as either ``pace`` (stated in the
    text) or ``calculatedPace`` (derived from distance and duration), never
    both. Absent fields are omitted when serialized.
    """
    model_config = ConfigDict(populate_by_name=True)

    distance: Optional[Distance] = None
    duration: Optional[Duration] = Field(
        default=None,
        validation_alias=AliasChoices("duration", "time"),
    )
    pace_reading: Optional[PaceReading] = None
    elevation: Optional[Elevation] = None
    heartRate: Optional[int] = None
    weather: Optional[List[str]] = None
    mood: Optional[List[str]] = None

    @model_validator(mode="before")
    @classmethod
    def read_pace_keys(cls, data: Any) -> Any:
        """Fold the ``pace`` / ``calculatedPace`` wire keys into one reading."""
        if not isinstance(data, dict) or "pace_reading" in data:
            return data

        data = dict(data)
        explicit = data.pop("pace", None)
        derived = data.pop("calculatedPace", None)

        if explicit is not None:
            data["pace_reading"] = {"source": PaceSource.EXPLICIT, "pace": explicit}
        elif derived is not None:
            data["pace_reading"] = {"source": PaceSource.DERIVED, "pace": derived}

        return data

    @model_serializer(mode="wrap")
    def write_pace_keys(self, handler) -> dict[str, Any]:
        data = handler(self)
        reading = data.pop("pace_reading", None)
        if reading is not None:
            key = "pace" if self.pace_reading.source == PaceSource.EXPLICIT else "calculatedPace"
            data[key] = reading["pace"]
        return {key: value for key, value in data.items() if value is not None}

    @property
    def explicit_pace(self) -> Optional[Pace]:
        """Pace stated in the note, if any."""
        if self.pace_reading and self.pace_reading.source == PaceSource.EXPLICIT:
            return self.pace_reading.pace
        return None

    @property
    def calculated_pace(self) -> Optional[Pace]:
        """Pace derived from distance and duration, if any."""
        if self.pace_reading and self.pace_reading.source == PaceSource.DERIVED:
            return self.pace_reading.pace
        return None

    @property
    def effective_pace(self) -> Optional[Pace]:
        """The explicit pace, falling back to the derived one."""
        return self.pace_reading.pace if self.pace_reading else None


class ParsedNote(BaseModel):
    """Result of parsing one note."""
    rawContent: str
    extractedData: MeasurementSet

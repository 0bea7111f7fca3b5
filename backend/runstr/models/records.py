"""
Stored record models.

Records are built once from an inbound event and never modified, so every
model here is frozen.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from runstr.models.event import InboundEvent


class StoredRecord(BaseModel):
    """Fields shared by everything kept in a bounded store."""
    model_config = ConfigDict(frozen=True)

    id: str
    kind: int
    pubkey: str
    created_at: int


class Author(BaseModel):
    model_config = ConfigDict(frozen=True)

    pubkey: str
    name: str


class FeedNote(StoredRecord):
    """A running-related note (or a mirrored workout event) in the feed."""
    author: Author
    content: str = ""
    hashtags: List[str] = Field(default_factory=list)
    relay: str = "unknown"
    eventType: Optional[str] = None

    @property
    def is_plain_note(self) -> bool:
        return self.kind == 1 and self.eventType is None


class ExerciseTemplate(StoredRecord):
    """Exercise template (kind 33401)."""
    d_tag: str = ""
    title: str = "Untitled Exercise"
    description: str = ""
    format: List[List[str]] = Field(default_factory=list)
    format_units: List[List[str]] = Field(default_factory=list)
    equipment: List[List[str]] = Field(default_factory=list)
    difficulty: str = ""
    hashtags: List[str] = Field(default_factory=list)
    raw_event: InboundEvent


class WorkoutTemplate(StoredRecord):
    """Workout template (kind 33402)."""
    d_tag: str = ""
    title: str = "Untitled Workout"
    description: str = ""
    exercises: List[List[str]] = Field(default_factory=list)
    duration: str = ""
    difficulty: str = ""
    hashtags: List[str] = Field(default_factory=list)
    raw_event: InboundEvent


class WeatherInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    temp: List[str] = Field(default_factory=list)
    humidity: List[str] = Field(default_factory=list)
    condition: str = ""


class Split(BaseModel):
    """One per-distance split of a workout record."""
    model_config = ConfigDict(frozen=True)

    number: Optional[str] = None
    distance: Optional[str] = None
    unit: Optional[str] = None
    time: Optional[str] = None
    heart_rate: Optional[str] = None
    heart_rate_unit: Optional[str] = None


class WorkoutRecord(StoredRecord):
    """Completed (or abandoned) workout (kind 1301)."""
    d_tag: str = ""
    title: str = "Untitled Workout"
    description: str = ""
    type: str = ""
    start: Optional[int] = None
    end: Optional[int] = None
    duration: Optional[int] = None
    exercises: List[List[str]] = Field(default_factory=list)
    heart_rate_avg: List[str] = Field(default_factory=list)
    cadence_avg: List[str] = Field(default_factory=list)
    weather: WeatherInfo = Field(default_factory=WeatherInfo)
    splits: List[Split] = Field(default_factory=list)
    completed: bool = False
    hashtags: List[str] = Field(default_factory=list)
    raw_event: InboundEvent

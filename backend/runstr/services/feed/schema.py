"""
Tag Schemas - Declarative mapping from event tags to stored record fields.

Each record kind declares an ordered list of TagField entries. A field's
extractor reads from a TagIndex built once per event and returns the
field's value, or its declared default when the label is absent.
"""
import re
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from runstr.models.event import InboundEvent
from runstr.models.records import (
    Author,
    ExerciseTemplate,
    FeedNote,
    Split,
    WeatherInfo,
    WorkoutRecord,
    WorkoutTemplate,
)

R = TypeVar("R", bound=BaseModel)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class TagIndex:
    """Tags of one event grouped by label, in their original order."""

    def __init__(self, tags: Sequence[Sequence[str]]):
        self._by_label: Dict[str, List[List[str]]] = defaultdict(list)
        for tag in tags:
            if tag:
                self._by_label[tag[0]].append(list(tag[1:]))

    def first(self, label: str) -> Optional[List[str]]:
        """Values of the first tag with this label."""
        entries = self._by_label.get(label)
        return entries[0] if entries else None

    def first_value(self, label: str) -> Optional[str]:
        """First value of the first tag with this label."""
        values = self.first(label)
        return values[0] if values else None

    def all(self, label: str) -> List[List[str]]:
        """Values of every tag with this label."""
        return [list(values) for values in self._by_label.get(label, [])]


Extractor = Callable[[TagIndex], Any]


@dataclass(frozen=True)
class TagField:
    """One stored field and how to read it from the tags."""
    name: str
    extract: Extractor


# ========================================
# Extractor factories
# ========================================

def first_value(label: str, default: Any = "") -> Extractor:
    """First value of the first ``label`` tag, or ``default``."""
    def _extract(tags: TagIndex) -> Any:
        value = tags.first_value(label)
        return default if value is None else value
    return _extract


def first_values(label: str) -> Extractor:
    """All values of the first ``label`` tag, or an empty list."""
    def _extract(tags: TagIndex) -> List[str]:
        return tags.first(label) or []
    return _extract


def all_values(label: str) -> Extractor:
    """Value lists of every ``label`` tag."""
    def _extract(tags: TagIndex) -> List[List[str]]:
        return tags.all(label)
    return _extract


def all_first_values(label: str) -> Extractor:
    """First value of every ``label`` tag (hashtags)."""
    def _extract(tags: TagIndex) -> List[str]:
        return [values[0] if values else "" for values in tags.all(label)]
    return _extract


def flag(label: str, truthy: str = "true") -> Extractor:
    """True only when the first value is exactly ``truthy``."""
    def _extract(tags: TagIndex) -> bool:
        return tags.first_value(label) == truthy
    return _extract


def integer(label: str) -> Extractor:
    """Leading integer of the first value, or None."""
    def _extract(tags: TagIndex) -> Optional[int]:
        return parse_int(tags.first_value(label))
    return _extract


def parse_int(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def _record_duration(tags: TagIndex) -> Optional[int]:
    start = parse_int(tags.first_value("start"))
    end = parse_int(tags.first_value("end"))
    if start is None or end is None:
        return None
    return end - start


def _weather(tags: TagIndex) -> WeatherInfo:
    return WeatherInfo(
        temp=tags.first("weather_temp") or [],
        humidity=tags.first("weather_humidity") or [],
        condition=tags.first_value("weather_condition") or "",
    )


def _split(values: List[str]) -> Split:
    """Build a split from [number, distance, unit, time, hr, hr_unit]."""
    slots = values + [None] * (6 - len(values))
    heart_rate, heart_rate_unit = slots[4], slots[5]
    return Split(
        number=slots[0],
        distance=slots[1],
        unit=slots[2],
        time=slots[3],
        heart_rate=None if heart_rate == "bpm" else heart_rate,
        heart_rate_unit=heart_rate_unit if heart_rate_unit == "bpm" else None,
    )


def _splits(tags: TagIndex) -> List[Split]:
    return [_split(values) for values in tags.all("split")]


# ========================================
# Record schemas
# ========================================

class RecordSchema(Generic[R]):
    """
    How to build one kind of stored record from an event.

    Envelope fields (id, kind, pubkey, created_at and the event body) are
    copied for every kind; the tag fields come from the schema.
    """

    def __init__(
        self,
        model: Type[R],
        fields: Sequence[TagField],
        content_field: Optional[str] = "description",
        keep_raw_event: bool = True,
    ):
        self.model = model
        self.fields = list(fields)
        self.content_field = content_field
        self.keep_raw_event = keep_raw_event

    def build(self, event: InboundEvent, **extra: Any) -> R:
        """
        Build a record from an event.

        Args:
            event: Inbound event
            **extra: Additional field values set by the caller

        Returns:
            Record instance
        """
        tags = TagIndex(event.tags)

        values: Dict[str, Any] = {
            "id": event.id,
            "kind": event.kind,
            "pubkey": event.pubkey,
            "created_at": event.created_at,
        }
        if self.content_field:
            values[self.content_field] = event.content
        if self.keep_raw_event:
            values["raw_event"] = event

        for tag_field in self.fields:
            values[tag_field.name] = tag_field.extract(tags)

        values.update(extra)
        return self.model(**values)


class FeedNoteSchema(RecordSchema[FeedNote]):
    """Feed notes also carry author and relay metadata from the envelope."""

    def __init__(self):
        super().__init__(
            FeedNote,
            [TagField("hashtags", all_first_values("t"))],
            content_field="content",
            keep_raw_event=False,
        )

    def build(self, event: InboundEvent, **extra: Any) -> FeedNote:
        extra.setdefault("author", Author(pubkey=event.pubkey, name=event.pubkey[:8]))
        extra.setdefault("relay", event.relay or "unknown")
        return super().build(event, **extra)


FEED_NOTE_SCHEMA = FeedNoteSchema()

EXERCISE_TEMPLATE_SCHEMA = RecordSchema(
    ExerciseTemplate,
    [
        TagField("d_tag", first_value("d")),
        TagField("title", first_value("title", "Untitled Exercise")),
        TagField("format", all_values("format")),
        TagField("format_units", all_values("format_units")),
        TagField("equipment", all_values("equipment")),
        TagField("difficulty", first_value("difficulty")),
        TagField("hashtags", all_first_values("t")),
    ],
)

WORKOUT_TEMPLATE_SCHEMA = RecordSchema(
    WorkoutTemplate,
    [
        TagField("d_tag", first_value("d")),
        TagField("title", first_value("title", "Untitled Workout")),
        TagField("exercises", all_values("exercise")),
        TagField("duration", first_value("duration")),
        TagField("difficulty", first_value("difficulty")),
        TagField("hashtags", all_first_values("t")),
    ],
)

WORKOUT_RECORD_SCHEMA = RecordSchema(
    WorkoutRecord,
    [
        TagField("d_tag", first_value("d")),
        TagField("title", first_value("title", "Untitled Workout")),
        TagField("type", first_value("type")),
        TagField("start", integer("start")),
        TagField("end", integer("end")),
        TagField("duration", _record_duration),
        TagField("exercises", all_values("exercise")),
        TagField("heart_rate_avg", first_values("heart_rate_avg")),
        TagField("cadence_avg", first_values("cadence_avg")),
        TagField("weather", _weather),
        TagField("splits", _splits),
        TagField("completed", flag("completed")),
        TagField("hashtags", all_first_values("t")),
    ],
)

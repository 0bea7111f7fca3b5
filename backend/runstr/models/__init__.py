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
from runstr.models.activity import Activity, ActivitySummary
from runstr.models.event import EventKind, InboundEvent
from runstr.models.records import (
    ExerciseTemplate,
    FeedNote,
    StoredRecord,
    WorkoutRecord,
    WorkoutTemplate,
)

__all__ = [
    "Distance",
    "Duration",
    "Elevation",
    "MeasurementSet",
    "Pace",
    "PaceReading",
    "PaceSource",
    "ParsedNote",
    "Activity",
    "ActivitySummary",
    "EventKind",
    "InboundEvent",
    "ExerciseTemplate",
    "FeedNote",
    "StoredRecord",
    "WorkoutRecord",
    "WorkoutTemplate",
]

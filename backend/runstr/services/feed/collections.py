"""
Running collections - The feed, template catalog and workout record store.

Each collection wraps one or two BoundedStore instances and answers the
filtered, paginated reads exposed as tasks.
"""
from typing import List, Optional, Union

from pydantic import BaseModel

from runstr.core.config import settings
from runstr.models.event import EventKind, InboundEvent
from runstr.models.records import ExerciseTemplate, FeedNote, WorkoutRecord, WorkoutTemplate
from runstr.services.feed.schema import (
    EXERCISE_TEMPLATE_SCHEMA,
    FEED_NOTE_SCHEMA,
    WORKOUT_RECORD_SCHEMA,
    WORKOUT_TEMPLATE_SCHEMA,
)
from runstr.services.feed.store import (
    DEFAULT_QUERY_LIMIT,
    MAX_TIMESTAMP,
    BoundedStore,
    IngestStatus,
    newest_created_first,
)

Template = Union[ExerciseTemplate, WorkoutTemplate]


# ========================================
# Read results
# ========================================

class FeedPage(BaseModel):
    feed: List[FeedNote]
    total: int


class TemplateTotals(BaseModel):
    exercise: int
    workout: int


class TemplatePage(BaseModel):
    templates: List[Template]
    total: TemplateTotals


class RecordPage(BaseModel):
    records: List[WorkoutRecord]
    total: int


# ========================================
# Collections
# ========================================

class RunningFeed:
    """Running-related notes plus workout events mirrored into the feed."""

    def __init__(self, max_size: Optional[int] = None):
        self.store: BoundedStore[FeedNote] = BoundedStore(
            "feed",
            FEED_NOTE_SCHEMA,
            max_size=max_size or settings.MAX_FEED_SIZE,
        )

    def add(self, event: InboundEvent, event_type: Optional[str] = None) -> IngestStatus:
        """Add a note; ``event_type`` labels mirrored workout events."""
        return self.store.ingest(event, eventType=event_type)

    def read(
        self,
        limit: int = DEFAULT_QUERY_LIMIT,
        since: int = 0,
        until: int = MAX_TIMESTAMP,
        include_workouts: bool = True,
    ) -> FeedPage:
        """
        Read the feed in arrival order, newest first.

        Args:
            limit: Maximum notes returned
            since: Earliest created_at, inclusive
            until: Latest created_at, inclusive
            include_workouts: When False only plain text notes are returned

        Returns:
            FeedPage with the notes and the unfiltered feed size
        """
        predicate = None if include_workouts else (lambda note: note.is_plain_note)
        notes = self.store.query(since=since, until=until, limit=limit, predicate=predicate)
        return FeedPage(feed=notes, total=len(self.store))

    def __len__(self) -> int:
        return len(self.store)


class TemplateCatalog:
    """Exercise and workout templates, kept in separate capped stores."""

    def __init__(self, max_size: Optional[int] = None):
        capacity = max_size or settings.MAX_TEMPLATES_SIZE
        self.exercises: BoundedStore[ExerciseTemplate] = BoundedStore(
            "exercise_templates", EXERCISE_TEMPLATE_SCHEMA, max_size=capacity
        )
        self.workouts: BoundedStore[WorkoutTemplate] = BoundedStore(
            "workout_templates", WORKOUT_TEMPLATE_SCHEMA, max_size=capacity
        )

    def add(self, event: InboundEvent) -> IngestStatus:
        if event.kind == EventKind.EXERCISE_TEMPLATE:
            return self.exercises.ingest(event)
        if event.kind == EventKind.WORKOUT_TEMPLATE:
            return self.workouts.ingest(event)
        return IngestStatus.IGNORED

    def read(
        self,
        limit: int = DEFAULT_QUERY_LIMIT,
        since: int = 0,
        until: int = MAX_TIMESTAMP,
        type: Optional[str] = None,
    ) -> TemplatePage:
        """
        Read templates newest-created first.

        Args:
            limit: Maximum templates returned
            since: Earliest created_at, inclusive
            until: Latest created_at, inclusive
            type: "exercise" or "workout" to restrict to one kind

        Returns:
            TemplatePage with templates and per-kind store sizes
        """
        templates: List[Template] = []
        if type in (None, "exercise"):
            templates.extend(self.exercises.query(since=since, until=until, limit=None))
        if type in (None, "workout"):
            templates.extend(self.workouts.query(since=since, until=until, limit=None))

        templates = newest_created_first(templates)[:limit]

        return TemplatePage(
            templates=templates,
            total=TemplateTotals(exercise=len(self.exercises), workout=len(self.workouts)),
        )


class WorkoutRecordStore:
    """Workout records."""

    def __init__(self, max_size: Optional[int] = None):
        self.store: BoundedStore[WorkoutRecord] = BoundedStore(
            "workout_records",
            WORKOUT_RECORD_SCHEMA,
            max_size=max_size or settings.MAX_RECORDS_SIZE,
        )

    def add(self, event: InboundEvent) -> IngestStatus:
        return self.store.ingest(event)

    def read(
        self,
        limit: int = DEFAULT_QUERY_LIMIT,
        since: int = 0,
        until: int = MAX_TIMESTAMP,
        completed: Optional[bool] = None,
    ) -> RecordPage:
        """
        Read records newest-created first, optionally by completion flag.
        """
        predicate = None
        if completed is not None:
            predicate = lambda record: record.completed is completed

        records = self.store.query(since=since, until=until, limit=None, predicate=predicate)
        records = newest_created_first(records)[:limit]

        return RecordPage(records=records, total=len(self.store))

    def __len__(self) -> int:
        return len(self.store)

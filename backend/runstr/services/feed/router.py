"""
Event Router - Sends inbound events to the store for their kind.
"""
from pydantic import ValidationError

from runstr.core.logging import get_logger
from runstr.models.event import EventKind, InboundEvent
from runstr.services.feed.collections import RunningFeed, TemplateCatalog, WorkoutRecordStore
from runstr.services.feed.store import IngestStatus

logger = get_logger(__name__)

# Label given to workout events when they are mirrored into the feed
FEED_EVENT_TYPES = {
    EventKind.EXERCISE_TEMPLATE: "Exercise Template",
    EventKind.WORKOUT_TEMPLATE: "Workout Template",
    EventKind.WORKOUT_RECORD: "Workout Record",
}


class EventRouter:
    """
    Routes events by kind.

    Templates and workout records go to their own store and, when newly
    added, are mirrored into the feed. Text notes go to the feed only.
    Every other kind is ignored.
    """

    def __init__(
        self,
        feed: RunningFeed,
        templates: TemplateCatalog,
        records: WorkoutRecordStore,
    ):
        self.feed = feed
        self.templates = templates
        self.records = records

    def ingest(self, event: InboundEvent) -> IngestStatus:
        """
        Store an event.

        Args:
            event: Inbound event

        Returns:
            Status from the primary store for the event's kind
        """
        try:
            if event.kind == EventKind.TEXT_NOTE:
                return self.feed.add(event)

            if event.kind in (EventKind.EXERCISE_TEMPLATE, EventKind.WORKOUT_TEMPLATE):
                status = self.templates.add(event)
            elif event.kind == EventKind.WORKOUT_RECORD:
                status = self.records.add(event)
            else:
                logger.debug("Ignored event kind", event_id=event.id, kind=event.kind)
                return IngestStatus.IGNORED

        except ValidationError as e:
            logger.error(
                "Error processing workout event",
                event_id=event.id,
                kind=event.kind,
                error=str(e),
            )
            return IngestStatus.IGNORED

        if status == IngestStatus.ADDED:
            self.feed.add(event, event_type=FEED_EVENT_TYPES[EventKind(event.kind)])

        return status

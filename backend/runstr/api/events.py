"""
Event ingestion API endpoints.

The relay transport (or a test harness) posts already-verified events
here; they are routed into the feed, template and record stores.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from runstr.api.deps import get_dispatcher
from runstr.core.logging import get_logger
from runstr.models.event import InboundEvent
from runstr.services.feed import IngestStatus
from runstr.services.tasks import TaskDispatcher

logger = get_logger(__name__)
router = APIRouter()


class IngestResponse(BaseModel):
    """Outcome of ingesting one event."""
    id: str
    status: IngestStatus


@router.post("", response_model=IngestResponse)
async def ingest_event(
    event: InboundEvent,
    dispatcher: TaskDispatcher = Depends(get_dispatcher),
):
    """
    Ingest an inbound event.
    """
    status = dispatcher.ingest_event(event)
    return IngestResponse(id=event.id, status=status)

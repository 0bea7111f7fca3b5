"""
Task parameter and result envelope schemas.
"""
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field

from runstr.models.activity import Activity
from runstr.services.feed.store import DEFAULT_QUERY_LIMIT, MAX_TIMESTAMP


class ParseNoteParams(BaseModel):
    """Parameters for parse_note."""
    content: Optional[str] = Field(None, description="Note text")


class SummarizeActivitiesParams(BaseModel):
    """Parameters for summarize_activities."""
    activities: Optional[List[Activity]] = Field(None, description="Parsed activities")


class WindowParams(BaseModel):
    """Time window and page size shared by the read tasks."""
    limit: int = Field(DEFAULT_QUERY_LIMIT, ge=0)
    since: int = Field(0, description="Earliest created_at, inclusive")
    until: int = Field(MAX_TIMESTAMP, description="Latest created_at, inclusive")


class ReadFeedParams(WindowParams):
    include_workouts: bool = True


class ReadTemplatesParams(WindowParams):
    type: Optional[Literal["exercise", "workout"]] = None


class ReadRecordsParams(WindowParams):
    completed: Optional[bool] = None


class TaskRequest(BaseModel):
    """Payload of a task-request message."""
    task: str
    params: Optional[dict[str, Any]] = None


class TaskEnvelope(BaseModel):
    """Result returned to callers: the task result or an error message."""
    success: bool
    result: Optional[Any] = None
    error: Optional[str] = None


class TaskInfo(BaseModel):
    name: str
    description: str

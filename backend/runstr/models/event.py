"""
Inbound structured messages handed over by the relay transport.
"""
from enum import IntEnum
from typing import List, Optional

from pydantic import BaseModel, Field


class EventKind(IntEnum):
    """Numeric kind discriminators understood by the service."""
    TEXT_NOTE = 1
    WORKOUT_RECORD = 1301
    TASK_REQUEST = 23194
    TASK_RESULT = 23195
    TASK_LIST = 31990
    EXERCISE_TEMPLATE = 33401
    WORKOUT_TEMPLATE = 33402


class InboundEvent(BaseModel):
    """
    An already-verified event.

    ``tags`` is an ordered list of tuples; the first item of each tuple is
    its label and the rest are its values.
    """
    id: str
    pubkey: str = ""
    created_at: int = 0
    kind: int
    content: str = ""
    tags: List[List[str]] = Field(default_factory=list)
    relay: Optional[str] = None

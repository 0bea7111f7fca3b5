"""Shared fixtures for the RUNSTR DVM test suite."""

from typing import Callable

import pytest
from fastapi.testclient import TestClient

from runstr.main import create_app
from runstr.models.event import EventKind, InboundEvent
from runstr.services.feed import RunningFeed, TemplateCatalog, WorkoutRecordStore
from runstr.services.tasks import TaskDispatcher


@pytest.fixture
def make_event() -> Callable[..., InboundEvent]:
    """Factory for inbound events with sensible defaults."""

    def _make(
        event_id: str,
        kind: int = EventKind.TEXT_NOTE,
        created_at: int = 1_700_000_000,
        content: str = "",
        tags: list[list[str]] | None = None,
        pubkey: str = "abcdef0123456789",
    ) -> InboundEvent:
        return InboundEvent(
            id=event_id,
            pubkey=pubkey,
            created_at=created_at,
            kind=int(kind),
            content=content,
            tags=tags or [["t", "running"]],
        )

    return _make


@pytest.fixture
def dispatcher() -> TaskDispatcher:
    """Dispatcher over fresh, small stores."""
    return TaskDispatcher(
        RunningFeed(max_size=100),
        TemplateCatalog(max_size=100),
        WorkoutRecordStore(max_size=100),
    )


@pytest.fixture
def client(dispatcher: TaskDispatcher) -> TestClient:
    """HTTP client bound to the dispatcher fixture."""
    return TestClient(create_app(dispatcher))

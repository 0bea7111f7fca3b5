"""
Feed module - Bounded, deduplicated collections of inbound workout events.

This module provides:
- Tag schemas mapping event tags to stored record fields
- BoundedStore, the capped newest-first collection
- The running feed, template catalog and workout record store
- EventRouter, which dispatches inbound events by kind
"""
from runstr.services.feed.collections import (
    FeedPage,
    RecordPage,
    RunningFeed,
    TemplateCatalog,
    TemplatePage,
    WorkoutRecordStore,
)
from runstr.services.feed.router import EventRouter
from runstr.services.feed.schema import RecordSchema, TagField, TagIndex
from runstr.services.feed.store import BoundedStore, IngestStatus

__all__ = [
    # Schemas
    "RecordSchema",
    "TagField",
    "TagIndex",
    # Store
    "BoundedStore",
    "IngestStatus",
    # Collections
    "RunningFeed",
    "TemplateCatalog",
    "WorkoutRecordStore",
    "FeedPage",
    "TemplatePage",
    "RecordPage",
    # Routing
    "EventRouter",
]

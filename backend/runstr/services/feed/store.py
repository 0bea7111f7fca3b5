"""
Bounded Store - Fixed-capacity, deduplicated, newest-first record collection.
"""
from collections import deque
from enum import Enum
from typing import Any, Callable, Deque, Generic, List, Optional, Set

from runstr.core.logging import get_logger
from runstr.models.event import InboundEvent
from runstr.models.records import StoredRecord
from runstr.services.feed.schema import R, RecordSchema

logger = get_logger(__name__)

DEFAULT_MAX_SIZE = 100
DEFAULT_QUERY_LIMIT = 20
MAX_TIMESTAMP = 2 ** 53 - 1


class IngestStatus(str, Enum):
    """Outcome of offering an event to a store."""
    ADDED = "added"
    SKIPPED = "skipped"
    IGNORED = "ignored"


class BoundedStore(Generic[R]):
    """
    In-memory store for one kind of record.

    Records are inserted at the head and never updated. An id already in
    the store is skipped. Once the store holds more than ``max_size``
    records the oldest insertions are dropped from the tail.
    """

    def __init__(self, name: str, schema: RecordSchema[R], max_size: int = DEFAULT_MAX_SIZE):
        """
        Initialize the store.

        Args:
            name: Store name used in log lines
            schema: Builds records from inbound events
            max_size: Capacity; oldest records are evicted beyond it
        """
        if max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")

        self.name = name
        self.schema = schema
        self.max_size = max_size
        self._records: Deque[R] = deque()
        self._ids: Set[str] = set()

    def ingest(self, event: InboundEvent, **extra: Any) -> IngestStatus:
        """
        Build a record from an event and insert it.

        Args:
            event: Inbound event
            **extra: Additional record fields supplied by the caller

        Returns:
            IngestStatus.ADDED, or IngestStatus.SKIPPED for a known id
        """
        if event.id in self._ids:
            logger.debug("Skipped duplicate event", store=self.name, event_id=event.id)
            return IngestStatus.SKIPPED

        record = self.schema.build(event, **extra)
        self._insert(record)

        logger.info(
            "Added record",
            store=self.name,
            event_id=event.id,
            kind=event.kind,
            size=len(self._records),
        )

        return IngestStatus.ADDED

    def _insert(self, record: R) -> None:
        self._records.appendleft(record)
        self._ids.add(record.id)

        while len(self._records) > self.max_size:
            evicted = self._records.pop()
            self._ids.discard(evicted.id)
            logger.debug("Evicted record", store=self.name, event_id=evicted.id)

    def query(
        self,
        since: int = 0,
        until: int = MAX_TIMESTAMP,
        limit: Optional[int] = DEFAULT_QUERY_LIMIT,
        predicate: Optional[Callable[[R], bool]] = None,
    ) -> List[R]:
        """
        Records created within [since, until], newest insertion first.

        Args:
            since: Earliest created_at, inclusive
            until: Latest created_at, inclusive
            limit: Maximum number of records (None for all)
            predicate: Extra filter applied after the time window

        Returns:
            Matching records
        """
        matches = [
            record for record in self._records
            if since <= record.created_at <= until
            and (predicate is None or predicate(record))
        ]
        if limit is not None:
            matches = matches[:limit]
        return matches

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._ids

    def ids(self) -> List[str]:
        """Ids in store order, newest first."""
        return [record.id for record in self._records]


def newest_created_first(records: List[StoredRecord]) -> List[StoredRecord]:
    """Stable sort by created_at, descending."""
    return sorted(records, key=lambda record: record.created_at, reverse=True)

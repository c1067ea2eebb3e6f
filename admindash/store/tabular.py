"""
Generic in-memory tabular store.

A TabularStore holds every record of one kind in insertion order and
provides list (search + page slicing), point lookup, insert, partial
update and delete. Kind-specific stores subclass it to declare their
record type, field normalization and searchable fields.

Invariants:
    - Ids are assigned by the store from a per-instance counter and are
      never reused after deletion
    - created_at is fixed at insert; updated_at is refreshed on every
      successful mutation and never precedes created_at
    - Records are frozen dataclasses; callers only ever hold snapshots
    - Store order is insertion order; deletes do not reorder survivors
    - Every operation runs under one re-entrant lock per store

How to change safely:
    - Keep operations free of I/O so they never suspend under the lock
    - Normalization belongs in normalize(); validation belongs to callers
    - Not-found is a return value (None / False), never an exception
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, ClassVar, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fields owned by the store itself; callers can never set them.
SYSTEM_FIELDS = frozenset({"id", "created_at", "updated_at"})


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a list query.

    Attributes:
        items: Records on this page, in store order
        total: Number of records matching the search (ignores paging)
    """

    items: list[T]
    total: int


class TabularStore(Generic[T]):
    """In-memory ordered collection of records keyed by id.

    Subclasses set the class attributes below and may override
    normalize() to trim/lowercase values before they are stored.

    Thread safety:
        All reads and writes take the store's RLock. Callers that need a
        check-then-write sequence to be atomic wrap it in locked().

    Example:
        >>> store = ProductStore()
        >>> product = store.insert({"name": "Desk Lamp", "price": 890})
        >>> store.list(page=1, limit=10, search="lamp").total
        1
    """

    kind: ClassVar[str] = "Record"
    record_type: ClassVar[type]
    mutable_fields: ClassVar[tuple[str, ...]] = ()
    required_fields: ClassVar[tuple[str, ...]] = ()
    searchable_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        """Initialize an empty store.

        Args:
            clock: Source of the current time (defaults to UTC now)
        """
        self._records: list[T] = []
        self._next_id = 1
        self._lock = threading.RLock()
        self._clock = clock or utc_now

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def normalize(self, field_name: str, value: Any) -> Any:
        """Normalize one field value before it is stored."""
        return value

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list(self, page: int, limit: int, search: str | None = None) -> Page[T]:
        """List records with optional search and page slicing.

        Args:
            page: 1-indexed page number (callers clamp to >= 1)
            limit: Page size (callers clamp to >= 1 and to their maximum)
            search: Case-insensitive substring matched against the
                searchable fields; blank or None applies no filter

        Returns:
            Page with the requested slice and the filtered total

        Raises:
            ValueError: If page or limit is below 1
        """
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")

        with self._lock:
            matched = list(self._records)

        query = (search or "").strip().lower()
        if query:
            matched = [record for record in matched if self._matches(record, query)]

        start = (page - 1) * limit
        return Page(items=matched[start : start + limit], total=len(matched))

    def get(self, record_id: str) -> T | None:
        """Get a record by id, or None if it does not exist."""
        with self._lock:
            index = self._index_of(record_id)
            return None if index is None else self._records[index]

    def find_one(self, field_name: str, value: Any) -> T | None:
        """Find the first record whose field exactly equals value.

        The value is normalized the same way it would be on insert, so
        lookups by e.g. email are insensitive to case and whitespace.
        """
        self._check_field(field_name)
        expected = self.normalize(field_name, value)
        with self._lock:
            for record in self._records:
                if getattr(record, field_name) == expected:
                    return record
        return None

    def all(self) -> list[T]:
        """Snapshot of every record in store order."""
        with self._lock:
            return list(self._records)

    def count(self) -> int:
        """Number of live records."""
        with self._lock:
            return len(self._records)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def insert(self, fields: Mapping[str, Any]) -> T:
        """Insert a new record.

        Args:
            fields: Kind-specific field values (already validated)

        Returns:
            The stored record with its assigned id and timestamps

        Raises:
            ValueError: If a field is unknown or a required field is missing
        """
        for name in self.required_fields:
            if fields.get(name) is None:
                raise ValueError(f"{self.kind} field '{name}' is required")

        values = self._normalize_fields(
            {name: fields.get(name) for name in self.mutable_fields} | dict(fields)
        )

        with self._lock:
            now = self._timestamp(self._clock())
            record = self.record_type(
                id=self._generate_id(),
                created_at=now,
                updated_at=now,
                **values,
            )
            self._records.append(record)

        logger.debug(f"Inserted {self.kind} {record.id}")
        return record

    def update(self, record_id: str, fields: Mapping[str, Any]) -> T | None:
        """Apply a partial update.

        Only keys present in fields are overwritten; updated_at is always
        refreshed. Never creates a record.

        Args:
            record_id: Id of the record to update
            fields: Subset of mutable fields to change

        Returns:
            The updated record, or None if no record has that id

        Raises:
            ValueError: If a field is unknown or immutable
        """
        values = self._normalize_fields(fields)

        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None

            current = self._records[index]
            now = self._clock()
            created = datetime.fromisoformat(current.created_at)
            updated = dataclasses.replace(
                current,
                updated_at=self._timestamp(max(now, created)),
                **values,
            )
            self._records[index] = updated

        logger.debug(f"Updated {self.kind} {record_id} fields={sorted(values)}")
        return updated

    def delete(self, record_id: str) -> bool:
        """Delete a record.

        Returns:
            True if a record was removed, False if none had that id
        """
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return False
            del self._records[index]

        logger.debug(f"Deleted {self.kind} {record_id}")
        return True

    def seed(self, rows: list[Mapping[str, Any]]) -> list[T]:
        """Insert initial rows in order and return the stored records."""
        with self._lock:
            records = [self.insert(row) for row in rows]
        logger.info(f"Seeded {len(records)} {self.kind} records")
        return records

    @contextmanager
    def locked(self) -> Iterator[TabularStore[T]]:
        """Hold the store lock across several calls.

        Example:
            >>> with users.locked():
            ...     if users.get_by_email(email) is None:
            ...         users.insert(fields)
        """
        with self._lock:
            yield self

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _generate_id(self) -> str:
        record_id = str(self._next_id)
        self._next_id += 1
        return record_id

    def _index_of(self, record_id: str) -> int | None:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None

    def _matches(self, record: T, query: str) -> bool:
        for name in self.searchable_fields:
            value = getattr(record, name)
            if value is not None and query in str(value).lower():
                return True
        return False

    def _check_field(self, field_name: str) -> None:
        if field_name in SYSTEM_FIELDS:
            raise ValueError(f"{self.kind} field '{field_name}' is managed by the store")
        if field_name not in self.mutable_fields:
            raise ValueError(f"Unknown {self.kind} field '{field_name}'")

    def _normalize_fields(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        values = {}
        for name, value in fields.items():
            self._check_field(name)
            values[name] = self.normalize(name, value)
        return values

    @staticmethod
    def _timestamp(moment: datetime) -> str:
        return moment.isoformat()

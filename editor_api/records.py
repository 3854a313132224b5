"""Design record store.

Keeps saved designs in insertion order with monotonically increasing ids.
The store is an injected dependency: ``RecordStore`` is the interface the
lifecycle code relies on, ``InMemoryRecordStore`` the process-local
implementation (records and the id counter reset on restart).

Examples:
    >>> store = InMemoryRecordStore()
    >>> record = store.insert({"text": "Hello", "image_url": "/storage/results/a.png"})
    >>> record.id
    1
    >>> store.get(1) is record
    True

Tests:
    - tests/unit/test_records.py
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from editor_api.errors import DesignNotFound
from editor_api.models import DesignRecord, apply_design_defaults

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_DAYS = 7

Clock = Callable[[], datetime]
EvictCallback = Callable[[DesignRecord], Awaitable[bool]]


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_days(value: Any, default: int = DEFAULT_RETENTION_DAYS) -> int:
    """Parse a retention period in days.

    Missing and non-numeric values fall back to ``default``. Zero and
    negative values are kept: a negative window puts the cutoff in the
    future, so every record is older than it.

    Examples:
        >>> parse_days("3")
        3
        >>> parse_days(None)
        7
        >>> parse_days("abc")
        7
        >>> parse_days("-1")
        -1
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        days = int(str(value).strip())
    except ValueError:
        return default
    return days


def eviction_cutoff(now: datetime, days: int) -> datetime:
    """Return ``now - days``, saturating at the ends of the datetime range.

    Windows reaching past the earliest representable date give a cutoff no
    record precedes; windows reaching past the latest give one every record
    precedes.

    Examples:
        >>> eviction_cutoff(datetime(2026, 3, 1), 1)
        datetime.datetime(2026, 2, 28, 0, 0)
        >>> eviction_cutoff(datetime(2026, 3, 1), 10**9) == datetime.min
        True
    """
    try:
        return now - timedelta(days=days)
    except OverflowError:
        bound = datetime.min if days > 0 else datetime.max
        return bound.replace(tzinfo=now.tzinfo)


@dataclass(frozen=True)
class EvictionResult:
    """Outcome of an age-based eviction sweep.

    Attributes:
        evicted: Records removed from the store.
        deleted_files: Owned blobs actually removed from disk.
        remaining: Records still in the store.
    """

    evicted: list[DesignRecord]
    deleted_files: int
    remaining: int

    @property
    def evicted_count(self) -> int:
        return len(self.evicted)


class RecordStore(ABC):
    """Abstract store of design records."""

    @abstractmethod
    def insert(self, fields: dict[str, Any]) -> DesignRecord:
        """Assign an id, apply defaults, stamp timestamps and store a record."""

    @abstractmethod
    def get(self, design_id: int) -> DesignRecord:
        """Look up a record.

        Raises:
            DesignNotFound: If no record has ``design_id``.
        """

    @abstractmethod
    def list(self) -> tuple[int, list[DesignRecord]]:
        """Return (count, records) in insertion order."""

    @abstractmethod
    def delete(self, design_id: int) -> DesignRecord:
        """Remove and return a record.

        Raises:
            DesignNotFound: If no record has ``design_id``.
        """

    @abstractmethod
    async def evict_older_than(
        self,
        days: int,
        on_evict: EvictCallback | None = None,
    ) -> EvictionResult:
        """Remove records created more than ``days`` days ago."""


class InMemoryRecordStore(RecordStore):
    """Process-local record store backed by a list.

    Mutations happen without any ``await`` in between, so a coroutine never
    observes a half-inserted or half-removed record.

    Attributes:
        clock: Source of the current time.
    """

    def __init__(self, clock: Clock = utcnow) -> None:
        self.clock = clock
        self._records: list[DesignRecord] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._records)

    @property
    def next_id(self) -> int:
        """Id the next inserted record will receive."""
        return self._next_id

    def insert(self, fields: dict[str, Any]) -> DesignRecord:
        now = self.clock()
        values = apply_design_defaults(fields)
        values.pop("id", None)
        record = DesignRecord(id=self._next_id, created_at=now, updated_at=now, **values)
        self._next_id += 1
        self._records.append(record)
        return record

    def get(self, design_id: int) -> DesignRecord:
        for record in self._records:
            if record.id == design_id:
                return record
        raise DesignNotFound(design_id)

    def list(self) -> tuple[int, list[DesignRecord]]:
        return len(self._records), list(self._records)

    def delete(self, design_id: int) -> DesignRecord:
        for index, record in enumerate(self._records):
            if record.id == design_id:
                return self._records.pop(index)
        raise DesignNotFound(design_id)

    async def evict_older_than(
        self,
        days: int,
        on_evict: EvictCallback | None = None,
    ) -> EvictionResult:
        """Evict records created before ``now - days``.

        Evicted records leave the store before their assets are cleaned up.
        ``on_evict`` runs once per evicted record and returns whether its
        asset was removed; a failing callback is logged and the sweep goes on.

        Args:
            days: Age threshold in days.
            on_evict: Async best-effort asset cleanup for one record.

        Returns:
            EvictionResult with evicted records and counts.
        """
        cutoff = eviction_cutoff(self.clock(), days)
        evicted = [r for r in self._records if r.created_at < cutoff]
        self._records = [r for r in self._records if r.created_at >= cutoff]

        deleted_files = 0
        if on_evict is not None:
            for record in evicted:
                try:
                    if await on_evict(record):
                        deleted_files += 1
                except Exception as e:
                    logger.warning(f"Could not clean up assets of design {record.id}: {e}")

        logger.info(
            f"Evicted {len(evicted)} design(s) older than {days} day(s), "
            f"{len(self._records)} remaining"
        )
        return EvictionResult(
            evicted=evicted,
            deleted_files=deleted_files,
            remaining=len(self._records),
        )

"""Sequential identifiers — enquiry uids, complaint references and record ids.

Each identifier family is backed by a named counter in the record store.
Generation for one counter is serialized by a keyed in-process lock and
the store increments the counter atomically, so two concurrent callers
never receive the same value. A counter that does not exist yet is seeded
from the identifiers already present in its collection.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from arbiter_api.application.interfaces import Record, RecordStore
from arbiter_api.application.services.lock_registry import LockRegistry
from arbiter_api.domain.entities import Collection
from arbiter_api.infrastructure.logging.workflow_logger import WorkflowLogger, WorkflowStage

logger = logging.getLogger(__name__)
wlog = WorkflowLogger("SequenceService")


class IdentifierKind(str, Enum):
    """Human-facing reference number families."""

    ENQUIRY = "enquiry"
    COMPLAINT = "complaint"


@dataclass(frozen=True)
class _IdentifierFamily:
    collection: str
    uid_field: str


_FAMILIES: dict[IdentifierKind, _IdentifierFamily] = {
    IdentifierKind.ENQUIRY: _IdentifierFamily(Collection.ENQUIRIES, "uid"),
    IdentifierKind.COMPLAINT: _IdentifierFamily(Collection.COMPLAINTS, "complaint_uid"),
}


def _record_id(record: Record) -> int:
    try:
        return int(record.get("id") or 0)
    except (TypeError, ValueError):
        return 0


class SequenceService:
    """Generates reference numbers and numeric record ids."""

    def __init__(
        self,
        store: RecordStore,
        locks: LockRegistry,
        *,
        enquiry_prefix: str = "ENQ",
        complaint_prefix: str = "ASF",
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._store = store
        self._locks = locks
        self._enquiry_prefix = enquiry_prefix
        self._complaint_prefix = complaint_prefix
        self._clock = clock

    # ── Reference numbers ────────────────────────────────────────────

    async def generate(self, kind: IdentifierKind) -> str:
        """Consume the next count of ``kind`` and format it with the current year."""
        family = _FAMILIES[kind]
        count = await self._next(family.collection, lambda: self._count_issued(family))
        identifier = self.format(kind, count)
        wlog.step(WorkflowStage.REFERENCE, f"Issued {identifier}", kind=kind.value)
        return identifier

    async def peek(self, kind: IdentifierKind) -> str:
        """The identifier ``generate`` would return next, without consuming it."""
        family = _FAMILIES[kind]
        current = await self._store.peek_sequence(family.collection)
        if current is None:
            current = await self._count_issued(family)
        return self.format(kind, current + 1)

    def format(self, kind: IdentifierKind, count: int) -> str:
        year = self._clock().year
        if kind is IdentifierKind.ENQUIRY:
            return f"{self._enquiry_prefix}_{year}_{count:04d}"
        return f"{self._complaint_prefix} {count:03d}/{year}"

    # ── Record ids ───────────────────────────────────────────────────

    async def next_id(self, collection: str) -> int:
        """Next numeric primary key for ``collection``."""
        return await self._next(f"{collection}.id", lambda: self._max_id(collection))

    # ── Internals ────────────────────────────────────────────────────

    async def _next(self, name: str, seed: Callable) -> int:
        async with self._locks.lock("sequence", name):
            value = await self._store.increment_sequence(name)
            if value is None:
                start = await seed()
                logger.info("Seeding sequence '%s' at %d", name, start)
                value = await self._store.create_sequence(name, start + 1)
            return value

    async def _count_issued(self, family: _IdentifierFamily) -> int:
        records = await self._store.all(family.collection)
        return sum(1 for r in records if r.get(family.uid_field))

    async def _max_id(self, collection: str) -> int:
        records = await self._store.all(collection)
        return max((_record_id(r) for r in records), default=0)

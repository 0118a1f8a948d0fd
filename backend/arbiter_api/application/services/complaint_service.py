"""Complaint workflow service — draft creation, section saves and submission.

State machine: Draft (1) → Submitted (2). Sections can only be saved
while the complaint is a draft; submitting twice returns the reference
issued the first time.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from arbiter_api.application.interfaces import Record, RecordStore
from arbiter_api.application.schemas.complaint import ComplaintInit
from arbiter_api.application.services.lock_registry import LockRegistry
from arbiter_api.application.services.sequence_service import IdentifierKind, SequenceService
from arbiter_api.domain.entities import Collection, Complaint, section_key
from arbiter_api.domain.exceptions import (
    ComplaintStateError,
    EntityNotFoundError,
    FieldValidationError,
)
from arbiter_api.infrastructure.logging.workflow_logger import WorkflowLogger, WorkflowStage

logger = logging.getLogger(__name__)
wlog = WorkflowLogger("ComplaintService")


class ComplaintService:
    """Orchestrates the complaint lifecycle on top of the record store."""

    def __init__(
        self,
        store: RecordStore,
        sequences: SequenceService,
        locks: LockRegistry,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._store = store
        self._sequences = sequences
        self._locks = locks
        self._clock = clock

    def _now(self) -> int:
        return int(self._clock().timestamp())

    async def get_complaint(self, complaint_id: int) -> Complaint:
        record = await self._store.get(Collection.COMPLAINTS, complaint_id)
        if record is None:
            raise EntityNotFoundError("Complaint", complaint_id)
        return Complaint.from_record(record)

    async def list_user_complaints(self, user_id: int) -> list[Complaint]:
        records = await self._store.filter(Collection.COMPLAINTS, user_id=user_id)
        return [Complaint.from_record(r) for r in records]

    async def init_complaint(self, data: ComplaintInit) -> Complaint:
        """Create a Draft complaint at section 1 with empty section payloads."""
        if not data.complainant_type_id:
            raise FieldValidationError({"complainant_type_id": "Type is required"})

        now = self._now()
        complaint = Complaint(
            id=await self._sequences.next_id(Collection.COMPLAINTS),
            user_id=data.user_id or 0,
            complainant_type_id=data.complainant_type_id,
            language=data.language,
            date_created=now,
            date_updated=now,
        )
        await self._store.append(Collection.COMPLAINTS, complaint.id, complaint.to_record())
        wlog.step(
            WorkflowStage.CREATE,
            "Complaint draft created",
            complaint_id=complaint.id,
            user_id=complaint.user_id,
        )
        return complaint

    async def update_section(
        self, complaint_id: int, section: int, payload: dict[str, Any]
    ) -> Complaint:
        """Shallow-merge ``payload`` into one section of a draft complaint.

        Only the touched section and the progress fields are written back,
        so concurrent saves of different sections do not overwrite each other.
        """
        key = section_key(section)
        now = self._now()

        def apply(record: Record) -> Record:
            complaint = Complaint.from_record(record)
            complaint.apply_section(section, payload, now)
            return {
                **record,
                key: getattr(complaint, key),
                "complaint_section": complaint.complaint_section,
                "date_updated": complaint.date_updated,
            }

        async with self._locks.lock(Collection.COMPLAINTS, complaint_id):
            try:
                updated = await self._store.update(Collection.COMPLAINTS, complaint_id, apply)
            except ComplaintStateError as exc:
                wlog.rejected("Section save refused", error=exc, section=section)
                raise

        if updated is None:
            raise EntityNotFoundError("Complaint", complaint_id)

        complaint = Complaint.from_record(updated)
        wlog.step(
            WorkflowStage.SECTION,
            f"Saved section '{key}'",
            complaint_id=complaint_id,
            progress=complaint.complaint_section,
        )
        return complaint

    async def submit(self, complaint_id: int) -> Complaint:
        """Finalize a complaint and assign its reference number.

        Unknown ids raise before any reference is generated. Submitting an
        already submitted complaint returns it unchanged.
        """
        async with self._locks.lock(Collection.COMPLAINTS, complaint_id):
            complaint = await self.get_complaint(complaint_id)
            if complaint.is_submitted:
                logger.info(
                    "Complaint %s already submitted as %s", complaint_id, complaint.complaint_uid
                )
                return complaint

            reference = await self._sequences.generate(IdentifierKind.COMPLAINT)
            now = self._now()

            def finalize(record: Record) -> Record:
                current = Complaint.from_record(record)
                if not current.mark_submitted(reference, now):
                    # Finalized by another process since our read; keep its reference.
                    return record
                return {
                    **record,
                    "status_id": int(current.status_id),
                    "complaint_uid": current.complaint_uid,
                    "date_originated": current.date_originated,
                }

            updated = await self._store.update(Collection.COMPLAINTS, complaint_id, finalize)

        if updated is None:
            raise EntityNotFoundError("Complaint", complaint_id)

        complaint = Complaint.from_record(updated)
        wlog.step(
            WorkflowStage.SUBMIT,
            f"Complaint submitted as {complaint.complaint_uid}",
            complaint_id=complaint_id,
        )
        return complaint

"""Enquiry service — validated submission, lookup and file attachments."""

import re
from collections.abc import Callable
from datetime import datetime
from typing import Any

from arbiter_api.application.interfaces import RecordStore
from arbiter_api.application.schemas.enquiry import EnquiryCreate, EnquiryFileCreate
from arbiter_api.application.services.sequence_service import IdentifierKind, SequenceService
from arbiter_api.domain.entities import Collection, Enquiry, EnquiryFile
from arbiter_api.domain.entities.enquiry import RESERVED_FIELDS
from arbiter_api.domain.exceptions import EntityNotFoundError, FieldValidationError
from arbiter_api.infrastructure.logging.workflow_logger import WorkflowLogger, WorkflowStage

wlog = WorkflowLogger("EnquiryService")

REQUIRED_FIELDS = (
    "title_id",
    "name",
    "surname",
    "contact_number",
    "email",
    "country",
    "sector",
    "enquiry",
)
MAX_ENQUIRY_LENGTH = 10000
OTHER_SECTOR = "4"

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_enquiry(fields: dict[str, Any]) -> dict[str, str]:
    """Per-field error messages for an enquiry form; empty when valid."""
    errors: dict[str, str] = {}

    for name in REQUIRED_FIELDS:
        if not fields.get(name):
            errors[name] = f"{name.replace('_', ' ', 1)} is required"

    email = fields.get("email")
    if email and not _EMAIL_PATTERN.match(str(email)):
        errors["email"] = "Please enter a valid email"

    if str(fields.get("sector")) == OTHER_SECTOR and not fields.get("sector_other"):
        errors["sector_other"] = "Please specify sector"

    text = fields.get("enquiry")
    if text and len(str(text)) > MAX_ENQUIRY_LENGTH:
        errors["enquiry"] = f"Enquiry cannot be longer than {MAX_ENQUIRY_LENGTH} characters"

    return errors


class EnquiryService:
    """Orchestrates enquiry submission. Enquiries are immutable once stored."""

    def __init__(
        self,
        store: RecordStore,
        sequences: SequenceService,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._store = store
        self._sequences = sequences
        self._clock = clock

    def _now(self) -> int:
        return int(self._clock().timestamp())

    async def next_uid(self) -> str:
        """Preview of the uid the next enquiry will receive."""
        return await self._sequences.peek(IdentifierKind.ENQUIRY)

    async def create_enquiry(self, data: EnquiryCreate) -> Enquiry:
        fields = {
            k: v for k, v in data.model_dump(exclude_none=True).items() if k not in RESERVED_FIELDS
        }
        errors = validate_enquiry(fields)
        if errors:
            wlog.rejected("Enquiry refused", fields=",".join(sorted(errors)))
            raise FieldValidationError(errors)

        enquiry = Enquiry(
            id=await self._sequences.next_id(Collection.ENQUIRIES),
            uid=await self._sequences.generate(IdentifierKind.ENQUIRY),
            created_at=self._now(),
            fields=fields,
        )
        await self._store.append(Collection.ENQUIRIES, enquiry.uid, enquiry.to_record())
        wlog.step(WorkflowStage.CREATE, f"Enquiry {enquiry.uid} created")
        return enquiry

    async def get_enquiry(self, uid: str) -> Enquiry:
        record = await self._store.get(Collection.ENQUIRIES, uid)
        if record is None:
            raise EntityNotFoundError("Enquiry", uid)
        return Enquiry.from_record(record)

    async def list_enquiries(self, email: str | None = None) -> list[Enquiry]:
        if email:
            records = await self._store.filter(Collection.ENQUIRIES, email=email)
        else:
            records = await self._store.all(Collection.ENQUIRIES)
        return [Enquiry.from_record(r) for r in records]

    # ── Attachments ──────────────────────────────────────────────────

    async def attach_file(self, uid: str, data: EnquiryFileCreate) -> EnquiryFile:
        """Record metadata of a file uploaded for an existing enquiry."""
        await self.get_enquiry(uid)

        attachment = EnquiryFile(
            id=await self._sequences.next_id(Collection.FILES),
            enquiry_uid=uid,
            created_at=self._now(),
            filename=data.filename,
            filesize=data.filesize,
            mimetype=data.mimetype,
            description=data.description,
        )
        await self._store.append(Collection.FILES, attachment.id, attachment.to_record())
        return attachment

    async def list_files(self, uid: str) -> list[EnquiryFile]:
        records = await self._store.filter(Collection.FILES, enquiry_uid=uid)
        return [
            EnquiryFile(
                id=int(r["id"]),
                enquiry_uid=r["enquiry_uid"],
                created_at=int(r.get("created_at") or 0),
                filename=r.get("filename"),
                filesize=r.get("filesize"),
                mimetype=r.get("mimetype"),
                description=r.get("description"),
            )
            for r in records
        ]

"""Domain entity for complaints — a multi-section draft that is finalized once."""

import copy
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from arbiter_api.domain.exceptions import ComplaintStateError, InvalidSectionError


class ComplaintStatus(IntEnum):
    """Lifecycle states of a complaint. Submission is terminal."""

    DRAFT = 1
    SUBMITTED = 2


# Form section number → key of the section payload on the complaint record.
SECTION_KEYS: dict[int, str] = {
    2: "individual",
    5: "company",
    6: "assistant",
    7: "service_provider",
    8: "details",
}


def section_key(section: int) -> str:
    """Resolve a section number to its payload key or raise InvalidSectionError."""
    try:
        return SECTION_KEYS[section]
    except KeyError:
        raise InvalidSectionError(section) from None


def _empty_company() -> dict[str, Any]:
    return {"directors": []}


def _empty_service_provider() -> dict[str, Any]:
    return {"provider_ids": [], "product_name": "", "reference": ""}


def _empty_details() -> dict[str, Any]:
    return {"additional_files": []}


@dataclass
class Complaint:
    """A complaint record moving from Draft to Submitted.

    Section payloads are opaque mappings; they are merged shallowly, last
    write wins per key. ``complaint_section`` tracks the furthest section
    reached and never goes down.
    """

    id: int
    complainant_type_id: int
    date_created: int
    date_updated: int
    user_id: int = 0
    language: str = "en"
    status_id: ComplaintStatus = ComplaintStatus.DRAFT
    complaint_section: int = 1
    date_originated: int | None = None
    complaint_uid: str | None = None
    individual: dict[str, Any] = field(default_factory=dict)
    company: dict[str, Any] = field(default_factory=_empty_company)
    assistant: dict[str, Any] = field(default_factory=dict)
    service_provider: dict[str, Any] = field(default_factory=_empty_service_provider)
    details: dict[str, Any] = field(default_factory=_empty_details)

    @property
    def is_submitted(self) -> bool:
        return self.status_id == ComplaintStatus.SUBMITTED

    def apply_section(self, section: int, payload: dict[str, Any], now: int) -> str:
        """Merge ``payload`` into the section and advance progress.

        Returns the key of the section that was written.
        """
        key = section_key(section)
        if self.is_submitted:
            raise ComplaintStateError(self.id, "submitted complaints can no longer be edited")

        setattr(self, key, {**getattr(self, key), **payload})
        self.complaint_section = max(self.complaint_section, section)
        self.date_updated = now
        return key

    def mark_submitted(self, reference: str, now: int) -> bool:
        """Transition to Submitted. Returns False if already submitted."""
        if self.is_submitted:
            return False
        self.status_id = ComplaintStatus.SUBMITTED
        self.complaint_uid = reference
        self.date_originated = now
        return True

    # ── Record mapping ───────────────────────────────────────────────

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Complaint":
        """Build a Complaint from a stored record, tolerating missing sections."""
        return cls(
            id=int(record["id"]),
            complainant_type_id=int(record["complainant_type_id"]),
            date_created=int(record.get("date_created") or 0),
            date_updated=int(record.get("date_updated") or 0),
            user_id=int(record.get("user_id") or 0),
            language=record.get("language") or "en",
            status_id=ComplaintStatus(int(record.get("status_id") or ComplaintStatus.DRAFT)),
            complaint_section=int(record.get("complaint_section") or 1),
            date_originated=record.get("date_originated"),
            complaint_uid=record.get("complaint_uid"),
            individual=copy.deepcopy(record.get("individual") or {}),
            company=copy.deepcopy(record.get("company") or _empty_company()),
            assistant=copy.deepcopy(record.get("assistant") or {}),
            service_provider=copy.deepcopy(
                record.get("service_provider") or _empty_service_provider()
            ),
            details=copy.deepcopy(record.get("details") or _empty_details()),
        )

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": self.id,
            "user_id": self.user_id,
            "status_id": int(self.status_id),
            "complainant_type_id": self.complainant_type_id,
            "complaint_section": self.complaint_section,
            "language": self.language,
            "date_created": self.date_created,
            "date_updated": self.date_updated,
            "individual": self.individual,
            "company": self.company,
            "assistant": self.assistant,
            "service_provider": self.service_provider,
            "details": self.details,
        }
        if self.complaint_uid is not None:
            record["complaint_uid"] = self.complaint_uid
            record["date_originated"] = self.date_originated
        return record

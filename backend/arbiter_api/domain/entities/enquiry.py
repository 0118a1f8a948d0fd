"""Domain entities for public enquiries and the files attached to them."""

from dataclasses import dataclass, field
from typing import Any

# Record fields owned by the service; never taken from submitted form data.
RESERVED_FIELDS = frozenset({"id", "uid", "status", "created_at"})


@dataclass
class Enquiry:
    """A submitted enquiry. Created once, never modified afterwards.

    ``fields`` carries the submitted form values (name, email, sector, ...).
    """

    id: int
    uid: str
    created_at: int
    fields: dict[str, Any] = field(default_factory=dict)
    status: str = "open"

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Enquiry":
        fields = {k: v for k, v in record.items() if k not in RESERVED_FIELDS}
        return cls(
            id=int(record.get("id") or 0),
            uid=record["uid"],
            created_at=int(record.get("created_at") or 0),
            fields=fields,
            status=record.get("status") or "open",
        )

    def to_record(self) -> dict[str, Any]:
        return {
            **self.fields,
            "id": self.id,
            "uid": self.uid,
            "status": self.status,
            "created_at": self.created_at,
        }


@dataclass
class EnquiryFile:
    """Metadata of a file attached to an enquiry by reference."""

    id: int
    enquiry_uid: str
    created_at: int
    filename: str | None = None
    filesize: int | None = None
    mimetype: str | None = None
    description: str | None = None

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "enquiry_uid": self.enquiry_uid,
            "filename": self.filename,
            "filesize": self.filesize,
            "mimetype": self.mimetype,
            "description": self.description,
            "created_at": self.created_at,
        }

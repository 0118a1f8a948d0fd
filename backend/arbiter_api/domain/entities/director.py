"""Domain entity — a company director attached to a complaint."""

from dataclasses import dataclass
from typing import Any


@dataclass
class Director:
    """Director of a complainant company. Created and deleted, never edited."""

    id: int
    complaint_id: int
    first_name: str
    last_name: str
    created_at: int
    email: str = ""
    role: str = "Director"

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "complaint_id": self.complaint_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "role": self.role,
            "created_at": self.created_at,
        }

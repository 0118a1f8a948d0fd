"""Pydantic DTOs for the complaint workflow."""

from typing import Any

from pydantic import BaseModel, Field


class ComplaintInit(BaseModel):
    """Schema for starting a new complaint draft (section 1)."""

    user_id: int | None = Field(None, examples=[42])
    complainant_type_id: int | None = Field(None, examples=[1])
    language: str = Field("en", min_length=1, max_length=10)


class ComplaintResponse(BaseModel):
    """Schema returned to the client — the full complaint record."""

    id: int
    user_id: int
    status_id: int
    complainant_type_id: int
    complaint_section: int
    language: str
    date_created: int
    date_updated: int
    date_originated: int | None = None
    complaint_uid: str | None = None
    individual: dict[str, Any]
    company: dict[str, Any]
    assistant: dict[str, Any]
    service_provider: dict[str, Any]
    details: dict[str, Any]

    model_config = {"from_attributes": True}


class SubmitResponse(BaseModel):
    """Result of a final submission."""

    success: bool = True
    reference: str

"""Pydantic DTOs for enquiries and enquiry file attachments."""

from pydantic import BaseModel, Field


class EnquiryCreate(BaseModel):
    """Schema for submitting an enquiry.

    Every field is optional at the schema level; the service reports all
    missing required fields together. Unknown form fields are kept.
    """

    title_id: str | int | None = None
    name: str | None = None
    surname: str | None = None
    contact_number: str | int | None = None
    email: str | None = None
    country: str | None = None
    sector: str | int | None = None
    sector_other: str | None = None
    enquiry: str | None = None

    model_config = {"extra": "allow"}


class EnquiryCreatedResponse(BaseModel):
    uid: str


class NextUidResponse(BaseModel):
    uid: str


class EnquiryFileCreate(BaseModel):
    """Metadata of a file uploaded alongside an enquiry."""

    filename: str | None = Field(None, max_length=255, examples=["statement.pdf"])
    filesize: int | None = Field(None, ge=0)
    mimetype: str | None = Field(None, max_length=255, examples=["application/pdf"])
    description: str | None = None


class EnquiryFileResponse(BaseModel):
    id: int
    enquiry_uid: str
    filename: str | None
    filesize: int | None
    mimetype: str | None
    description: str | None
    created_at: int

    model_config = {"from_attributes": True}


class FileAttachedResponse(BaseModel):
    success: bool = True
    file_id: int

"""Pydantic DTOs for company directors."""

from pydantic import BaseModel, Field


class DirectorCreate(BaseModel):
    """Schema for adding a director to a complaint.

    Required fields are checked by the service so that every missing field
    is reported at once.
    """

    complaint_id: int | None = None
    first_name: str | None = Field(None, max_length=255)
    last_name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    role: str | None = Field(None, max_length=100)


class DirectorResponse(BaseModel):
    id: int
    complaint_id: int
    first_name: str
    last_name: str
    email: str
    role: str
    created_at: int

    model_config = {"from_attributes": True}


class DirectorCreatedResponse(BaseModel):
    success: bool = True
    director_id: int
    redirect_section: int = 5


class DirectorDeletedResponse(BaseModel):
    success: bool = True
    message: str = "Director removed"

"""Complaint workflow endpoints — init, section saves and submission."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from arbiter_api.application.schemas.complaint import (
    ComplaintInit,
    ComplaintResponse,
    SubmitResponse,
)
from arbiter_api.application.services import ComplaintService
from arbiter_api.domain.exceptions import ComplaintStateError, EntityNotFoundError
from arbiter_api.infrastructure.dependencies import get_complaint_service

router = APIRouter(prefix="/complaints", tags=["Complaints"])
users_router = APIRouter(prefix="/users", tags=["Complaints"])


@router.post("/init", response_model=ComplaintResponse, status_code=status.HTTP_201_CREATED)
async def init_complaint(
    data: ComplaintInit,
    service: ComplaintService = Depends(get_complaint_service),
) -> ComplaintResponse:
    """Start a new complaint draft."""
    complaint = await service.init_complaint(data)
    return ComplaintResponse.model_validate(complaint, from_attributes=True)


@router.get("/{complaint_id}", response_model=ComplaintResponse)
async def get_complaint(
    complaint_id: int,
    service: ComplaintService = Depends(get_complaint_service),
) -> ComplaintResponse:
    try:
        complaint = await service.get_complaint(complaint_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ComplaintResponse.model_validate(complaint, from_attributes=True)


@router.patch("/{complaint_id}/section/{section}", response_model=ComplaintResponse)
async def update_section(
    complaint_id: int,
    section: int,
    payload: dict[str, Any] = Body(...),
    service: ComplaintService = Depends(get_complaint_service),
) -> ComplaintResponse:
    """Autosave or manual save of one form section."""
    try:
        complaint = await service.update_section(complaint_id, section, payload)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ComplaintStateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    return ComplaintResponse.model_validate(complaint, from_attributes=True)


@router.post("/{complaint_id}/submit", response_model=SubmitResponse)
async def submit_complaint(
    complaint_id: int,
    service: ComplaintService = Depends(get_complaint_service),
) -> SubmitResponse:
    """Final submission — assigns the complaint reference number."""
    try:
        complaint = await service.submit(complaint_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return SubmitResponse(reference=complaint.complaint_uid)


@users_router.get("/{user_id}/complaints", response_model=list[ComplaintResponse])
async def list_user_complaints(
    user_id: int,
    service: ComplaintService = Depends(get_complaint_service),
) -> list[ComplaintResponse]:
    """All complaints started by one user ("My complaints")."""
    complaints = await service.list_user_complaints(user_id)
    return [ComplaintResponse.model_validate(c, from_attributes=True) for c in complaints]

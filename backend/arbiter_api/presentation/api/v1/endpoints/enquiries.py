"""Enquiry endpoints — submission, lookup and attached files."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from arbiter_api.application.schemas.enquiry import (
    EnquiryCreate,
    EnquiryCreatedResponse,
    EnquiryFileCreate,
    EnquiryFileResponse,
    FileAttachedResponse,
    NextUidResponse,
)
from arbiter_api.application.services import EnquiryService
from arbiter_api.domain.exceptions import EntityNotFoundError
from arbiter_api.infrastructure.dependencies import get_enquiry_service

router = APIRouter(prefix="/enquiries", tags=["Enquiries"])


@router.get("/next-uid", response_model=NextUidResponse)
async def next_uid(
    service: EnquiryService = Depends(get_enquiry_service),
) -> NextUidResponse:
    """Preview the uid the next enquiry will be given."""
    return NextUidResponse(uid=await service.next_uid())


@router.post("", response_model=EnquiryCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_enquiry(
    data: EnquiryCreate,
    service: EnquiryService = Depends(get_enquiry_service),
) -> EnquiryCreatedResponse:
    """Validate and store a new enquiry."""
    enquiry = await service.create_enquiry(data)
    return EnquiryCreatedResponse(uid=enquiry.uid)


@router.get("")
async def list_enquiries(
    email: str | None = Query(None, description="Only enquiries sent from this address"),
    service: EnquiryService = Depends(get_enquiry_service),
) -> list[dict[str, Any]]:
    enquiries = await service.list_enquiries(email=email)
    return [e.to_record() for e in enquiries]


@router.get("/{uid}")
async def get_enquiry(
    uid: str,
    service: EnquiryService = Depends(get_enquiry_service),
) -> dict[str, Any]:
    try:
        enquiry = await service.get_enquiry(uid)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return enquiry.to_record()


@router.post(
    "/{uid}/files",
    response_model=FileAttachedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def attach_file(
    uid: str,
    data: EnquiryFileCreate,
    service: EnquiryService = Depends(get_enquiry_service),
) -> FileAttachedResponse:
    """Attach file metadata to an existing enquiry."""
    try:
        attachment = await service.attach_file(uid, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return FileAttachedResponse(file_id=attachment.id)


@router.get("/{uid}/files", response_model=list[EnquiryFileResponse])
async def list_files(
    uid: str,
    service: EnquiryService = Depends(get_enquiry_service),
) -> list[EnquiryFileResponse]:
    files = await service.list_files(uid)
    return [EnquiryFileResponse.model_validate(f, from_attributes=True) for f in files]

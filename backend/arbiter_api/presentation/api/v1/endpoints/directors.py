"""Director endpoints — directors of a complainant company."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from arbiter_api.application.schemas.director import (
    DirectorCreate,
    DirectorCreatedResponse,
    DirectorDeletedResponse,
    DirectorResponse,
)
from arbiter_api.application.services import DirectorService
from arbiter_api.domain.exceptions import EntityNotFoundError
from arbiter_api.infrastructure.dependencies import get_director_service

router = APIRouter(prefix="/directors", tags=["Directors"])


@router.get("", response_model=list[DirectorResponse])
async def list_directors(
    complaint_id: int | None = Query(None, description="Filter by complaint ID"),
    service: DirectorService = Depends(get_director_service),
) -> list[DirectorResponse]:
    directors = await service.list_directors(complaint_id=complaint_id)
    return [DirectorResponse.model_validate(d, from_attributes=True) for d in directors]


@router.get("/{director_id}", response_model=DirectorResponse)
async def get_director(
    director_id: int,
    service: DirectorService = Depends(get_director_service),
) -> DirectorResponse:
    try:
        director = await service.get_director(director_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DirectorResponse.model_validate(director, from_attributes=True)


@router.post(
    "", response_model=DirectorCreatedResponse, status_code=status.HTTP_201_CREATED
)
async def create_director(
    data: DirectorCreate,
    service: DirectorService = Depends(get_director_service),
) -> DirectorCreatedResponse:
    """Add a director to a complaint."""
    try:
        director = await service.create_director(data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DirectorCreatedResponse(director_id=director.id)


@router.delete("/{director_id}", response_model=DirectorDeletedResponse)
async def delete_director(
    director_id: int,
    service: DirectorService = Depends(get_director_service),
) -> DirectorDeletedResponse:
    """Remove a director from a complaint."""
    try:
        await service.delete_director(director_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DirectorDeletedResponse()

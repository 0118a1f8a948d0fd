"""Application service (use case) for company directors of a complaint."""

from collections.abc import Callable
from datetime import datetime

from arbiter_api.application.interfaces import Record, RecordStore
from arbiter_api.application.schemas.director import DirectorCreate
from arbiter_api.application.services.reference_resolver import as_int
from arbiter_api.application.services.sequence_service import SequenceService
from arbiter_api.domain.entities import Collection, Director
from arbiter_api.domain.exceptions import EntityNotFoundError, FieldValidationError
from arbiter_api.infrastructure.logging.workflow_logger import WorkflowLogger, WorkflowStage

wlog = WorkflowLogger("DirectorService")


def _to_director(record: Record) -> Director:
    return Director(
        id=int(record["id"]),
        complaint_id=as_int(record.get("complaint_id")) or 0,
        first_name=record.get("first_name") or "",
        last_name=record.get("last_name") or "",
        email=record.get("email") or "",
        role=record.get("role") or "Director",
        created_at=int(record.get("created_at") or 0),
    )


class DirectorService:
    """Directors live in their own collection, linked to a complaint by id."""

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

    async def get_director(self, director_id: int) -> Director:
        record = await self._store.get(Collection.DIRECTORS, director_id)
        if record is None:
            raise EntityNotFoundError("Director", director_id)
        return _to_director(record)

    async def list_directors(self, complaint_id: int | None = None) -> list[Director]:
        records = await self._store.all(Collection.DIRECTORS)
        if complaint_id is not None:
            records = [r for r in records if as_int(r.get("complaint_id")) == complaint_id]
        return [_to_director(r) for r in records]

    async def create_director(self, data: DirectorCreate) -> Director:
        errors: dict[str, str] = {}
        if not data.complaint_id:
            errors["session"] = "Complaint ID is missing from session/request"
        if not data.first_name:
            errors["first_name"] = "First name is required"
        if not data.last_name:
            errors["last_name"] = "Last name is required"
        if errors:
            raise FieldValidationError(errors)

        if await self._store.get(Collection.COMPLAINTS, data.complaint_id) is None:
            raise EntityNotFoundError("Complaint", data.complaint_id)

        director = Director(
            id=await self._sequences.next_id(Collection.DIRECTORS),
            complaint_id=data.complaint_id,
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email or "",
            role=data.role or "Director",
            created_at=int(self._clock().timestamp()),
        )
        await self._store.append(Collection.DIRECTORS, director.id, director.to_record())
        wlog.step(
            WorkflowStage.CREATE,
            "Director added",
            complaint_id=director.complaint_id,
            director_id=director.id,
        )
        return director

    async def delete_director(self, director_id: int) -> bool:
        exists = await self._store.get(Collection.DIRECTORS, director_id)
        if exists is None:
            raise EntityNotFoundError("Director", director_id)
        return await self._store.remove(Collection.DIRECTORS, director_id)

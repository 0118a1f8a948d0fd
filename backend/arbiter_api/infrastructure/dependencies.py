"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends

from arbiter_api.config import get_settings
from arbiter_api.application.interfaces import RecordStore
from arbiter_api.application.services import (
    ComplaintService,
    DecisionQueryService,
    DirectorService,
    EnquiryService,
    LockRegistry,
    SequenceService,
)
from arbiter_api.infrastructure.database.session import async_session_factory
from arbiter_api.infrastructure.database.repositories import SQLAlchemyRecordStore


@lru_cache
def get_lock_registry() -> LockRegistry:
    """Process-wide registry of keyed locks shared by every request."""
    return LockRegistry()


@lru_cache
def get_record_store() -> RecordStore:
    """Process-wide record store; it opens its own transaction per operation."""
    return SQLAlchemyRecordStore(async_session_factory)


def get_sequence_service(
    store: RecordStore = Depends(get_record_store),
    locks: LockRegistry = Depends(get_lock_registry),
) -> SequenceService:
    settings = get_settings()
    return SequenceService(
        store,
        locks,
        enquiry_prefix=settings.enquiry_uid_prefix,
        complaint_prefix=settings.complaint_reference_prefix,
    )


async def get_decision_query_service(
    store: RecordStore = Depends(get_record_store),
) -> AsyncGenerator[DecisionQueryService, None]:
    """Provides the decision report engine with the configured date format."""
    settings = get_settings()
    yield DecisionQueryService(store, date_format=settings.date_format)


async def get_complaint_service(
    store: RecordStore = Depends(get_record_store),
    sequences: SequenceService = Depends(get_sequence_service),
    locks: LockRegistry = Depends(get_lock_registry),
) -> AsyncGenerator[ComplaintService, None]:
    """Provides the complaint workflow with its sequence generator and locks."""
    yield ComplaintService(store, sequences, locks)


async def get_director_service(
    store: RecordStore = Depends(get_record_store),
    sequences: SequenceService = Depends(get_sequence_service),
) -> AsyncGenerator[DirectorService, None]:
    yield DirectorService(store, sequences)


async def get_enquiry_service(
    store: RecordStore = Depends(get_record_store),
    sequences: SequenceService = Depends(get_sequence_service),
) -> AsyncGenerator[EnquiryService, None]:
    yield EnquiryService(store, sequences)

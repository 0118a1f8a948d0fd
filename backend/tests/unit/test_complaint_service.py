"""Unit tests for the complaint workflow (ComplaintService + Complaint entity)."""

import asyncio
from datetime import datetime

import pytest

from arbiter_api.application.schemas import ComplaintInit
from arbiter_api.application.services import ComplaintService, LockRegistry, SequenceService
from arbiter_api.domain.entities import Collection, Complaint, ComplaintStatus
from arbiter_api.domain.exceptions import (
    ComplaintStateError,
    EntityNotFoundError,
    FieldValidationError,
    InvalidSectionError,
)
from tests.fakes import FakeRecordStore, FixedClock


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 3, 1, 9, 30))


@pytest.fixture
def store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def service(store: FakeRecordStore, clock: FixedClock) -> ComplaintService:
    locks = LockRegistry()
    sequences = SequenceService(store, locks, clock=clock)
    return ComplaintService(store, sequences, locks, clock=clock)


async def _draft(service: ComplaintService, user_id: int = 7) -> Complaint:
    return await service.init_complaint(ComplaintInit(user_id=user_id, complainant_type_id=1))


@pytest.mark.asyncio
async def test_init_creates_draft(service: ComplaintService):
    complaint = await _draft(service)
    assert complaint.id == 1
    assert complaint.status_id == ComplaintStatus.DRAFT
    assert complaint.complaint_section == 1
    assert complaint.complaint_uid is None
    assert complaint.company == {"directors": []}
    assert complaint.service_provider == {"provider_ids": [], "product_name": "", "reference": ""}
    assert complaint.details == {"additional_files": []}


@pytest.mark.asyncio
async def test_init_requires_complainant_type(service: ComplaintService):
    with pytest.raises(FieldValidationError) as exc_info:
        await service.init_complaint(ComplaintInit(user_id=7))
    assert exc_info.value.errors == {"complainant_type_id": "Type is required"}


@pytest.mark.asyncio
async def test_get_complaint_not_found(service: ComplaintService):
    with pytest.raises(EntityNotFoundError):
        await service.get_complaint(999)


@pytest.mark.asyncio
async def test_sections_merge_independently_and_progress_is_monotonic(service):
    draft = await _draft(service)

    await service.update_section(draft.id, 6, {"first_name": "A"})
    complaint = await service.update_section(draft.id, 2, {"first_name": "B"})

    assert complaint.complaint_section == 6
    assert complaint.assistant == {"first_name": "A"}
    assert complaint.individual == {"first_name": "B"}


@pytest.mark.asyncio
async def test_section_merge_is_shallow(service: ComplaintService):
    draft = await _draft(service)
    await service.update_section(draft.id, 7, {"product_name": "Card", "provider_ids": [1]})
    complaint = await service.update_section(draft.id, 7, {"provider_ids": [2, 3]})

    assert complaint.service_provider == {
        "provider_ids": [2, 3],
        "product_name": "Card",
        "reference": "",
    }
    assert complaint.complaint_section == 7


@pytest.mark.asyncio
async def test_update_section_refreshes_date_updated(service, clock):
    draft = await _draft(service)
    clock.moment = datetime(2024, 3, 2, 9, 30)
    complaint = await service.update_section(draft.id, 2, {"surname": "Borg"})
    assert complaint.date_updated > draft.date_created


@pytest.mark.asyncio
async def test_invalid_section_rejected_without_lookup(service: ComplaintService):
    with pytest.raises(InvalidSectionError):
        await service.update_section(999, 3, {"x": 1})


@pytest.mark.asyncio
async def test_update_section_unknown_complaint(service: ComplaintService):
    with pytest.raises(EntityNotFoundError):
        await service.update_section(999, 2, {"x": 1})


@pytest.mark.asyncio
async def test_concurrent_saves_of_different_sections(service: ComplaintService):
    draft = await _draft(service)
    await asyncio.gather(
        service.update_section(draft.id, 2, {"name": "Maria"}),
        service.update_section(draft.id, 6, {"name": "Joe"}),
        service.update_section(draft.id, 8, {"description": "Fee"}),
    )
    complaint = await service.get_complaint(draft.id)
    assert complaint.individual == {"name": "Maria"}
    assert complaint.assistant == {"name": "Joe"}
    assert complaint.details["description"] == "Fee"
    assert complaint.complaint_section == 8


@pytest.mark.asyncio
async def test_submit_assigns_reference(service: ComplaintService):
    draft = await _draft(service)
    complaint = await service.submit(draft.id)
    assert complaint.status_id == ComplaintStatus.SUBMITTED
    assert complaint.complaint_uid == "ASF 001/2024"
    assert complaint.date_originated == int(datetime(2024, 3, 1, 9, 30).timestamp())


@pytest.mark.asyncio
async def test_submit_is_idempotent(service: ComplaintService):
    draft = await _draft(service)
    first = await service.submit(draft.id)
    second = await service.submit(draft.id)
    assert second.complaint_uid == first.complaint_uid

    other = await _draft(service)
    assert (await service.submit(other.id)).complaint_uid == "ASF 002/2024"


@pytest.mark.asyncio
async def test_concurrent_submits_issue_one_reference(service: ComplaintService):
    draft = await _draft(service)
    results = await asyncio.gather(*(service.submit(draft.id) for _ in range(5)))
    assert {c.complaint_uid for c in results} == {"ASF 001/2024"}


@pytest.mark.asyncio
async def test_submit_unknown_complaint_consumes_no_reference(store, service):
    with pytest.raises(EntityNotFoundError):
        await service.submit(404)
    assert store.sequence(Collection.COMPLAINTS) is None
    assert await store.all(Collection.COMPLAINTS) == []


@pytest.mark.asyncio
async def test_submitted_complaint_rejects_section_edits(service: ComplaintService):
    draft = await _draft(service)
    await service.update_section(draft.id, 2, {"name": "Maria"})
    await service.submit(draft.id)

    with pytest.raises(ComplaintStateError):
        await service.update_section(draft.id, 2, {"name": "Changed"})

    complaint = await service.get_complaint(draft.id)
    assert complaint.individual == {"name": "Maria"}


@pytest.mark.asyncio
async def test_list_user_complaints(service: ComplaintService):
    await _draft(service, user_id=7)
    await _draft(service, user_id=8)
    await _draft(service, user_id=7)
    complaints = await service.list_user_complaints(7)
    assert [c.id for c in complaints] == [1, 3]


def test_complaint_record_round_trip_keeps_reference():
    complaint = Complaint(id=3, complainant_type_id=2, date_created=10, date_updated=10)
    assert "complaint_uid" not in complaint.to_record()

    complaint.mark_submitted("ASF 004/2024", 20)
    restored = Complaint.from_record(complaint.to_record())
    assert restored.is_submitted
    assert restored.complaint_uid == "ASF 004/2024"
    assert restored.date_originated == 20
    assert restored.mark_submitted("ASF 005/2024", 30) is False

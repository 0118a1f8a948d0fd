"""End-to-end tests of the HTTP API against an in-memory record store."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from arbiter_api.application.services import LockRegistry
from arbiter_api.config import get_settings
from arbiter_api.domain.entities import Collection
from arbiter_api.infrastructure.dependencies import get_lock_registry, get_record_store
from arbiter_api.main import app
from tests.fakes import FakeRecordStore, enquiry_form

JUNE_2023 = 1686830400


@pytest.fixture
def store() -> FakeRecordStore:
    store = FakeRecordStore()
    store.load(Collection.SECTORS, [{"id": 1, "name": "Banking"}, {"id": 2, "name": "Insurance"}])
    store.load(Collection.PROVIDERS, [{"id": 1, "name": "Harbour Bank"}, {"id": 2, "name": "Northgate"}])
    store.load(Collection.ISSUES, [{"id": 1, "sector_id": 2, "code": "I-CLM", "name": "Claims"}])
    store.load(
        Collection.DECISIONS,
        [
            {
                "decision_id": n,
                "case_reference_number": f"ASF {n:03d}/2023",
                "sector_id": 2 if n > 1 else 1,
                "year_of_decision": JUNE_2023,
                "published_date": JUNE_2023,
                "published": 1,
                "court_appeal": 0,
                "provider_ids": [2, 1],
            }
            for n in (1, 2, 3, 4)
        ],
        key_field="decision_id",
    )
    return store


@pytest_asyncio.fixture
async def client(store: FakeRecordStore):
    locks = LockRegistry()
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_lock_registry] = lambda: locks
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# ── Decisions ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_decision_report_pagination(client: AsyncClient):
    response = await client.get("/api/v1/decisions", params={"sector": "2", "page": 2, "limit": 1})
    assert response.status_code == 200
    data = response.json()
    assert data["page"] == 2
    assert data["pages"] == 3
    assert list(data["decisions"]) == ["3"]
    decision = data["decisions"]["3"]
    assert decision["sector"] == "Insurance"
    assert decision["provider_names"] == "Northgate,<br/>Harbour Bank"
    assert set(data["filters"]["providers_load"]) == {"1", "2"}
    assert len(data["filters"]["years"]) == 1


@pytest.mark.asyncio
async def test_blank_filters_are_ignored(client: AsyncClient):
    response = await client.get("/api/v1/decisions", params={"sector": "", "year": ""})
    assert response.status_code == 200
    assert len(response.json()["decisions"]) == 4


@pytest.mark.asyncio
async def test_non_numeric_filter_rejected(client: AsyncClient):
    response = await client.get("/api/v1/decisions", params={"sector": "banking"})
    assert response.status_code == 400
    assert response.json()["errors"] == {"sector": "sector must be a number"}


@pytest.mark.asyncio
async def test_invalid_limit_rejected(client: AsyncClient):
    response = await client.get("/api/v1/decisions", params={"limit": 0})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_large_limit_accepted(client: AsyncClient):
    response = await client.get("/api/v1/decisions", params={"limit": 500})
    assert response.status_code == 200
    data = response.json()
    assert data["pages"] == 1
    assert len(data["decisions"]) == 4


@pytest.mark.asyncio
async def test_default_limit_read_from_settings_per_request(client: AsyncClient, monkeypatch):
    monkeypatch.setenv("DECISIONS_DEFAULT_LIMIT", "3")
    get_settings.cache_clear()
    try:
        response = await client.get("/api/v1/decisions")
    finally:
        get_settings.cache_clear()
    data = response.json()
    assert data["pages"] == 2
    assert list(data["decisions"]) == ["1", "2", "3"]


@pytest.mark.asyncio
async def test_filter_metadata(client: AsyncClient):
    options = (await client.get("/api/v1/decisions/filters")).json()
    assert [s["name"] for s in options["sectors"]] == ["Banking", "Insurance"]

    issues = (await client.get("/api/v1/decisions/issues", params={"sector_id": 2})).json()
    assert [i["code"] for i in issues] == ["I-CLM"]
    products = (await client.get("/api/v1/decisions/products", params={"sector_id": 2})).json()
    assert products == []


# ── Enquiries ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_enquiry_lifecycle(client: AsyncClient):
    preview = (await client.get("/api/v1/enquiries/next-uid")).json()["uid"]

    response = await client.post("/api/v1/enquiries", json=enquiry_form())
    assert response.status_code == 201
    uid = response.json()["uid"]
    assert uid == preview

    enquiry = (await client.get(f"/api/v1/enquiries/{uid}")).json()
    assert enquiry["email"] == "maria@example.com"
    assert enquiry["status"] == "open"

    response = await client.post(
        f"/api/v1/enquiries/{uid}/files", json={"filename": "statement.pdf", "filesize": 10}
    )
    assert response.status_code == 201
    files = (await client.get(f"/api/v1/enquiries/{uid}/files")).json()
    assert [f["filename"] for f in files] == ["statement.pdf"]


@pytest.mark.asyncio
async def test_enquiry_form_cannot_set_its_own_uid(client: AsyncClient):
    response = await client.post("/api/v1/enquiries", json=enquiry_form(uid="HIJACK", id=1))
    uid = response.json()["uid"]
    assert uid != "HIJACK"

    enquiry = (await client.get(f"/api/v1/enquiries/{uid}")).json()
    assert enquiry["uid"] == uid
    assert (await client.get("/api/v1/enquiries/HIJACK")).status_code == 404


@pytest.mark.asyncio
async def test_invalid_enquiry_returns_field_errors(client: AsyncClient):
    response = await client.post("/api/v1/enquiries", json=enquiry_form(email="nope", sector="4"))
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["errors"] == {
        "email": "Please enter a valid email",
        "sector_other": "Please specify sector",
    }


@pytest.mark.asyncio
async def test_unknown_enquiry_returns_404(client: AsyncClient):
    assert (await client.get("/api/v1/enquiries/ENQ_2024_9999")).status_code == 404
    response = await client.post("/api/v1/enquiries/ENQ_2024_9999/files", json={"filename": "a"})
    assert response.status_code == 404


# ── Complaints ───────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_complaint_workflow(client: AsyncClient):
    response = await client.post(
        "/api/v1/complaints/init", json={"user_id": 7, "complainant_type_id": 1}
    )
    assert response.status_code == 201
    complaint_id = response.json()["id"]

    await client.patch(f"/api/v1/complaints/{complaint_id}/section/6", json={"first_name": "A"})
    response = await client.patch(
        f"/api/v1/complaints/{complaint_id}/section/2", json={"first_name": "B"}
    )
    assert response.status_code == 200
    complaint = response.json()
    assert complaint["complaint_section"] == 6
    assert complaint["assistant"] == {"first_name": "A"}
    assert complaint["individual"] == {"first_name": "B"}

    response = await client.post(f"/api/v1/complaints/{complaint_id}/submit")
    assert response.status_code == 200
    reference = response.json()["reference"]
    assert reference.startswith("ASF 001/")

    again = await client.post(f"/api/v1/complaints/{complaint_id}/submit")
    assert again.json()["reference"] == reference

    late = await client.patch(f"/api/v1/complaints/{complaint_id}/section/2", json={"x": 1})
    assert late.status_code == 409

    mine = (await client.get("/api/v1/users/7/complaints")).json()
    assert [c["complaint_uid"] for c in mine] == [reference]


@pytest.mark.asyncio
async def test_complaint_errors(client: AsyncClient):
    response = await client.post("/api/v1/complaints/init", json={"user_id": 7})
    assert response.status_code == 400
    assert response.json()["errors"] == {"complainant_type_id": "Type is required"}

    response = await client.patch("/api/v1/complaints/1/section/3", json={})
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid section"}

    assert (await client.get("/api/v1/complaints/404")).status_code == 404
    assert (await client.post("/api/v1/complaints/404/submit")).status_code == 404


# ── Directors ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_director_crud(client: AsyncClient):
    complaint = (
        await client.post("/api/v1/complaints/init", json={"complainant_type_id": 2})
    ).json()

    response = await client.post(
        "/api/v1/directors",
        json={"complaint_id": complaint["id"], "first_name": "Anna", "last_name": "Vella"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["redirect_section"] == 5
    director_id = body["director_id"]

    listed = (
        await client.get("/api/v1/directors", params={"complaint_id": complaint["id"]})
    ).json()
    assert [d["first_name"] for d in listed] == ["Anna"]

    assert (await client.delete(f"/api/v1/directors/{director_id}")).status_code == 200
    assert (await client.get(f"/api/v1/directors/{director_id}")).status_code == 404


@pytest.mark.asyncio
async def test_director_validation(client: AsyncClient):
    response = await client.post("/api/v1/directors", json={"first_name": "Anna"})
    assert response.status_code == 400
    assert set(response.json()["errors"]) == {"session", "last_name"}

    response = await client.post(
        "/api/v1/directors", json={"complaint_id": 99, "first_name": "A", "last_name": "B"}
    )
    assert response.status_code == 404

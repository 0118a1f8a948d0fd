"""Unit tests for the YAML SeedLoader."""

from pathlib import Path

import pytest

from arbiter_api.application.services import SeedLoader
from arbiter_api.domain.entities import Collection
from tests.fakes import FakeRecordStore

SEED = """
sectors:
  - {id: 1, name: Banking}
  - {id: 2, name: Insurance}
decisions:
  - {decision_id: 10, case_reference_number: "ASF 010/2023", published: 1}
  - {case_reference_number: "no key"}
"""


@pytest.fixture
def seed_file(tmp_path: Path) -> Path:
    path = tmp_path / "seed.yaml"
    path.write_text(SEED, encoding="utf-8")
    return path


@pytest.mark.asyncio
async def test_load_keys_records_per_collection(seed_file: Path):
    store = FakeRecordStore()
    total = await SeedLoader(seed_file, store).load()

    assert total == 3
    assert (await store.get(Collection.SECTORS, 2))["name"] == "Insurance"
    assert (await store.get(Collection.DECISIONS, 10))["case_reference_number"] == "ASF 010/2023"


@pytest.mark.asyncio
async def test_populated_collections_are_left_alone(seed_file: Path):
    store = FakeRecordStore()
    store.load(Collection.SECTORS, [{"id": 1, "name": "Edited"}])

    total = await SeedLoader(seed_file, store).load()

    assert total == 1
    assert await store.all(Collection.SECTORS) == [{"id": 1, "name": "Edited"}]


@pytest.mark.asyncio
async def test_missing_seed_file_is_skipped(tmp_path: Path):
    assert await SeedLoader(tmp_path / "absent.yaml", FakeRecordStore()).load() == 0


@pytest.mark.asyncio
async def test_bundled_seed_file_loads():
    bundled = Path(__file__).resolve().parents[2] / "data" / "seed.yaml"
    store = FakeRecordStore()
    assert await SeedLoader(bundled, store).load() > 0
    assert len(await store.all(Collection.DECISIONS)) == 4

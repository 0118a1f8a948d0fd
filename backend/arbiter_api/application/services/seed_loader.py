"""Seed loader — loads reference data from a YAML file into the record store.

Executed once at application startup via the FastAPI lifespan. The file
maps collection names to lists of records:

    sectors:
      - {id: 1, name: Banking}
    decisions:
      - {decision_id: 10, case_reference_number: "ASF 010/2023", ...}

A collection is only loaded while it is still empty, so data written
through the API is never overwritten by a restart.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from arbiter_api.application.interfaces import RecordStore
from arbiter_api.domain.entities import Collection

logger = logging.getLogger(__name__)

# Field used as the record key, per collection.
_KEY_FIELDS = {
    Collection.DECISIONS: "decision_id",
    Collection.ENQUIRIES: "uid",
}
_DEFAULT_KEY_FIELD = "id"


class SeedLoader:
    """Loads a YAML seed file into empty collections."""

    def __init__(self, seed_file: str | Path, store: RecordStore):
        self._seed_file = Path(seed_file)
        self._store = store

    async def load(self) -> int:
        """Returns the number of records written."""
        if not self._seed_file.exists():
            logger.info("No seed file at %s — skipping", self._seed_file)
            return 0

        document = yaml.safe_load(self._seed_file.read_text("utf-8")) or {}
        if not isinstance(document, dict):
            raise ValueError(f"Seed file {self._seed_file} must map collection names to lists")

        total = 0
        for collection, records in document.items():
            total += await self._load_collection(str(collection), records or [])
        logger.info("Seeding complete: %d records from %s", total, self._seed_file)
        return total

    async def _load_collection(self, collection: str, records: list[Any]) -> int:
        if await self._store.all(collection):
            logger.debug("Collection '%s' already populated", collection)
            return 0

        key_field = _KEY_FIELDS.get(collection, _DEFAULT_KEY_FIELD)
        count = 0
        for record in records:
            if not isinstance(record, dict) or record.get(key_field) is None:
                logger.warning(
                    "Skipping %s seed entry without '%s': %r", collection, key_field, record
                )
                continue
            await self._store.append(collection, record[key_field], record)
            count += 1

        logger.info("Seeded %d records into '%s'", count, collection)
        return count

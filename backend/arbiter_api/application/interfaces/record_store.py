"""Abstract record store interface (port) — named collections of JSON records."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

Record = dict[str, Any]
RecordMutator = Callable[[Record], Record]


def record_matches(record: Record, criteria: dict[str, Any]) -> bool:
    """True when every criterion equals the record's value for that field."""
    return all(record.get(name) == value for name, value in criteria.items())


class RecordStore(ABC):
    """Port for record persistence — implemented in the infrastructure layer.

    Records are plain mappings grouped into named collections. Each record
    has a key unique within its collection. Listing operations return
    records in insertion order.
    """

    @abstractmethod
    async def get(self, collection: str, key: int | str) -> Record | None:
        """Retrieve a single record by its key."""
        ...

    @abstractmethod
    async def all(self, collection: str) -> list[Record]:
        """Retrieve every record of a collection."""
        ...

    @abstractmethod
    async def snapshot(self, *collections: str) -> dict[str, list[Record]]:
        """Read several collections at once from a single consistent view."""
        ...

    @abstractmethod
    async def append(self, collection: str, key: int | str, record: Record) -> Record:
        """Persist a new record. Raises DuplicateEntityError if the key is taken."""
        ...

    @abstractmethod
    async def update(
        self, collection: str, key: int | str, mutate: RecordMutator
    ) -> Record | None:
        """Atomically read, transform and write back one record.

        ``mutate`` receives a private copy of the stored record and returns
        the new version. Exceptions raised by ``mutate`` abort the write.
        Returns None when the key does not exist.
        """
        ...

    @abstractmethod
    async def remove(self, collection: str, key: int | str) -> bool:
        """Delete a record. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def increment_sequence(self, name: str) -> int | None:
        """Atomically add one to a named counter and return the new value.

        Returns None when the counter has never been created.
        """
        ...

    @abstractmethod
    async def create_sequence(self, name: str, value: int) -> int:
        """Create a counter holding ``value`` and return it.

        If another writer created the counter first, increments the existing
        counter instead and returns that value.
        """
        ...

    @abstractmethod
    async def peek_sequence(self, name: str) -> int | None:
        """Current value of a counter without changing it."""
        ...

    # ── Derived operations ───────────────────────────────────────────

    async def filter(self, collection: str, **criteria: Any) -> list[Record]:
        """Records whose fields equal every given criterion."""
        return [r for r in await self.all(collection) if record_matches(r, criteria)]

    async def find(self, collection: str, **criteria: Any) -> Record | None:
        """First record whose fields equal every given criterion."""
        for record in await self.all(collection):
            if record_matches(record, criteria):
                return record
        return None

    async def merge(
        self, collection: str, key: int | str, fields: Record
    ) -> Record | None:
        """Shallow-merge ``fields`` into a record (top-level keys overwrite)."""
        return await self.update(collection, key, lambda record: {**record, **fields})

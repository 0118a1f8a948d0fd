"""Reference resolver — indexed foreign-key lookups over a snapshot of collections."""

from typing import Any

from arbiter_api.application.interfaces import Record


def as_int(value: Any) -> int | None:
    """Coerce a stored or submitted value to int; None when not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            as_float = float(value)
        except (TypeError, ValueError):
            return None
        return int(as_float) if as_float.is_integer() else None


def normalize_key(value: Any) -> str | None:
    """Canonical form of a key so that ``2``, ``2.0`` and ``"2"`` compare equal."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


class ReferenceResolver:
    """Resolves foreign keys against in-memory collections.

    Indexes are built lazily, once per (collection, fields) pair. When
    several records share a key, the first one in collection order wins.
    A miss is never an error: lookups return ``None``.
    """

    def __init__(self, collections: dict[str, list[Record]]):
        self._collections = collections
        self._indexes: dict[tuple[str, tuple[str, ...]], dict[tuple, Record]] = {}

    def resolve(self, collection: str, key: Any) -> Record | None:
        """Record of ``collection`` whose ``id`` equals ``key``."""
        return self.find(collection, id=key)

    def find(self, collection: str, **criteria: Any) -> Record | None:
        """First record whose fields equal every criterion (after key normalization)."""
        fields = tuple(sorted(criteria))
        lookup = tuple(normalize_key(criteria[f]) for f in fields)
        if any(part is None for part in lookup):
            return None
        return self._index(collection, fields).get(lookup)

    def _index(self, collection: str, fields: tuple[str, ...]) -> dict[tuple, Record]:
        index = self._indexes.get((collection, fields))
        if index is None:
            index = {}
            for record in self._collections.get(collection, []):
                key = tuple(normalize_key(record.get(f)) for f in fields)
                index.setdefault(key, record)
            self._indexes[(collection, fields)] = index
        return index

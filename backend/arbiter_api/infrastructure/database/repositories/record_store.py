"""Concrete RecordStore implementation backed by SQLAlchemy."""

import copy
import logging
from collections import defaultdict
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from arbiter_api.application.interfaces import Record, RecordMutator, RecordStore
from arbiter_api.domain.exceptions import DuplicateEntityError
from arbiter_api.infrastructure.database.models import RecordModel, RecordSequenceModel

logger = logging.getLogger(__name__)


class SQLAlchemyRecordStore(RecordStore):
    """Implements the RecordStore port on the 'records' and 'record_sequences' tables.

    Every operation runs in its own short transaction so that a write is
    committed before any in-process lock guarding it is released. Row locks
    (``SELECT ... FOR UPDATE``) make read-modify-write atomic across
    processes on databases that support them.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @staticmethod
    def _key(key: int | str) -> str:
        return str(key)

    def _by_key(self, collection: str, key: int | str):
        return select(RecordModel).where(
            RecordModel.collection == collection,
            RecordModel.record_key == self._key(key),
        )

    async def get(self, collection: str, key: int | str) -> Record | None:
        async with self._session_factory() as session:
            result = await session.execute(self._by_key(collection, key))
            model = result.scalar_one_or_none()
            return copy.deepcopy(model.data) if model else None

    async def all(self, collection: str) -> list[Record]:
        snapshot = await self.snapshot(collection)
        return snapshot[collection]

    async def snapshot(self, *collections: str) -> dict[str, list[Record]]:
        grouped: dict[str, list[Record]] = defaultdict(list)
        async with self._session_factory() as session, session.begin():
            stmt = (
                select(RecordModel.collection, RecordModel.data)
                .where(RecordModel.collection.in_(collections))
                .order_by(RecordModel.id)
            )
            result = await session.execute(stmt)
            for collection, data in result.all():
                grouped[collection].append(copy.deepcopy(data))
        return {name: grouped.get(name, []) for name in collections}

    async def append(self, collection: str, key: int | str, record: Record) -> Record:
        model = RecordModel(
            collection=collection,
            record_key=self._key(key),
            data=copy.deepcopy(record),
        )
        try:
            async with self._session_factory() as session, session.begin():
                session.add(model)
        except IntegrityError as exc:
            raise DuplicateEntityError(collection, "key", self._key(key)) from exc
        return copy.deepcopy(record)

    async def update(
        self, collection: str, key: int | str, mutate: RecordMutator
    ) -> Record | None:
        async with self._session_factory() as session, session.begin():
            result = await session.execute(
                self._by_key(collection, key).with_for_update()
            )
            model = result.scalar_one_or_none()
            if model is None:
                return None
            new_data = mutate(copy.deepcopy(model.data))
            model.data = new_data
            model.updated_at = datetime.now(timezone.utc)
        return copy.deepcopy(new_data)

    async def remove(self, collection: str, key: int | str) -> bool:
        async with self._session_factory() as session, session.begin():
            result = await session.execute(self._by_key(collection, key))
            model = result.scalar_one_or_none()
            if model is None:
                return False
            await session.delete(model)
        return True

    # ── Sequences ────────────────────────────────────────────────────

    async def increment_sequence(self, name: str) -> int | None:
        async with self._session_factory() as session, session.begin():
            stmt = (
                update(RecordSequenceModel)
                .where(RecordSequenceModel.name == name)
                .values(
                    value=RecordSequenceModel.value + 1,
                    updated_at=datetime.now(timezone.utc),
                )
                .returning(RecordSequenceModel.value)
            )
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def create_sequence(self, name: str, value: int) -> int:
        try:
            async with self._session_factory() as session, session.begin():
                session.add(RecordSequenceModel(name=name, value=value))
            return value
        except IntegrityError:
            logger.debug("Sequence '%s' created concurrently; incrementing instead", name)

        current = await self.increment_sequence(name)
        if current is None:
            raise RuntimeError(f"Sequence '{name}' vanished after concurrent creation")
        return current

    async def peek_sequence(self, name: str) -> int | None:
        async with self._session_factory() as session:
            result = await session.execute(
                select(RecordSequenceModel.value).where(RecordSequenceModel.name == name)
            )
            return result.scalar_one_or_none()

"""SQLAlchemy ORM models for generic collection records and their counters."""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Index, Integer, JSON, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from arbiter_api.infrastructure.database.base import Base


class RecordModel(Base):
    """ORM model — maps to the 'records' table.

    One row per record; ``data`` holds the whole record document.
    """

    __tablename__ = "records"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    collection: Mapped[str] = mapped_column(String(100), nullable=False)
    record_key: Mapped[str] = mapped_column(String(255), nullable=False)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("collection", "record_key", name="uq_records_collection_key"),
        Index("ix_records_collection", "collection"),
    )

    def __repr__(self) -> str:
        return (
            f"<RecordModel(id={self.id}, "
            f"collection='{self.collection}', key='{self.record_key}')>"
        )


class RecordSequenceModel(Base):
    """ORM model — maps to the 'record_sequences' table of named counters."""

    __tablename__ = "record_sequences"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<RecordSequenceModel(name='{self.name}', value={self.value})>"

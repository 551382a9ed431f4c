"""
Module: billing_kernel.db.base
Responsibility: Declarative bases and column conventions shared by every
    billing model: UUID keys stored as strings, money as BigInteger minor
    units, and the audit columns of TrackedBase.
Architecture position: Kernel > DB.  Imported by models/, selectors/ and
    services/; imports nothing from the kernel itself.

Invariants enforced:
    - Every row has a uuid4 primary key.
    - Money is never stored as Numeric or float.  ``money_column`` declares a
      NOT NULL BigInteger holding paise; non-negativity is enforced by each
      table's CHECK constraints.
    - Every tracked row records who created it and who last changed it.
"""

from datetime import date, datetime
from typing import Any, ClassVar
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import BigInteger, Date, DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class UUIDString(TypeDecorator):
    """UUID persisted as its 36-character string form (PostgreSQL and SQLite alike)."""

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return None if value is None else str(value)

    def process_result_value(self, value, dialect):
        return None if value is None else PyUUID(value)


def money_column(default: int | None = None, **kwargs: Any) -> Mapped[int]:
    """A NOT NULL BigInteger column of minor units, optionally defaulted."""
    if default is not None:
        kwargs["default"] = default
    return mapped_column(BigInteger, nullable=False, **kwargs)


class Base(DeclarativeBase):
    """
    Declarative base for all billing models.

    ``int`` annotations map to BigInteger so counters and amounts share one
    width; dates and timezone-aware datetimes map to their native types.
    """

    type_annotation_map: ClassVar[dict] = {
        datetime: DateTime(timezone=True),
        date: Date(),
        PyUUID: UUIDString(),
        int: BigInteger,
    }

    id: Mapped[PyUUID] = mapped_column(UUIDString(), primary_key=True, default=uuid4)


class TrackedBase(Base):
    """
    Abstract base for operator-maintained records.

    ``created_at`` / ``updated_at`` come from the database clock;
    ``created_by_id`` is mandatory and ``touch()`` stamps the last editor.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
    created_by_id: Mapped[PyUUID] = mapped_column(nullable=False)
    updated_by_id: Mapped[PyUUID | None] = mapped_column(nullable=True)

    def touch(self, actor_id: PyUUID) -> None:
        """Record ``actor_id`` as the last editor of this row."""
        self.updated_by_id = actor_id


UUID = PyUUID

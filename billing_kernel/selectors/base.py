"""
Module: billing_kernel.selectors.base
Responsibility: Base class for read-only query selectors.
Architecture position: Kernel > Selectors.  May import from db/, models/
    and domain/; never from services/.

Selectors never add, delete, flush or commit.  They return DTOs or plain
integers, not ORM instances.  They share the caller's session, so a
balance read inside a posting sees the rows that posting has locked.
"""

from abc import ABC
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from billing_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseSelector(ABC, Generic[ModelType]):
    """Read-only access to one aggregate."""

    def __init__(self, session: Session):
        self.session = session

    def _sum_minor(self, column: InstrumentedAttribute, *criteria: Any) -> int:
        """Sum of a minor-unit column over the matching rows; 0 when none match."""
        stmt = select(func.coalesce(func.sum(column), 0)).where(*criteria)
        return int(self.session.scalar(stmt))

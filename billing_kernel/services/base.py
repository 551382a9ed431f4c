"""
BaseService -- common constructor and lookup helper for kernel services.

Services receive the caller's Session and flush; they never commit or roll
back.  ``session_scope`` (or the test harness) owns the transaction, which
is what makes a ledger posting and its invoice / vendor side effects
all-or-nothing.
"""

from abc import ABC
from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from billing_kernel.db.base import Base
from billing_kernel.domain.clock import Clock, SystemClock
from billing_kernel.exceptions import BillingError

ModelType = TypeVar("ModelType", bound=Base)
RowType = TypeVar("RowType", bound=Base)


class BaseService(ABC, Generic[ModelType]):
    """
    Abstract base for services.

    Time is read only from the injected Clock.  Read-only queries belong in
    ``billing_kernel/selectors/``.
    """

    def __init__(self, session: Session, clock: Clock | None = None):
        self.session = session
        self._clock = clock or SystemClock()

    def _require(
        self,
        model: type[RowType],
        entity_id: UUID,
        not_found: type[BillingError],
        *,
        lock: bool = False,
    ) -> RowType:
        """
        Load a row by id or raise ``not_found(str(entity_id))``.

        With ``lock=True`` the row is read with ``SELECT ... FOR UPDATE OF``
        its own table, serializing writers on it until the transaction ends.
        """
        if lock:
            row = self.session.execute(
                select(model)
                .where(model.id == entity_id)
                .with_for_update(of=model)
                .execution_options(populate_existing=True)
            ).scalar_one_or_none()
        else:
            row = self.session.get(model, entity_id)
        if row is None:
            raise not_found(str(entity_id))
        return row

"""
SequenceService -- gap-free document numbers from locked counter rows.

Responsibility:
    Hands out strictly increasing numbers per named sequence (invoice
    numbers today).  The counter row is read with ``SELECT ... FOR UPDATE``
    so two concurrent invoice creations never receive the same number; a
    max-plus-one over the invoices table is never used.

    A sequence that does not exist yet is created on first use.  Its first
    value continues after ``start_after()`` when given, which lets invoice
    numbering pick up after rows imported from an older system.

Invariants enforced:
    - Values are > 0 and increase by exactly one per allocation.
    - An allocation becomes visible when the caller commits; a rollback
      hands the number out again.

Failure modes:
    - IntegrityError on a lost counter-creation race is absorbed inside a
      savepoint and the winner's row is re-read under lock.
"""

from collections.abc import Callable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from billing_kernel.logging_config import get_logger
from billing_kernel.models.sequence import SequenceCounter

logger = get_logger("services.sequence")


class SequenceService:
    """
    Allocate sequence values inside the caller's transaction.

    Usage:
        number = SequenceService(session).next_value(SequenceService.INVOICE)
    """

    INVOICE = "invoice"

    def __init__(self, session: Session):
        self._session = session

    def _locked_counter(self, name: str) -> SequenceCounter | None:
        return self._session.execute(
            select(SequenceCounter)
            .where(SequenceCounter.name == name)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def _create_counter(self, name: str, first_value: int) -> SequenceCounter | None:
        savepoint = self._session.begin_nested()
        try:
            counter = SequenceCounter(name=name, current_value=first_value)
            self._session.add(counter)
            self._session.flush()
        except IntegrityError:
            savepoint.rollback()
            logger.debug("sequence_counter_race_retry", extra={"sequence_name": name})
            return None
        savepoint.commit()
        return counter

    def next_value(
        self,
        name: str,
        start_after: Callable[[], int | None] | None = None,
    ) -> int:
        """
        Lock ``name``, advance it by one and return the new value.

        ``start_after`` is consulted only when the counter is created; the
        first value is one past what it returns (or 1 when it returns None).
        """
        counter = self._locked_counter(name)

        if counter is None:
            base = (start_after() if start_after else None) or 0
            counter = self._create_counter(name, base + 1)
            if counter is not None:
                logger.info(
                    "sequence_created",
                    extra={"sequence_name": name, "value": counter.current_value},
                )
                return counter.current_value
            counter = self._locked_counter(name)
            if counter is None:
                raise RuntimeError(f"Sequence counter {name!r} vanished after a creation race")

        counter.current_value += 1
        self._session.flush()
        logger.debug(
            "sequence_allocated",
            extra={"sequence_name": name, "value": counter.current_value},
        )
        return counter.current_value

    def current_value(self, name: str) -> int | None:
        """Last allocated value, or None if the sequence was never used."""
        return self._session.scalar(
            select(SequenceCounter.current_value).where(SequenceCounter.name == name)
        )

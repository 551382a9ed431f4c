"""
Module: billing_kernel.selectors.ledger_selector
Responsibility: Read-only queries over posted ledger entries, keyed by the
    target they were reconciled against.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - No stored balances.  Salary cycles and invoice receipts are derived
      from LedgerEntry rows at query time.
    - Date windows are half-open: start <= entry_date < end.
"""

from datetime import date
from uuid import UUID

from sqlalchemy import select

from billing_kernel.domain.dtos import (
    EntryType,
    LedgerEntryInfo,
    LedgerEntryRecord,
    TargetType,
)
from billing_kernel.models.ledger import LedgerEntry
from billing_kernel.selectors.base import BaseSelector


def _to_record(entry: LedgerEntry) -> LedgerEntryRecord:
    return LedgerEntryRecord(
        entry_type=EntryType(entry.entry_type),
        amount=entry.amount,
        entry_date=entry.entry_date,
        reason=entry.reason,
        counterparty=entry.counterparty,
        counterparty_id=entry.target_id,
    )


def to_entry_info(entry: LedgerEntry) -> LedgerEntryInfo:
    return LedgerEntryInfo(
        id=entry.id,
        entry_type=EntryType(entry.entry_type),
        amount=entry.amount,
        currency=entry.currency,
        entry_date=entry.entry_date,
        reason=entry.reason,
        counterparty=entry.counterparty,
        target_type=TargetType(entry.target_type) if entry.target_type else None,
        target_id=entry.target_id,
    )


class LedgerSelector(BaseSelector[LedgerEntry]):
    """
    Selector for ledger entries.

    Guarantees:
        - Results are ordered by entry_date, then created_at.
        - Amounts are minor-unit integers.
    """

    def entries_for_target(
        self,
        target_type: TargetType,
        target_id: UUID,
        start: date | None = None,
        end: date | None = None,
        entry_type: EntryType | None = None,
    ) -> list[LedgerEntryRecord]:
        """Entries reconciled against one target, optionally within [start, end)."""
        stmt = select(LedgerEntry).where(
            LedgerEntry.target_type == target_type.value,
            LedgerEntry.target_id == target_id,
        )
        if start is not None:
            stmt = stmt.where(LedgerEntry.entry_date >= start)
        if end is not None:
            stmt = stmt.where(LedgerEntry.entry_date < end)
        if entry_type is not None:
            stmt = stmt.where(LedgerEntry.entry_type == entry_type.value)
        stmt = stmt.order_by(LedgerEntry.entry_date, LedgerEntry.created_at)

        return [_to_record(entry) for entry in self.session.scalars(stmt)]

    def employee_debits(
        self,
        employee_id: UUID,
        start: date | None = None,
        end: date | None = None,
    ) -> list[LedgerEntryRecord]:
        """Salary payments made to one employee."""
        return self.entries_for_target(
            TargetType.EMPLOYEE,
            employee_id,
            start=start,
            end=end,
            entry_type=EntryType.DEBIT,
        )

    def total_for_target(
        self,
        target_type: TargetType,
        target_id: UUID,
        entry_type: EntryType,
    ) -> int:
        return self._sum_minor(
            LedgerEntry.amount,
            LedgerEntry.target_type == target_type.value,
            LedgerEntry.target_id == target_id,
            LedgerEntry.entry_type == entry_type.value,
        )

    def get_entry(self, entry_id: UUID) -> LedgerEntryInfo | None:
        entry = self.session.get(LedgerEntry, entry_id)
        if entry is None:
            return None
        return to_entry_info(entry)

"""
Obligation Cycle Tracker - Salary due/paid status over fixed-length cycles.

Pure functions with no I/O.  "Now" is always an explicit argument; this
module never reads the wall clock.

Cycle model:
    - Anchor: the employee's joining date (immutable).
    - Windows are half-open: [cycle_start, cycle_end), each
      ``cycle_length_days`` long (31 by default).
    - The open cycle is the unique window containing ``as_of``; when
      ``as_of`` is before the anchor the first window is open.
    - A payment dated exactly on ``cycle_end`` belongs to the next cycle.
    - Payments dated before the anchor never match any cycle.

Cycle state is derived on every read and never persisted, so backdated or
edited ledger entries are reflected immediately.

Usage:
    cycle = compute_obligation_cycle(
        joining_date=date(2025, 1, 1),
        monthly_salary=2_000_000,
        payments=[LedgerEntryRecord(EntryType.DEBIT, 1_500_000, date(2025, 1, 10), "salary")],
        as_of=date(2025, 1, 15),
    )
    cycle.status            # CycleStatus.PARTIAL
    cycle.due_in_cycle      # 500_000
    cycle.cycle_end         # date(2025, 2, 1)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable

from billing_engines.tracer import traced_engine
from billing_kernel.domain.dtos import CycleStatus, EntryType, LedgerEntryRecord
from billing_kernel.domain.money import validate_minor_amount

DEFAULT_CYCLE_LENGTH_DAYS = 31


@dataclass(frozen=True)
class CycleWindow:
    """Half-open date window [start, end)."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day < self.end


@dataclass(frozen=True)
class ObligationCycle:
    """
    The open cycle for one employee.

    Guarantees:
        - due_in_cycle >= 0
        - status == PAID  <=>  due_in_cycle == 0
    """

    cycle_start: date
    cycle_end: date
    paid_in_cycle: int
    due_in_cycle: int
    status: CycleStatus

    @property
    def next_due_date(self) -> date:
        return self.cycle_end


def _as_date(value: date | datetime) -> date:
    # datetime is a subclass of date; normalize so comparisons stay date-to-date
    if isinstance(value, datetime):
        return value.date()
    return value


def current_cycle_window(
    joining_date: date | datetime,
    as_of: date | datetime,
    cycle_length_days: int = DEFAULT_CYCLE_LENGTH_DAYS,
) -> CycleWindow:
    """
    Locate the open cycle window containing ``as_of``.

    Advances one cycle at a time while ``cycle_end <= as_of``, which
    terminates after (elapsed days / cycle length) steps.
    """
    if cycle_length_days <= 0:
        raise ValueError(f"cycle_length_days must be positive, got {cycle_length_days}")

    anchor = _as_date(joining_date)
    now = _as_date(as_of)
    length = timedelta(days=cycle_length_days)

    start = anchor
    end = start + length
    while end <= now:
        start = end
        end = start + length
    return CycleWindow(start=start, end=end)


def sum_payments_in_window(
    payments: Iterable[LedgerEntryRecord],
    window: CycleWindow,
) -> int:
    """Sum DEBIT entries dated inside ``window``. CREDIT entries are ignored."""
    return sum(
        entry.amount
        for entry in payments
        if entry.entry_type == EntryType.DEBIT and window.contains(_as_date(entry.entry_date))
    )


def cycle_status_for(paid_in_cycle: int, due_in_cycle: int) -> CycleStatus:
    if due_in_cycle == 0:
        return CycleStatus.PAID
    if paid_in_cycle > 0:
        return CycleStatus.PARTIAL
    return CycleStatus.DUE


@traced_engine(
    "obligation_cycle",
    "1.0",
    fingerprint_fields=("joining_date", "monthly_salary", "as_of", "cycle_length_days"),
)
def compute_obligation_cycle(
    joining_date: date | datetime,
    monthly_salary: int,
    payments: Iterable[LedgerEntryRecord],
    as_of: date | datetime,
    cycle_length_days: int = DEFAULT_CYCLE_LENGTH_DAYS,
) -> ObligationCycle:
    """
    Compute the open cycle and how much of it is settled.

    ``payments`` are the employee's ledger entries; callers may pass a
    pre-filtered list or everything for the employee, the window filter is
    applied here either way.
    """
    salary = validate_minor_amount(monthly_salary, field="monthly_salary")
    window = current_cycle_window(joining_date, as_of, cycle_length_days)

    paid = sum_payments_in_window(payments, window)
    due = max(0, salary - paid)

    return ObligationCycle(
        cycle_start=window.start,
        cycle_end=window.end,
        paid_in_cycle=paid,
        due_in_cycle=due,
        status=cycle_status_for(paid, due),
    )

"""
Tests for the obligation cycle tracker.

Verifies:
- Window location relative to the joining date
- Half-open windows: a payment on cycle_end counts toward the next cycle
- PAID / PARTIAL / DUE classification
"""

from datetime import date, datetime, timedelta, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from billing_engines.obligation_cycle import (
    CycleWindow,
    compute_obligation_cycle,
    current_cycle_window,
    cycle_status_for,
    sum_payments_in_window,
)
from billing_kernel.domain.dtos import CycleStatus, EntryType, LedgerEntryRecord
from billing_kernel.exceptions import InvalidAmountError

JOINED = date(2025, 1, 1)
SALARY = 2_000_000


def debit(amount: int, on: date) -> LedgerEntryRecord:
    return LedgerEntryRecord(EntryType.DEBIT, amount, on, "salary")


class TestCurrentCycleWindow:
    def test_first_cycle(self):
        window = current_cycle_window(JOINED, date(2025, 1, 15))
        assert window == CycleWindow(date(2025, 1, 1), date(2025, 2, 1))

    def test_on_cycle_end_moves_to_next(self):
        window = current_cycle_window(JOINED, date(2025, 2, 1))
        assert window.start == date(2025, 2, 1)
        assert window.end == date(2025, 3, 4)

    def test_day_before_cycle_end_stays(self):
        window = current_cycle_window(JOINED, date(2025, 1, 31))
        assert window.start == JOINED

    def test_datetime_now_is_normalized(self):
        window = current_cycle_window(JOINED, datetime(2025, 2, 1, 23, 59, tzinfo=timezone.utc))
        assert window.start == date(2025, 2, 1)

    def test_now_before_joining_uses_first_window(self):
        window = current_cycle_window(JOINED, date(2024, 12, 1))
        assert window.start == JOINED

    def test_custom_length(self):
        window = current_cycle_window(JOINED, date(2025, 1, 10), cycle_length_days=7)
        assert window == CycleWindow(date(2025, 1, 8), date(2025, 1, 15))

    def test_non_positive_length_rejected(self):
        with pytest.raises(ValueError):
            current_cycle_window(JOINED, date(2025, 1, 10), cycle_length_days=0)

    @given(
        st.dates(min_value=date(2000, 1, 1), max_value=date(2030, 1, 1)),
        st.integers(min_value=0, max_value=3000),
    )
    def test_window_contains_now(self, joined, offset):
        now = joined + timedelta(days=offset)
        window = current_cycle_window(joined, now)
        assert window.start <= now < window.end
        assert (window.end - window.start).days == 31
        assert (window.start - joined).days % 31 == 0


class TestComputeObligationCycle:
    def test_partial_payment(self):
        """Salary 20000.00, 15000.00 paid on 2025-01-10 -> PARTIAL, 5000.00 due."""
        cycle = compute_obligation_cycle(
            JOINED, SALARY, [debit(1_500_000, date(2025, 1, 10))], date(2025, 1, 15)
        )
        assert cycle.status == CycleStatus.PARTIAL
        assert cycle.paid_in_cycle == 1_500_000
        assert cycle.due_in_cycle == 500_000
        assert cycle.next_due_date == date(2025, 2, 1)
        assert cycle.cycle_start == JOINED

    def test_no_payments_is_due(self):
        cycle = compute_obligation_cycle(JOINED, SALARY, [], date(2025, 1, 15))
        assert cycle.status == CycleStatus.DUE
        assert cycle.due_in_cycle == SALARY

    def test_fully_paid(self):
        cycle = compute_obligation_cycle(
            JOINED, SALARY, [debit(SALARY, date(2025, 1, 2))], date(2025, 1, 15)
        )
        assert cycle.status == CycleStatus.PAID
        assert cycle.due_in_cycle == 0

    def test_payment_on_cycle_end_counts_toward_next_cycle(self):
        payments = [debit(1_000_000, date(2025, 2, 1))]

        first = compute_obligation_cycle(JOINED, SALARY, payments, date(2025, 1, 31))
        assert first.paid_in_cycle == 0

        second = compute_obligation_cycle(JOINED, SALARY, payments, date(2025, 2, 1))
        assert second.paid_in_cycle == 1_000_000
        assert second.status == CycleStatus.PARTIAL

    def test_previous_cycle_payments_ignored(self):
        payments = [debit(SALARY, date(2025, 1, 5))]
        cycle = compute_obligation_cycle(JOINED, SALARY, payments, date(2025, 2, 10))
        assert cycle.status == CycleStatus.DUE
        assert cycle.due_in_cycle == SALARY

    def test_credits_ignored(self):
        credit = LedgerEntryRecord(EntryType.CREDIT, 500_000, date(2025, 1, 5), "refund")
        cycle = compute_obligation_cycle(JOINED, SALARY, [credit], date(2025, 1, 15))
        assert cycle.paid_in_cycle == 0

    def test_zero_salary_is_paid(self):
        cycle = compute_obligation_cycle(JOINED, 0, [], date(2025, 1, 15))
        assert cycle.status == CycleStatus.PAID

    def test_negative_salary_rejected(self):
        with pytest.raises(InvalidAmountError):
            compute_obligation_cycle(JOINED, -1, [], date(2025, 1, 15))


class TestHelpers:
    def test_sum_payments_in_window(self):
        window = CycleWindow(date(2025, 1, 1), date(2025, 2, 1))
        payments = [
            debit(100, date(2024, 12, 31)),
            debit(200, date(2025, 1, 1)),
            debit(300, date(2025, 1, 31)),
            debit(400, date(2025, 2, 1)),
        ]
        assert sum_payments_in_window(payments, window) == 500

    @pytest.mark.parametrize(
        "paid, due, expected",
        [
            (0, 0, CycleStatus.PAID),
            (100, 0, CycleStatus.PAID),
            (100, 50, CycleStatus.PARTIAL),
            (0, 50, CycleStatus.DUE),
        ],
    )
    def test_cycle_status_for(self, paid, due, expected):
        assert cycle_status_for(paid, due) == expected

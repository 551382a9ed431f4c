"""
Ledger Reconciliation Guard - Reject postings that overdraw their target.

Pure functions with no I/O.  Each guard takes the current balance inputs
plus the proposed amount and either returns the balance that remains after
the posting or raises OverpaymentError carrying the computed limit.

    CREDIT -> invoice   limit = total - paid_amount
    DEBIT  -> vendor    limit = total_purchases - total_payments
    DEBIT  -> employee  limit = due_in_cycle of the open obligation cycle

An amount equal to the limit is accepted; anything above is rejected.

Storage precondition:
    The guard evaluates a snapshot.  Two concurrent postings against the
    same invoice, vendor or employee can each pass on their own and jointly
    overdraw.  Callers MUST read the inputs and write the posting inside a
    single transaction that serializes postings per target (the kernel's
    LedgerPostingService locks the target row with SELECT ... FOR UPDATE).
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from billing_engines.obligation_cycle import ObligationCycle
from billing_kernel.domain.dtos import TargetType
from billing_kernel.domain.money import validate_minor_amount, validate_positive_minor_amount
from billing_kernel.exceptions import OverpaymentError


@dataclass(frozen=True)
class GuardResult:
    """Outcome of an accepted posting check."""

    target_type: TargetType
    limit: int
    amount: int

    @property
    def remaining_after(self) -> int:
        return self.limit - self.amount


def _check(
    target_type: TargetType,
    limit: int,
    amount: int,
    target_id: UUID | str | None,
) -> GuardResult:
    requested = validate_positive_minor_amount(amount)
    if requested > limit:
        raise OverpaymentError(
            target_type=target_type.value,
            limit=max(limit, 0),
            requested=requested,
            target_id=str(target_id) if target_id is not None else None,
        )
    return GuardResult(target_type=target_type, limit=limit, amount=requested)


def remaining_invoice_balance(total: int, paid_amount: int) -> int:
    return validate_minor_amount(total, "total") - validate_minor_amount(paid_amount, "paid_amount")


def vendor_balance(total_purchases: int, total_payments: int) -> int:
    return validate_minor_amount(total_purchases, "total_purchases") - validate_minor_amount(
        total_payments, "total_payments"
    )


def guard_invoice_credit(
    total: int,
    paid_amount: int,
    amount: int,
    invoice_id: UUID | str | None = None,
) -> GuardResult:
    """Reject a CREDIT larger than the invoice's remaining balance."""
    return _check(
        TargetType.INVOICE,
        remaining_invoice_balance(total, paid_amount),
        amount,
        invoice_id,
    )


def guard_vendor_debit(
    total_purchases: int,
    total_payments: int,
    amount: int,
    vendor_id: UUID | str | None = None,
) -> GuardResult:
    """Reject a DEBIT larger than what is still owed to the vendor."""
    return _check(
        TargetType.VENDOR,
        vendor_balance(total_purchases, total_payments),
        amount,
        vendor_id,
    )


def guard_employee_debit(
    cycle: ObligationCycle,
    amount: int,
    employee_id: UUID | str | None = None,
) -> GuardResult:
    """Reject a DEBIT larger than the employee's due amount in the open cycle."""
    return _check(TargetType.EMPLOYEE, cycle.due_in_cycle, amount, employee_id)

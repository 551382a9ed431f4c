"""
LedgerPostingService -- guarded cash postings against invoices, vendors
and employee salaries.

Responsibility:
    The single write path for ledger entries.  Converts the major-unit
    input to minor units, locks the target row, runs the matching
    reconciliation guard and only then writes the entry together with its
    dependent rows:

        CREDIT + invoice   -> invoice.paid_amount / status updated
        DEBIT  + vendor    -> VendorPayment row
        DEBIT  + employee  -> entry counts toward the open salary cycle
        CREDIT (no target) -> plain receipt

Architecture position:
    Kernel > Services -- imperative shell around billing_engines.reconciliation.

Invariants enforced:
    - A posting never takes an invoice's paid amount above its total, a
      vendor's payments above its purchases, or a cycle's payments above
      the monthly salary.
    - Guard and write happen in one transaction with the target row
      locked (``SELECT ... FOR UPDATE``), so concurrent postings against
      the same target are serialized.  This holds on PostgreSQL; SQLite
      ignores FOR UPDATE.
    - A rejected posting changes nothing: the guard runs before any write.

Failure modes:
    - InvalidAmountError: zero, negative or malformed amount.
    - CounterpartyRequiredError: DEBIT with neither vendor nor employee.
    - EntryBeforeJoiningError: salary DEBIT dated before the joining date.
    - OverpaymentError: amount exceeds remaining balance / due.
    - InvoiceNotFoundError / VendorNotFoundError / EmployeeNotFoundError.

Audit relevance:
    Every accepted posting logs ``ledger_entry_posted`` and every guard
    rejection logs ``ledger_posting_rejected`` with the limit and the
    requested amount.
"""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from sqlalchemy.orm import Session

from billing_engines.obligation_cycle import DEFAULT_CYCLE_LENGTH_DAYS
from billing_engines.reconciliation import (
    GuardResult,
    guard_employee_debit,
    guard_invoice_credit,
    guard_vendor_debit,
)
from billing_kernel.domain.clock import Clock
from billing_kernel.domain.dtos import (
    EntryType,
    InvoiceStatus,
    LedgerEntryInfo,
    TargetType,
)
from billing_kernel.domain.money import (
    NumberLike,
    from_major,
    validate_positive_minor_amount,
)
from billing_kernel.exceptions import (
    CounterpartyRequiredError,
    EmployeeNotFoundError,
    EntryBeforeJoiningError,
    InvoiceNotFoundError,
    OverpaymentError,
    VendorNotFoundError,
)
from billing_kernel.logging_config import LogContext, get_logger
from billing_kernel.models.invoice import Invoice
from billing_kernel.models.ledger import LedgerEntry, VendorPayment
from billing_kernel.models.party import Employee, Vendor
from billing_kernel.selectors.ledger_selector import to_entry_info
from billing_kernel.selectors.vendor_selector import VendorSelector
from billing_kernel.services.base import BaseService
from billing_kernel.services.employee_cycle_service import EmployeeCycleService

logger = get_logger("services.ledger_posting")

DEFAULT_CURRENCY = "INR"


@dataclass(frozen=True)
class LedgerPostingRequest:
    """
    A cash movement to post, as entered by an operator.

    ``amount`` is in major units (rupees).  A ``datetime`` entry_date is
    reduced to its calendar date.  At most one of ``invoice_id``,
    ``vendor_id`` and ``employee_id`` may be set; a CREDIT may only target
    an invoice and a DEBIT only a vendor or an employee.
    """

    entry_type: EntryType
    amount: NumberLike
    reason: str
    entry_date: date | None = None
    counterparty: str | None = None
    invoice_id: UUID | None = None
    vendor_id: UUID | None = None
    employee_id: UUID | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "entry_type", EntryType(self.entry_type))
        if isinstance(self.entry_date, datetime):
            object.__setattr__(self, "entry_date", self.entry_date.date())
        targets = [t for t in (self.invoice_id, self.vendor_id, self.employee_id) if t]
        if len(targets) > 1:
            raise ValueError("A ledger entry can be reconciled against one target only")
        if self.entry_type == EntryType.CREDIT and (self.vendor_id or self.employee_id):
            raise ValueError("A CREDIT can only be reconciled against an invoice")
        if self.entry_type == EntryType.DEBIT and self.invoice_id:
            raise ValueError("A DEBIT cannot be reconciled against an invoice")

    @property
    def target(self) -> tuple[TargetType, UUID] | None:
        if self.invoice_id:
            return TargetType.INVOICE, self.invoice_id
        if self.vendor_id:
            return TargetType.VENDOR, self.vendor_id
        if self.employee_id:
            return TargetType.EMPLOYEE, self.employee_id
        return None


class LedgerPostingService(BaseService[LedgerEntry]):
    """
    Guarded ledger posting.

    Contract:
        ``post_entry`` either writes the entry and all of its dependent
        rows, or raises and writes nothing.  Flush only; the caller's
        ``session_scope`` commits.

    Non-goals:
        - Does NOT edit or delete posted entries.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        cycle_length_days: int = DEFAULT_CYCLE_LENGTH_DAYS,
    ):
        super().__init__(session, clock)
        self._cycles = EmployeeCycleService(session, self._clock, cycle_length_days)

    def _guard_invoice(self, invoice_id: UUID, amount: int) -> tuple[GuardResult, Invoice]:
        invoice = self._require(Invoice, invoice_id, InvoiceNotFoundError, lock=True)
        return guard_invoice_credit(invoice.total, invoice.paid_amount, amount, invoice.id), invoice

    def _guard_vendor(self, vendor_id: UUID, amount: int) -> GuardResult:
        self._require(Vendor, vendor_id, VendorNotFoundError, lock=True)
        balance = VendorSelector(self.session).balance(vendor_id)
        return guard_vendor_debit(
            balance.total_purchases, balance.total_payments, amount, vendor_id
        )

    def _guard_employee(self, employee_id: UUID, amount: int, entry_date: date) -> GuardResult:
        employee = self._require(Employee, employee_id, EmployeeNotFoundError, lock=True)
        if entry_date < employee.joining_date:
            raise EntryBeforeJoiningError(
                str(employee_id), entry_date.isoformat(), employee.joining_date.isoformat()
            )
        cycle = self._cycles.compute_cycle(employee, entry_date)
        return guard_employee_debit(cycle, amount, employee_id)

    def post_entry(self, request: LedgerPostingRequest, actor_id: UUID) -> LedgerEntryInfo:
        """
        Post one ledger entry.

        Args:
            request: What to post.
            actor_id: Who is posting.

        Returns:
            LedgerEntryInfo for the written entry.
        """
        amount = validate_positive_minor_amount(from_major(request.amount))
        entry_date = request.entry_date or self._clock.today()
        target = request.target

        if request.entry_type == EntryType.DEBIT and target is None:
            raise CounterpartyRequiredError(request.entry_type.value)

        target_type, target_id = target if target else (None, None)

        with LogContext.bind(
            actor_id=str(actor_id),
            invoice_id=str(request.invoice_id) if request.invoice_id else None,
            counterparty_id=str(target_id) if target_id else None,
        ):
            invoice = None
            try:
                if target_type == TargetType.INVOICE:
                    guard, invoice = self._guard_invoice(target_id, amount)
                elif target_type == TargetType.VENDOR:
                    guard = self._guard_vendor(target_id, amount)
                elif target_type == TargetType.EMPLOYEE:
                    guard = self._guard_employee(target_id, amount, entry_date)
                else:
                    guard = None
            except OverpaymentError as exc:
                logger.warning(
                    "ledger_posting_rejected",
                    extra={
                        "entry_type": request.entry_type.value,
                        "target_type": exc.target_type,
                        "limit": exc.limit,
                        "requested": exc.requested,
                    },
                )
                raise
            except EntryBeforeJoiningError as exc:
                logger.warning(
                    "ledger_posting_rejected",
                    extra={
                        "entry_type": request.entry_type.value,
                        "target_type": TargetType.EMPLOYEE.value,
                        "reason": exc.code,
                    },
                )
                raise

            entry = LedgerEntry(
                entry_type=request.entry_type.value,
                amount=amount,
                currency=DEFAULT_CURRENCY,
                reason=request.reason,
                counterparty=request.counterparty,
                entry_date=entry_date,
                target_type=target_type.value if target_type else None,
                target_id=target_id,
                created_by_id=actor_id,
            )
            self.session.add(entry)
            self.session.flush()

            if invoice is not None:
                invoice.paid_amount += amount
                invoice.status = InvoiceStatus.for_amounts(
                    invoice.total, invoice.paid_amount
                ).value
                invoice.touch(actor_id)
            elif target_type == TargetType.VENDOR:
                self.session.add(
                    VendorPayment(
                        vendor_id=target_id,
                        ledger_entry_id=entry.id,
                        amount=amount,
                        payment_date=entry_date,
                        notes=request.reason,
                        created_by_id=actor_id,
                    )
                )
            self.session.flush()

            logger.info(
                "ledger_entry_posted",
                extra={
                    "entry_id": str(entry.id),
                    "entry_type": entry.entry_type,
                    "amount": amount,
                    "target_type": entry.target_type,
                    "remaining_after": guard.remaining_after if guard else None,
                },
            )
            return to_entry_info(entry)

"""
DTOs -- Immutable records shared between engines, services and rendering.

Responsibility:
    Plain frozen dataclasses and enums that cross layer boundaries. They
    carry no ORM state, so engines can stay pure and services can return
    values that are safe to hand to callers after the session closes.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID


class EntryType(str, Enum):
    """Direction of a cash ledger entry."""

    CREDIT = "CREDIT"  # Money in, settles an invoice
    DEBIT = "DEBIT"  # Money out, settles a vendor payable or employee salary


class TargetType(str, Enum):
    """The balance a ledger entry is reconciled against."""

    INVOICE = "invoice"
    VENDOR = "vendor"
    EMPLOYEE = "employee"


class InvoiceStatus(str, Enum):
    """Payment state of an invoice, derived from paid vs total."""

    PENDING = "PENDING"
    SEMI_PAID = "SEMI_PAID"
    PAID = "PAID"

    @classmethod
    def for_amounts(cls, total: int, paid_amount: int) -> InvoiceStatus:
        if paid_amount >= total:
            return cls.PAID
        if paid_amount > 0:
            return cls.SEMI_PAID
        return cls.PENDING


class CycleStatus(str, Enum):
    """Salary status within the open obligation cycle."""

    PAID = "PAID"
    PARTIAL = "PARTIAL"
    DUE = "DUE"


@dataclass(frozen=True)
class LedgerEntryRecord:
    """
    A posted ledger entry as seen by the pure engines.

    ``counterparty_id`` is the resolved target (vendor/employee/invoice id)
    the entry was reconciled against, when there was one.
    """

    entry_type: EntryType
    amount: int
    entry_date: date
    reason: str
    counterparty: str | None = None
    counterparty_id: UUID | None = None


@dataclass(frozen=True)
class LedgerEntryInfo:
    """Posted ledger entry returned by the posting service."""

    id: UUID
    entry_type: EntryType
    amount: int
    currency: str
    entry_date: date
    reason: str
    counterparty: str | None
    target_type: TargetType | None
    target_id: UUID | None


@dataclass(frozen=True)
class CycleStatusInfo:
    """
    Cycle status query result for one employee.

    All amounts are minor units; ``next_due_date`` is the exclusive end of
    the open cycle.
    """

    employee_id: UUID
    status: CycleStatus
    cycle_paid_amount: int
    cycle_due_amount: int
    next_due_date: date
    current_cycle_start: date


@dataclass(frozen=True)
class VendorBalanceInfo:
    """Derived vendor payable: purchases minus payments, minor units."""

    vendor_id: UUID
    total_purchases: int
    total_payments: int

    @property
    def balance(self) -> int:
        return self.total_purchases - self.total_payments


@dataclass(frozen=True)
class CustomerInfo:
    name: str
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    state: str | None = None
    state_code: str | None = None
    gstin: str | None = None


@dataclass(frozen=True)
class InvoiceLineInfo:
    """Stored invoice line. Quantity and percents are exact decimals."""

    srl: int
    description: str
    quantity: Decimal
    rate: int
    discount_percent: Decimal
    tax_percent: Decimal
    amount: int


@dataclass(frozen=True)
class InvoiceInfo:
    """
    Read snapshot of a stored invoice with its customer and lines.

    Totals are the stored values; nothing here is recomputed.
    """

    id: UUID
    invoice_no: str
    issue_date: date
    customer: CustomerInfo
    lines: tuple[InvoiceLineInfo, ...]
    subtotal: int
    discount_amount: int
    tax_amount: int
    total: int
    paid_amount: int
    status: InvoiceStatus
    sac_code: str
    booking_date: date | None = None
    event_date: date | None = None
    start_time: str | None = None
    end_time: str | None = None
    venue: str | None = None
    ref_name: str | None = None
    manager: str | None = None
    remarks: str | None = None

    @property
    def balance_amount(self) -> int:
        return self.total - self.paid_amount

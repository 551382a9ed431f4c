"""
Module: billing_kernel.models.invoice
Responsibility: ORM persistence for invoices and their line items.
Architecture position: Kernel > Models.  May import from db/base.py only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - invoice_no is unique (uq_invoice_no).
    - 0 <= paid_amount <= total (CHECK constraints); the posting guard is the
      primary enforcement point, the constraint is the storage backstop.
    - Stored totals are always the aggregate of the stored line amounts.
      They are written together by InvoiceService and never edited alone.

Failure modes:
    - IntegrityError on duplicate invoice_no or a CHECK violation.

Audit relevance:
    The rendered document is built from these stored values; the renderer
    never re-derives totals.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Index,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from billing_kernel.db.base import TrackedBase, money_column
from billing_kernel.models.party import Customer

DEFAULT_SAC_CODE = "998314"


class Invoice(TrackedBase):
    """
    A customer invoice for one booking.

    Guarantees:
        - subtotal - discount_amount + tax_amount == total.
        - status agrees with paid_amount vs total (PENDING / SEMI_PAID / PAID).

    Non-goals:
        - Does NOT compute its own totals; see billing_engines.totals.
    """

    __tablename__ = "invoices"

    __table_args__ = (
        UniqueConstraint("invoice_no", name="uq_invoice_no"),
        CheckConstraint("paid_amount >= 0", name="chk_invoice_paid_nonneg"),
        CheckConstraint("paid_amount <= total", name="chk_invoice_paid_le_total"),
        Index("idx_invoice_customer", "customer_id"),
        Index("idx_invoice_status", "status"),
    )

    invoice_no: Mapped[str] = mapped_column(String(20), nullable=False)

    customer_id: Mapped[UUID] = mapped_column(
        ForeignKey("customers.id"),
        nullable=False,
    )

    issue_date: Mapped[date] = mapped_column(nullable=False)

    # Booking details
    booking_date: Mapped[date | None] = mapped_column(nullable=True)
    event_date: Mapped[date | None] = mapped_column(nullable=True)
    start_time: Mapped[str | None] = mapped_column(String(20), nullable=True)
    end_time: Mapped[str | None] = mapped_column(String(20), nullable=True)
    venue: Mapped[str | None] = mapped_column(String(500), nullable=True)
    ref_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    manager: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Totals (minor units)
    subtotal: Mapped[int] = money_column(default=0)
    discount_amount: Mapped[int] = money_column(default=0)
    tax_amount: Mapped[int] = money_column(default=0)
    total: Mapped[int] = money_column(default=0)

    # Sum of CREDIT ledger entries posted against this invoice; shown as the
    # advance received on the rendered document
    paid_amount: Mapped[int] = money_column(default=0)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default="PENDING")

    sac_code: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=DEFAULT_SAC_CODE,
    )

    remarks: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    customer: Mapped[Customer] = relationship(lazy="joined")

    lines: Mapped[list["InvoiceLine"]] = relationship(
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceLine.srl",
    )

    def __repr__(self) -> str:
        return f"<Invoice {self.invoice_no} total={self.total} paid={self.paid_amount}>"


class InvoiceLine(TrackedBase):
    """
    One line of an invoice.

    Quantity and percents are stored exactly (Numeric); rate and amount are
    minor units.  ``amount`` is the line total after discount and tax.
    """

    __tablename__ = "invoice_lines"

    __table_args__ = (
        UniqueConstraint("invoice_id", "srl", name="uq_invoice_line_srl"),
        CheckConstraint("quantity >= 0", name="chk_invoice_line_quantity_nonneg"),
        CheckConstraint("rate >= 0", name="chk_invoice_line_rate_nonneg"),
    )

    invoice_id: Mapped[UUID] = mapped_column(
        ForeignKey("invoices.id", ondelete="CASCADE"),
        nullable=False,
    )

    srl: Mapped[int] = mapped_column(nullable=False)

    description: Mapped[str] = mapped_column(String(500), nullable=False)

    quantity: Mapped[Decimal] = mapped_column(Numeric(12, 3), nullable=False)

    rate: Mapped[int] = money_column()

    discount_percent: Mapped[Decimal] = mapped_column(
        Numeric(5, 2),
        nullable=False,
        default=Decimal("0"),
    )

    tax_percent: Mapped[Decimal] = mapped_column(
        Numeric(5, 2),
        nullable=False,
        default=Decimal("0"),
    )

    amount: Mapped[int] = money_column()

    invoice: Mapped[Invoice] = relationship(back_populates="lines")

    def __repr__(self) -> str:
        return f"<InvoiceLine {self.srl} {self.description!r} amount={self.amount}>"

"""
Module: billing_kernel.models.ledger
Responsibility: ORM persistence for cash ledger entries and the vendor
    purchase / payment records that back vendor balances.
Architecture position: Kernel > Models.  May import from db/base.py only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - amount > 0 on every ledger entry, purchase and payment (CHECK).
    - A ledger entry's (target_type, target_id) names the balance it was
      reconciled against; unreconciled CREDITs have neither.
    - Every VendorPayment is created together with the DEBIT ledger entry
      that paid it (ledger_entry_id), in the same transaction.

Audit relevance:
    Balances are never stored: invoice paid amounts, vendor balances and
    salary cycles are all derived from these rows.
"""

from datetime import date
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from billing_kernel.db.base import TrackedBase, UUIDString, money_column


class LedgerEntry(TrackedBase):
    """
    A single CREDIT or DEBIT cash movement.

    Guarantees:
        - entry_type is "CREDIT" or "DEBIT".
        - amount is a positive minor-unit integer.
    """

    __tablename__ = "ledger_entries"

    __table_args__ = (
        CheckConstraint("amount > 0", name="chk_ledger_amount_pos"),
        CheckConstraint(
            "entry_type IN ('CREDIT', 'DEBIT')",
            name="chk_ledger_entry_type",
        ),
        Index("idx_ledger_target", "target_type", "target_id", "entry_date"),
        Index("idx_ledger_entry_date", "entry_date"),
    )

    entry_type: Mapped[str] = mapped_column(String(10), nullable=False)

    amount: Mapped[int] = money_column()

    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="INR")

    reason: Mapped[str] = mapped_column(String(500), nullable=False)

    # Free-text counterparty as entered by the operator
    counterparty: Mapped[str | None] = mapped_column(String(255), nullable=True)

    entry_date: Mapped[date] = mapped_column(nullable=False)

    target_type: Mapped[str | None] = mapped_column(String(20), nullable=True)

    target_id: Mapped[UUID | None] = mapped_column(UUIDString(), nullable=True)

    def __repr__(self) -> str:
        return f"<LedgerEntry {self.entry_type} {self.amount} on {self.entry_date}>"


class VendorPurchase(TrackedBase):
    """Goods or services bought from a vendor on credit."""

    __tablename__ = "vendor_purchases"

    __table_args__ = (
        CheckConstraint("amount > 0", name="chk_vendor_purchase_amount_pos"),
        Index("idx_vendor_purchase_vendor", "vendor_id"),
    )

    vendor_id: Mapped[UUID] = mapped_column(ForeignKey("vendors.id"), nullable=False)

    amount: Mapped[int] = money_column()

    purchase_date: Mapped[date] = mapped_column(nullable=False)

    description: Mapped[str | None] = mapped_column(String(500), nullable=True)


class VendorPayment(TrackedBase):
    """A payment to a vendor, always created by a DEBIT ledger posting."""

    __tablename__ = "vendor_payments"

    __table_args__ = (
        CheckConstraint("amount > 0", name="chk_vendor_payment_amount_pos"),
        Index("idx_vendor_payment_vendor", "vendor_id"),
    )

    vendor_id: Mapped[UUID] = mapped_column(ForeignKey("vendors.id"), nullable=False)

    ledger_entry_id: Mapped[UUID] = mapped_column(
        ForeignKey("ledger_entries.id"),
        nullable=False,
    )

    amount: Mapped[int] = money_column()

    payment_date: Mapped[date] = mapped_column(nullable=False)

    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

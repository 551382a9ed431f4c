"""
Module: billing_kernel.models.party
Responsibility: ORM persistence for the people the business transacts with:
    customers (invoiced), vendors (paid for purchases) and employees (paid a
    monthly salary).
Architecture position: Kernel > Models.  May import from db/base.py only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - monthly_salary is a non-negative minor-unit integer (CHECK constraint).
    - joining_date anchors the employee's salary cycles and must not move
      once salary entries exist against the employee.

Audit relevance:
    These rows are the identity anchors that ledger entries are reconciled
    against.  The posting service locks the Vendor / Employee row before it
    evaluates a DEBIT.
"""

from datetime import date

from sqlalchemy import Boolean, CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from billing_kernel.db.base import TrackedBase, money_column


class Customer(TrackedBase):
    """
    A customer that invoices are issued to.

    Non-goals:
        - No CRUD workflow beyond what feeds invoice rendering.
    """

    __tablename__ = "customers"

    __table_args__ = (Index("idx_customer_name", "name"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)

    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    address: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Place of supply for the tax summary
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)

    state_code: Mapped[str | None] = mapped_column(String(4), nullable=True)

    gstin: Mapped[str | None] = mapped_column(String(15), nullable=True)

    def __repr__(self) -> str:
        return f"<Customer {self.name}>"


class Vendor(TrackedBase):
    """
    A supplier the business buys from.

    The payable balance is derived (purchases minus payments) and never
    stored on this row.
    """

    __tablename__ = "vendors"

    __table_args__ = (Index("idx_vendor_name", "name"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)

    address: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<Vendor {self.name}>"


class Employee(TrackedBase):
    """
    An employee on a fixed monthly salary.

    Contract:
        Salary obligations run in fixed-length cycles anchored at
        ``joining_date``.  ``monthly_salary`` is the amount due per cycle,
        in minor units.
    """

    __tablename__ = "employees"

    __table_args__ = (
        CheckConstraint("monthly_salary >= 0", name="chk_employee_salary_nonneg"),
        Index("idx_employee_active", "is_active"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    mobile: Mapped[str | None] = mapped_column(String(32), nullable=True)

    joining_date: Mapped[date] = mapped_column(nullable=False)

    monthly_salary: Mapped[int] = money_column(default=0)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<Employee {self.name} joined={self.joining_date}>"

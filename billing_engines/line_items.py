"""
Line-Item Calculator - Compute one invoice line's amount.

Pure functions with no I/O. All money is integer minor units (paise);
quantities and percentages are Decimal.

Algorithm (one rounding per derived amount):

    base     = round(quantity * rate)
    discount = round(quantity * rate * discount_percent / 100)
    taxable  = base - discount
    tax      = round(taxable * tax_percent / 100)
    amount   = taxable + tax

``base`` only rounds when the quantity is fractional; for whole quantities
it is exact. Discount ties round half-up, i.e. in the customer's favour.

Usage:
    from billing_engines.line_items import InvoiceLineItem

    line = InvoiceLineItem(
        description="Safa (Pagdi)",
        quantity=2,
        rate=50000,
        discount_percent=10,
        tax_percent=18,
    )
    line.amount   # 106200
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from billing_kernel.domain.money import (
    NumberLike,
    percent_of,
    round_half_up,
    validate_discount_percent,
    validate_minor_amount,
    validate_quantity,
    validate_tax_percent,
)


@dataclass(frozen=True)
class LineItemAmounts:
    """
    Derived amounts for a single line, all in minor units.

    Invariant: ``amount == base - discount + tax`` and every field is >= 0.
    """

    base: int
    discount: int
    taxable: int
    tax: int
    amount: int


def compute_line_amounts(
    quantity: NumberLike,
    rate: NumberLike,
    discount_percent: NumberLike = 0,
    tax_percent: NumberLike = 0,
) -> LineItemAmounts:
    """
    Compute a line's base, discount, tax and amount.

    Raises:
        InvalidAmountError: On negative/non-finite quantity or rate, or a
            percentage outside [0, 100].
    """
    qty = validate_quantity(quantity)
    unit_rate = validate_minor_amount(rate, field="rate")
    discount_pct = validate_discount_percent(discount_percent)
    tax_pct = validate_tax_percent(tax_percent)

    exact_base = qty * Decimal(unit_rate)
    base = round_half_up(exact_base)
    discount = percent_of(exact_base, discount_pct)
    taxable = base - discount
    tax = percent_of(taxable, tax_pct)

    return LineItemAmounts(
        base=base,
        discount=discount,
        taxable=taxable,
        tax=tax,
        amount=taxable + tax,
    )


@dataclass(frozen=True)
class InvoiceLineItem:
    """
    One invoice line.

    Contract:
        Inputs are validated and normalized on construction (Decimal
        quantity/percentages, int rate). ``amount`` is always derived from
        the four inputs and can never be set independently.
    """

    description: str
    quantity: Decimal
    rate: int
    discount_percent: Decimal = Decimal("0")
    tax_percent: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        object.__setattr__(self, "quantity", validate_quantity(self.quantity))
        object.__setattr__(self, "rate", validate_minor_amount(self.rate, field="rate"))
        object.__setattr__(
            self, "discount_percent", validate_discount_percent(self.discount_percent)
        )
        object.__setattr__(self, "tax_percent", validate_tax_percent(self.tax_percent))

    @property
    def breakdown(self) -> LineItemAmounts:
        return compute_line_amounts(
            self.quantity, self.rate, self.discount_percent, self.tax_percent
        )

    @property
    def amount(self) -> int:
        return self.breakdown.amount

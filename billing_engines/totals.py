"""
Totals Aggregator - Sum invoice lines into canonical invoice totals.

Pure functions with no I/O.  Totals are always recomputed from the full
list of lines; there is no incremental patching, so edits cannot drift.

Invariants:
    total == subtotal - discount_amount + tax_amount
    total == sum(line.amount)        (zero tolerance)

Each line's rounding is already resolved by the line calculator, so both
identities hold exactly in integer minor units.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from billing_engines.line_items import InvoiceLineItem
from billing_engines.tracer import traced_engine
from billing_kernel.exceptions import EmptyInvoiceError, TotalsMismatchError


@dataclass(frozen=True)
class InvoiceTotals:
    """Invoice-level totals in minor units."""

    subtotal: int
    discount_amount: int
    tax_amount: int
    total: int

    @property
    def taxable_amount(self) -> int:
        """Amount the tax was levied on (subtotal after discounts)."""
        return self.subtotal - self.discount_amount


@dataclass(frozen=True)
class GstSplit:
    """
    CGST/SGST halves of the invoice tax for the tax summary.

    Odd paise go to CGST so the halves always add back to the tax amount.
    Percentages are the effective rate halved, to two decimals.
    """

    cgst_percent: Decimal
    sgst_percent: Decimal
    cgst_amount: int
    sgst_amount: int


@traced_engine("totals", "1.0", fingerprint_fields=("items",))
def compute_totals(items: Sequence[InvoiceLineItem]) -> InvoiceTotals:
    """
    Aggregate line items into InvoiceTotals.

    Order of ``items`` does not affect the result.

    Raises:
        EmptyInvoiceError: If ``items`` is empty.
        TotalsMismatchError: If the aggregate disagrees with the summed
            line amounts (calculator defect).
    """
    if not items:
        raise EmptyInvoiceError()

    subtotal = discount_amount = tax_amount = summed_amounts = 0
    for item in items:
        amounts = item.breakdown
        subtotal += amounts.base
        discount_amount += amounts.discount
        tax_amount += amounts.tax
        summed_amounts += amounts.amount

    total = subtotal - discount_amount + tax_amount
    if total != summed_amounts:
        raise TotalsMismatchError(total, summed_amounts)

    return InvoiceTotals(
        subtotal=subtotal,
        discount_amount=discount_amount,
        tax_amount=tax_amount,
        total=total,
    )


def split_gst(totals: InvoiceTotals) -> GstSplit:
    """Split the invoice tax into equal CGST and SGST halves."""
    sgst_amount = totals.tax_amount // 2
    cgst_amount = totals.tax_amount - sgst_amount

    if totals.taxable_amount > 0:
        effective = Decimal(totals.tax_amount) * 100 / Decimal(totals.taxable_amount)
    else:
        effective = Decimal("0")
    half = (effective / 2).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    return GstSplit(
        cgst_percent=half,
        sgst_percent=half,
        cgst_amount=cgst_amount,
        sgst_amount=sgst_amount,
    )

"""
Module: billing_engines
Responsibility:
    Package entrypoint that re-exports the pure calculation engines:
    line items, invoice totals, obligation cycles, the ledger
    reconciliation guard, and amount-in-words.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import billing_kernel.domain, billing_kernel.exceptions and
    billing_kernel.logging_config.  MUST NOT import billing_kernel services,
    selectors or models.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
      "Now" is always passed in by the caller.
    - Integer minor-unit arithmetic; Decimal only for quantities and
      percentages; floats are never used internally.
    - Determinism: identical inputs always produce identical outputs, so
      engines are safe to call concurrently.
"""

from billing_engines.amount_words import amount_in_words, number_to_words
from billing_engines.line_items import (
    InvoiceLineItem,
    LineItemAmounts,
    compute_line_amounts,
)
from billing_engines.obligation_cycle import (
    DEFAULT_CYCLE_LENGTH_DAYS,
    CycleWindow,
    ObligationCycle,
    compute_obligation_cycle,
    current_cycle_window,
)
from billing_engines.reconciliation import (
    GuardResult,
    guard_employee_debit,
    guard_invoice_credit,
    guard_vendor_debit,
    remaining_invoice_balance,
    vendor_balance,
)
from billing_engines.totals import GstSplit, InvoiceTotals, compute_totals, split_gst

__all__ = [
    # Line items
    "InvoiceLineItem",
    "LineItemAmounts",
    "compute_line_amounts",
    # Totals
    "InvoiceTotals",
    "GstSplit",
    "compute_totals",
    "split_gst",
    # Obligation cycles
    "DEFAULT_CYCLE_LENGTH_DAYS",
    "CycleWindow",
    "ObligationCycle",
    "compute_obligation_cycle",
    "current_cycle_window",
    # Reconciliation guard
    "GuardResult",
    "guard_invoice_credit",
    "guard_vendor_debit",
    "guard_employee_debit",
    "remaining_invoice_balance",
    "vendor_balance",
    # Words
    "amount_in_words",
    "number_to_words",
]

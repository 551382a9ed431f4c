"""Read-only query selectors."""

from billing_kernel.selectors.base import BaseSelector
from billing_kernel.selectors.invoice_selector import InvoiceSelector
from billing_kernel.selectors.ledger_selector import LedgerSelector
from billing_kernel.selectors.vendor_selector import VendorSelector

__all__ = [
    "BaseSelector",
    "InvoiceSelector",
    "LedgerSelector",
    "VendorSelector",
]

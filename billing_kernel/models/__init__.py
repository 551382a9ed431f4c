"""ORM models for the billing kernel."""

from billing_kernel.models.invoice import DEFAULT_SAC_CODE, Invoice, InvoiceLine
from billing_kernel.models.ledger import LedgerEntry, VendorPayment, VendorPurchase
from billing_kernel.models.party import Customer, Employee, Vendor
from billing_kernel.models.sequence import SequenceCounter

__all__ = [
    "Customer",
    "Vendor",
    "Employee",
    "Invoice",
    "InvoiceLine",
    "DEFAULT_SAC_CODE",
    "LedgerEntry",
    "VendorPurchase",
    "VendorPayment",
    "SequenceCounter",
]

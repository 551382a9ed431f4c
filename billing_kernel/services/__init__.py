"""Kernel services -- the write side. Services flush, callers commit."""

from billing_kernel.services.base import BaseService
from billing_kernel.services.employee_cycle_service import EmployeeCycleService
from billing_kernel.services.invoice_service import (
    BookingDetails,
    InvoiceService,
    format_invoice_no,
)
from billing_kernel.services.ledger_posting_service import (
    LedgerPostingRequest,
    LedgerPostingService,
)
from billing_kernel.services.sequence_service import SequenceService
from billing_kernel.services.vendor_service import VendorService

__all__ = [
    "BaseService",
    "BookingDetails",
    "EmployeeCycleService",
    "InvoiceService",
    "LedgerPostingRequest",
    "LedgerPostingService",
    "SequenceService",
    "VendorService",
    "format_invoice_no",
]

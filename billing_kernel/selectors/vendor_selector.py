"""
Module: billing_kernel.selectors.vendor_selector
Responsibility: Derived vendor payables (purchases minus payments).
Architecture position: Kernel > Selectors.
"""

from uuid import UUID

from billing_kernel.domain.dtos import VendorBalanceInfo
from billing_kernel.models.ledger import VendorPayment, VendorPurchase
from billing_kernel.models.party import Vendor
from billing_kernel.selectors.base import BaseSelector


class VendorSelector(BaseSelector[Vendor]):
    """Selector for vendor balances."""

    def total_purchases(self, vendor_id: UUID) -> int:
        return self._sum_minor(VendorPurchase.amount, VendorPurchase.vendor_id == vendor_id)

    def total_payments(self, vendor_id: UUID) -> int:
        return self._sum_minor(VendorPayment.amount, VendorPayment.vendor_id == vendor_id)

    def balance(self, vendor_id: UUID) -> VendorBalanceInfo:
        return VendorBalanceInfo(
            vendor_id=vendor_id,
            total_purchases=self.total_purchases(vendor_id),
            total_payments=self.total_payments(vendor_id),
        )

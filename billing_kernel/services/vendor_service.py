"""
VendorService -- vendors, their purchases and the derived payable balance.

Responsibility:
    Records vendors and purchases on credit, and reads the payable balance
    (total purchases minus total payments).  Payments are NOT recorded
    here: every vendor payment is a DEBIT ledger posting and goes through
    LedgerPostingService, which writes the VendorPayment row.

Invariants enforced:
    - Purchase amounts are positive minor-unit integers.
    - The balance is derived on read and never stored.
"""

from datetime import date
from uuid import UUID

from billing_kernel.domain.dtos import VendorBalanceInfo
from billing_kernel.domain.money import NumberLike, from_major, validate_positive_minor_amount
from billing_kernel.exceptions import VendorNotFoundError
from billing_kernel.logging_config import get_logger
from billing_kernel.models.ledger import VendorPurchase
from billing_kernel.models.party import Vendor
from billing_kernel.selectors.vendor_selector import VendorSelector
from billing_kernel.services.base import BaseService

logger = get_logger("services.vendor")


class VendorService(BaseService[Vendor]):
    """Service for vendors and vendor purchases."""

    def create_vendor(
        self,
        name: str,
        actor_id: UUID,
        phone: str | None = None,
        address: str | None = None,
    ) -> UUID:
        vendor = Vendor(name=name, phone=phone, address=address, created_by_id=actor_id)
        self.session.add(vendor)
        self.session.flush()
        return vendor.id

    def record_purchase(
        self,
        vendor_id: UUID,
        amount: NumberLike,
        actor_id: UUID,
        purchase_date: date | None = None,
        description: str | None = None,
    ) -> VendorBalanceInfo:
        """
        Record a purchase on credit, in major units (rupees).

        Returns:
            The vendor balance after the purchase.
        """
        minor = validate_positive_minor_amount(from_major(amount))
        self._require(Vendor, vendor_id, VendorNotFoundError)

        purchase = VendorPurchase(
            vendor_id=vendor_id,
            amount=minor,
            purchase_date=purchase_date or self._clock.today(),
            description=description,
            created_by_id=actor_id,
        )
        self.session.add(purchase)
        self.session.flush()

        logger.info(
            "vendor_purchase_recorded",
            extra={"vendor_id": str(vendor_id), "amount": minor},
        )
        return self.balance(vendor_id)

    def balance(self, vendor_id: UUID) -> VendorBalanceInfo:
        self._require(Vendor, vendor_id, VendorNotFoundError)
        return VendorSelector(self.session).balance(vendor_id)

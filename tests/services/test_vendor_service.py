"""Tests for VendorService and the derived vendor balance."""

from datetime import date
from uuid import uuid4

import pytest

from billing_kernel.exceptions import InvalidAmountError, VendorNotFoundError


class TestVendorService:
    def test_new_vendor_has_zero_balance(self, vendor_service, vendor_id):
        info = vendor_service.balance(vendor_id)
        assert info.total_purchases == 0
        assert info.total_payments == 0
        assert info.balance == 0

    def test_purchases_accumulate(self, vendor_service, vendor_id, test_actor_id):
        vendor_service.record_purchase(vendor_id, "1000", test_actor_id)
        info = vendor_service.record_purchase(
            vendor_id, "250.75", test_actor_id, purchase_date=date(2025, 1, 2), description="Chairs"
        )
        assert info.total_purchases == 125075
        assert info.balance == 125075

    @pytest.mark.parametrize("amount", ["0", "-10"])
    def test_non_positive_purchase_rejected(self, vendor_service, vendor_id, test_actor_id, amount):
        with pytest.raises(InvalidAmountError):
            vendor_service.record_purchase(vendor_id, amount, test_actor_id)

    def test_unknown_vendor(self, vendor_service, test_actor_id):
        with pytest.raises(VendorNotFoundError):
            vendor_service.record_purchase(uuid4(), "10", test_actor_id)
        with pytest.raises(VendorNotFoundError):
            vendor_service.balance(uuid4())

    def test_purchase_logged(self, vendor_service, vendor_id, test_actor_id, captured_logs):
        vendor_service.record_purchase(vendor_id, "10", test_actor_id)
        records = [r for r in captured_logs() if r["message"] == "vendor_purchase_recorded"]
        assert records[0]["amount"] == 1000
        assert records[0]["vendor_id"] == str(vendor_id)

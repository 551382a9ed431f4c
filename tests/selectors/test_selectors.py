"""
Tests for the read-only selectors.

Selectors return DTOs and never write; these tests seed through the
services and read back through the selectors.
"""

from datetime import date
from uuid import uuid4

import pytest

from billing_engines.line_items import InvoiceLineItem
from billing_kernel.domain.dtos import EntryType, InvoiceInfo, TargetType
from billing_kernel.exceptions import InvoiceNotFoundError
from billing_kernel.selectors.invoice_selector import InvoiceSelector
from billing_kernel.selectors.ledger_selector import LedgerSelector
from billing_kernel.selectors.vendor_selector import VendorSelector
from billing_kernel.services.ledger_posting_service import LedgerPostingRequest


class TestLedgerSelector:
    @pytest.fixture
    def salary_entries(self, posting_service, employee_id, test_actor_id):
        for amount, on in [("100", date(2025, 1, 1)), ("200", date(2025, 1, 31)), ("400", date(2025, 2, 1))]:
            posting_service.post_entry(
                LedgerPostingRequest(
                    EntryType.DEBIT, amount, "Salary", entry_date=on, employee_id=employee_id
                ),
                test_actor_id,
            )

    def test_half_open_window(self, session, employee_id, salary_entries):
        entries = LedgerSelector(session).employee_debits(
            employee_id, start=date(2025, 1, 1), end=date(2025, 2, 1)
        )
        assert [e.amount for e in entries] == [10000, 20000]
        assert all(e.counterparty_id == employee_id for e in entries)

    def test_unbounded(self, session, employee_id, salary_entries):
        entries = LedgerSelector(session).entries_for_target(TargetType.EMPLOYEE, employee_id)
        assert [e.entry_date for e in entries] == [date(2025, 1, 1), date(2025, 1, 31), date(2025, 2, 1)]

    def test_total_for_target(self, session, employee_id, salary_entries):
        selector = LedgerSelector(session)
        assert selector.total_for_target(TargetType.EMPLOYEE, employee_id, EntryType.DEBIT) == 70000
        assert selector.total_for_target(TargetType.EMPLOYEE, employee_id, EntryType.CREDIT) == 0
        assert selector.total_for_target(TargetType.VENDOR, uuid4(), EntryType.DEBIT) == 0

    def test_get_entry(self, session, posting_service, test_actor_id):
        posted = posting_service.post_entry(
            LedgerPostingRequest(EntryType.CREDIT, "10", "Deposit"), test_actor_id
        )
        selector = LedgerSelector(session)
        assert selector.get_entry(posted.id) == posted
        assert selector.get_entry(uuid4()) is None


class TestInvoiceSelector:
    def test_get_invoice(self, session, invoice_service, customer_id, test_actor_id):
        created = invoice_service.create_invoice(
            customer_id, [InvoiceLineItem("Stage", 1, 10000)], test_actor_id
        )
        loaded = InvoiceSelector(session).get_invoice(created.id)
        assert isinstance(loaded, InvoiceInfo)
        assert loaded == created

    def test_get_invoice_not_found(self, session):
        with pytest.raises(InvoiceNotFoundError):
            InvoiceSelector(session).get_invoice(uuid4())

    def test_last_invoice_no(self, session, invoice_service, customer_id, test_actor_id):
        selector = InvoiceSelector(session)
        assert selector.last_invoice_no() is None
        for _ in range(3):
            invoice_service.create_invoice(
                customer_id, [InvoiceLineItem("Stage", 1, 10000)], test_actor_id
            )
        assert selector.last_invoice_no() == "INV-000003"

    def test_list_for_customer(self, session, invoice_service, customer_id, test_actor_id):
        invoice_service.create_invoice(
            customer_id, [InvoiceLineItem("Stage", 1, 10000)], test_actor_id,
            issue_date=date(2025, 1, 9),
        )
        invoice_service.create_invoice(
            customer_id, [InvoiceLineItem("Lights", 1, 5000)], test_actor_id,
            issue_date=date(2025, 1, 2),
        )
        invoices = InvoiceSelector(session).list_for_customer(customer_id)
        assert [i.issue_date for i in invoices] == [date(2025, 1, 2), date(2025, 1, 9)]
        assert InvoiceSelector(session).list_for_customer(uuid4()) == []


class TestVendorSelector:
    def test_balance(self, session, vendor_service, posting_service, vendor_id, test_actor_id):
        vendor_service.record_purchase(vendor_id, "500", test_actor_id)
        posting_service.post_entry(
            LedgerPostingRequest(EntryType.DEBIT, "120", "Part payment", vendor_id=vendor_id),
            test_actor_id,
        )
        info = VendorSelector(session).balance(vendor_id)
        assert info.total_purchases == 50000
        assert info.total_payments == 12000
        assert info.balance == 38000

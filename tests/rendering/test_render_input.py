"""Tests for building the display-ready RenderInput from a stored invoice."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

from billing_rendering.render_input import (
    build_render_input,
    format_date,
    format_percent,
    format_quantity,
)


class TestFormatting:
    def test_date(self):
        assert format_date(date(2025, 2, 14)) == "14/02/2025"
        assert format_date(None) is None

    def test_quantity(self):
        assert format_quantity(Decimal("2.000")) == "2"
        assert format_quantity(Decimal("1.500")) == "1.5"
        assert format_quantity(Decimal("10")) == "10"
        assert format_quantity(Decimal("0.000")) == "0"

    def test_percent(self):
        assert format_percent(Decimal("9")) == "9.00"


class TestBuildRenderInput:
    def test_money_is_two_decimal_major_units(self, invoice_info, company):
        doc = build_render_input(invoice_info, company)
        assert doc.subtotal == "1750.00"
        assert doc.taxable_amount == "1750.00"
        assert doc.total_amount == "2065.00"
        assert doc.items[0].rate == "1000.00"
        assert doc.items[1].amount == "885.00"
        assert doc.items[1].quantity == "5"

    def test_items_total_matches_invoice_total(self, invoice_info, company):
        doc = build_render_input(invoice_info, company)
        assert doc.items_total == doc.total_amount

    def test_items_total_is_stored_total_not_line_sum(self, invoice_info, company):
        doc = build_render_input(replace(invoice_info, lines=invoice_info.lines[:1]), company)
        assert doc.items_total == "2065.00"
        assert len(doc.items) == 1

    def test_gst_split(self, invoice_info, company):
        doc = build_render_input(invoice_info, company)
        assert doc.cgst_percent == doc.sgst_percent == "9.00"
        assert doc.cgst_amount == doc.sgst_amount == "157.50"

    def test_payment_summary(self, invoice_info, company):
        doc = build_render_input(invoice_info, company)
        assert doc.advance_amount == "300.00"
        assert doc.balance_amount == "1765.00"

    def test_amount_in_words(self, invoice_info, company):
        doc = build_render_input(invoice_info, company)
        assert doc.amount_in_words == "Two Thousand Sixty Five Rupees Only"

    def test_absent_fields_stay_none(self, invoice_info, company):
        doc = build_render_input(invoice_info, company)
        assert doc.customer_address is None
        assert doc.booking_date is None
        assert doc.end_time is None
        assert doc.event_date == "14/02/2025"
        assert doc.issue_date == "10/01/2025"

    def test_company_profile(self, invoice_info, company):
        doc = build_render_input(invoice_info, company)
        assert doc.company_name == "HUMJOLI EVENTS"
        assert doc.company_gstin == "27ADOPA7853Q1ZR"
        assert doc.company_state_code == "27"
        assert doc.terms == company.terms

    def test_discounted_invoice(self, invoice_info, company):
        invoice = replace(invoice_info, discount_amount=17500, tax_amount=28350, total=186350)
        doc = build_render_input(invoice, company)
        assert doc.discount_amount == "175.00"
        assert doc.taxable_amount == "1575.00"
        assert doc.cgst_amount == "141.75"

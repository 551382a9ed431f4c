"""
Tests for the totals aggregator and the CGST/SGST split.
"""

import random
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from billing_engines.line_items import InvoiceLineItem
from billing_engines.totals import InvoiceTotals, compute_totals, split_gst
from billing_kernel.exceptions import EmptyInvoiceError


class TestComputeTotals:
    def test_single_plain_line(self):
        """One line, qty 1 at 10000, no discount or tax."""
        totals = compute_totals([InvoiceLineItem("Mandap", 1, 10000)])
        assert totals.subtotal == 10000
        assert totals.discount_amount == 0
        assert totals.tax_amount == 0
        assert totals.total == 10000

    def test_mixed_lines(self):
        items = [
            InvoiceLineItem("Mandap", 1, 100000, discount_percent=10, tax_percent=18),
            InvoiceLineItem("Safa", 20, 1500, tax_percent=18),
        ]
        totals = compute_totals(items)
        assert totals.subtotal == 100000 + 30000
        assert totals.discount_amount == 10000
        assert totals.tax_amount == 16200 + 5400
        assert totals.total == sum(item.amount for item in items)
        assert totals.taxable_amount == 120000

    def test_empty_invoice_rejected(self):
        with pytest.raises(EmptyInvoiceError) as exc_info:
            compute_totals([])
        assert exc_info.value.code == "EMPTY_INVOICE"


class TestSplitGst:
    def test_even_split(self):
        gst = split_gst(InvoiceTotals(subtotal=100000, discount_amount=0, tax_amount=18000, total=118000))
        assert gst.cgst_amount == 9000
        assert gst.sgst_amount == 9000
        assert gst.cgst_percent == Decimal("9.00")
        assert gst.sgst_percent == Decimal("9.00")

    def test_odd_paisa_goes_to_cgst(self):
        gst = split_gst(InvoiceTotals(subtotal=1000, discount_amount=0, tax_amount=181, total=1181))
        assert gst.cgst_amount == 91
        assert gst.sgst_amount == 90
        assert gst.cgst_amount + gst.sgst_amount == 181

    def test_no_tax(self):
        gst = split_gst(InvoiceTotals(subtotal=0, discount_amount=0, tax_amount=0, total=0))
        assert gst.cgst_amount == gst.sgst_amount == 0
        assert gst.cgst_percent == Decimal("0.00")


line_items = st.builds(
    InvoiceLineItem,
    description=st.just("item"),
    quantity=st.decimals(min_value=0, max_value=1000, places=2, allow_nan=False, allow_infinity=False),
    rate=st.integers(min_value=0, max_value=10**8),
    discount_percent=st.decimals(min_value=0, max_value=100, places=2, allow_nan=False, allow_infinity=False),
    tax_percent=st.sampled_from([Decimal("0"), Decimal("5"), Decimal("12"), Decimal("18"), Decimal("28")]),
)


class TestTotalsProperties:
    @given(st.lists(line_items, min_size=1, max_size=20))
    def test_total_equals_sum_of_line_amounts(self, items):
        totals = compute_totals(items)
        assert totals.total == sum(item.amount for item in items)
        assert totals.total == totals.subtotal - totals.discount_amount + totals.tax_amount

    @given(st.lists(line_items, min_size=1, max_size=20))
    def test_recompute_is_idempotent(self, items):
        assert compute_totals(items) == compute_totals(items)

    @given(st.lists(line_items, min_size=1, max_size=20), st.randoms(use_true_random=False))
    def test_order_independent(self, items, rnd: random.Random):
        shuffled = list(items)
        rnd.shuffle(shuffled)
        assert compute_totals(items) == compute_totals(shuffled)

    @given(st.lists(line_items, min_size=1, max_size=20))
    def test_gst_halves_sum_to_tax(self, items):
        totals = compute_totals(items)
        gst = split_gst(totals)
        assert gst.cgst_amount + gst.sgst_amount == totals.tax_amount
        assert 0 <= gst.cgst_amount - gst.sgst_amount <= 1

"""
Tests for the line-item calculator.

Verifies:
- Base, discount, tax and amount for plain, discounted and taxed lines
- Rounding happens once per derived amount
- Invalid inputs are rejected, never clamped
- Line invariants hold for arbitrary valid inputs
"""

from decimal import ROUND_HALF_UP, Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from billing_engines.line_items import InvoiceLineItem, compute_line_amounts
from billing_kernel.exceptions import InvalidAmountError


class TestComputeLineAmounts:
    def test_plain_line(self):
        """Qty 1 at 10000 paise, no discount or tax -> 10000."""
        amounts = compute_line_amounts(1, 10000)
        assert amounts.base == 10000
        assert amounts.discount == 0
        assert amounts.tax == 0
        assert amounts.amount == 10000

    def test_discount_then_tax(self):
        """2 x 50000 = 100000; 10% off = 10000; 18% on 90000 = 16200."""
        amounts = compute_line_amounts(2, 50000, discount_percent=10, tax_percent=18)
        assert amounts.base == 100000
        assert amounts.discount == 10000
        assert amounts.taxable == 90000
        assert amounts.tax == 16200
        assert amounts.amount == 106200

    def test_fractional_quantity_rounds_base_once(self):
        """1.5 x 333 = 499.5 -> 500."""
        amounts = compute_line_amounts("1.5", 333)
        assert amounts.base == 500
        assert amounts.amount == 500

    def test_tax_rounding_half_up(self):
        """18% of 25 = 4.5 -> 5."""
        assert compute_line_amounts(1, 25, tax_percent=18).tax == 5

    def test_discount_half_paisa_rounds_up_before_tax(self):
        """10% of 5 = 0.5 -> discount 1, so the line is 4, not round(4.5) = 5."""
        amounts = compute_line_amounts(1, 5, discount_percent=10)
        assert amounts.base == 5
        assert amounts.discount == 1
        assert amounts.taxable == 4
        assert amounts.tax == 0
        assert amounts.amount == 4

    def test_discount_taken_from_unrounded_base(self):
        """1.5 x 333 = 499.5; 10% of 499.5 = 49.95 -> 50; base 500 - 50 = 450."""
        amounts = compute_line_amounts("1.5", 333, discount_percent=10)
        assert amounts.base == 500
        assert amounts.discount == 50
        assert amounts.amount == 450

    def test_full_discount_zeroes_line(self):
        amounts = compute_line_amounts(3, 1000, discount_percent=100, tax_percent=18)
        assert amounts.taxable == 0
        assert amounts.tax == 0
        assert amounts.amount == 0

    def test_zero_quantity(self):
        assert compute_line_amounts(0, 10000, tax_percent=18).amount == 0

    def test_negative_rate_rejected(self):
        with pytest.raises(InvalidAmountError) as exc_info:
            compute_line_amounts(1, -100)
        assert exc_info.value.field == "rate"

    def test_discount_over_hundred_rejected(self):
        with pytest.raises(InvalidAmountError):
            compute_line_amounts(1, 100, discount_percent=101)

    def test_nan_quantity_rejected(self):
        with pytest.raises(InvalidAmountError):
            compute_line_amounts(float("nan"), 100)


class TestInvoiceLineItem:
    def test_normalizes_inputs(self):
        item = InvoiceLineItem("Safa", "2", 15000, discount_percent=5, tax_percent="18")
        assert item.quantity == Decimal("2")
        assert item.discount_percent == Decimal("5")
        assert item.tax_percent == Decimal("18")

    def test_amount_is_derived(self):
        item = InvoiceLineItem("Stage decor", 1, 10000)
        assert item.amount == 10000
        assert item.breakdown.base == 10000

    def test_invalid_input_rejected_on_construction(self):
        with pytest.raises(InvalidAmountError):
            InvoiceLineItem("Lights", -1, 100)


quantities = st.decimals(min_value=0, max_value=10_000, places=3, allow_nan=False, allow_infinity=False)
rates = st.integers(min_value=0, max_value=10**9)
percents = st.decimals(min_value=0, max_value=100, places=2, allow_nan=False, allow_infinity=False)


def _half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _expected_line(quantity: Decimal, rate: int, discount: Decimal, tax: Decimal) -> tuple:
    """base, discount, taxable, tax, amount with each derived value rounded once."""
    exact_base = quantity * rate
    line_discount = _half_up(exact_base * discount / 100)
    taxable = _half_up(exact_base) - line_discount
    line_tax = _half_up(Decimal(taxable) * tax / 100)
    return _half_up(exact_base), line_discount, taxable, line_tax, taxable + line_tax


class TestLineProperties:
    @given(quantities, rates, percents, percents)
    def test_line_invariants(self, quantity, rate, discount, tax):
        amounts = compute_line_amounts(quantity, rate, discount, tax)
        assert amounts.amount == amounts.base - amounts.discount + amounts.tax
        assert 0 <= amounts.discount <= amounts.base
        assert amounts.tax >= 0
        assert amounts.amount >= 0
        assert all(
            isinstance(v, int)
            for v in (amounts.base, amounts.discount, amounts.taxable, amounts.tax, amounts.amount)
        )

    @given(quantities, rates, percents, percents)
    def test_matches_written_out_formula(self, quantity, rate, discount, tax):
        amounts = compute_line_amounts(quantity, rate, discount, tax)
        assert (
            amounts.base,
            amounts.discount,
            amounts.taxable,
            amounts.tax,
            amounts.amount,
        ) == _expected_line(quantity, rate, discount, tax)

    @given(quantities, rates, percents, percents)
    def test_deterministic(self, quantity, rate, discount, tax):
        assert compute_line_amounts(quantity, rate, discount, tax) == compute_line_amounts(
            quantity, rate, discount, tax
        )

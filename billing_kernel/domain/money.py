"""
Money -- Integer minor-unit money model and the single rounding rule.

Responsibility:
    Defines how monetary values are represented (``int`` minor units, e.g.
    paise), how percentages and quantities are validated, and the ONE
    rounding rule used by every derived amount in the system.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by billing_engines (calculators), services (posting boundary),
    and billing_rendering (major-unit display boundary).

Invariants enforced:
    - All internal arithmetic is integer minor units or Decimal; never float.
    - round_half_up() is the only sanctioned rounding function. Callers apply
      it exactly once per derived amount, never per intermediate step.
    - Invalid input (non-finite, negative, percentage outside [0, 100]) is
      rejected with InvalidAmountError. Values are never clamped.
    - Major-unit conversion happens only at a boundary (to_major/from_major).

Failure modes:
    - InvalidAmountError on any malformed numeric input.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from billing_kernel.exceptions import InvalidAmountError

# Amount in minor currency units (paise).
MinorAmount = int

NumberLike = Union[int, Decimal, str, float]

MINOR_PER_MAJOR = 100
MAX_PERCENT = Decimal("100")
_ONE = Decimal("1")
_HUNDRED = Decimal("100")


def round_half_up(value: Decimal) -> MinorAmount:
    """
    Round a Decimal to the nearest whole minor unit, halves away from zero.

    This is the ONLY rounding function for money in the system.
    """
    return int(value.quantize(_ONE, rounding=ROUND_HALF_UP))


def _to_decimal(field: str, value: NumberLike) -> Decimal:
    """Convert a numeric input to Decimal, rejecting non-numeric and non-finite values."""
    if isinstance(value, bool) or value is None:
        raise InvalidAmountError(field, value, "not a number")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, (float, str)):
        # str() keeps the float's shortest repr (0.1 -> "0.1", not the binary expansion)
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise InvalidAmountError(field, value, "not a number") from exc
    else:
        raise InvalidAmountError(field, value, f"unsupported type {type(value).__name__}")

    if not result.is_finite():
        raise InvalidAmountError(field, value, "not finite")
    return result


def validate_quantity(value: NumberLike) -> Decimal:
    """Quantity must be finite and >= 0. Fractional quantities are allowed."""
    quantity = _to_decimal("quantity", value)
    if quantity < 0:
        raise InvalidAmountError("quantity", value, "must not be negative")
    return quantity


def validate_minor_amount(value: NumberLike, field: str = "amount") -> MinorAmount:
    """Minor-unit amounts must be whole, finite and >= 0."""
    amount = _to_decimal(field, value)
    if amount != amount.to_integral_value():
        raise InvalidAmountError(field, value, "must be a whole number of minor units")
    if amount < 0:
        raise InvalidAmountError(field, value, "must not be negative")
    return int(amount)


def validate_positive_minor_amount(value: NumberLike, field: str = "amount") -> MinorAmount:
    """Posting amounts must be whole minor units strictly greater than zero."""
    amount = validate_minor_amount(value, field)
    if amount == 0:
        raise InvalidAmountError(field, value, "must be greater than zero")
    return amount


def _validate_percent(field: str, value: NumberLike) -> Decimal:
    percent = _to_decimal(field, value)
    if percent < 0 or percent > MAX_PERCENT:
        raise InvalidAmountError(field, value, "must be between 0 and 100")
    return percent


def validate_discount_percent(value: NumberLike) -> Decimal:
    return _validate_percent("discount_percent", value)


def validate_tax_percent(value: NumberLike) -> Decimal:
    return _validate_percent("tax_percent", value)


def percent_of(amount: Decimal | int, percent: Decimal) -> MinorAmount:
    """``round(amount * percent / 100)`` with a single rounding step."""
    return round_half_up(Decimal(amount) * percent / _HUNDRED)


# ---------------------------------------------------------------------------
# Major-unit boundary
# ---------------------------------------------------------------------------


def to_major(amount: MinorAmount) -> Decimal:
    """
    Convert minor units to major units for display.

    Lossless: the result always has exactly two decimal places.
    """
    return Decimal(int(amount)).scaleb(-2)


def from_major(value: NumberLike, field: str = "amount") -> MinorAmount:
    """
    Convert a major-unit input (rupees) to minor units (paise).

    Rounds half-up to the nearest paisa, the same rule the posting boundary
    has always used. Negative and non-finite inputs are rejected.
    """
    major = _to_decimal(field, value)
    if major < 0:
        raise InvalidAmountError(field, value, "must not be negative")
    return round_half_up(major * MINOR_PER_MAJOR)


def format_major(amount: MinorAmount) -> str:
    """Two-decimal display string, e.g. ``10050 -> "100.50"``."""
    return f"{to_major(amount):.2f}"

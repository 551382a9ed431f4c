"""
Amount in words, Indian numbering (Thousand / Lakh / Crore).

Used for the "Amount in Words" line of the printed invoice.  Paise are
dropped: the words describe the whole-rupee part of the amount.

    amount_in_words(12_345_600)   # "One Lakh Twenty Three Thousand Four Hundred and Fifty Six Rupees Only"
"""

from __future__ import annotations

from billing_kernel.domain.money import MINOR_PER_MAJOR, validate_minor_amount

_ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
_TEENS = [
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen",
    "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# (divisor, label), largest first
_SCALES = [(10_000_000, "Crore"), (100_000, "Lakh"), (1_000, "Thousand")]


def number_to_words(num: int) -> str:
    """Spell a non-negative integer using the Indian numbering system."""
    if num < 0:
        raise ValueError(f"num must be non-negative, got {num}")
    if num == 0:
        return "Zero"
    if num < 10:
        return _ONES[num]
    if num < 20:
        return _TEENS[num - 10]
    if num < 100:
        tens, ones = divmod(num, 10)
        return _TENS[tens] + (" " + _ONES[ones] if ones else "")
    if num < 1000:
        hundreds, rest = divmod(num, 100)
        return _ONES[hundreds] + " Hundred" + (" and " + number_to_words(rest) if rest else "")

    for divisor, label in _SCALES:
        if num >= divisor:
            head, rest = divmod(num, divisor)
            return number_to_words(head) + f" {label}" + (" " + number_to_words(rest) if rest else "")
    raise AssertionError("unreachable")


def amount_in_words(amount: int, currency_word: str = "Rupees") -> str:
    """Words for the whole major-unit part of a minor-unit amount."""
    minor = validate_minor_amount(amount)
    return f"{number_to_words(minor // MINOR_PER_MAJOR)} {currency_word} Only"

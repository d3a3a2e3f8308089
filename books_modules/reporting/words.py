"""
Amount in words, Indian numbering system.

    1,00,00,000 -> Crore
    1,00,000    -> Lakh
    1,000       -> Thousand

Pure functions.  Callers round to whole rupees before calling
``amount_to_words``; ``rupees_in_words`` does that rounding for report
captions.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from books_kernel.exceptions import InvalidAmountError

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000

SUFFIX = "Rupees Only"

_ONES = ("", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine")
_TEENS = (
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen",
    "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen",
)
_TENS = ("", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety")


def _below_thousand(n: int) -> str:
    """Words for 0..999; zero is the empty string."""
    if n == 0:
        return ""
    if n < 10:
        return _ONES[n]
    if n < 20:
        return _TEENS[n - 10]
    if n < 100:
        return _TENS[n // 10] + (" " + _ONES[n % 10] if n % 10 else "")
    rest = n % 100
    return _ONES[n // 100] + " Hundred" + (" " + _below_thousand(rest) if rest else "")


def _whole_number(n: int) -> str:
    """Words for any non-negative integer, without suffix."""
    crore, rest = divmod(n, CRORE)
    lakh, rest = divmod(rest, LAKH)
    thousand, remainder = divmod(rest, THOUSAND)

    parts = []
    if crore:
        # 100 crore and above: the crore count is itself spelled out
        parts.append(
            (_below_thousand(crore) if crore < THOUSAND else _whole_number(crore))
            + " Crore"
        )
    if lakh:
        parts.append(_below_thousand(lakh) + " Lakh")
    if thousand:
        parts.append(_below_thousand(thousand) + " Thousand")
    if remainder:
        parts.append(_below_thousand(remainder))
    return " ".join(parts).strip()


def amount_to_words(amount: int) -> str:
    """
    Convert a non-negative whole-rupee amount to words.

    >>> amount_to_words(1234567)
    'Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven Rupees Only'

    Raises:
        InvalidAmountError: If amount is negative, not an int, or a bool.
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError("amount", amount, "must be a whole number of rupees")
    if amount < 0:
        raise InvalidAmountError("amount", amount, "must not be negative")
    if amount == 0:
        return "Zero"
    return f"{_whole_number(amount)} {SUFFIX}"


def rupees_in_words(amount: Decimal) -> str:
    """
    Caption for a signed Decimal amount.

    Rounds half-up to whole rupees; negative amounts are prefixed "Minus".
    """
    if isinstance(amount, bool) or not isinstance(amount, (Decimal, int)):
        raise InvalidAmountError("amount", amount, "must be a Decimal")
    if isinstance(amount, Decimal) and not amount.is_finite():
        raise InvalidAmountError("amount", amount, "amount is not finite")
    whole = int(Decimal(abs(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    words = amount_to_words(whole)
    if amount < 0 and whole:
        return f"Minus {words}"
    return words

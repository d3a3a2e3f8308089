"""Tests for amount-in-words (Indian numbering)."""

from decimal import Decimal

import pytest

from books_kernel.exceptions import InvalidAmountError
from books_modules.reporting.words import amount_to_words, rupees_in_words


class TestAmountToWords:
    @pytest.mark.parametrize(
        "amount, words",
        [
            (0, "Zero"),
            (1, "One Rupees Only"),
            (15, "Fifteen Rupees Only"),
            (20, "Twenty Rupees Only"),
            (99, "Ninety Nine Rupees Only"),
            (100, "One Hundred Rupees Only"),
            (101, "One Hundred One Rupees Only"),
            (999, "Nine Hundred Ninety Nine Rupees Only"),
            (1000, "One Thousand Rupees Only"),
            (8000, "Eight Thousand Rupees Only"),
            (23000, "Twenty Three Thousand Rupees Only"),
            (100000, "One Lakh Rupees Only"),
            (1234567, "Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven Rupees Only"),
            (10000000, "One Crore Rupees Only"),
            (12345678, "One Crore Twenty Three Lakh Forty Five Thousand Six Hundred Seventy Eight Rupees Only"),
            (99999999, "Nine Crore Ninety Nine Lakh Ninety Nine Thousand Nine Hundred Ninety Nine Rupees Only"),
        ],
    )
    def test_examples(self, amount, words):
        assert amount_to_words(amount) == words

    def test_hundreds_of_crores(self):
        assert amount_to_words(2_500_000_000) == "Two Hundred Fifty Crore Rupees Only"

    def test_thousands_of_crores(self):
        assert amount_to_words(12_345 * 10_000_000) == (
            "Twelve Thousand Three Hundred Forty Five Crore Rupees Only"
        )

    def test_no_double_spaces(self):
        for amount in (100001, 10000001, 10100100, 1000010):
            assert "  " not in amount_to_words(amount)

    @pytest.mark.parametrize("bad", [-1, 1.5, Decimal("10"), "10", True, None])
    def test_rejects_non_whole_rupees(self, bad):
        with pytest.raises(InvalidAmountError):
            amount_to_words(bad)


class TestRupeesInWords:
    def test_rounds_half_up(self):
        assert rupees_in_words(Decimal("8000.50")) == "Eight Thousand One Rupees Only"
        assert rupees_in_words(Decimal("8000.49")) == "Eight Thousand Rupees Only"

    def test_negative_prefixed(self):
        assert rupees_in_words(Decimal("-250")) == "Minus Two Hundred Fifty Rupees Only"

    def test_negative_rounding_to_zero(self):
        assert rupees_in_words(Decimal("-0.40")) == "Zero"

    def test_zero(self):
        assert rupees_in_words(Decimal("0")) == "Zero"

    def test_int_accepted(self):
        assert rupees_in_words(5) == "Five Rupees Only"

    @pytest.mark.parametrize("bad", [1.0, "1", Decimal("Infinity"), Decimal("NaN")])
    def test_rejects_bad_input(self, bad):
        with pytest.raises(InvalidAmountError):
            rupees_in_words(bad)

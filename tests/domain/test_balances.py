"""
Pure function tests for balance evaluation.

NO database, NO I/O.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import uuid4

import pytest

from books_kernel.domain.balances import (
    compute_natural_balance,
    evaluate_balance,
    sum_period_activity,
    validate_period,
    validate_report_date,
)
from books_kernel.domain.classification import NormalBalance
from books_kernel.domain.dtos import EntryLine, LedgerInfo
from books_kernel.exceptions import (
    InvalidAmountError,
    InvalidDateError,
    InvalidDateRangeError,
    InvalidInputError,
    UnknownLedgerTypeError,
)

COMPANY_ID = uuid4()


def _ledger(ledger_type: str, opening: Decimal | None = Decimal("0")) -> LedgerInfo:
    return LedgerInfo(
        ledger_id=uuid4(),
        company_id=COMPANY_ID,
        name=f"{ledger_type} ledger",
        ledger_type=ledger_type,
        opening_balance=opening,
    )


def _entry(
    ledger: LedgerInfo,
    on: date,
    debit: Decimal = Decimal("0"),
    credit: Decimal = Decimal("0"),
) -> EntryLine:
    return EntryLine(
        entry_id=uuid4(),
        voucher_id=uuid4(),
        ledger_id=ledger.ledger_id,
        voucher_date=on,
        debit_amount=debit,
        credit_amount=credit,
    )


class TestComputeNaturalBalance:
    def test_debit_normal(self):
        assert compute_natural_balance(
            Decimal("100"), Decimal("30"), NormalBalance.DEBIT,
        ) == Decimal("70")

    def test_credit_normal(self):
        assert compute_natural_balance(
            Decimal("100"), Decimal("30"), NormalBalance.CREDIT,
        ) == Decimal("-70")


class TestEvaluateBalanceAsOf:
    def test_capital_account_credit_increases(self):
        capital = _ledger("capital_account", Decimal("10000"))
        entries = [_entry(capital, date(2024, 1, 10), credit=Decimal("5000"))]

        balance = evaluate_balance(capital, entries, as_of_date=date(2024, 1, 31))

        assert balance == Decimal("15000")

    def test_fixed_assets_debit_increases(self):
        assets = _ledger("fixed_assets", Decimal("20000"))
        entries = [_entry(assets, date(2024, 1, 10), debit=Decimal("3000"))]

        balance = evaluate_balance(assets, entries, as_of_date=date(2024, 1, 31))

        assert balance == Decimal("23000")

    def test_entries_after_as_of_date_ignored(self):
        cash = _ledger("cash_in_hand", Decimal("500"))
        entries = [
            _entry(cash, date(2024, 1, 31), debit=Decimal("100")),
            _entry(cash, date(2024, 2, 1), debit=Decimal("999")),
        ]

        assert evaluate_balance(cash, entries, as_of_date=date(2024, 1, 31)) == Decimal("600")

    def test_no_entries_gives_opening(self):
        bank = _ledger("bank_accounts", Decimal("1234.56"))
        assert evaluate_balance(bank, [], as_of_date=date(2024, 1, 1)) == Decimal("1234.56")

    def test_null_opening_reads_as_zero(self):
        creditors = _ledger("sundry_creditors", None)
        entries = [_entry(creditors, date(2024, 1, 5), credit=Decimal("250"))]
        assert evaluate_balance(creditors, entries, as_of_date=date(2024, 1, 5)) == Decimal("250")

    def test_two_sided_entry_counts_both_amounts(self):
        debtors = _ledger("sundry_debtors")
        entries = [_entry(debtors, date(2024, 1, 5), debit=Decimal("300"), credit=Decimal("100"))]
        assert evaluate_balance(debtors, entries, as_of_date=date(2024, 1, 5)) == Decimal("200")

    def test_negative_balance_when_overdrawn(self):
        cash = _ledger("cash_in_hand", Decimal("100"))
        entries = [_entry(cash, date(2024, 1, 5), credit=Decimal("400"))]
        assert evaluate_balance(cash, entries, as_of_date=date(2024, 1, 5)) == Decimal("-300")


class TestEvaluateBalanceRange:
    def test_range_is_inclusive(self):
        sales = _ledger("sales_accounts")
        entries = [
            _entry(sales, date(2024, 3, 31), credit=Decimal("1")),
            _entry(sales, date(2024, 4, 1), credit=Decimal("10")),
            _entry(sales, date(2025, 3, 31), credit=Decimal("100")),
            _entry(sales, date(2025, 4, 1), credit=Decimal("1000")),
        ]

        balance = evaluate_balance(sales, entries, period=(date(2024, 4, 1), date(2025, 3, 31)))

        assert balance == Decimal("110")

    def test_sum_period_activity_excludes_opening(self):
        purchases = _ledger("purchase_accounts", Decimal("5000"))
        entries = [_entry(purchases, date(2024, 6, 1), debit=Decimal("700"))]

        activity = sum_period_activity(purchases, entries, (date(2024, 4, 1), date(2025, 3, 31)))

        assert activity == Decimal("700")

    def test_both_modes_rejected(self):
        cash = _ledger("cash_in_hand")
        with pytest.raises(InvalidInputError):
            evaluate_balance(
                cash, [], as_of_date=date(2024, 1, 1),
                period=(date(2024, 1, 1), date(2024, 1, 31)),
            )

    def test_neither_mode_rejected(self):
        with pytest.raises(InvalidInputError):
            evaluate_balance(_ledger("cash_in_hand"), [])

    def test_malformed_period_rejected(self):
        with pytest.raises(InvalidInputError):
            evaluate_balance(_ledger("cash_in_hand"), [], period=date(2024, 1, 1))


class TestMalformedInput:
    def test_unknown_ledger_type(self):
        odd = _ledger("goodwill")
        with pytest.raises(UnknownLedgerTypeError) as exc_info:
            evaluate_balance(odd, [], as_of_date=date(2024, 1, 1))
        assert exc_info.value.ledger_id == odd.ledger_id

    def test_float_amount_rejected(self):
        cash = _ledger("cash_in_hand")
        entries = [_entry(cash, date(2024, 1, 1), debit=100.0)]
        with pytest.raises(InvalidAmountError):
            evaluate_balance(cash, entries, as_of_date=date(2024, 1, 1))

    def test_nan_amount_rejected(self):
        cash = _ledger("cash_in_hand")
        entries = [_entry(cash, date(2024, 1, 1), credit=Decimal("NaN"))]
        with pytest.raises(InvalidAmountError):
            evaluate_balance(cash, entries, as_of_date=date(2024, 1, 1))

    def test_string_opening_rejected(self):
        cash = _ledger("cash_in_hand", "100")
        with pytest.raises(InvalidAmountError):
            evaluate_balance(cash, [], as_of_date=date(2024, 1, 1))

    def test_entry_of_other_ledger_rejected(self):
        cash = _ledger("cash_in_hand")
        bank = _ledger("bank_accounts")
        with pytest.raises(InvalidInputError):
            evaluate_balance(
                cash, [_entry(bank, date(2024, 1, 1), debit=Decimal("1"))],
                as_of_date=date(2024, 1, 1),
            )

    def test_bad_voucher_date_rejected(self):
        cash = _ledger("cash_in_hand")
        entry = EntryLine(
            entry_id=uuid4(), voucher_id=uuid4(), ledger_id=cash.ledger_id,
            voucher_date="2024-01-01",
        )
        with pytest.raises(InvalidDateError):
            evaluate_balance(cash, [entry], as_of_date=date(2024, 1, 1))


class TestDateValidation:
    def test_plain_date_accepted(self):
        assert validate_report_date("as_of_date", date(2024, 1, 1)) == date(2024, 1, 1)

    @pytest.mark.parametrize("value", ["2024-01-01", None, 20240101, datetime(2024, 1, 1)])
    def test_non_dates_rejected(self, value):
        with pytest.raises(InvalidDateError) as exc_info:
            validate_report_date("as_of_date", value)
        assert exc_info.value.field == "as_of_date"

    def test_single_day_period(self):
        assert validate_period(date(2024, 1, 1), date(2024, 1, 1)) == (
            date(2024, 1, 1), date(2024, 1, 1),
        )

    def test_reversed_period_rejected(self):
        with pytest.raises(InvalidDateRangeError) as exc_info:
            validate_period(date(2024, 2, 1), date(2024, 1, 1))
        assert exc_info.value.code == "INVALID_DATE_RANGE"

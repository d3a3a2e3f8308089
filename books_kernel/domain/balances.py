"""
Balance evaluation over the immutable voucher-entry log.

Pure functions.  ZERO I/O.  All amounts are Decimal and nothing is rounded
here; rounding happens at presentation time only.

Sign convention:
    DEBIT-normal (assets, purchase/expense):   delta = debit - credit
    CREDIT-normal (capital, liabilities, income): delta = credit - debit

A positive balance is a balance on the ledger's natural side.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable

from books_kernel.domain.classification import NormalBalance, classify
from books_kernel.domain.dtos import EntryLine, LedgerInfo
from books_kernel.exceptions import (
    InvalidDateError,
    InvalidDateRangeError,
    InvalidInputError,
    UnknownLedgerTypeError,
    ensure_money,
)

Period = tuple[date, date]

_ZERO = Decimal("0")


def validate_report_date(field: str, value: Any) -> date:
    """Reject anything that is not a plain calendar date (datetimes included)."""
    if isinstance(value, datetime) or not isinstance(value, date):
        raise InvalidDateError(field, value)
    return value


def validate_period(period_start: Any, period_end: Any) -> Period:
    """Validate an inclusive date range."""
    start = validate_report_date("period_start", period_start)
    end = validate_report_date("period_end", period_end)
    if start > end:
        raise InvalidDateRangeError(start, end)
    return start, end


def compute_natural_balance(
    debit_total: Decimal,
    credit_total: Decimal,
    normal_balance: NormalBalance,
) -> Decimal:
    """
    Compute a balance adjusted for the normal balance side.

    DEBIT-normal: debit_total - credit_total
    CREDIT-normal: credit_total - debit_total
    """
    if normal_balance == NormalBalance.DEBIT:
        return debit_total - credit_total
    return credit_total - debit_total


def normal_balance_of(ledger: LedgerInfo) -> NormalBalance:
    """Natural side of a ledger, from the classification table."""
    try:
        return classify(ledger.ledger_type).normal_balance
    except UnknownLedgerTypeError:
        raise UnknownLedgerTypeError(ledger.ledger_type, ledger.ledger_id) from None


def _checked_entries(
    ledger: LedgerInfo,
    entries: Iterable[EntryLine],
) -> list[tuple[date, Decimal, Decimal]]:
    checked: list[tuple[date, Decimal, Decimal]] = []
    for entry in entries:
        if not isinstance(entry, EntryLine):
            raise InvalidInputError(
                f"Expected EntryLine, got {type(entry).__name__}", field="entries",
            )
        if entry.ledger_id != ledger.ledger_id:
            raise InvalidInputError(
                f"Entry {entry.entry_id} belongs to ledger {entry.ledger_id}, "
                f"not {ledger.ledger_id}",
                field="entries",
            )
        voucher_date = validate_report_date("voucher_date", entry.voucher_date)
        checked.append((
            voucher_date,
            ensure_money("debit_amount", entry.debit_amount),
            ensure_money("credit_amount", entry.credit_amount),
        ))
    return checked


def _in_scope(
    voucher_date: date,
    as_of_date: date | None,
    period: Period | None,
) -> bool:
    if period is not None:
        return period[0] <= voucher_date <= period[1]
    return voucher_date <= as_of_date


def _signed_activity(
    ledger: LedgerInfo,
    entries: Iterable[EntryLine],
    as_of_date: date | None,
    period: Period | None,
) -> Decimal:
    normal = normal_balance_of(ledger)
    debit_total = _ZERO
    credit_total = _ZERO
    for voucher_date, debit, credit in _checked_entries(ledger, entries):
        if _in_scope(voucher_date, as_of_date, period):
            debit_total += debit
            credit_total += credit
    return compute_natural_balance(debit_total, credit_total, normal)


def resolve_scope(
    as_of_date: Any,
    period: Any,
) -> tuple[date | None, Period | None]:
    """Resolve a scope to (as_of_date, None) or (None, period); exactly one is given."""
    if (as_of_date is None) == (period is None):
        raise InvalidInputError(
            "Exactly one of as_of_date and period must be given", field="as_of_date",
        )
    if period is not None:
        try:
            period_start, period_end = period
        except (TypeError, ValueError):
            raise InvalidInputError(
                f"period must be a (start, end) pair, got {period!r}", field="period",
            ) from None
        return None, validate_period(period_start, period_end)
    return validate_report_date("as_of_date", as_of_date), None


def evaluate_balance(
    ledger: LedgerInfo,
    entries: Iterable[EntryLine],
    as_of_date: date | None = None,
    period: Period | None = None,
) -> Decimal:
    """
    Balance of a ledger: opening balance plus signed entry deltas.

    As-of mode counts entries with voucher_date <= as_of_date.  Range mode
    counts entries with period[0] <= voucher_date <= period[1].  With no
    matching entries the result is exactly the opening balance.

    Raises:
        InvalidInputError: Malformed date, range, amount or entry, or an
            entry that belongs to another ledger.
        UnknownLedgerTypeError: The ledger type has no classification.
    """
    as_of, rng = resolve_scope(as_of_date, period)
    opening = ensure_money("opening_balance", ledger.opening_balance)
    return opening + _signed_activity(ledger, entries, as_of, rng)


def sum_period_activity(
    ledger: LedgerInfo,
    entries: Iterable[EntryLine],
    period: Period,
) -> Decimal:
    """Signed in-range movement of a ledger, without its opening balance."""
    _, rng = resolve_scope(None, period)
    return _signed_activity(ledger, entries, None, rng)

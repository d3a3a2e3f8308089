"""
Typed Exception Hierarchy for the Books Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

A report either comes back complete or the caller gets a typed error.
Callers catch by type and read structured attributes instead of parsing
message strings:

    try:
        report = service.balance_sheet(company_id, as_of_date)
    except MissingLedgerError as e:
        log.warning(f"Entry {e.entry_id} points at unknown ledger {e.ledger_id}")
        api_response(code=e.code, ledger=str(e.ledger_id))

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from BooksError:

    BooksError (base)
    |
    +-- InvalidInputError
    |   +-- InvalidDateError
    |   +-- InvalidDateRangeError
    |   +-- InvalidAmountError
    |   +-- UnknownLedgerTypeError
    |
    +-- DataSourceError
        +-- MissingLedgerError
        +-- DataFetchError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                  | When Raised
----------------|-----------------------|-----------------------------------------
Input           | INVALID_INPUT         | Malformed ledger or entry snapshot
                | INVALID_DATE          | Report date is not a calendar date
                | INVALID_DATE_RANGE    | Period start falls after period end
                | INVALID_AMOUNT        | Float/non-finite amount, or negative
                |                       | / non-integer amount into words
                | UNKNOWN_LEDGER_TYPE   | Ledger type has no classification
----------------|-----------------------|-----------------------------------------
Data source     | DATA_SOURCE_ERROR     | Fetched data has an inconsistent shape
                | MISSING_LEDGER        | Entry references a ledger not fetched
                | DATA_FETCH_FAILED     | The underlying query raised
----------------|-----------------------|-----------------------------------------

No report is ever partially computed: any of the above aborts the whole
report and propagates to the caller. The engine performs no retries.
"""

from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID


class BooksError(Exception):
    """
    Base exception for all books kernel errors.

    All subclasses must have a `code` class attribute
    for machine-readable error identification.
    """

    code: str = "BOOKS_ERROR"


# Input-related exceptions


class InvalidInputError(BooksError):
    """Input to the engine is malformed."""

    code: str = "INVALID_INPUT"

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class InvalidDateError(InvalidInputError):
    """A report date is not a valid calendar date."""

    code: str = "INVALID_DATE"

    def __init__(self, field: str, value: Any):
        self.value = repr(value)
        super().__init__(
            f"{field} must be a datetime.date, got {type(value).__name__}: {value!r}",
            field=field,
        )


class InvalidDateRangeError(InvalidInputError):
    """Period start is after period end."""

    code: str = "INVALID_DATE_RANGE"

    def __init__(self, period_start: date, period_end: date):
        self.period_start = period_start
        self.period_end = period_end
        super().__init__(
            f"Period start {period_start} is after period end {period_end}",
            field="period",
        )


class InvalidAmountError(InvalidInputError):
    """An amount is not usable (float, non-finite, negative or fractional)."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, field: str, value: Any, reason: str):
        self.value = repr(value)
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}", field=field)


class UnknownLedgerTypeError(InvalidInputError):
    """Ledger type has no entry in the classification table."""

    code: str = "UNKNOWN_LEDGER_TYPE"

    def __init__(self, ledger_type: str, ledger_id: UUID | None = None):
        self.ledger_type = ledger_type
        self.ledger_id = ledger_id
        super().__init__(
            f"Ledger type {ledger_type!r} has no classification"
            + (f" (ledger {ledger_id})" if ledger_id is not None else ""),
            field="ledger_type",
        )


# Data source exceptions


class DataSourceError(BooksError):
    """The data source returned data the engine cannot use."""

    code: str = "DATA_SOURCE_ERROR"


class MissingLedgerError(DataSourceError):
    """A voucher entry references a ledger absent from the fetched set."""

    code: str = "MISSING_LEDGER"

    def __init__(self, ledger_id: UUID, entry_id: UUID | None = None):
        self.ledger_id = ledger_id
        self.entry_id = entry_id
        if entry_id is not None:
            message = f"Entry {entry_id} references unknown ledger {ledger_id}"
        else:
            message = f"Ledger not found: {ledger_id}"
        super().__init__(message)


class DataFetchError(DataSourceError):
    """The query against the data store failed."""

    code: str = "DATA_FETCH_FAILED"

    def __init__(self, operation: str, company_id: UUID, reason: str):
        self.operation = operation
        self.company_id = company_id
        self.reason = reason
        super().__init__(
            f"Fetching {operation} for company {company_id} failed: {reason}"
        )


def ensure_money(field: str, value: Any) -> Decimal:
    """Coerce a stored amount to Decimal, rejecting floats and non-finite values.

    None reads as zero (nullable amount columns). ints are accepted.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidAmountError(field, value, "amounts must be Decimal, never float")
    if isinstance(value, int):
        return Decimal(value)
    if not isinstance(value, Decimal):
        raise InvalidAmountError(field, value, "not a Decimal")
    if not value.is_finite():
        raise InvalidAmountError(field, value, "amount is not finite")
    return value

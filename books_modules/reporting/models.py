"""
Financial Reporting Domain Models (``books_modules.reporting.models``).

Responsibility
--------------
Frozen dataclass value objects representing report outputs: balance sheet,
profit & loss account, trial balance, ledger statement and day book.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Consumed by
``ReportingService`` and returned to callers.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary fields use ``Decimal`` -- NEVER ``float``.
* Every derived structure belongs to the single report call that built it;
  nothing here is cached or shared between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from books_kernel.domain.classification import StatementSection


# =========================================================================
# Enums
# =========================================================================


class ReportType(str, Enum):
    """Types of reports."""

    BALANCE_SHEET = "balance_sheet"
    PROFIT_AND_LOSS = "profit_and_loss"
    TRIAL_BALANCE = "trial_balance"
    LEDGER_STATEMENT = "ledger_statement"
    DAY_BOOK = "day_book"


class BalanceSide(str, Enum):
    """Dr/Cr marker of a uniformly signed (debit minus credit) balance."""

    DR = "Dr"
    CR = "Cr"


# =========================================================================
# Report Metadata (common to all reports)
# =========================================================================


@dataclass(frozen=True)
class ReportMetadata:
    """Metadata attached to every report."""

    report_type: ReportType
    company_id: UUID
    entity_name: str
    currency: str
    generated_at: str  # ISO format timestamp from injected clock
    as_of_date: date | None = None
    period_start: date | None = None
    period_end: date | None = None


# =========================================================================
# Grouped statements (Balance Sheet, Profit & Loss)
# =========================================================================


@dataclass(frozen=True)
class LedgerBalanceLine:
    """One ledger with its evaluated balance."""

    ledger_id: UUID
    name: str
    ledger_type: str
    group_label: str
    balance: Decimal


@dataclass(frozen=True)
class LedgerGroup:
    """Ledgers sharing a group label; total is the sum of their balances."""

    label: str
    section: StatementSection
    lines: tuple[LedgerBalanceLine, ...]
    total: Decimal


@dataclass(frozen=True)
class BalancingFigure:
    """The profit/loss plug added to the deficient side of a statement."""

    label: str
    amount: Decimal
    section: StatementSection


@dataclass(frozen=True)
class StatementSide:
    """
    One side of a two-sided statement.

    display_total = raw_total + balancing_figure.amount when the plug sits
    on this side, otherwise raw_total.
    """

    section: StatementSection
    groups: tuple[LedgerGroup, ...]
    raw_total: Decimal
    balancing_figure: BalancingFigure | None
    display_total: Decimal


@dataclass(frozen=True)
class BalanceSheetReport:
    """
    Balance sheet as on a date.

    Liabilities on one side, assets on the other; the balancing figure
    makes both display totals equal.
    """

    metadata: ReportMetadata
    liabilities: StatementSide
    assets: StatementSide
    total_liabilities: Decimal
    total_assets: Decimal
    difference: Decimal  # total_assets - total_liabilities
    plug_label: str | None
    plug_amount: Decimal
    amount_in_words: str
    is_balanced: bool  # liabilities.display_total == assets.display_total


@dataclass(frozen=True)
class ProfitAndLossReport:
    """
    Profit & Loss account for a period.

    Expenditure on one side, income on the other; Net Profit is shown on
    the expenditure side and Net Loss on the income side.
    """

    metadata: ReportMetadata
    expenses: StatementSide
    income: StatementSide
    total_expense: Decimal
    total_income: Decimal
    net_profit: Decimal  # total_income - total_expense, signed
    plug_label: str | None
    plug_amount: Decimal
    amount_in_words: str
    is_balanced: bool  # expenses.display_total == income.display_total


# =========================================================================
# Trial Balance
# =========================================================================


@dataclass(frozen=True)
class TrialBalanceRow:
    """
    A single ledger row.

    closing_balance = opening_balance + total_debit - total_credit for every
    ledger type; positive reads Dr, negative reads Cr.
    """

    ledger_id: UUID
    name: str
    ledger_type: str
    group_label: str
    opening_balance: Decimal
    total_debit: Decimal
    total_credit: Decimal
    closing_balance: Decimal
    closing_side: BalanceSide


@dataclass(frozen=True)
class TrialBalanceFooter:
    """Column totals of the trial balance."""

    total_debit: Decimal
    total_credit: Decimal
    closing_debit_total: Decimal  # sum of positive closing balances
    closing_credit_total: Decimal  # sum of |negative closing balances|


@dataclass(frozen=True)
class TrialBalanceReport:
    """Complete trial balance for a period."""

    metadata: ReportMetadata
    rows: tuple[TrialBalanceRow, ...]
    footer: TrialBalanceFooter


# =========================================================================
# Ledger Statement and Day Book
# =========================================================================


@dataclass(frozen=True)
class LedgerStatementLine:
    """One entry of a ledger statement with the running balance after it."""

    entry_id: UUID
    voucher_id: UUID
    voucher_date: date
    voucher_number: str | None
    voucher_type: str | None
    narration: str | None
    debit_amount: Decimal
    credit_amount: Decimal
    running_balance: Decimal


@dataclass(frozen=True)
class LedgerStatementReport:
    """Transactions of one ledger in a period or up to a date, with a running balance."""

    metadata: ReportMetadata
    ledger_id: UUID
    ledger_name: str
    opening_balance: Decimal
    lines: tuple[LedgerStatementLine, ...]
    total_debit: Decimal
    total_credit: Decimal
    closing_balance: Decimal


@dataclass(frozen=True)
class DayBookLine:
    """One entry line of a day-book voucher."""

    ledger_id: UUID
    ledger_name: str
    debit_amount: Decimal
    credit_amount: Decimal
    narration: str | None


@dataclass(frozen=True)
class DayBookVoucher:
    """A voucher and its entry lines."""

    voucher_id: UUID
    voucher_date: date
    voucher_type: str
    voucher_number: str | None
    narration: str | None
    lines: tuple[DayBookLine, ...]
    total_debit: Decimal
    total_credit: Decimal


@dataclass(frozen=True)
class DayBookReport:
    """All vouchers of a period in date order."""

    metadata: ReportMetadata
    vouchers: tuple[DayBookVoucher, ...]
    total_debit: Decimal
    total_credit: Decimal

"""
Ledger Reporting Module (``books_modules.reporting``).

Responsibility
--------------
Read-only module that derives reports from the voucher-entry log: balance
sheet, profit & loss account, trial balance, ledger statement and day
book.  Balances are never stored; every report is evaluated from entries
at request time.

Architecture position
---------------------
**Modules layer** -- pure statement functions plus a thin service over the
kernel selector.

Failure modes
-------------
* Malformed input -> ``InvalidInputError`` subclasses; nothing is returned.
* Entry referencing an unknown ledger -> ``MissingLedgerError``.
"""

from books_modules.reporting.config import BalancingLabels, ReportingConfig
from books_modules.reporting.generation import ReportRequestTracker
from books_modules.reporting.models import (
    BalanceSheetReport,
    BalanceSide,
    BalancingFigure,
    DayBookLine,
    DayBookReport,
    DayBookVoucher,
    LedgerBalanceLine,
    LedgerGroup,
    LedgerStatementLine,
    LedgerStatementReport,
    ProfitAndLossReport,
    ReportMetadata,
    ReportType,
    StatementSide,
    TrialBalanceFooter,
    TrialBalanceReport,
    TrialBalanceRow,
)
from books_modules.reporting.service import ReportingService
from books_modules.reporting.statements import render_to_dict
from books_modules.reporting.words import amount_to_words, rupees_in_words

__all__ = [
    # Service
    "ReportingService",
    "ReportRequestTracker",
    "render_to_dict",
    # Config
    "ReportingConfig",
    "BalancingLabels",
    # Words
    "amount_to_words",
    "rupees_in_words",
    # Models
    "ReportType",
    "BalanceSide",
    "ReportMetadata",
    "LedgerBalanceLine",
    "LedgerGroup",
    "BalancingFigure",
    "StatementSide",
    "BalanceSheetReport",
    "ProfitAndLossReport",
    "TrialBalanceRow",
    "TrialBalanceFooter",
    "TrialBalanceReport",
    "LedgerStatementLine",
    "LedgerStatementReport",
    "DayBookLine",
    "DayBookVoucher",
    "DayBookReport",
]

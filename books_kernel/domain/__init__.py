"""Pure domain layer: classification, balances, snapshot DTOs and the clock."""

from books_kernel.domain.balances import (
    compute_natural_balance,
    evaluate_balance,
    resolve_scope,
    sum_period_activity,
    validate_period,
    validate_report_date,
)
from books_kernel.domain.classification import (
    LEDGER_CLASSIFICATION,
    LedgerClass,
    NormalBalance,
    StatementSection,
    classify,
    group_label_for,
    ledger_types_for,
    section_of,
)
from books_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from books_kernel.domain.dtos import EntryLine, LedgerInfo, VoucherInfo

__all__ = [
    "LEDGER_CLASSIFICATION",
    "LedgerClass",
    "NormalBalance",
    "StatementSection",
    "classify",
    "group_label_for",
    "ledger_types_for",
    "section_of",
    "compute_natural_balance",
    "evaluate_balance",
    "resolve_scope",
    "sum_period_activity",
    "validate_period",
    "validate_report_date",
    "Clock",
    "SystemClock",
    "DeterministicClock",
    "LedgerInfo",
    "EntryLine",
    "VoucherInfo",
]

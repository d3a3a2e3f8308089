"""
Ledger classification table.

Maps every ledger type to its display group, its natural balance side and
the statement section it is reported in.  The table is data: adding a
ledger type means adding one row to ``LEDGER_CLASSIFICATION``.

Pure module -- no I/O, no clock, no database.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from books_kernel.exceptions import UnknownLedgerTypeError
from books_kernel.models.ledger import LedgerType


class NormalBalance(str, Enum):
    """Side on which a ledger's balance conventionally increases."""

    DEBIT = "debit"
    CREDIT = "credit"


class StatementSection(str, Enum):
    """Report section a ledger's group is presented in."""

    LIABILITY = "liability"
    ASSET = "asset"
    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class LedgerClass:
    """Classification of one ledger type."""

    group_label: str
    normal_balance: NormalBalance
    section: StatementSection


_CR = NormalBalance.CREDIT
_DR = NormalBalance.DEBIT
_L = StatementSection.LIABILITY
_A = StatementSection.ASSET
_I = StatementSection.INCOME
_E = StatementSection.EXPENSE

LEDGER_CLASSIFICATION: Mapping[str, LedgerClass] = MappingProxyType({
    LedgerType.CAPITAL_ACCOUNT.value: LedgerClass("Capital Account", _CR, _L),
    LedgerType.RESERVES_AND_SURPLUS.value: LedgerClass("Reserves & Surplus", _CR, _L),
    LedgerType.SECURED_LOANS.value: LedgerClass("Secured Loans", _CR, _L),
    LedgerType.UNSECURED_LOANS.value: LedgerClass("Unsecured Loans", _CR, _L),
    LedgerType.DUTIES_AND_TAXES.value: LedgerClass("Duties & Taxes", _CR, _L),
    LedgerType.SUNDRY_CREDITORS.value: LedgerClass("Sundry Creditors", _CR, _L),
    LedgerType.SUSPENSE_ACCOUNT.value: LedgerClass("Suspense A/c", _CR, _L),
    LedgerType.CURRENT_LIABILITIES.value: LedgerClass("Current Liabilities", _CR, _L),
    LedgerType.LOANS_LIABILITY.value: LedgerClass("Loans (Liability)", _CR, _L),
    LedgerType.BANK_OD_ACCOUNT.value: LedgerClass("Bank OD A/c", _CR, _L),
    LedgerType.PROVISIONS.value: LedgerClass("Provisions", _CR, _L),
    LedgerType.BRANCH_DIVISIONS.value: LedgerClass("Branch / Divisions", _CR, _L),
    LedgerType.PROFIT_AND_LOSS_ACCOUNT.value: LedgerClass("Profit & Loss A/c", _CR, _L),
    LedgerType.FIXED_ASSETS.value: LedgerClass("Fixed Assets", _DR, _A),
    LedgerType.INVESTMENTS.value: LedgerClass("Investments", _DR, _A),
    LedgerType.CURRENT_ASSETS.value: LedgerClass("Current Assets", _DR, _A),
    LedgerType.SUNDRY_DEBTORS.value: LedgerClass("Sundry Debtors", _DR, _A),
    LedgerType.CASH_IN_HAND.value: LedgerClass("Cash-in-Hand", _DR, _A),
    LedgerType.BANK_ACCOUNTS.value: LedgerClass("Bank Accounts", _DR, _A),
    LedgerType.STOCK_IN_HAND.value: LedgerClass("Stock-in-Hand", _DR, _A),
    LedgerType.DEPOSITS_ASSETS.value: LedgerClass("Deposits (Asset)", _DR, _A),
    LedgerType.LOANS_AND_ADVANCES_ASSETS.value: LedgerClass("Loans & Advances (Asset)", _DR, _A),
    LedgerType.MISC_EXPENSES_ASSET.value: LedgerClass("Misc. Expenses (Asset)", _DR, _A),
    LedgerType.SALES_ACCOUNTS.value: LedgerClass("Sales Accounts", _CR, _I),
    LedgerType.DIRECT_INCOMES.value: LedgerClass("Direct Incomes", _CR, _I),
    LedgerType.INDIRECT_INCOMES.value: LedgerClass("Indirect Incomes", _CR, _I),
    LedgerType.PURCHASE_ACCOUNTS.value: LedgerClass("Purchase Accounts", _DR, _E),
    LedgerType.DIRECT_EXPENSES.value: LedgerClass("Direct Expenses", _DR, _E),
    LedgerType.INDIRECT_EXPENSES.value: LedgerClass("Indirect Expenses", _DR, _E),
})


def _key(ledger_type: str | LedgerType) -> str:
    if isinstance(ledger_type, LedgerType):
        return ledger_type.value
    return ledger_type


def classify(ledger_type: str | LedgerType) -> LedgerClass:
    """
    Look up the classification of a ledger type.

    Raises:
        UnknownLedgerTypeError: If the type has no row in the table.
    """
    try:
        return LEDGER_CLASSIFICATION[_key(ledger_type)]
    except KeyError:
        raise UnknownLedgerTypeError(str(_key(ledger_type))) from None


def group_label_for(ledger_type: str | LedgerType) -> str:
    """Display group for a ledger type, falling back to the raw type string."""
    cls = LEDGER_CLASSIFICATION.get(_key(ledger_type))
    if cls is None:
        return str(_key(ledger_type))
    return cls.group_label


def ledger_types_for(*sections: StatementSection) -> tuple[str, ...]:
    """Ledger types reported in any of the given sections, in table order."""
    return tuple(
        ledger_type
        for ledger_type, cls in LEDGER_CLASSIFICATION.items()
        if cls.section in sections
    )


def section_of(ledger_type: str | LedgerType) -> StatementSection | None:
    """Statement section of a ledger type, or None if it is unclassified."""
    cls = LEDGER_CLASSIFICATION.get(_key(ledger_type))
    return cls.section if cls is not None else None

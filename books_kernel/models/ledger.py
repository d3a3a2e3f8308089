"""
Module: books_kernel.models.ledger
Responsibility: ORM persistence for ledgers -- the accounts every voucher
    entry is posted against -- and the LedgerType enumeration.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - ledger_type is stored as a plain string so that a value outside
      LedgerType can still be read; classification (domain/classification.py)
      decides what to do with it.
    - opening_balance is a signed Decimal; no floats.
"""

from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from books_kernel.db.base import TrackedBase, UUIDString
from books_kernel.db.types import money_column_type


class LedgerType(str, Enum):
    """Primary group a ledger belongs to."""

    # Capital and liability groups
    CAPITAL_ACCOUNT = "capital_account"
    RESERVES_AND_SURPLUS = "reserves_and_surplus"
    SECURED_LOANS = "secured_loans"
    UNSECURED_LOANS = "unsecured_loans"
    DUTIES_AND_TAXES = "duties_and_taxes"
    SUNDRY_CREDITORS = "sundry_creditors"
    SUSPENSE_ACCOUNT = "suspense_account"
    CURRENT_LIABILITIES = "current_liabilities"
    LOANS_LIABILITY = "loans_liability"
    BANK_OD_ACCOUNT = "bank_od_account"
    PROVISIONS = "provisions"
    BRANCH_DIVISIONS = "branch_divisions"
    PROFIT_AND_LOSS_ACCOUNT = "profit_and_loss_account"

    # Asset groups
    FIXED_ASSETS = "fixed_assets"
    INVESTMENTS = "investments"
    CURRENT_ASSETS = "current_assets"
    SUNDRY_DEBTORS = "sundry_debtors"
    CASH_IN_HAND = "cash_in_hand"
    BANK_ACCOUNTS = "bank_accounts"
    STOCK_IN_HAND = "stock_in_hand"
    DEPOSITS_ASSETS = "deposits_assets"
    LOANS_AND_ADVANCES_ASSETS = "loans_and_advances_assets"
    MISC_EXPENSES_ASSET = "misc_expenses_asset"

    # Income groups
    SALES_ACCOUNTS = "sales_accounts"
    DIRECT_INCOMES = "direct_incomes"
    INDIRECT_INCOMES = "indirect_incomes"

    # Expense groups
    PURCHASE_ACCOUNTS = "purchase_accounts"
    DIRECT_EXPENSES = "direct_expenses"
    INDIRECT_EXPENSES = "indirect_expenses"


class Ledger(TrackedBase):
    """
    A ledger (account) in a company's chart of accounts.

    Contract:
        (company_id, name) identifies a ledger for people; id identifies it
        for voucher entries.  The opening balance is expressed on the
        ledger's natural side (credit-normal ledgers carry a positive
        opening balance for a credit balance).
    """

    __tablename__ = "ledgers"

    __table_args__ = (
        Index("idx_ledger_company", "company_id"),
        Index("idx_ledger_company_type", "company_id", "ledger_type"),
    )

    company_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("companies.id"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    ledger_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    # Nullable in the source data; read as zero
    opening_balance: Mapped[Decimal | None] = mapped_column(
        money_column_type(),
        nullable=True,
        default=Decimal("0"),
    )

    # Party details (sundry debtors / creditors)
    gstin: Mapped[str | None] = mapped_column(
        String(15),
        nullable=True,
    )

    state: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Ledger {self.name} ({self.ledger_type})>"

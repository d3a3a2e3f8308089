"""
Module: books_kernel.models.voucher
Responsibility: ORM persistence for vouchers (sales, purchase, payment,
    receipt, journal...) and their entry lines.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - Entries are immutable once created; the reporting engine only reads them.
    - Each entry carries independent debit and credit amounts.  Normally one
      side is zero, but nothing here enforces single-sidedness and readers
      treat both as additive terms.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from books_kernel.db.base import TrackedBase, UUIDString
from books_kernel.db.types import money_column_type


class VoucherType(str, Enum):
    """Kinds of voucher recorded by the books."""

    SALES = "sales"
    PURCHASE = "purchase"
    PAYMENT = "payment"
    RECEIPT = "receipt"
    JOURNAL = "journal"
    CONTRA = "contra"
    CREDIT_NOTE = "credit_note"
    DEBIT_NOTE = "debit_note"


class Voucher(TrackedBase):
    """
    A recorded transaction document.

    Only company_id and voucher_date drive balance computation; the rest is
    carried for the day book and ledger statement.
    """

    __tablename__ = "vouchers"

    __table_args__ = (
        Index("idx_voucher_company_date", "company_id", "voucher_date"),
    )

    company_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("companies.id"),
        nullable=False,
    )

    voucher_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )

    voucher_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    voucher_number: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    narration: Mapped[str | None] = mapped_column(
        String(4000),
        nullable=True,
    )

    total_amount: Mapped[Decimal] = mapped_column(
        money_column_type(),
        nullable=False,
        default=Decimal("0"),
    )

    entries: Mapped[list["VoucherEntry"]] = relationship(
        back_populates="voucher",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Voucher {self.voucher_type} {self.voucher_number} {self.voucher_date}>"


class VoucherEntry(TrackedBase):
    """One debit and/or credit posting against one ledger within a voucher."""

    __tablename__ = "voucher_entries"

    __table_args__ = (
        Index("idx_entry_voucher", "voucher_id"),
        Index("idx_entry_ledger", "ledger_id"),
    )

    voucher_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("vouchers.id"),
        nullable=False,
    )

    ledger_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("ledgers.id"),
        nullable=False,
    )

    debit_amount: Mapped[Decimal | None] = mapped_column(
        money_column_type(),
        nullable=True,
        default=Decimal("0"),
    )

    credit_amount: Mapped[Decimal | None] = mapped_column(
        money_column_type(),
        nullable=True,
        default=Decimal("0"),
    )

    narration: Mapped[str | None] = mapped_column(
        String(4000),
        nullable=True,
    )

    voucher: Mapped["Voucher"] = relationship(back_populates="entries")

    def __repr__(self) -> str:
        return (
            f"<VoucherEntry ledger={self.ledger_id} "
            f"Dr {self.debit_amount} Cr {self.credit_amount}>"
        )

"""
Module: books_kernel.models.company
Responsibility: ORM persistence for companies -- the tenant boundary that owns
    ledgers and vouchers.
Architecture position: Kernel > Models.  May import from db/base.py only.
"""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from books_kernel.db.base import TrackedBase


class Company(TrackedBase):
    """
    A company whose books are reported on.

    Every ledger and voucher belongs to exactly one company; reports never
    mix data across companies.
    """

    __tablename__ = "companies"

    __table_args__ = (
        UniqueConstraint("name", name="uq_company_name"),
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    address: Mapped[str | None] = mapped_column(
        String(1000),
        nullable=True,
    )

    # GST registration and PAN, shown on report headers
    gstin: Mapped[str | None] = mapped_column(
        String(15),
        nullable=True,
    )

    pan: Mapped[str | None] = mapped_column(
        String(10),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Company {self.name}>"

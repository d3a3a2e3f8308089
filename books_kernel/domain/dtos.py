"""
Snapshot DTOs passed from selectors to the pure domain and report functions.

These frozen dataclasses are the bridge between the ORM layer and the pure
functions: selectors convert ORM rows into these before anything is
computed, so nothing downstream touches a session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True)
class LedgerInfo:
    """Snapshot of one ledger."""

    ledger_id: UUID
    company_id: UUID
    name: str
    ledger_type: str
    opening_balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class EntryLine:
    """
    One voucher entry joined with its parent voucher's date.

    Voucher metadata (type, number, narration, creation time) is optional;
    balance computation only needs the date and the two amounts.
    """

    entry_id: UUID
    voucher_id: UUID
    ledger_id: UUID
    voucher_date: date
    debit_amount: Decimal = Decimal("0")
    credit_amount: Decimal = Decimal("0")
    voucher_type: str | None = None
    voucher_number: str | None = None
    narration: str | None = None
    voucher_created_at: datetime | None = None


@dataclass(frozen=True)
class VoucherInfo:
    """A voucher with its entry lines, for the day book."""

    voucher_id: UUID
    company_id: UUID
    voucher_date: date
    voucher_type: str
    voucher_number: str | None = None
    narration: str | None = None
    total_amount: Decimal = Decimal("0")
    created_at: datetime | None = None
    entries: tuple[EntryLine, ...] = field(default_factory=tuple)

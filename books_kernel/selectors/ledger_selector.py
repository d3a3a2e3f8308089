"""
Module: books_kernel.selectors.ledger_selector
Responsibility: Read-only, company-scoped queries over ledgers, vouchers and
    voucher entries.  This is the engine's data source: every report starts
    from the snapshots returned here.
Architecture position: Kernel > Selectors.  May import from models/, domain/dtos
    and selectors/base.py.

Invariants enforced:
    - No stored balances.  Balances are always derived from entries at
      report time.
    - Every query is scoped to one company.
    - Entries come back joined with their voucher's date and already filtered
      to the requested date bound.

Failure modes:
    - DataFetchError wraps any SQLAlchemyError raised by a query.
    - MissingLedgerError from get_ledger() for an unknown ledger id.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from books_kernel.domain.dtos import EntryLine, LedgerInfo, VoucherInfo
from books_kernel.exceptions import DataFetchError, MissingLedgerError
from books_kernel.logging_config import get_logger
from books_kernel.models.company import Company
from books_kernel.models.ledger import Ledger
from books_kernel.models.voucher import Voucher, VoucherEntry
from books_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.ledger")

_ZERO = Decimal("0")


def _money(value: Decimal | None) -> Decimal:
    return _ZERO if value is None else value


def _ledger_info(ledger: Ledger) -> LedgerInfo:
    return LedgerInfo(
        ledger_id=ledger.id,
        company_id=ledger.company_id,
        name=ledger.name,
        ledger_type=ledger.ledger_type,
        opening_balance=_money(ledger.opening_balance),
    )


def _entry_line(entry: VoucherEntry, voucher: Voucher) -> EntryLine:
    return EntryLine(
        entry_id=entry.id,
        voucher_id=voucher.id,
        ledger_id=entry.ledger_id,
        voucher_date=voucher.voucher_date,
        debit_amount=_money(entry.debit_amount),
        credit_amount=_money(entry.credit_amount),
        voucher_type=voucher.voucher_type,
        voucher_number=voucher.voucher_number,
        narration=entry.narration or voucher.narration,
        voucher_created_at=voucher.created_at,
    )


class LedgerSelector(BaseSelector):
    """
    Selector for ledger and voucher-entry snapshots.

    Contract:
        Returns frozen DTOs (LedgerInfo, EntryLine, VoucherInfo), ordered
        deterministically.  Never writes.
    """

    def __init__(self, session: Session):
        super().__init__(session)

    def company_name(self, company_id: UUID) -> str | None:
        """Name of the company, or None if it is not on file."""
        try:
            return self.session.execute(
                select(Company.name).where(Company.id == company_id)
            ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise DataFetchError("company", company_id, str(exc)) from exc

    def list_ledgers(
        self,
        company_id: UUID,
        ledger_types: Iterable[str] | None = None,
    ) -> list[LedgerInfo]:
        """
        Ledgers of a company, optionally restricted to some ledger types.

        Args:
            company_id: Owning company.
            ledger_types: Ledger-type filter; None means every ledger.

        Returns:
            LedgerInfo list ordered by name, then id.
        """
        query = select(Ledger).where(Ledger.company_id == company_id)
        if ledger_types is not None:
            query = query.where(Ledger.ledger_type.in_(list(ledger_types)))
        query = query.order_by(Ledger.name, Ledger.id)

        try:
            ledgers = self.session.execute(query).scalars().all()
        except SQLAlchemyError as exc:
            raise DataFetchError("ledgers", company_id, str(exc)) from exc

        logger.debug(
            "ledgers_fetched",
            extra={"company_id": str(company_id), "ledger_count": len(ledgers)},
        )
        return [_ledger_info(ledger) for ledger in ledgers]

    def get_ledger(self, company_id: UUID, ledger_id: UUID) -> LedgerInfo:
        """
        One ledger of a company.

        Raises:
            MissingLedgerError: If the ledger does not exist in the company.
        """
        query = select(Ledger).where(
            Ledger.company_id == company_id,
            Ledger.id == ledger_id,
        )
        try:
            ledger = self.session.execute(query).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise DataFetchError("ledger", company_id, str(exc)) from exc
        if ledger is None:
            raise MissingLedgerError(ledger_id)
        return _ledger_info(ledger)

    def list_transaction_entries(
        self,
        company_id: UUID,
        as_of_date: date | None = None,
        period: tuple[date, date] | None = None,
        ledger_id: UUID | None = None,
    ) -> list[EntryLine]:
        """
        Voucher entries of a company joined with their voucher date.

        Args:
            company_id: Owning company (of the voucher).
            as_of_date: Keep entries with voucher_date <= as_of_date.
            period: Keep entries with start <= voucher_date <= end.
            ledger_id: Optional single-ledger filter.

        Returns:
            EntryLine list ordered by voucher date, voucher creation time,
            voucher number, entry id.
        """
        query = (
            select(VoucherEntry, Voucher)
            .join(Voucher, VoucherEntry.voucher_id == Voucher.id)
            .where(Voucher.company_id == company_id)
        )
        if as_of_date is not None:
            query = query.where(Voucher.voucher_date <= as_of_date)
        if period is not None:
            query = query.where(
                Voucher.voucher_date >= period[0],
                Voucher.voucher_date <= period[1],
            )
        if ledger_id is not None:
            query = query.where(VoucherEntry.ledger_id == ledger_id)
        query = query.order_by(
            Voucher.voucher_date, Voucher.created_at, Voucher.voucher_number,
            Voucher.id, VoucherEntry.id,
        )

        try:
            rows = self.session.execute(query).all()
        except SQLAlchemyError as exc:
            raise DataFetchError("voucher entries", company_id, str(exc)) from exc

        logger.debug(
            "entries_fetched",
            extra={"company_id": str(company_id), "entry_count": len(rows)},
        )
        return [_entry_line(entry, voucher) for entry, voucher in rows]

    def list_vouchers(
        self,
        company_id: UUID,
        period: tuple[date, date],
    ) -> list[VoucherInfo]:
        """
        Vouchers of a company within a date range, with their entries.

        Returns:
            VoucherInfo list ordered by voucher date, creation time, voucher
            number, id.
        """
        query = (
            select(Voucher)
            .where(
                Voucher.company_id == company_id,
                Voucher.voucher_date >= period[0],
                Voucher.voucher_date <= period[1],
            )
            .order_by(
                Voucher.voucher_date, Voucher.created_at,
                Voucher.voucher_number, Voucher.id,
            )
        )
        try:
            vouchers = self.session.execute(query).scalars().all()
        except SQLAlchemyError as exc:
            raise DataFetchError("vouchers", company_id, str(exc)) from exc

        result = []
        for voucher in vouchers:
            entries = sorted(voucher.entries, key=lambda e: str(e.id))
            result.append(
                VoucherInfo(
                    voucher_id=voucher.id,
                    company_id=voucher.company_id,
                    voucher_date=voucher.voucher_date,
                    voucher_type=voucher.voucher_type,
                    voucher_number=voucher.voucher_number,
                    narration=voucher.narration,
                    total_amount=_money(voucher.total_amount),
                    created_at=voucher.created_at,
                    entries=tuple(_entry_line(e, voucher) for e in entries),
                )
            )
        return result

"""
Reporting-specific test fixtures.

Provides:
- ReportingService instances
- Snapshot builders for the pure statement functions
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from books_kernel.domain.dtos import EntryLine, LedgerInfo
from books_modules.reporting.config import ReportingConfig
from books_modules.reporting.service import ReportingService

COMPANY_ID = uuid4()


@pytest.fixture
def reporting_config() -> ReportingConfig:
    """Standard reporting configuration for tests."""
    return ReportingConfig.with_defaults()


@pytest.fixture
def reporting_service(
    session,
    deterministic_clock,
    reporting_config,
) -> ReportingService:
    """ReportingService wired to the test session."""
    return ReportingService(
        session=session,
        clock=deterministic_clock,
        config=reporting_config,
    )


def make_ledger_info(
    name: str,
    ledger_type: str,
    opening_balance: Decimal | None = Decimal("0"),
    ledger_id: UUID | None = None,
) -> LedgerInfo:
    """Build a LedgerInfo snapshot for pure-function tests."""
    return LedgerInfo(
        ledger_id=ledger_id or uuid4(),
        company_id=COMPANY_ID,
        name=name,
        ledger_type=ledger_type,
        opening_balance=opening_balance,
    )


def make_entry(
    ledger: LedgerInfo,
    voucher_date: date,
    debit: Decimal = Decimal("0"),
    credit: Decimal = Decimal("0"),
    voucher_id: UUID | None = None,
    voucher_number: str | None = None,
    voucher_created_at: datetime | None = None,
) -> EntryLine:
    """Build an EntryLine snapshot for pure-function tests."""
    return EntryLine(
        entry_id=uuid4(),
        voucher_id=voucher_id or uuid4(),
        ledger_id=ledger.ledger_id,
        voucher_date=voucher_date,
        debit_amount=debit,
        credit_amount=credit,
        voucher_type="journal",
        voucher_number=voucher_number,
        voucher_created_at=voucher_created_at,
    )

"""
Pytest fixtures for the books test suite.

Provides:
- In-memory SQLite database sessions (one fresh database per test)
- Company / ledger / voucher builders
- Logging capture

Environment Variables:
- DATABASE_URL: optional SQLAlchemy URL.  Defaults to in-memory SQLite.
"""

import json
import logging
import os
from datetime import date, datetime
from decimal import Decimal
from io import StringIO
from typing import Generator
from uuid import UUID

import pytest
from sqlalchemy.orm import Session

from books_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from books_kernel.domain.clock import DeterministicClock
from books_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from books_kernel.models import Company, Ledger, Voucher, VoucherEntry, VoucherType

DEFAULT_TEST_URL = "sqlite://"


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture books_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, reporting_service):
            reporting_service.balance_sheet(...)
            logs = captured_logs()
            assert any(r["message"] == "balance_sheet_generated" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("books_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """Provide a session on a freshly created database."""
    init_engine_from_url(os.environ.get("DATABASE_URL", DEFAULT_TEST_URL))
    create_tables()
    sess = get_session()
    yield sess
    try:
        sess.close()
        drop_tables()
    finally:
        reset_engine()


@pytest.fixture
def deterministic_clock():
    """Provide a deterministic clock for testing."""
    return DeterministicClock()


# =============================================================================
# Data builders
# =============================================================================


@pytest.fixture
def company(session) -> Company:
    """A persisted company."""
    c = Company(name="Shree Traders", gstin="27AAAAA0000A1Z5", pan="AAAAA0000A")
    session.add(c)
    session.flush()
    return c


@pytest.fixture
def create_ledger(session, company):
    """Factory: persist a ledger for the test company."""

    def _create(
        name: str,
        ledger_type: str,
        opening_balance: Decimal | None = Decimal("0"),
        company_id: UUID | None = None,
    ) -> Ledger:
        ledger = Ledger(
            company_id=company_id or company.id,
            name=name,
            ledger_type=ledger_type,
            opening_balance=opening_balance,
        )
        session.add(ledger)
        session.flush()
        return ledger

    return _create


@pytest.fixture
def create_voucher(session, company):
    """
    Factory: persist a voucher with entry lines.

    ``lines`` is a list of (ledger, debit, credit) tuples.
    """

    def _create(
        voucher_date: date,
        lines: list[tuple[Ledger | UUID, Decimal, Decimal]],
        voucher_type: str = VoucherType.JOURNAL.value,
        voucher_number: str | None = None,
        narration: str | None = None,
        company_id: UUID | None = None,
        created_at: datetime | None = None,
    ) -> Voucher:
        voucher = Voucher(
            company_id=company_id or company.id,
            voucher_date=voucher_date,
            voucher_type=voucher_type,
            voucher_number=voucher_number,
            narration=narration,
            total_amount=sum((d for _, d, _ in lines), Decimal("0")),
        )
        if created_at is not None:
            voucher.created_at = created_at
        session.add(voucher)
        session.flush()
        for ledger, debit, credit in lines:
            ledger_id = ledger.id if isinstance(ledger, Ledger) else ledger
            session.add(
                VoucherEntry(
                    voucher_id=voucher.id,
                    ledger_id=ledger_id,
                    debit_amount=debit,
                    credit_amount=credit,
                )
            )
        session.flush()
        return voucher

    return _create

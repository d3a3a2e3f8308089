"""
Reporting Module Service (``books_modules.reporting.service``).

Responsibility
--------------
Orchestrates report generation -- balance sheet, profit & loss account,
trial balance, ledger statement and day book -- by bridging the database
selector (``LedgerSelector``) to the pure transformation functions in
``statements.py``.  This is a **read-only** service: no vouchers are
written and no balances are stored.

Architecture position
---------------------
**Modules layer** -- thin glue.  ``ReportingService`` is the sole public
entry point for report generation.  Constructor: ``session`` + ``clock`` +
``config``.

Invariants enforced
-------------------
* Read-only -- no mutations to ledgers or vouchers.
* All monetary amounts use ``Decimal`` -- NEVER ``float``.
* Every report is derived from entries fetched for that call only.
* Report metadata carries the generation timestamp and parameters.

Failure modes
-------------
* Invalid report parameters (bad date, end before start)  ->
  ``InvalidInputError`` subclasses raised before any query executes.
* Selector query failure  -> ``DataFetchError``.
* Entry referencing an unknown ledger  -> ``MissingLedgerError``; no
  partial report is returned.
"""

from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from books_kernel.domain.balances import validate_period, validate_report_date
from books_kernel.domain.clock import Clock, SystemClock
from books_kernel.domain.dtos import LedgerInfo
from books_kernel.exceptions import InvalidInputError
from books_kernel.logging_config import LogContext, get_logger
from books_kernel.selectors.ledger_selector import LedgerSelector

from books_modules.reporting.config import ReportingConfig
from books_modules.reporting.models import (
    BalanceSheetReport,
    DayBookReport,
    LedgerStatementReport,
    ProfitAndLossReport,
    ReportMetadata,
    ReportType,
    TrialBalanceReport,
)
from books_modules.reporting.statements import (
    build_balance_sheet,
    build_day_book,
    build_ledger_statement,
    build_profit_and_loss,
    build_trial_balance,
)

logger = get_logger("modules.reporting.service")


class ReportingService:
    """
    Ledger report generation service.

    Contract
    --------
    * Every public method returns a typed, frozen report DTO.
    * All methods are **read-only**.

    Guarantees
    ----------
    * Report generation delegates to pure transformation functions in
      ``statements.py``; no accounting logic lives in this class.
    * Clock is injectable for deterministic testing.

    Non-goals
    ---------
    * Does NOT cache reports between calls.
    * Does NOT discard stale results; wrap calls in a
      ``ReportRequestTracker`` for that.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._config = config or ReportingConfig.with_defaults()
        self._ledger = LedgerSelector(session)

        logger.info(
            "reporting_service_initialized",
            extra={
                "entity_name": self._config.entity_name,
                "default_currency": self._config.default_currency,
            },
        )

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def _build_metadata(
        self,
        report_type: ReportType,
        company_id: UUID,
        as_of_date: date | None = None,
        period_start: date | None = None,
        period_end: date | None = None,
    ) -> ReportMetadata:
        """Build report metadata with injected clock timestamp."""
        entity_name = self._ledger.company_name(company_id) or self._config.entity_name
        return ReportMetadata(
            report_type=report_type,
            company_id=company_id,
            entity_name=entity_name,
            currency=self._config.default_currency,
            generated_at=self._clock.now().isoformat(),
            as_of_date=as_of_date,
            period_start=period_start,
            period_end=period_end,
        )

    def _load_ledgers(self, company_id: UUID) -> list[LedgerInfo]:
        ledgers = self._ledger.list_ledgers(company_id)
        logger.debug(
            "ledgers_loaded_for_reporting",
            extra={"ledger_count": len(ledgers)},
        )
        return ledgers

    # =========================================================================
    # Public API
    # =========================================================================

    def balance_sheet(
        self,
        company_id: UUID,
        as_of_date: date,
    ) -> BalanceSheetReport:
        """
        Generate the balance sheet as on a date.

        Args:
            company_id: Company to report on.
            as_of_date: Entries dated on or before this date are counted.

        Returns:
            BalanceSheetReport whose two display totals are equal.
        """
        as_of_date = validate_report_date("as_of_date", as_of_date)
        with LogContext.bind(
            company_id=str(company_id),
            report_type=ReportType.BALANCE_SHEET.value,
        ):
            ledgers = self._load_ledgers(company_id)
            entries = self._ledger.list_transaction_entries(
                company_id, as_of_date=as_of_date,
            )
            metadata = self._build_metadata(
                ReportType.BALANCE_SHEET, company_id, as_of_date=as_of_date,
            )
            report = build_balance_sheet(
                ledgers, entries, as_of_date, self._config, metadata,
            )

            logger.info(
                "balance_sheet_generated",
                extra={
                    "as_of_date": as_of_date.isoformat(),
                    "total_assets": str(report.total_assets),
                    "total_liabilities": str(report.total_liabilities),
                    "plug_label": report.plug_label,
                    "is_balanced": report.is_balanced,
                },
            )
        return report

    def profit_and_loss(
        self,
        company_id: UUID,
        period_start: date,
        period_end: date,
    ) -> ProfitAndLossReport:
        """
        Generate the profit & loss account for a period.

        Only in-period entries count; opening balances do not.
        """
        period = validate_period(period_start, period_end)
        with LogContext.bind(
            company_id=str(company_id),
            report_type=ReportType.PROFIT_AND_LOSS.value,
        ):
            ledgers = self._load_ledgers(company_id)
            entries = self._ledger.list_transaction_entries(company_id, period=period)
            metadata = self._build_metadata(
                ReportType.PROFIT_AND_LOSS,
                company_id,
                period_start=period[0],
                period_end=period[1],
            )
            report = build_profit_and_loss(
                ledgers, entries, period, self._config, metadata,
            )

            logger.info(
                "profit_and_loss_generated",
                extra={
                    "period_start": period[0].isoformat(),
                    "period_end": period[1].isoformat(),
                    "total_income": str(report.total_income),
                    "total_expense": str(report.total_expense),
                    "net_profit": str(report.net_profit),
                },
            )
        return report

    def trial_balance(
        self,
        company_id: UUID,
        period_start: date,
        period_end: date,
    ) -> TrialBalanceReport:
        """Generate the trial balance of every ledger for a period."""
        period = validate_period(period_start, period_end)
        with LogContext.bind(
            company_id=str(company_id),
            report_type=ReportType.TRIAL_BALANCE.value,
        ):
            ledgers = self._load_ledgers(company_id)
            entries = self._ledger.list_transaction_entries(company_id, period=period)
            metadata = self._build_metadata(
                ReportType.TRIAL_BALANCE,
                company_id,
                period_start=period[0],
                period_end=period[1],
            )
            report = build_trial_balance(ledgers, entries, period, metadata)

            logger.info(
                "trial_balance_generated",
                extra={
                    "period_start": period[0].isoformat(),
                    "period_end": period[1].isoformat(),
                    "row_count": len(report.rows),
                    "total_debit": str(report.footer.total_debit),
                    "total_credit": str(report.footer.total_credit),
                },
            )
        return report

    def ledger_statement(
        self,
        company_id: UUID,
        ledger_id: UUID,
        period_start: date | None = None,
        period_end: date | None = None,
        as_of_date: date | None = None,
    ) -> LedgerStatementReport:
        """
        Generate the statement of one ledger.

        Pass either ``period_start`` and ``period_end`` for the entries of a
        period, or ``as_of_date`` for every entry up to that date (the
        drill-down from a balance sheet group).

        Raises:
            InvalidInputError: Both scopes, or neither, were given.
            MissingLedgerError: If the ledger is not in the company.
        """
        if as_of_date is not None and (period_start, period_end) != (None, None):
            raise InvalidInputError(
                "Give either a period or as_of_date, not both", field="as_of_date",
            )
        if as_of_date is not None:
            period = None
            as_of_date = validate_report_date("as_of_date", as_of_date)
        else:
            period = validate_period(period_start, period_end)

        with LogContext.bind(
            company_id=str(company_id),
            report_type=ReportType.LEDGER_STATEMENT.value,
        ):
            ledger = self._ledger.get_ledger(company_id, ledger_id)
            entries = self._ledger.list_transaction_entries(
                company_id, as_of_date=as_of_date, period=period, ledger_id=ledger_id,
            )
            metadata = self._build_metadata(
                ReportType.LEDGER_STATEMENT,
                company_id,
                as_of_date=as_of_date,
                period_start=period[0] if period else None,
                period_end=period[1] if period else None,
            )
            report = build_ledger_statement(
                ledger, entries, period, metadata, as_of_date=as_of_date,
            )

            logger.info(
                "ledger_statement_generated",
                extra={
                    "ledger_id": str(ledger_id),
                    "line_count": len(report.lines),
                    "closing_balance": str(report.closing_balance),
                },
            )
        return report

    def day_book(
        self,
        company_id: UUID,
        period_start: date,
        period_end: date,
    ) -> DayBookReport:
        """Generate the day book: every voucher of the period with its entries."""
        period = validate_period(period_start, period_end)
        with LogContext.bind(
            company_id=str(company_id),
            report_type=ReportType.DAY_BOOK.value,
        ):
            ledgers = self._load_ledgers(company_id)
            vouchers = self._ledger.list_vouchers(company_id, period)
            metadata = self._build_metadata(
                ReportType.DAY_BOOK,
                company_id,
                period_start=period[0],
                period_end=period[1],
            )
            report = build_day_book(vouchers, ledgers, metadata)

            logger.info(
                "day_book_generated",
                extra={
                    "voucher_count": len(report.vouchers),
                    "total_debit": str(report.total_debit),
                    "total_credit": str(report.total_credit),
                },
            )
        return report

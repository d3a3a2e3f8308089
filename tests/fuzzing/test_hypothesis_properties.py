"""
Hypothesis-based property tests for the statement engine.

Properties checked:
- No entries in scope -> balance equals the opening balance
- Swapping debit and credit on every entry mirrors the period movement
- Grouping is independent of input order
- The balancing figure always equalises both display totals
- Trial balance footer columns reconcile with the row closings
"""

from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

from hypothesis import given, settings
from hypothesis import strategies as st

from books_kernel.domain.balances import evaluate_balance, sum_period_activity
from books_kernel.domain.classification import StatementSection
from books_kernel.domain.dtos import EntryLine, LedgerInfo
from books_kernel.models.ledger import LedgerType
from books_modules.reporting.config import ReportingConfig
from books_modules.reporting.models import ReportMetadata, ReportType
from books_modules.reporting.statements import (
    balance_sheet_plug,
    build_balance_sheet,
    build_profit_and_loss,
    build_side,
    build_trial_balance,
    evaluate_ledger_balances,
    group_ledgers,
    index_entries_by_ledger,
    profit_and_loss_plug,
)

COMPANY_ID = uuid4()
BASE_DATE = date(2024, 4, 1)
PERIOD = (BASE_DATE, BASE_DATE + timedelta(days=364))

amounts = st.decimals(
    min_value=Decimal("0"), max_value=Decimal("99999999.99"), places=2,
    allow_nan=False, allow_infinity=False,
)
signed_amounts = st.decimals(
    min_value=Decimal("-99999999.99"), max_value=Decimal("99999999.99"), places=2,
    allow_nan=False, allow_infinity=False,
)
ledger_types = st.sampled_from([t.value for t in LedgerType])


@st.composite
def ledgers_with_entries(draw, max_ledgers: int = 8, max_entries: int = 20):
    count = draw(st.integers(min_value=0, max_value=max_ledgers))
    ledgers = [
        LedgerInfo(
            ledger_id=uuid4(),
            company_id=COMPANY_ID,
            name=draw(st.text(alphabet="ABCDEF", min_size=1, max_size=3)),
            ledger_type=draw(ledger_types),
            opening_balance=draw(signed_amounts),
        )
        for _ in range(count)
    ]
    entries = []
    if ledgers:
        for _ in range(draw(st.integers(min_value=0, max_value=max_entries))):
            ledger = draw(st.sampled_from(ledgers))
            entries.append(
                EntryLine(
                    entry_id=uuid4(),
                    voucher_id=uuid4(),
                    ledger_id=ledger.ledger_id,
                    voucher_date=BASE_DATE + timedelta(days=draw(st.integers(-30, 400))),
                    debit_amount=draw(amounts),
                    credit_amount=draw(amounts),
                )
            )
    return ledgers, entries


def _metadata(report_type: ReportType) -> ReportMetadata:
    return ReportMetadata(
        report_type=report_type,
        company_id=COMPANY_ID,
        entity_name="Fuzz Co",
        currency="INR",
        generated_at="2024-01-01T12:00:00+00:00",
    )


class TestBalanceProperties:
    @given(opening=signed_amounts, ledger_type=ledger_types)
    def test_opening_preserved_without_entries(self, opening, ledger_type):
        ledger = LedgerInfo(uuid4(), COMPANY_ID, "L", ledger_type, opening)
        assert evaluate_balance(ledger, [], as_of_date=BASE_DATE) == opening
        assert evaluate_balance(ledger, [], period=PERIOD) == opening

    @given(data=ledgers_with_entries(max_ledgers=1))
    def test_swapping_sides_negates_movement(self, data):
        ledgers, entries = data
        if not ledgers:
            return
        ledger = ledgers[0]
        swapped = [
            EntryLine(
                entry_id=e.entry_id,
                voucher_id=e.voucher_id,
                ledger_id=e.ledger_id,
                voucher_date=e.voucher_date,
                debit_amount=e.credit_amount,
                credit_amount=e.debit_amount,
            )
            for e in entries
        ]
        assert sum_period_activity(ledger, swapped, PERIOD) == -sum_period_activity(
            ledger, entries, PERIOD,
        )


class TestGroupingProperties:
    @given(data=ledgers_with_entries(), seed=st.randoms(use_true_random=False))
    @settings(max_examples=50)
    def test_grouping_independent_of_order(self, data, seed):
        ledgers, entries = data
        index = index_entries_by_ledger(ledgers, entries)
        lines = evaluate_ledger_balances(ledgers, index, as_of_date=PERIOD[1])
        shuffled = list(lines)
        seed.shuffle(shuffled)
        order = ReportingConfig().order_for(StatementSection.ASSET)

        assert group_ledgers(lines, StatementSection.ASSET, order) == group_ledgers(
            shuffled, StatementSection.ASSET, order,
        )


class TestPlugProperties:
    @given(assets=signed_amounts, liabilities=signed_amounts)
    def test_balance_sheet_sides_equal(self, assets, liabilities):
        plug = balance_sheet_plug(assets, liabilities)
        asset_side = build_side(StatementSection.ASSET, (), plug)
        liability_side = build_side(StatementSection.LIABILITY, (), plug)
        # Empty groups: display totals are just the plug amounts
        assert assets + asset_side.display_total == liabilities + liability_side.display_total

    @given(income=signed_amounts, expense=signed_amounts)
    def test_profit_and_loss_sides_equal(self, income, expense):
        plug = profit_and_loss_plug(income, expense)
        income_side = build_side(StatementSection.INCOME, (), plug)
        expense_side = build_side(StatementSection.EXPENSE, (), plug)
        assert income + income_side.display_total == expense + expense_side.display_total

    @given(data=ledgers_with_entries())
    @settings(max_examples=50)
    def test_balance_sheet_always_balanced(self, data):
        ledgers, entries = data
        report = build_balance_sheet(
            ledgers, entries, PERIOD[1], ReportingConfig(),
            _metadata(ReportType.BALANCE_SHEET),
        )
        assert report.is_balanced
        assert report.liabilities.display_total == report.assets.display_total

    @given(data=ledgers_with_entries())
    @settings(max_examples=50)
    def test_profit_and_loss_always_balanced(self, data):
        ledgers, entries = data
        report = build_profit_and_loss(
            ledgers, entries, PERIOD, ReportingConfig(),
            _metadata(ReportType.PROFIT_AND_LOSS),
        )
        assert report.is_balanced


class TestTrialBalanceProperties:
    @given(data=ledgers_with_entries())
    @settings(max_examples=50)
    def test_footer_reconciles(self, data):
        ledgers, entries = data
        report = build_trial_balance(ledgers, entries, PERIOD, _metadata(ReportType.TRIAL_BALANCE))
        footer = report.footer
        net_closing = sum((r.closing_balance for r in report.rows), Decimal("0"))
        assert footer.closing_debit_total - footer.closing_credit_total == net_closing
        net_opening = sum((r.opening_balance for r in report.rows), Decimal("0"))
        assert net_opening + footer.total_debit - footer.total_credit == net_closing

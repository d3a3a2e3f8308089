"""
Pure report transformation functions.

These functions turn ledger snapshots and voucher-entry snapshots into
structured reports.  ZERO I/O.  ZERO side effects.

All monetary values are Decimal.  All inputs/outputs are frozen dataclasses.

Functions in this module follow the books_kernel/domain/ purity convention:
- No database access
- No clock access
- No file I/O
- Deterministic: same inputs always produce same outputs, whatever their order

A report is computed completely or not at all: any invalid input raises
before a report object exists.
"""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Iterable, Sequence
from uuid import UUID

from books_kernel.db.types import round_money
from books_kernel.domain.balances import (
    Period,
    evaluate_balance,
    resolve_scope,
    sum_period_activity,
    validate_period,
    validate_report_date,
)
from books_kernel.domain.classification import (
    StatementSection,
    group_label_for,
    section_of,
)
from books_kernel.domain.dtos import EntryLine, LedgerInfo, VoucherInfo
from books_kernel.exceptions import InvalidInputError, MissingLedgerError, ensure_money
from books_modules.reporting.config import BalancingLabels, ReportingConfig
from books_modules.reporting.models import (
    BalanceSheetReport,
    BalanceSide,
    BalancingFigure,
    DayBookLine,
    DayBookReport,
    DayBookVoucher,
    LedgerBalanceLine,
    LedgerGroup,
    LedgerStatementLine,
    LedgerStatementReport,
    ProfitAndLossReport,
    ReportMetadata,
    StatementSide,
    TrialBalanceFooter,
    TrialBalanceReport,
    TrialBalanceRow,
)
from books_modules.reporting.words import rupees_in_words

_ZERO = Decimal("0")

# =========================================================================
# Helpers
# =========================================================================


def _ledger_sort_key(name: str, ledger_id: UUID) -> tuple[str, str]:
    return (name, str(ledger_id))


def _voucher_order_key(
    voucher_date: date,
    created_at: datetime | None,
    voucher_number: str | None,
    voucher_id: UUID,
) -> tuple:
    """
    Vouchers run by date, then by when they were recorded.

    Voucher numbers are free text ("9" sorts after "10"), so they only break
    ties between vouchers recorded at the same instant.
    """
    return (
        voucher_date,
        created_at is not None,
        created_at,
        voucher_number or "",
        str(voucher_id),
    )


def ledgers_in_sections(
    ledgers: Iterable[LedgerInfo],
    *sections: StatementSection,
) -> list[LedgerInfo]:
    """Ledgers whose type is reported in one of the given sections."""
    return [l for l in ledgers if section_of(l.ledger_type) in sections]


def index_entries_by_ledger(
    ledgers: Iterable[LedgerInfo],
    entries: Iterable[EntryLine],
) -> dict[UUID, list[EntryLine]]:
    """
    Bucket entries by ledger id.

    Raises:
        MissingLedgerError: If an entry references a ledger that is not in
            ``ledgers``.  Entries are never dropped.
    """
    index: dict[UUID, list[EntryLine]] = {}
    for ledger in ledgers:
        index[ledger.ledger_id] = []
    for entry in entries:
        bucket = index.get(entry.ledger_id)
        if bucket is None:
            raise MissingLedgerError(entry.ledger_id, entry.entry_id)
        bucket.append(entry)
    return index


def _sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, _ZERO)


# =========================================================================
# 1. LEDGER BALANCES
# =========================================================================


def evaluate_ledger_balances(
    ledgers: Sequence[LedgerInfo],
    entries_by_ledger: dict[UUID, list[EntryLine]],
    as_of_date: date | None = None,
    period: Period | None = None,
    include_opening: bool = True,
) -> list[LedgerBalanceLine]:
    """
    Evaluate each ledger's balance and attach its group label.

    With include_opening=False only the in-period movement is returned
    (Profit & Loss reports period activity).
    """
    lines: list[LedgerBalanceLine] = []
    for ledger in ledgers:
        own = entries_by_ledger.get(ledger.ledger_id, [])
        if include_opening:
            balance = evaluate_balance(ledger, own, as_of_date=as_of_date, period=period)
        else:
            balance = sum_period_activity(ledger, own, period)
        lines.append(
            LedgerBalanceLine(
                ledger_id=ledger.ledger_id,
                name=ledger.name,
                ledger_type=ledger.ledger_type,
                group_label=group_label_for(ledger.ledger_type),
                balance=balance,
            )
        )
    return lines


# =========================================================================
# 2. STATEMENT GROUPER
# =========================================================================


def group_ledgers(
    lines: Iterable[LedgerBalanceLine],
    section: StatementSection,
    order: Sequence[str],
) -> tuple[LedgerGroup, ...]:
    """
    Combine ledgers sharing a group label and order the groups.

    Lines of a type classified into another section are left out; lines of
    an unclassified type are kept under their raw type label.  Groups follow
    ``order``; labels missing from it come last in order of first
    appearance.  Lines are put in canonical (name, id) order first, so the
    result does not depend on input order.
    """
    members: dict[str, list[LedgerBalanceLine]] = {}
    canonical = sorted(lines, key=lambda l: _ledger_sort_key(l.name, l.ledger_id))
    for line in canonical:
        line_section = section_of(line.ledger_type)
        if line_section is not None and line_section != section:
            continue
        members.setdefault(line.group_label, []).append(line)

    position = {label: i for i, label in enumerate(order)}
    first_seen = {label: i for i, label in enumerate(members)}
    labels = sorted(
        members,
        key=lambda label: (
            label not in position,
            position.get(label, 0),
            first_seen[label],
        ),
    )

    return tuple(
        LedgerGroup(
            label=label,
            section=section,
            lines=tuple(members[label]),
            total=_sum(line.balance for line in members[label]),
        )
        for label in labels
    )


def _drop_zero(
    lines: list[LedgerBalanceLine],
    config: ReportingConfig,
) -> list[LedgerBalanceLine]:
    if config.include_zero_balances:
        return lines
    return [line for line in lines if line.balance != _ZERO]


# =========================================================================
# 3. BALANCING FIGURE
# =========================================================================


def balance_sheet_plug(
    total_assets: Decimal,
    total_liabilities: Decimal,
    labels: BalancingLabels | None = None,
) -> BalancingFigure | None:
    """
    Balance sheet plug.

    difference = assets - liabilities
    difference < 0 -> "Profit for the Year" of |difference|
    difference > 0 -> "Loss for the Year" of difference

    The figure is placed on the lighter side so both display totals match.
    """
    labels = labels or BalancingLabels()
    difference = total_assets - total_liabilities
    if difference < 0:
        return BalancingFigure(
            label=labels.balance_sheet_profit,
            amount=abs(difference),
            section=StatementSection.ASSET,
        )
    if difference > 0:
        return BalancingFigure(
            label=labels.balance_sheet_loss,
            amount=difference,
            section=StatementSection.LIABILITY,
        )
    return None


def profit_and_loss_plug(
    total_income: Decimal,
    total_expense: Decimal,
    labels: BalancingLabels | None = None,
) -> BalancingFigure | None:
    """
    Profit & loss plug.

    net = income - expense
    net > 0 -> "Net Profit" of net on the expenditure side
    net < 0 -> "Net Loss" of |net| on the income side
    """
    labels = labels or BalancingLabels()
    net = total_income - total_expense
    if net > 0:
        return BalancingFigure(
            label=labels.net_profit,
            amount=net,
            section=StatementSection.EXPENSE,
        )
    if net < 0:
        return BalancingFigure(
            label=labels.net_loss,
            amount=abs(net),
            section=StatementSection.INCOME,
        )
    return None


def build_side(
    section: StatementSection,
    groups: tuple[LedgerGroup, ...],
    plug: BalancingFigure | None,
) -> StatementSide:
    """Assemble one statement side, attaching the plug if it belongs here."""
    raw_total = _sum(group.total for group in groups)
    own_plug = plug if plug is not None and plug.section == section else None
    display_total = raw_total + (own_plug.amount if own_plug is not None else _ZERO)
    return StatementSide(
        section=section,
        groups=groups,
        raw_total=raw_total,
        balancing_figure=own_plug,
        display_total=display_total,
    )


# =========================================================================
# 4. BALANCE SHEET
# =========================================================================


def build_balance_sheet(
    ledgers: Sequence[LedgerInfo],
    entries: Iterable[EntryLine],
    as_of_date: date,
    config: ReportingConfig,
    metadata: ReportMetadata,
) -> BalanceSheetReport:
    """
    Build the balance sheet as on a date.

    1. Check every entry against the fetched ledgers
    2. Evaluate liability and asset ledgers as of the date
    3. Group and order each side
    4. Plug the difference and caption the grand total in words
    """
    as_of_date = validate_report_date("as_of_date", as_of_date)
    index = index_entries_by_ledger(ledgers, entries)

    bs_ledgers = ledgers_in_sections(
        ledgers, StatementSection.LIABILITY, StatementSection.ASSET,
    )
    lines = _drop_zero(
        evaluate_ledger_balances(bs_ledgers, index, as_of_date=as_of_date),
        config,
    )

    liability_groups = group_ledgers(
        lines, StatementSection.LIABILITY, config.order_for(StatementSection.LIABILITY),
    )
    asset_groups = group_ledgers(
        lines, StatementSection.ASSET, config.order_for(StatementSection.ASSET),
    )
    total_liabilities = _sum(g.total for g in liability_groups)
    total_assets = _sum(g.total for g in asset_groups)

    plug = balance_sheet_plug(total_assets, total_liabilities, config.labels)
    liabilities = build_side(StatementSection.LIABILITY, liability_groups, plug)
    assets = build_side(StatementSection.ASSET, asset_groups, plug)

    return BalanceSheetReport(
        metadata=metadata,
        liabilities=liabilities,
        assets=assets,
        total_liabilities=total_liabilities,
        total_assets=total_assets,
        difference=total_assets - total_liabilities,
        plug_label=plug.label if plug else None,
        plug_amount=plug.amount if plug else _ZERO,
        amount_in_words=rupees_in_words(
            max(liabilities.display_total, assets.display_total)
        ),
        is_balanced=(liabilities.display_total == assets.display_total),
    )


# =========================================================================
# 5. PROFIT & LOSS
# =========================================================================


def build_profit_and_loss(
    ledgers: Sequence[LedgerInfo],
    entries: Iterable[EntryLine],
    period: Period,
    config: ReportingConfig,
    metadata: ReportMetadata,
) -> ProfitAndLossReport:
    """
    Build the profit & loss account for a period.

    Income and expense ledgers report their in-period movement on their
    natural side; the net result is plugged onto the lighter side.
    """
    period = validate_period(*period)
    index = index_entries_by_ledger(ledgers, entries)

    pl_ledgers = ledgers_in_sections(
        ledgers, StatementSection.INCOME, StatementSection.EXPENSE,
    )
    lines = _drop_zero(
        evaluate_ledger_balances(pl_ledgers, index, period=period, include_opening=False),
        config,
    )

    expense_groups = group_ledgers(
        lines, StatementSection.EXPENSE, config.order_for(StatementSection.EXPENSE),
    )
    income_groups = group_ledgers(
        lines, StatementSection.INCOME, config.order_for(StatementSection.INCOME),
    )
    total_expense = _sum(g.total for g in expense_groups)
    total_income = _sum(g.total for g in income_groups)

    plug = profit_and_loss_plug(total_income, total_expense, config.labels)
    expenses = build_side(StatementSection.EXPENSE, expense_groups, plug)
    income = build_side(StatementSection.INCOME, income_groups, plug)
    net_profit = total_income - total_expense

    return ProfitAndLossReport(
        metadata=metadata,
        expenses=expenses,
        income=income,
        total_expense=total_expense,
        total_income=total_income,
        net_profit=net_profit,
        plug_label=plug.label if plug else None,
        plug_amount=plug.amount if plug else _ZERO,
        amount_in_words=rupees_in_words(abs(net_profit)),
        is_balanced=(expenses.display_total == income.display_total),
    )


# =========================================================================
# 6. TRIAL BALANCE
# =========================================================================


def _closing_side(closing: Decimal) -> BalanceSide:
    return BalanceSide.DR if closing >= 0 else BalanceSide.CR


def build_trial_balance(
    ledgers: Sequence[LedgerInfo],
    entries: Iterable[EntryLine],
    period: Period,
    metadata: ReportMetadata,
) -> TrialBalanceReport:
    """
    Build the trial balance for a period.

    Every ledger, whatever its type, closes at
    opening + total debit - total credit.  Debit and credit are plain sums
    of in-period entries.
    """
    start, end = validate_period(*period)
    index = index_entries_by_ledger(ledgers, entries)

    rows: list[TrialBalanceRow] = []
    for ledger in sorted(ledgers, key=lambda l: _ledger_sort_key(l.name, l.ledger_id)):
        opening = ensure_money("opening_balance", ledger.opening_balance)
        total_debit = _ZERO
        total_credit = _ZERO
        for entry in index[ledger.ledger_id]:
            voucher_date = validate_report_date("voucher_date", entry.voucher_date)
            if start <= voucher_date <= end:
                total_debit += ensure_money("debit_amount", entry.debit_amount)
                total_credit += ensure_money("credit_amount", entry.credit_amount)
        closing = opening + total_debit - total_credit
        rows.append(
            TrialBalanceRow(
                ledger_id=ledger.ledger_id,
                name=ledger.name,
                ledger_type=ledger.ledger_type,
                group_label=group_label_for(ledger.ledger_type),
                opening_balance=opening,
                total_debit=total_debit,
                total_credit=total_credit,
                closing_balance=closing,
                closing_side=_closing_side(closing),
            )
        )

    footer = TrialBalanceFooter(
        total_debit=_sum(r.total_debit for r in rows),
        total_credit=_sum(r.total_credit for r in rows),
        closing_debit_total=_sum(r.closing_balance for r in rows if r.closing_balance > 0),
        closing_credit_total=_sum(
            abs(r.closing_balance) for r in rows if r.closing_balance < 0
        ),
    )
    return TrialBalanceReport(metadata=metadata, rows=tuple(rows), footer=footer)


# =========================================================================
# 7. LEDGER STATEMENT
# =========================================================================


def build_ledger_statement(
    ledger: LedgerInfo,
    entries: Iterable[EntryLine],
    period: Period | None,
    metadata: ReportMetadata,
    as_of_date: date | None = None,
) -> LedgerStatementReport:
    """
    Transactions of one ledger with a running balance.

    Exactly one scope is given: ``period`` lists entries dated within the
    range, ``as_of_date`` lists every entry dated on or before that date
    (the drill-down from a balance sheet group).

    The running balance starts at the ledger's opening balance and moves by
    debit - credit per entry, in voucher order.
    """
    as_of, rng = resolve_scope(as_of_date, period)
    index = index_entries_by_ledger([ledger], entries)
    opening = ensure_money("opening_balance", ledger.opening_balance)

    def _in_scope(entry: EntryLine) -> bool:
        on = validate_report_date("voucher_date", entry.voucher_date)
        if as_of is not None:
            return on <= as_of
        return rng[0] <= on <= rng[1]

    in_range = [e for e in index[ledger.ledger_id] if _in_scope(e)]
    in_range.sort(
        key=lambda e: _voucher_order_key(
            e.voucher_date, e.voucher_created_at, e.voucher_number, e.voucher_id,
        ) + (str(e.entry_id),)
    )

    running = opening
    lines: list[LedgerStatementLine] = []
    for entry in in_range:
        debit = ensure_money("debit_amount", entry.debit_amount)
        credit = ensure_money("credit_amount", entry.credit_amount)
        running += debit - credit
        lines.append(
            LedgerStatementLine(
                entry_id=entry.entry_id,
                voucher_id=entry.voucher_id,
                voucher_date=entry.voucher_date,
                voucher_number=entry.voucher_number,
                voucher_type=entry.voucher_type,
                narration=entry.narration,
                debit_amount=debit,
                credit_amount=credit,
                running_balance=running,
            )
        )

    return LedgerStatementReport(
        metadata=metadata,
        ledger_id=ledger.ledger_id,
        ledger_name=ledger.name,
        opening_balance=opening,
        lines=tuple(lines),
        total_debit=_sum(l.debit_amount for l in lines),
        total_credit=_sum(l.credit_amount for l in lines),
        closing_balance=running,
    )


# =========================================================================
# 8. DAY BOOK
# =========================================================================


def build_day_book(
    vouchers: Iterable[VoucherInfo],
    ledgers: Sequence[LedgerInfo],
    metadata: ReportMetadata,
) -> DayBookReport:
    """Vouchers in date order with ledger names resolved and totals summed."""
    names = {ledger.ledger_id: ledger.name for ledger in ledgers}

    out: list[DayBookVoucher] = []
    for voucher in sorted(
        vouchers,
        key=lambda v: _voucher_order_key(
            v.voucher_date, v.created_at, v.voucher_number, v.voucher_id,
        ),
    ):
        lines: list[DayBookLine] = []
        for entry in voucher.entries:
            if entry.ledger_id not in names:
                raise MissingLedgerError(entry.ledger_id, entry.entry_id)
            if entry.voucher_id != voucher.voucher_id:
                raise InvalidInputError(
                    f"Entry {entry.entry_id} is not part of voucher {voucher.voucher_id}",
                    field="entries",
                )
            lines.append(
                DayBookLine(
                    ledger_id=entry.ledger_id,
                    ledger_name=names[entry.ledger_id],
                    debit_amount=ensure_money("debit_amount", entry.debit_amount),
                    credit_amount=ensure_money("credit_amount", entry.credit_amount),
                    narration=entry.narration,
                )
            )
        out.append(
            DayBookVoucher(
                voucher_id=voucher.voucher_id,
                voucher_date=voucher.voucher_date,
                voucher_type=voucher.voucher_type,
                voucher_number=voucher.voucher_number,
                narration=voucher.narration,
                lines=tuple(lines),
                total_debit=_sum(l.debit_amount for l in lines),
                total_credit=_sum(l.credit_amount for l in lines),
            )
        )

    return DayBookReport(
        metadata=metadata,
        vouchers=tuple(out),
        total_debit=_sum(v.total_debit for v in out),
        total_credit=_sum(v.total_credit for v in out),
    )


# =========================================================================
# Rendering
# =========================================================================


def render_to_dict(
    obj: object,
    precision: int | None = None,
) -> dict | list | str | int | float | bool | None:
    """
    Convert any report dataclass to plain data for JSON serialization.

    Handles:
    - Decimal -> str (full precision, or rounded half-up to ``precision``
      places when given)
    - UUID -> str
    - date -> ISO format string
    - Enum -> .value
    - Nested frozen dataclasses -> nested dicts
    - Tuples -> lists
    - None preserved
    """
    if obj is None:
        return None
    if isinstance(obj, Decimal):
        if precision is not None and obj.is_finite():
            return str(round_money(obj, precision))
        return str(obj)
    if isinstance(obj, UUID):
        return str(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [render_to_dict(item, precision) for item in obj]
    if isinstance(obj, dict):
        return {str(k): render_to_dict(v, precision) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: render_to_dict(getattr(obj, f.name), precision)
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, (str, int, float, bool)):
        return obj
    return str(obj)

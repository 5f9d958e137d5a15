"""Domain services for finance aggregates.

Every function is pure: it reads the records it is given and returns value
objects. Empty inputs produce zero-valued results.
"""

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal
from logging import Logger

from finledger.domain.models import (
    Account,
    AccountKind,
    BudgetCategory,
    BudgetLine,
    BudgetOverview,
    CashflowSummary,
    CategorySpend,
    ComparisonRow,
    DailySpendingPoint,
    NetWorthSnapshot,
    NetWorthSummary,
    ReportingPeriod,
    Transaction,
    TransactionCategory,
)
from finledger.domain.services.validation import validate_balance_sign
from finledger.utils.decimal_utils import coerce_decimal


ZERO = Decimal("0")
HUNDRED = Decimal("100")
_PERCENT_QUANTUM = Decimal("0.01")


def split_assets_liabilities(
    accounts: Iterable[Account],
    logger: Logger | None = None,
) -> tuple[Decimal, Decimal]:
    """Return (asset total, liability magnitude) over the accounts.

    Args:
        accounts: Accounts to aggregate.
        logger: Optional logger used for sign warnings.

    Returns:
        tuple[Decimal, Decimal]: Assets and liabilities, both non-negative
        for well-formed data.
    """
    asset_total = ZERO
    liability_total = ZERO
    for account in accounts:
        kind = AccountKind(account.kind)
        balance = coerce_decimal(account.balance)
        if logger is not None:
            validate_balance_sign(kind, balance, logger)
        if kind.is_asset:
            asset_total += balance
        else:
            liability_total += abs(balance)
    return asset_total, liability_total


def compute_net_worth_summary(
    accounts: Iterable[Account],
    recent_snapshots: Sequence[NetWorthSnapshot] = (),
    logger: Logger | None = None,
) -> NetWorthSummary:
    """Compute net worth totals and the month-over-month change.

    Args:
        accounts: Visible accounts.
        recent_snapshots: Snapshots ordered newest first; only the first two
            are used.
        logger: Optional logger used for sign warnings.

    Returns:
        NetWorthSummary: Asset, liability and net worth totals.
    """
    asset_total, liability_total = split_assets_liabilities(accounts, logger)
    change = ZERO
    change_percent = ZERO
    has_history = len(recent_snapshots) >= 2
    if has_history:
        latest, previous = recent_snapshots[0], recent_snapshots[1]
        change = latest.net_worth - previous.net_worth
        if previous.net_worth != 0:
            change_percent = _percent(change, abs(previous.net_worth))
    return NetWorthSummary(
        asset_total=asset_total,
        liability_total=liability_total,
        net_worth=asset_total - liability_total,
        month_change=change,
        month_change_percent=change_percent,
        has_history=has_history,
    )


def compute_cashflow(transactions: Iterable[Transaction]) -> CashflowSummary:
    """Return income and expense totals for the given transactions."""
    income = ZERO
    expenses = ZERO
    for transaction in transactions:
        amount = coerce_decimal(transaction.amount)
        if amount > 0:
            income += amount
        elif amount < 0:
            expenses += abs(amount)
    return CashflowSummary(income=income, expenses=expenses)


def expense_totals_by_category(
    transactions: Iterable[Transaction],
) -> dict[TransactionCategory, Decimal]:
    """Sum expense magnitudes per category."""
    totals: dict[TransactionCategory, Decimal] = {}
    for transaction in transactions:
        amount = coerce_decimal(transaction.amount)
        if amount >= 0:
            continue
        category = TransactionCategory(transaction.category)
        totals[category] = totals.get(category, ZERO) + abs(amount)
    return totals


def compute_category_breakdown(
    transactions: Iterable[Transaction],
    limit: int | None = None,
) -> list[CategorySpend]:
    """Group expenses by category, sorted by total descending.

    Args:
        transactions: Transactions of the reporting period.
        limit: Optional maximum number of categories to return.

    Returns:
        list[CategorySpend]: Categories with totals and percentages of the
        grand total. Ties are ordered by category value.
    """
    totals = expense_totals_by_category(transactions)
    grand_total = sum(totals.values(), ZERO)
    ordered = sorted(
        totals.items(),
        key=lambda item: (-item[1], item[0].value),
    )
    breakdown = [
        CategorySpend(
            category=category,
            total=total,
            percentage=_percent(total, grand_total),
        )
        for category, total in ordered
    ]
    if limit is not None:
        return breakdown[:limit]
    return breakdown


def compute_budget_overview(
    categories: Iterable[BudgetCategory],
    transactions: Iterable[Transaction],
) -> BudgetOverview:
    """Compute live budget progress from the period's transactions.

    A zero limit reports zero progress. A category is over budget when its
    progress exceeds 1.

    Args:
        categories: Budget categories to evaluate.
        transactions: Transactions of the reporting period.

    Returns:
        BudgetOverview: Per-category lines plus totals.
    """
    spent_by_category = expense_totals_by_category(transactions)
    lines: list[BudgetLine] = []
    total_budgeted = ZERO
    total_spent = ZERO
    for budget in categories:
        category = TransactionCategory(budget.category)
        limit = coerce_decimal(budget.monthly_limit)
        spent = spent_by_category.get(category, ZERO)
        progress = spent / limit if limit > 0 else ZERO
        lines.append(
            BudgetLine(
                budget_id=budget.id,
                name=budget.name,
                icon=budget.icon or category.emoji,
                category=category,
                limit=limit,
                spent=spent,
                progress=progress,
            )
        )
        total_budgeted += limit
        total_spent += spent
    return BudgetOverview(
        lines=lines,
        total_budgeted=total_budgeted,
        total_spent=total_spent,
    )


def compute_daily_cumulative(
    transactions: Iterable[Transaction],
    period: ReportingPeriod,
    through_day: int | None = None,
) -> list[DailySpendingPoint]:
    """Return cumulative expenses for each day of a month.

    Args:
        transactions: Transactions to consider; those outside ``period`` are
            ignored.
        period: Calendar month of the series.
        through_day: Last day of the series, clamped to the month length.
            Defaults to the whole month.

    Returns:
        list[DailySpendingPoint]: One point per day starting at day 1.
    """
    last_day = period.day_count
    if through_day is not None:
        last_day = max(0, min(through_day, last_day))
    daily = [ZERO] * (last_day + 1)
    for transaction in transactions:
        amount = coerce_decimal(transaction.amount)
        if amount >= 0 or not period.contains(transaction.date):
            continue
        day = transaction.date.day
        if day <= last_day:
            daily[day] += abs(amount)
    points: list[DailySpendingPoint] = []
    running = ZERO
    for day in range(1, last_day + 1):
        running += daily[day]
        points.append(DailySpendingPoint(day=day, cumulative=running))
    return points


def compute_monthly_comparison(
    transactions_a: Iterable[Transaction],
    transactions_b: Iterable[Transaction],
) -> list[ComparisonRow]:
    """Compare category expenses of two periods.

    Returns:
        list[ComparisonRow]: One row per category present in either period,
        sorted by the first period's total descending.
    """
    totals_a = expense_totals_by_category(transactions_a)
    totals_b = expense_totals_by_category(transactions_b)
    categories = set(totals_a) | set(totals_b)
    rows = [
        ComparisonRow(
            category=category,
            total_a=totals_a.get(category, ZERO),
            total_b=totals_b.get(category, ZERO),
        )
        for category in categories
    ]
    return sorted(rows, key=lambda row: (-row.total_a, row.category.value))


def _percent(part: Decimal, whole: Decimal) -> Decimal:
    if whole == 0:
        return ZERO
    return (part / whole * HUNDRED).quantize(
        _PERCENT_QUANTUM,
        rounding=ROUND_HALF_UP,
    )


__all__ = [
    "split_assets_liabilities",
    "compute_net_worth_summary",
    "compute_cashflow",
    "expense_totals_by_category",
    "compute_category_breakdown",
    "compute_budget_overview",
    "compute_daily_cumulative",
    "compute_monthly_comparison",
]

"""Tests for the pure finance aggregate services."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

from finledger.domain.models import (
    Account,
    AccountKind,
    BudgetCategory,
    NetWorthSnapshot,
    ReportingPeriod,
    Transaction,
    TransactionCategory,
)
from finledger.domain.services import finance


def _txn(day, amount, category=TransactionCategory.GROCERIES, month=10):
    return Transaction(datetime(2026, month, day), "Shop", amount, category)


def _snapshot(assets, liabilities):
    return NetWorthSnapshot(datetime(2026, 10, 1), assets, liabilities)


def test_net_worth_summary_algebra():
    accounts = [
        Account("Checking", "Bank", AccountKind.CHECKING, 5000),
        Account("Brokerage", "Bank", AccountKind.INVESTMENT, 10000),
        Account("Card", "Bank", AccountKind.CREDIT_CARD, -1200),
        Account("Mortgage", "Bank", AccountKind.MORTGAGE, -200000),
    ]

    summary = finance.compute_net_worth_summary(accounts)

    assert summary.asset_total == Decimal("15000")
    assert summary.liability_total == Decimal("201200")
    assert summary.net_worth == summary.asset_total - summary.liability_total
    assert summary.has_history is False
    assert summary.month_change == 0


def test_net_worth_summary_month_change_uses_two_latest_snapshots():
    snapshots = [_snapshot(12000, 1000), _snapshot(10000, 1000)]

    summary = finance.compute_net_worth_summary([], snapshots)

    assert summary.has_history is True
    assert summary.month_change == Decimal("2000")
    assert summary.month_change_percent == Decimal("22.22")


def test_net_worth_summary_percent_is_zero_when_previous_is_zero():
    snapshots = [_snapshot(500, 0), _snapshot(0, 0)]

    summary = finance.compute_net_worth_summary([], snapshots)

    assert summary.month_change == Decimal("500")
    assert summary.month_change_percent == 0


def test_net_worth_summary_warns_on_positive_liability():
    logger = MagicMock()

    finance.compute_net_worth_summary(
        [Account("Card", "Bank", AccountKind.CREDIT_CARD, 50)],
        logger=logger,
    )

    logger.warning.assert_called_once()


def test_cashflow_splits_income_and_expenses():
    summary = finance.compute_cashflow(
        [_txn(1, 3000), _txn(2, -120.5), _txn(3, -79.5), _txn(4, 0)]
    )

    assert summary.income == Decimal("3000")
    assert summary.expenses == Decimal("200.0")
    assert summary.net == Decimal("2800")


def test_cashflow_of_nothing_is_zero():
    summary = finance.compute_cashflow([])

    assert summary.income == summary.expenses == summary.net == 0


def test_category_breakdown_sorted_with_percentages():
    transactions = [
        _txn(1, -100, TransactionCategory.GROCERIES),
        _txn(2, -100, TransactionCategory.DINING),
        _txn(3, -200, TransactionCategory.HOUSING),
        _txn(4, 500, TransactionCategory.INCOME),
    ]

    breakdown = finance.compute_category_breakdown(transactions)

    assert [item.category for item in breakdown] == [
        TransactionCategory.HOUSING,
        TransactionCategory.DINING,
        TransactionCategory.GROCERIES,
    ]
    assert [item.percentage for item in breakdown] == [
        Decimal("50.00"),
        Decimal("25.00"),
        Decimal("25.00"),
    ]
    assert sum(item.total for item in breakdown) == Decimal("400")


def test_category_breakdown_respects_limit_and_empty_input():
    transactions = [
        _txn(1, -10, TransactionCategory.GROCERIES),
        _txn(2, -20, TransactionCategory.DINING),
    ]

    assert len(finance.compute_category_breakdown(transactions, limit=1)) == 1
    assert finance.compute_category_breakdown([]) == []


def test_budget_overview_progress_and_over_budget_flag():
    groceries = BudgetCategory("Groceries", 400, TransactionCategory.GROCERIES)
    dining = BudgetCategory("Dining", 100, TransactionCategory.DINING, icon="🍕")
    transactions = [
        _txn(1, -150, TransactionCategory.GROCERIES),
        _txn(2, -130, TransactionCategory.DINING),
        _txn(3, 40, TransactionCategory.DINING),
    ]

    overview = finance.compute_budget_overview([groceries, dining], transactions)

    grocery_line, dining_line = overview.lines
    assert grocery_line.spent == Decimal("150")
    assert grocery_line.progress == Decimal("0.375")
    assert grocery_line.is_over_budget is False
    assert grocery_line.icon == TransactionCategory.GROCERIES.emoji
    assert dining_line.spent == Decimal("130")
    assert dining_line.is_over_budget is True
    assert dining_line.icon == "🍕"
    assert overview.total_budgeted == Decimal("500")
    assert overview.total_spent == Decimal("280")
    assert overview.remaining == Decimal("220")


def test_budget_overview_zero_limit_reports_zero_progress():
    budget = BudgetCategory("Fun", 0, TransactionCategory.ENTERTAINMENT)

    overview = finance.compute_budget_overview(
        [budget],
        [_txn(1, -25, TransactionCategory.ENTERTAINMENT)],
    )

    line = overview.lines[0]
    assert line.progress == 0
    assert line.is_over_budget is False
    assert overview.remaining == Decimal("-25")


def test_daily_cumulative_runs_through_requested_day():
    period = ReportingPeriod.for_month(2026, 10)
    transactions = [
        _txn(1, -10),
        _txn(3, -5),
        _txn(3, 100),
        _txn(9, -50),
        _txn(2, -7, month=9),
    ]

    points = finance.compute_daily_cumulative(transactions, period, through_day=4)

    assert [point.day for point in points] == [1, 2, 3, 4]
    assert [point.cumulative for point in points] == [
        Decimal("10"),
        Decimal("10"),
        Decimal("15"),
        Decimal("15"),
    ]


def test_daily_cumulative_clamps_to_month_length():
    period = ReportingPeriod.for_month(2026, 2)

    points = finance.compute_daily_cumulative([], period, through_day=31)

    assert len(points) == 28
    assert points[-1].cumulative == 0


def test_monthly_comparison_unions_categories():
    october = [_txn(1, -300, TransactionCategory.HOUSING)]
    september = [
        _txn(1, -250, TransactionCategory.HOUSING, month=9),
        _txn(2, -40, TransactionCategory.DINING, month=9),
    ]

    rows = finance.compute_monthly_comparison(october, september)

    assert [row.category for row in rows] == [
        TransactionCategory.HOUSING,
        TransactionCategory.DINING,
    ]
    assert rows[0].difference == Decimal("50")
    assert rows[1].total_a == 0
    assert rows[1].difference == Decimal("-40")

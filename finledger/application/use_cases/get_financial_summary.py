"""Use case exposing the read-side financial aggregates.

Every read goes through the ledger repositories, which already apply the
demo/live data-source view, and delegates the arithmetic to the pure domain
services.
"""

from datetime import date, datetime, time

from finledger.application.ports.ledger import (
    AccountsLedgerPort,
    BudgetLedgerPort,
    NetWorthLedgerPort,
    TransactionsLedgerPort,
)
from finledger.domain.constants import (
    CASHFLOW_HISTORY_MONTHS,
    NET_WORTH_HISTORY_MONTHS,
    RECENT_TRANSACTION_LIMIT,
)
from finledger.domain.models import (
    Account,
    BudgetOverview,
    CashflowSummary,
    CategorySpend,
    ComparisonRow,
    MonthCashflow,
    NetWorthSnapshot,
    NetWorthSummary,
    ReportingPeriod,
    SpendingTrend,
    Transaction,
    utc_now,
)
from finledger.domain.services import (
    compute_budget_overview,
    compute_cashflow,
    compute_category_breakdown,
    compute_daily_cumulative,
    compute_monthly_comparison,
    compute_net_worth_summary,
)
from finledger.infrastructure.logging.logger import get_app_logger


class GetFinancialSummaryUseCase:
    """Compute net worth, cash flow, spending and budget aggregates."""

    def __init__(
        self,
        accounts: AccountsLedgerPort,
        transactions: TransactionsLedgerPort,
        budgets: BudgetLedgerPort,
        snapshots: NetWorthLedgerPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            accounts: Ledger port for accounts.
            transactions: Ledger port for transactions.
            budgets: Ledger port for budget categories.
            snapshots: Ledger port for net worth snapshots.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._accounts = accounts
        self._transactions = transactions
        self._budgets = budgets
        self._snapshots = snapshots
        self._logger = logger or get_app_logger()

    def accounts(self) -> list[Account]:
        """Return the visible accounts."""
        return self._accounts.fetch_visible()

    def net_worth(self) -> NetWorthSummary:
        """Return current totals and the month-over-month change.

        Returns:
            NetWorthSummary: Totals from the visible accounts; the change
            compares the two most recent snapshots.
        """
        summary = compute_net_worth_summary(
            self._accounts.fetch_visible(),
            self._snapshots.fetch_latest(2),
            self._logger,
        )
        self._logger.info(
            f"Net worth computed: assets={summary.asset_total}, "
            f"liabilities={summary.liability_total}"
        )
        return summary

    def cashflow(self, period: ReportingPeriod) -> CashflowSummary:
        """Return income and expenses for the period."""
        return compute_cashflow(self._transactions.fetch_for_period(period))

    def cashflow_by_month(
        self,
        today: date | None = None,
        months: int = CASHFLOW_HISTORY_MONTHS,
    ) -> list[MonthCashflow]:
        """Return cash flow for the last ``months`` months, oldest first.

        Args:
            today: Reference day; its month is the last one returned.
            months: Number of calendar months to return.

        Returns:
            list[MonthCashflow]: One entry per month.
        """
        current = ReportingPeriod.containing(today or utc_now().date())
        history: list[MonthCashflow] = []
        for offset in range(months - 1, -1, -1):
            period = current.shift_months(-offset)
            summary = self.cashflow(period)
            history.append(
                MonthCashflow(
                    period=period,
                    income=summary.income,
                    expenses=summary.expenses,
                )
            )
        return history

    def category_breakdown(
        self,
        period: ReportingPeriod,
        limit: int | None = None,
    ) -> list[CategorySpend]:
        """Return expenses by category for the period, largest first."""
        return compute_category_breakdown(
            self._transactions.fetch_for_period(period),
            limit=limit,
        )

    def budget_overview(self, period: ReportingPeriod) -> BudgetOverview:
        """Return progress of every budget category in the period."""
        overview = compute_budget_overview(
            self._budgets.fetch_all_categories(),
            self._transactions.fetch_for_period(period),
        )
        over = [line.name for line in overview.lines if line.is_over_budget]
        if over:
            self._logger.info(f"Over budget: {', '.join(over)}")
        return overview

    def spending_trend(self, today: date | None = None) -> SpendingTrend:
        """Compare this month so far with the same days of last month.

        Args:
            today: Reference day. Defaults to the current UTC date.

        Returns:
            SpendingTrend: Cumulative series for both months. The previous
            series stops at the same day number, clamped to its length.
        """
        day = today or utc_now().date()
        current = ReportingPeriod.containing(day)
        previous = current.previous_month()
        return SpendingTrend(
            current=compute_daily_cumulative(
                self._transactions.fetch_for_period(current),
                current,
                through_day=day.day,
            ),
            previous=compute_daily_cumulative(
                self._transactions.fetch_for_period(previous),
                previous,
                through_day=day.day,
            ),
        )

    def monthly_comparison(
        self,
        period_a: ReportingPeriod,
        period_b: ReportingPeriod,
    ) -> list[ComparisonRow]:
        """Compare category expenses of two periods."""
        return compute_monthly_comparison(
            self._transactions.fetch_for_period(period_a),
            self._transactions.fetch_for_period(period_b),
        )

    def net_worth_history(
        self,
        months: int = NET_WORTH_HISTORY_MONTHS,
        today: date | None = None,
    ) -> list[NetWorthSnapshot]:
        """Return snapshots of the past ``months`` months, oldest first."""
        current = ReportingPeriod.containing(today or utc_now().date())
        start = current.shift_months(-months).start
        return self._snapshots.fetch_since(datetime.combine(start, time.min))

    def recent_transactions(
        self,
        limit: int = RECENT_TRANSACTION_LIMIT,
    ) -> list[Transaction]:
        """Return the newest visible transactions."""
        return self._transactions.fetch_all(limit=limit)

    def pending_transactions(self) -> list[Transaction]:
        return self._transactions.fetch_pending()


__all__ = ["GetFinancialSummaryUseCase"]

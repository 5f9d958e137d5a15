"""Use case assembling the grounding document for the assistant.

The document is a fixed sequence of labelled sections. A section whose data
is empty keeps its header and states that there is nothing to report.
"""

from dataclasses import dataclass
from datetime import date

from finledger.application.use_cases.get_financial_summary import (
    GetFinancialSummaryUseCase,
)
from finledger.domain.constants import (
    RECENT_TRANSACTION_LIMIT,
    TOP_CATEGORY_LIMIT,
)
from finledger.domain.models import (
    Account,
    AccountKind,
    BudgetOverview,
    CashflowSummary,
    CategorySpend,
    NetWorthSummary,
    ReportingPeriod,
    Transaction,
    TransactionCategory,
    utc_now,
)
from finledger.infrastructure.logging.logger import get_app_logger
from finledger.utils.formatting import (
    format_currency,
    format_long_date,
    format_short_date,
)


SECTION_SEPARATOR = "\n\n"

PREAMBLE_TEMPLATE = (
    "You are a helpful personal finance assistant. "
    "Give concise, actionable financial advice based on the user's real "
    "data provided below. "
    "Always use specific numbers from the data. "
    "Never fabricate transactions, balances, or statistics not present in "
    "the data. "
    "Keep answers focused and under 200 words unless a detailed breakdown is "
    "requested. "
    "Format currency as US dollars. Today's date is {today}."
)


@dataclass(frozen=True)
class FinancialContextData:
    """Aggregates rendered into the grounding document."""

    today: date
    accounts: list[Account]
    net_worth: NetWorthSummary
    cashflow: CashflowSummary
    has_transactions: bool
    top_categories: list[CategorySpend]
    budget: BudgetOverview
    recent_transactions: list[Transaction]


class BuildFinancialContextUseCase:
    """Build the assistant grounding document from current aggregates."""

    def __init__(self, summary: GetFinancialSummaryUseCase, logger=None) -> None:
        """Initialize the use case.

        Args:
            summary: Use case providing the read-side aggregates.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._summary = summary
        self._logger = logger or get_app_logger()

    def execute(self, today: date | None = None) -> str:
        """Return the grounding document for ``today``.

        Args:
            today: Reference day. Defaults to the current UTC date.

        Returns:
            str: Sections joined by blank lines.
        """
        data = self.collect(today or utc_now().date())
        document = render_financial_context(data)
        self._logger.info(
            f"Built financial context: {len(data.accounts)} accounts, "
            f"{len(data.recent_transactions)} recent transactions"
        )
        return document

    def collect(self, today: date) -> FinancialContextData:
        """Gather the aggregates for the month containing ``today``."""
        period = ReportingPeriod.containing(today)
        cashflow = self._summary.cashflow(period)
        return FinancialContextData(
            today=today,
            accounts=self._summary.accounts(),
            net_worth=self._summary.net_worth(),
            cashflow=cashflow,
            has_transactions=bool(cashflow.income or cashflow.expenses),
            top_categories=self._summary.category_breakdown(
                period,
                limit=TOP_CATEGORY_LIMIT,
            ),
            budget=self._summary.budget_overview(period),
            recent_transactions=self._summary.recent_transactions(
                RECENT_TRANSACTION_LIMIT
            ),
        )


def render_financial_context(data: FinancialContextData) -> str:
    """Render every section in order."""
    sections = [
        PREAMBLE_TEMPLATE.format(today=format_long_date(data.today)),
        _accounts_section(data.accounts),
        _net_worth_section(data.accounts, data.net_worth),
        _cashflow_section(data.cashflow, data.has_transactions),
        _spending_section(data.top_categories),
        _budget_section(data.budget),
        _recent_transactions_section(data.recent_transactions),
    ]
    return SECTION_SEPARATOR.join(sections)


def _accounts_section(accounts: list[Account]) -> str:
    if not accounts:
        return "ACCOUNTS: None connected."
    lines = [
        f"  - {account.name} ({account.institution}, "
        f"{AccountKind(account.kind).display_name}): "
        f"{format_currency(account.balance)}"
        for account in accounts
    ]
    return "ACCOUNTS:\n" + "\n".join(lines)


def _net_worth_section(
    accounts: list[Account],
    summary: NetWorthSummary,
) -> str:
    if not accounts:
        return "NET WORTH: No accounts connected."
    lines = [
        "NET WORTH:",
        f"  Total Assets:      {format_currency(summary.asset_total, 0)}",
        f"  Total Liabilities: {format_currency(summary.liability_total, 0)}",
        f"  Net Worth:         {format_currency(summary.net_worth, 0)}",
    ]
    if summary.has_history:
        change = format_currency(summary.month_change, 0, signed=True)
        lines.append(
            f"  MoM Change: {change} ({summary.month_change_percent}%)"
        )
    else:
        lines.append("  MoM Change: Not enough history yet.")
    return "\n".join(lines)


def _cashflow_section(summary: CashflowSummary, has_transactions: bool) -> str:
    if not has_transactions:
        return "CASH FLOW (this month): No transactions recorded."
    return "\n".join(
        [
            "CASH FLOW (this month):",
            f"  Income:   {format_currency(summary.income, 0)}",
            f"  Expenses: {format_currency(summary.expenses, 0)}",
            f"  Net:      {format_currency(summary.net, 0, signed=True)}",
        ]
    )


def _spending_section(categories: list[CategorySpend]) -> str:
    if not categories:
        return "SPENDING BY CATEGORY (this month): No expenses recorded."
    lines = [
        f"  - {spend.category.emoji} {spend.category.value}: "
        f"{format_currency(spend.total, 0)}"
        for spend in categories
    ]
    return "SPENDING BY CATEGORY (this month):\n" + "\n".join(lines)


def _budget_section(overview: BudgetOverview) -> str:
    if not overview.lines:
        return "BUDGET (this month): No budget categories configured."
    lines = []
    for line in overview.lines:
        flag = " ⚠️ OVER BUDGET" if line.is_over_budget else ""
        percent = int(line.progress * 100)
        lines.append(
            f"  - {line.icon} {line.name}: {format_currency(line.spent, 0)} "
            f"of {format_currency(line.limit, 0)} ({percent}%){flag}"
        )
    return "BUDGET (this month):\n" + "\n".join(lines)


def _recent_transactions_section(transactions: list[Transaction]) -> str:
    header = f"RECENT TRANSACTIONS (last {RECENT_TRANSACTION_LIMIT})"
    if not transactions:
        return f"{header}: None."
    lines = [
        f"  - {format_short_date(transaction.date)} {transaction.merchant} "
        f"{format_currency(transaction.amount, signed=True)} "
        f"[{TransactionCategory(transaction.category).value}]"
        for transaction in transactions
    ]
    return f"{header}:\n" + "\n".join(lines)


__all__ = [
    "BuildFinancialContextUseCase",
    "FinancialContextData",
    "render_financial_context",
]

"""Domain models package."""

from .enums import AccountKind, ChatRole, LIABILITY_KINDS, TransactionCategory
from .finance import (
    BudgetLine,
    BudgetOverview,
    CashflowSummary,
    CategorySpend,
    ComparisonRow,
    DailySpendingPoint,
    MonthCashflow,
    NetWorthSummary,
    ReportingPeriod,
    SpendingTrend,
)
from .ledger import (
    Account,
    Base,
    BudgetCategory,
    ChatMessage,
    NetWorthSnapshot,
    Preference,
    Transaction,
    utc_now,
)

__all__ = [
    "AccountKind",
    "ChatRole",
    "LIABILITY_KINDS",
    "TransactionCategory",
    "BudgetLine",
    "BudgetOverview",
    "CashflowSummary",
    "CategorySpend",
    "ComparisonRow",
    "DailySpendingPoint",
    "MonthCashflow",
    "NetWorthSummary",
    "ReportingPeriod",
    "SpendingTrend",
    "Account",
    "Base",
    "BudgetCategory",
    "ChatMessage",
    "NetWorthSnapshot",
    "Preference",
    "Transaction",
    "utc_now",
]

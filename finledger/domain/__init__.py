"""Domain package for business rules and core models."""

from .constants import (
    CHAT_HISTORY_LIMIT,
    DEFAULT_INSTITUTION,
    RECENT_TRANSACTION_LIMIT,
    TOP_CATEGORY_LIMIT,
)
from .models import (
    Account,
    AccountKind,
    BudgetCategory,
    ChatMessage,
    ChatRole,
    NetWorthSnapshot,
    ReportingPeriod,
    Transaction,
    TransactionCategory,
)
from .policies import DataSourceSelector
from .services import (
    compute_budget_overview,
    compute_cashflow,
    compute_category_breakdown,
    compute_net_worth_summary,
    map_account_kind,
    map_transaction_category,
    signed_account_balance,
)

__all__ = [
    "CHAT_HISTORY_LIMIT",
    "DEFAULT_INSTITUTION",
    "RECENT_TRANSACTION_LIMIT",
    "TOP_CATEGORY_LIMIT",
    "Account",
    "AccountKind",
    "BudgetCategory",
    "ChatMessage",
    "ChatRole",
    "NetWorthSnapshot",
    "ReportingPeriod",
    "Transaction",
    "TransactionCategory",
    "DataSourceSelector",
    "compute_budget_overview",
    "compute_cashflow",
    "compute_category_breakdown",
    "compute_net_worth_summary",
    "map_account_kind",
    "map_transaction_category",
    "signed_account_balance",
]

"""Domain services package."""

from .finance import (
    compute_budget_overview,
    compute_cashflow,
    compute_category_breakdown,
    compute_daily_cumulative,
    compute_monthly_comparison,
    compute_net_worth_summary,
    expense_totals_by_category,
    split_assets_liabilities,
)
from .mapping import (
    ledger_amount,
    map_account_kind,
    map_transaction_category,
    merchant_display,
    parse_aggregator_date,
    parse_amount,
    signed_account_balance,
)
from .normalization import normalize_account_type, normalize_label
from .validation import validate_balance_sign, validate_budget_limit

__all__ = [
    "compute_budget_overview",
    "compute_cashflow",
    "compute_category_breakdown",
    "compute_daily_cumulative",
    "compute_monthly_comparison",
    "compute_net_worth_summary",
    "expense_totals_by_category",
    "split_assets_liabilities",
    "ledger_amount",
    "map_account_kind",
    "map_transaction_category",
    "merchant_display",
    "parse_aggregator_date",
    "parse_amount",
    "signed_account_balance",
    "normalize_account_type",
    "normalize_label",
    "validate_balance_sign",
    "validate_budget_limit",
]

"""Domain constants for reconciliation and reporting."""

DEFAULT_INSTITUTION = "Connected Bank"

RECENT_TRANSACTION_LIMIT = 20
TOP_CATEGORY_LIMIT = 8
CHAT_HISTORY_LIMIT = 20
NET_WORTH_HISTORY_MONTHS = 12
CASHFLOW_HISTORY_MONTHS = 6


__all__ = [
    "DEFAULT_INSTITUTION",
    "RECENT_TRANSACTION_LIMIT",
    "TOP_CATEGORY_LIMIT",
    "CHAT_HISTORY_LIMIT",
    "NET_WORTH_HISTORY_MONTHS",
    "CASHFLOW_HISTORY_MONTHS",
]

"""Closed enumerations for accounts, transactions and chat."""

from enum import Enum


class AccountKind(str, Enum):
    """Kind of financial holding, tagged asset-like or liability-like."""

    CHECKING = "checking"
    SAVINGS = "savings"
    CREDIT_CARD = "credit-card"
    INVESTMENT = "investment"
    LOAN = "loan"
    MORTGAGE = "mortgage"
    OTHER = "other"

    @property
    def is_asset(self) -> bool:
        return self not in LIABILITY_KINDS

    @property
    def display_name(self) -> str:
        return _ACCOUNT_KIND_LABELS[self]


LIABILITY_KINDS = frozenset(
    {AccountKind.CREDIT_CARD, AccountKind.LOAN, AccountKind.MORTGAGE}
)

_ACCOUNT_KIND_LABELS = {
    AccountKind.CHECKING: "Checking",
    AccountKind.SAVINGS: "Savings",
    AccountKind.CREDIT_CARD: "Credit Card",
    AccountKind.INVESTMENT: "Investment",
    AccountKind.LOAN: "Loan",
    AccountKind.MORTGAGE: "Mortgage",
    AccountKind.OTHER: "Other",
}


class TransactionCategory(str, Enum):
    """Spending category of a transaction."""

    GROCERIES = "groceries"
    DINING = "dining"
    TRANSPORTATION = "transportation"
    ENTERTAINMENT = "entertainment"
    SHOPPING = "shopping"
    UTILITIES = "utilities"
    HOUSING = "housing"
    HEALTHCARE = "healthcare"
    PERSONAL_CARE = "personal-care"
    EDUCATION = "education"
    TRAVEL = "travel"
    SUBSCRIPTIONS = "subscriptions"
    INCOME = "income"
    TRANSFER = "transfer"
    FEES = "fees"
    OTHER = "other"

    @property
    def emoji(self) -> str:
        return _CATEGORY_EMOJI[self]

    @property
    def display_name(self) -> str:
        return self.value.replace("-", " ").title()


_CATEGORY_EMOJI = {
    TransactionCategory.GROCERIES: "🛒",
    TransactionCategory.DINING: "🍽️",
    TransactionCategory.TRANSPORTATION: "🚗",
    TransactionCategory.ENTERTAINMENT: "🎬",
    TransactionCategory.SHOPPING: "🛍️",
    TransactionCategory.UTILITIES: "💡",
    TransactionCategory.HOUSING: "🏠",
    TransactionCategory.HEALTHCARE: "🏥",
    TransactionCategory.PERSONAL_CARE: "💇",
    TransactionCategory.EDUCATION: "📚",
    TransactionCategory.TRAVEL: "✈️",
    TransactionCategory.SUBSCRIPTIONS: "📱",
    TransactionCategory.INCOME: "💰",
    TransactionCategory.TRANSFER: "🔄",
    TransactionCategory.FEES: "💳",
    TransactionCategory.OTHER: "📦",
}


class ChatRole(str, Enum):
    """Author of a persisted chat message."""

    USER = "user"
    ASSISTANT = "assistant"


__all__ = [
    "AccountKind",
    "LIABILITY_KINDS",
    "TransactionCategory",
    "ChatRole",
]

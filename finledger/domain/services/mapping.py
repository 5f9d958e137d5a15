"""Translation from aggregator conventions to ledger conventions.

The aggregator reports transaction amounts as positive debits and liability
balances as positive amounts owed. The ledger stores money out and
liabilities as negative values.
"""

from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation

from finledger.domain.models.enums import AccountKind, TransactionCategory
from finledger.domain.models.ledger import utc_now
from finledger.domain.services.normalization import (
    normalize_account_type,
    normalize_label,
)
from finledger.utils.decimal_utils import coerce_decimal


LIABILITY_ACCOUNT_TYPES = frozenset({"credit", "loan"})

CATEGORY_LABELS: dict[str, TransactionCategory] = {
    "FOOD_AND_DRINK": TransactionCategory.DINING,
    "GROCERIES": TransactionCategory.GROCERIES,
    "TRANSPORTATION": TransactionCategory.TRANSPORTATION,
    "TRAVEL": TransactionCategory.TRAVEL,
    "ENTERTAINMENT": TransactionCategory.ENTERTAINMENT,
    "GENERAL_MERCHANDISE": TransactionCategory.SHOPPING,
    "CLOTHING_AND_ACCESSORIES": TransactionCategory.SHOPPING,
    "ELECTRONICS": TransactionCategory.SHOPPING,
    "UTILITIES": TransactionCategory.UTILITIES,
    "HOME_IMPROVEMENT": TransactionCategory.HOUSING,
    "RENT_AND_UTILITIES": TransactionCategory.HOUSING,
    "RENT": TransactionCategory.HOUSING,
    "MEDICAL": TransactionCategory.HEALTHCARE,
    "PERSONAL_CARE": TransactionCategory.PERSONAL_CARE,
    "EDUCATION": TransactionCategory.EDUCATION,
    "SUBSCRIPTION": TransactionCategory.SUBSCRIPTIONS,
    "INCOME": TransactionCategory.INCOME,
    "TRANSFER_IN": TransactionCategory.TRANSFER,
    "TRANSFER_OUT": TransactionCategory.TRANSFER,
    "TRANSFER": TransactionCategory.TRANSFER,
    "BANK_FEES": TransactionCategory.FEES,
    "SERVICE": TransactionCategory.FEES,
    "FEES_AND_ADJUSTMENTS": TransactionCategory.FEES,
}


def map_account_kind(account_type: str | None, subtype: str | None) -> AccountKind:
    """Map an aggregator (type, subtype) pair to an account kind.

    Args:
        account_type: Aggregator type such as ``"depository"``.
        subtype: Aggregator subtype such as ``"savings"``.

    Returns:
        AccountKind: Matching ledger kind, ``OTHER`` when unknown.
    """
    kind = normalize_account_type(account_type)
    sub = normalize_account_type(subtype)
    if kind == "depository":
        if sub == "savings":
            return AccountKind.SAVINGS
        return AccountKind.CHECKING
    if kind == "credit":
        return AccountKind.CREDIT_CARD
    if kind in ("investment", "brokerage"):
        return AccountKind.INVESTMENT
    if kind == "loan":
        if "mortgage" in sub:
            return AccountKind.MORTGAGE
        return AccountKind.LOAN
    return AccountKind.OTHER


def parse_amount(value) -> Decimal:
    """Parse an aggregator amount into a finite Decimal.

    Raises:
        ValueError: If the value is not a finite number.
    """
    try:
        amount = coerce_decimal(value)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"invalid amount {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"invalid amount {value!r}")
    return amount


def signed_account_balance(
    account_type: str | None,
    current,
    available,
) -> Decimal:
    """Return the ledger balance for an aggregator account.

    Current balance is preferred, then available, then zero. Credit and loan
    accounts are always stored as a negative amount.

    Args:
        account_type: Aggregator account type.
        current: Reported current balance, may be None.
        available: Reported available balance, may be None.

    Returns:
        Decimal: Signed ledger balance.
    """
    if current is not None:
        raw = parse_amount(current)
    elif available is not None:
        raw = parse_amount(available)
    else:
        raw = Decimal("0")
    if normalize_account_type(account_type) in LIABILITY_ACCOUNT_TYPES:
        return -abs(raw)
    return raw


def map_transaction_category(label: str | None) -> TransactionCategory:
    """Map an aggregator coarse category label to a ledger category."""
    normalized = normalize_label(label)
    if normalized is None:
        return TransactionCategory.OTHER
    return CATEGORY_LABELS.get(normalized, TransactionCategory.OTHER)


def ledger_amount(aggregator_amount) -> Decimal:
    """Flip an aggregator debit-positive amount into ledger convention."""
    return -parse_amount(aggregator_amount)


def merchant_display(merchant_name: str | None, name: str | None) -> str:
    """Return the merchant name when present, else the raw payee name."""
    if merchant_name:
        return merchant_name
    return name or ""


def parse_aggregator_date(value) -> datetime:
    """Parse an aggregator ``YYYY-MM-DD`` date as UTC midnight.

    Unparsable values fall back to the current UTC time.

    Args:
        value: ISO date string or ``date`` instance.

    Returns:
        datetime: Naive UTC datetime.
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    try:
        parsed = datetime.strptime(str(value), "%Y-%m-%d")
    except (TypeError, ValueError):
        return utc_now()
    return parsed


__all__ = [
    "CATEGORY_LABELS",
    "LIABILITY_ACCOUNT_TYPES",
    "map_account_kind",
    "signed_account_balance",
    "map_transaction_category",
    "ledger_amount",
    "merchant_display",
    "parse_aggregator_date",
]

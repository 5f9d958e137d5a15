"""Domain validation helpers."""

from decimal import Decimal
from logging import Logger

from finledger.domain.models.enums import AccountKind


def validate_balance_sign(
    kind: AccountKind,
    balance: Decimal,
    logger: Logger,
) -> None:
    """Warn when balances violate expected sign conventions.

    Args:
        kind: Kind of the account holding the balance.
        balance: Stored signed balance.
        logger: Logger used for warnings.
    """
    if not kind.is_asset and balance > 0:
        logger.warning(
            f"Liability balance is positive for kind={kind.value}: {balance}"
        )


def validate_budget_limit(limit: Decimal) -> Decimal:
    """Return ``limit`` or raise when it is negative.

    Raises:
        ValueError: If the limit is below zero.
    """
    if limit < 0:
        raise ValueError(f"Budget limit must be non-negative, got {limit}")
    return limit


__all__ = ["validate_balance_sign", "validate_budget_limit"]

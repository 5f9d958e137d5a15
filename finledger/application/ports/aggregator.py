"""Port for the third-party bank-data aggregator."""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class AggregatorBalances:
    """Balances reported for an aggregator account."""

    current: float | None = None
    available: float | None = None
    limit: float | None = None


@dataclass(frozen=True)
class AggregatorAccount:
    """Account record returned by a balance fetch."""

    external_id: str | None
    name: str | None
    account_type: str | None
    subtype: str | None = None
    official_name: str | None = None
    balances: AggregatorBalances = field(default_factory=AggregatorBalances)


@dataclass(frozen=True)
class AggregatorTransaction:
    """Transaction record; ``amount`` is positive for debits."""

    external_id: str | None
    external_account_id: str | None
    amount: float | None
    date: object
    name: str | None
    merchant_name: str | None = None
    pending: bool = False
    category_label: str | None = None


@dataclass(frozen=True)
class AggregatorRemovedTransaction:
    """Identifier of a transaction the aggregator no longer reports."""

    external_id: str | None
    external_account_id: str | None = None


@dataclass(frozen=True)
class TransactionsPage:
    """One page of the incremental transactions feed."""

    added: list[AggregatorTransaction]
    modified: list[AggregatorTransaction]
    removed: list[AggregatorRemovedTransaction]
    next_cursor: str | None
    has_more: bool


class AggregatorClientPort(Protocol):
    """Port exposing the aggregator operations used by the core.

    Implementations raise the typed errors of ``finledger.domain.errors``:
    configuration, transport (timeout), upstream and decoding failures.
    """

    async def create_link_session(self) -> str:
        """Return a session token for the bank-linking flow."""

    async def exchange_public_token(self, public_token: str) -> str:
        """Exchange a public token for an access credential."""

    async def fetch_balances(self, credential: str) -> list[AggregatorAccount]:
        """Return the accounts and balances behind a credential."""

    async def fetch_transactions_page(
        self,
        credential: str,
        cursor: str | None = None,
    ) -> TransactionsPage:
        """Return the page of changes following ``cursor``."""


__all__ = [
    "AggregatorBalances",
    "AggregatorAccount",
    "AggregatorTransaction",
    "AggregatorRemovedTransaction",
    "TransactionsPage",
    "AggregatorClientPort",
]

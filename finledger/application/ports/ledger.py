"""Ports for the local ledger store.

Each port covers one entity collection. Repositories built from the same
composition share a unit of work, so ``commit`` on any of them persists the
pending changes of all of them.
"""

from datetime import datetime
from typing import Protocol

from finledger.domain.models import (
    Account,
    BudgetCategory,
    ChatMessage,
    NetWorthSnapshot,
    ReportingPeriod,
    Transaction,
    TransactionCategory,
)


class AccountsLedgerPort(Protocol):
    """Port exposing account storage."""

    def fetch_all(self) -> list[Account]:
        """Return every account, hidden ones included, sorted by name."""

    def fetch_visible(self) -> list[Account]:
        """Return non-hidden accounts of the selected data source."""

    def fetch_connected(self) -> list[Account]:
        """Return non-hidden accounts holding an access credential."""

    def fetch_by_id(self, account_id: int) -> Account | None:
        """Return the account with the given local id."""

    def fetch_by_external_id(self, external_id: str) -> Account | None:
        """Return the account with the given aggregator id."""

    def insert(self, account: Account) -> None:
        """Stage a new account."""

    def delete(self, account: Account) -> None:
        """Stage an account deletion (cascades to its transactions)."""

    def commit(self) -> None:
        """Persist staged changes."""


class TransactionsLedgerPort(Protocol):
    """Port exposing transaction storage."""

    def fetch_all(self, limit: int | None = None) -> list[Transaction]:
        """Return visible transactions, newest first."""

    def fetch_for_period(self, period: ReportingPeriod) -> list[Transaction]:
        """Return visible transactions dated within the period."""

    def fetch_for_category(
        self,
        category: TransactionCategory,
        period: ReportingPeriod,
    ) -> list[Transaction]:
        """Return visible transactions of a category within the period."""

    def fetch_pending(self) -> list[Transaction]:
        """Return visible pending transactions, newest first."""

    def fetch_by_external_id(self, external_id: str) -> Transaction | None:
        """Return the transaction with the given aggregator id."""

    def fetch_by_id(self, transaction_id: int) -> Transaction | None:
        """Return a transaction by local id."""

    def search(
        self,
        text: str | None = None,
        category: TransactionCategory | None = None,
        account_id: int | None = None,
    ) -> list[Transaction]:
        """Return visible transactions matching every given filter.

        ``text`` matches merchant or notes, case-insensitively.
        """

    def insert(self, transaction: Transaction) -> None:
        """Stage a new transaction."""

    def delete(self, transaction: Transaction) -> None:
        """Stage a transaction deletion."""

    def commit(self) -> None:
        """Persist staged changes."""


class BudgetLedgerPort(Protocol):
    """Port exposing budget category storage."""

    def fetch_all_categories(self) -> list[BudgetCategory]:
        """Return budget categories sorted by name."""

    def fetch_category(self, budget_id: int) -> BudgetCategory | None:
        """Return a budget category by id."""

    def insert_category(self, category: BudgetCategory) -> None:
        """Stage a new budget category."""

    def delete_category(self, category: BudgetCategory) -> None:
        """Stage a budget category deletion."""

    def commit(self) -> None:
        """Persist staged changes."""


class NetWorthLedgerPort(Protocol):
    """Port exposing net worth snapshot storage (append-only)."""

    def fetch_all(self) -> list[NetWorthSnapshot]:
        """Return every snapshot, oldest first."""

    def fetch_latest(self, count: int = 1) -> list[NetWorthSnapshot]:
        """Return up to ``count`` snapshots, newest first."""

    def fetch_since(self, cutoff: datetime) -> list[NetWorthSnapshot]:
        """Return snapshots dated on or after ``cutoff``, oldest first."""

    def insert(self, snapshot: NetWorthSnapshot) -> None:
        """Stage a new snapshot."""

    def commit(self) -> None:
        """Persist staged changes."""


class ChatLedgerPort(Protocol):
    """Port exposing persisted assistant conversation turns."""

    def fetch_all(self) -> list[ChatMessage]:
        """Return messages in chronological order."""

    def insert(self, message: ChatMessage) -> None:
        """Stage a new message."""

    def delete_all(self) -> int:
        """Stage deletion of every message and return how many."""

    def commit(self) -> None:
        """Persist staged changes."""


class PreferencesLedgerPort(Protocol):
    """Port exposing settings persisted in the ledger store."""

    def load_demo_mode(self, default: bool) -> bool:
        """Return the stored demo/live choice, or ``default`` if none."""

    def save_demo_mode(self, enabled: bool) -> None:
        """Stage the demo/live choice."""

    def commit(self) -> None:
        """Persist staged changes."""


__all__ = [
    "AccountsLedgerPort",
    "TransactionsLedgerPort",
    "BudgetLedgerPort",
    "NetWorthLedgerPort",
    "ChatLedgerPort",
    "PreferencesLedgerPort",
]

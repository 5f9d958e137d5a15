"""SQLAlchemy-backed repositories for the ledger store.

Repositories built on the same ``Session`` form one unit of work: a commit
through any of them persists the staged changes of all of them. Account and
transaction reads apply the demo/live data-source view in SQL.
"""

from datetime import datetime

from sqlalchemy import exists, or_, select, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finledger.application.ports.ledger import (
    AccountsLedgerPort,
    BudgetLedgerPort,
    ChatLedgerPort,
    NetWorthLedgerPort,
    PreferencesLedgerPort,
    TransactionsLedgerPort,
)
from finledger.domain.errors import LedgerWriteError
from finledger.domain.models import (
    Account,
    BudgetCategory,
    ChatMessage,
    NetWorthSnapshot,
    Preference,
    ReportingPeriod,
    Transaction,
    TransactionCategory,
)
from finledger.domain.policies import DataSourceSelector
from finledger.infrastructure.logging.logger import get_app_logger


DEMO_MODE_KEY = "use_demo_data"


class SqlAlchemyLedgerRepository:
    """Shared session handling for ledger repositories."""

    def __init__(self, session: Session, logger=None) -> None:
        """Initialize the repository.

        Args:
            session: Unit-of-work session shared with sibling repositories.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._session = session
        self._logger = logger or get_app_logger()

    def commit(self) -> None:
        """Persist staged changes, rolling back on failure.

        Raises:
            LedgerWriteError: If the database rejects the batch.
        """
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            self._logger.error(f"Ledger commit failed: {exc}")
            raise LedgerWriteError(str(exc)) from exc


class SqlAlchemyAccountsRepository(SqlAlchemyLedgerRepository, AccountsLedgerPort):
    """Account storage; visible reads respect the data-source selector."""

    def __init__(
        self,
        session: Session,
        selector: DataSourceSelector,
        logger=None,
    ) -> None:
        super().__init__(session, logger)
        self._selector = selector

    def fetch_all(self) -> list[Account]:
        query = select(Account).order_by(Account.name, Account.id)
        return list(self._session.scalars(query))

    def fetch_visible(self) -> list[Account]:
        """Return non-hidden accounts of the selected data source.

        In live mode, when no visible account is live, every visible account
        is returned.
        """
        live_available = self._session.scalar(
            select(
                exists().where(
                    Account.is_hidden.is_(False),
                    Account.external_id.is_not(None),
                )
            )
        )
        query = (
            select(Account)
            .where(Account.is_hidden.is_(False))
            .where(_source_clause(Account, self._selector, live_available))
            .order_by(Account.name, Account.id)
        )
        return list(self._session.scalars(query))

    def fetch_connected(self) -> list[Account]:
        query = (
            select(Account)
            .where(Account.is_hidden.is_(False))
            .where(Account.access_credential.is_not(None))
            .order_by(Account.name, Account.id)
        )
        return list(self._session.scalars(query))

    def fetch_by_id(self, account_id: int) -> Account | None:
        return self._session.get(Account, account_id)

    def fetch_by_external_id(self, external_id: str) -> Account | None:
        query = select(Account).where(Account.external_id == external_id)
        return self._session.scalars(query).first()

    def insert(self, account: Account) -> None:
        self._session.add(account)

    def delete(self, account: Account) -> None:
        self._session.delete(account)


class SqlAlchemyTransactionsRepository(
    SqlAlchemyLedgerRepository,
    TransactionsLedgerPort,
):
    """Transaction storage; reads respect the data-source selector.

    Whether live data exists is decided over the whole transactions table.
    """

    def __init__(
        self,
        session: Session,
        selector: DataSourceSelector,
        logger=None,
    ) -> None:
        super().__init__(session, logger)
        self._selector = selector

    def fetch_all(self, limit: int | None = None) -> list[Transaction]:
        query = self._visible_query()
        if limit is not None:
            query = query.limit(limit)
        return list(self._session.scalars(query))

    def fetch_for_period(self, period: ReportingPeriod) -> list[Transaction]:
        lower, upper = period.bounds()
        query = self._visible_query().where(
            Transaction.date >= lower,
            Transaction.date < upper,
        )
        return list(self._session.scalars(query))

    def fetch_for_category(
        self,
        category: TransactionCategory,
        period: ReportingPeriod,
    ) -> list[Transaction]:
        lower, upper = period.bounds()
        query = self._visible_query().where(
            Transaction.category == category,
            Transaction.date >= lower,
            Transaction.date < upper,
        )
        return list(self._session.scalars(query))

    def fetch_pending(self) -> list[Transaction]:
        query = self._visible_query().where(Transaction.is_pending.is_(True))
        return list(self._session.scalars(query))

    def fetch_by_external_id(self, external_id: str) -> Transaction | None:
        query = select(Transaction).where(Transaction.external_id == external_id)
        return self._session.scalars(query).first()

    def fetch_by_id(self, transaction_id: int) -> Transaction | None:
        return self._session.get(Transaction, transaction_id)

    def search(
        self,
        text: str | None = None,
        category: TransactionCategory | None = None,
        account_id: int | None = None,
    ) -> list[Transaction]:
        query = self._visible_query()
        if text:
            pattern = f"%{text}%"
            query = query.where(
                or_(
                    Transaction.merchant.ilike(pattern),
                    Transaction.notes.ilike(pattern),
                )
            )
        if category is not None:
            query = query.where(Transaction.category == category)
        if account_id is not None:
            query = query.where(Transaction.account_id == account_id)
        return list(self._session.scalars(query))

    def insert(self, transaction: Transaction) -> None:
        self._session.add(transaction)

    def delete(self, transaction: Transaction) -> None:
        self._session.delete(transaction)

    def _visible_query(self):
        live_available = self._session.scalar(
            select(exists().where(Transaction.external_id.is_not(None)))
        )
        return (
            select(Transaction)
            .where(_source_clause(Transaction, self._selector, live_available))
            .order_by(Transaction.date.desc(), Transaction.id.desc())
        )


class SqlAlchemyBudgetRepository(SqlAlchemyLedgerRepository, BudgetLedgerPort):
    """Budget category storage."""

    def fetch_all_categories(self) -> list[BudgetCategory]:
        query = select(BudgetCategory).order_by(
            BudgetCategory.name,
            BudgetCategory.id,
        )
        return list(self._session.scalars(query))

    def fetch_category(self, budget_id: int) -> BudgetCategory | None:
        return self._session.get(BudgetCategory, budget_id)

    def insert_category(self, category: BudgetCategory) -> None:
        self._session.add(category)

    def delete_category(self, category: BudgetCategory) -> None:
        self._session.delete(category)


class SqlAlchemyNetWorthRepository(
    SqlAlchemyLedgerRepository,
    NetWorthLedgerPort,
):
    """Append-only net worth snapshot storage."""

    def fetch_all(self) -> list[NetWorthSnapshot]:
        query = select(NetWorthSnapshot).order_by(
            NetWorthSnapshot.date,
            NetWorthSnapshot.id,
        )
        return list(self._session.scalars(query))

    def fetch_latest(self, count: int = 1) -> list[NetWorthSnapshot]:
        query = (
            select(NetWorthSnapshot)
            .order_by(NetWorthSnapshot.date.desc(), NetWorthSnapshot.id.desc())
            .limit(count)
        )
        return list(self._session.scalars(query))

    def fetch_since(self, cutoff: datetime) -> list[NetWorthSnapshot]:
        query = (
            select(NetWorthSnapshot)
            .where(NetWorthSnapshot.date >= cutoff)
            .order_by(NetWorthSnapshot.date, NetWorthSnapshot.id)
        )
        return list(self._session.scalars(query))

    def insert(self, snapshot: NetWorthSnapshot) -> None:
        self._session.add(snapshot)


class SqlAlchemyChatRepository(SqlAlchemyLedgerRepository, ChatLedgerPort):
    """Persisted assistant conversation."""

    def fetch_all(self) -> list[ChatMessage]:
        query = select(ChatMessage).order_by(ChatMessage.timestamp, ChatMessage.id)
        return list(self._session.scalars(query))

    def insert(self, message: ChatMessage) -> None:
        self._session.add(message)

    def delete_all(self) -> int:
        messages = self.fetch_all()
        for message in messages:
            self._session.delete(message)
        return len(messages)


class SqlAlchemyPreferencesRepository(
    SqlAlchemyLedgerRepository,
    PreferencesLedgerPort,
):
    """Settings persisted next to the ledger data."""

    def load_demo_mode(self, default: bool) -> bool:
        stored = self._session.get(Preference, DEMO_MODE_KEY)
        if stored is None:
            return default
        return stored.value == "true"

    def save_demo_mode(self, enabled: bool) -> None:
        value = "true" if enabled else "false"
        stored = self._session.get(Preference, DEMO_MODE_KEY)
        if stored is None:
            self._session.add(Preference(DEMO_MODE_KEY, value))
        else:
            stored.value = value


def _source_clause(model, selector: DataSourceSelector, live_available: bool):
    """Translate the selector decision into a WHERE clause on ``model``."""
    wanted = selector.wants_live(bool(live_available))
    if wanted is None:
        return true()
    if wanted:
        return model.external_id.is_not(None)
    return model.external_id.is_(None)


__all__ = [
    "SqlAlchemyLedgerRepository",
    "SqlAlchemyAccountsRepository",
    "SqlAlchemyTransactionsRepository",
    "SqlAlchemyBudgetRepository",
    "SqlAlchemyNetWorthRepository",
    "SqlAlchemyChatRepository",
    "SqlAlchemyPreferencesRepository",
]

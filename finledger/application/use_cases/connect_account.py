"""Use case linking a new institution and importing its data."""

from dataclasses import dataclass

from finledger.application.ports.aggregator import AggregatorClientPort
from finledger.application.ports.ledger import PreferencesLedgerPort
from finledger.application.use_cases.reconcile_ledger import (
    ReconcileLedgerUseCase,
)
from finledger.domain.models import NetWorthSnapshot
from finledger.domain.policies import DataSourceSelector
from finledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ConnectAccountResult:
    """Result of a completed bank link.

    Attributes:
        account_count: Accounts imported from the institution.
        transaction_count: Transactions upserted by the first sync.
        snapshot: Net worth snapshot taken after the import.
    """

    account_count: int
    transaction_count: int
    snapshot: NetWorthSnapshot


class ConnectAccountUseCase:
    """Run the bank-linking flow around the aggregator."""

    def __init__(
        self,
        aggregator: AggregatorClientPort,
        reconcile: ReconcileLedgerUseCase,
        selector: DataSourceSelector,
        preferences: PreferencesLedgerPort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            aggregator: Port creating link sessions and exchanging tokens.
            reconcile: Use case importing accounts and transactions.
            selector: Data-source selector switched to live data on success.
            preferences: Optional port persisting the live-data choice so
                later compositions start in live mode.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._aggregator = aggregator
        self._reconcile = reconcile
        self._selector = selector
        self._preferences = preferences
        self._logger = logger or get_app_logger()

    async def start_link(self) -> str:
        """Return a session token for the bank-linking UI."""
        token = await self._aggregator.create_link_session()
        self._logger.info("Created Plaid link session")
        return token

    async def complete_link(
        self,
        public_token: str,
        institution: str | None = None,
    ) -> ConnectAccountResult:
        """Exchange the public token and import the institution's data.

        Demo records stay in storage; the selector is switched to live data so
        reads show only the imported records. The choice is persisted when a
        preferences port is wired in.

        Args:
            public_token: Token produced by the bank-linking UI.
            institution: Optional institution name for the new accounts.

        Returns:
            ConnectAccountResult: Imported counts and the new snapshot.
        """
        credential = await self._aggregator.exchange_public_token(public_token)
        self._selector.use_live_data()
        if self._preferences is not None:
            self._preferences.save_demo_mode(False)
            self._preferences.commit()
        self._logger.info("Exchanged public token; switched to live data")

        accounts = await self._reconcile.sync_accounts(credential, institution)
        transactions = await self._reconcile.sync_transactions(credential)
        snapshot = self._reconcile.take_net_worth_snapshot()

        self._logger.info(
            f"Connected institution: {accounts.processed_count} accounts, "
            f"{transactions.added_count} transactions"
        )
        return ConnectAccountResult(
            account_count=accounts.processed_count,
            transaction_count=transactions.added_count,
            snapshot=snapshot,
        )


__all__ = ["ConnectAccountUseCase", "ConnectAccountResult"]

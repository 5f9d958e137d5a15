"""Use case refreshing every connected institution."""

import asyncio
from dataclasses import dataclass

from finledger.application.ports.ledger import AccountsLedgerPort
from finledger.application.use_cases.reconcile_ledger import (
    ReconcileLedgerUseCase,
)
from finledger.domain.errors import NoConnectedAccountsError
from finledger.domain.models import NetWorthSnapshot
from finledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class SyncAllAccountsResult:
    """Result of a full refresh.

    Attributes:
        credential_count: Distinct credentials synced.
        account_count: Accounts processed across credentials.
        transaction_count: Transactions upserted across credentials.
        removed_count: Transactions deleted across credentials.
        snapshot: Net worth snapshot taken after the refresh.
    """

    credential_count: int
    account_count: int
    transaction_count: int
    removed_count: int
    snapshot: NetWorthSnapshot


class SyncAllAccountsUseCase:
    """Re-sync each distinct credential, then take one snapshot."""

    def __init__(
        self,
        reconcile: ReconcileLedgerUseCase,
        accounts: AccountsLedgerPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            reconcile: Use case importing accounts and transactions.
            accounts: Ledger port listing connected accounts.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._reconcile = reconcile
        self._accounts = accounts
        self._logger = logger or get_app_logger()

    def credentials(self) -> list[str]:
        """Return the distinct credentials of connected accounts."""
        return sorted(
            {
                account.access_credential
                for account in self._accounts.fetch_connected()
                if account.access_credential
            }
        )

    async def run(
        self,
        cancel_event: asyncio.Event | None = None,
    ) -> SyncAllAccountsResult:
        """Sync accounts then transactions for each credential in turn.

        Args:
            cancel_event: Optional event checked between transaction pages.

        Returns:
            SyncAllAccountsResult: Totals across credentials and the snapshot.

        Raises:
            NoConnectedAccountsError: If no account holds a credential.
        """
        credentials = self.credentials()
        if not credentials:
            raise NoConnectedAccountsError()

        account_count = 0
        transaction_count = 0
        removed_count = 0
        for credential in credentials:
            accounts = await self._reconcile.sync_accounts(credential)
            transactions = await self._reconcile.sync_transactions(
                credential,
                cancel_event=cancel_event,
            )
            account_count += accounts.processed_count
            transaction_count += transactions.added_count
            removed_count += transactions.removed_count

        snapshot = self._reconcile.take_net_worth_snapshot()
        self._logger.info(
            f"Sync complete: credentials={len(credentials)}, "
            f"accounts={account_count}, transactions={transaction_count}"
        )
        return SyncAllAccountsResult(
            credential_count=len(credentials),
            account_count=account_count,
            transaction_count=transaction_count,
            removed_count=removed_count,
            snapshot=snapshot,
        )


__all__ = ["SyncAllAccountsUseCase", "SyncAllAccountsResult"]

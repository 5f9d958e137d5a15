"""Use case for user-driven account changes."""

from finledger.application.ports.ledger import AccountsLedgerPort
from finledger.domain.models import Account
from finledger.infrastructure.logging.logger import get_app_logger


class ManageAccountsUseCase:
    """List and disconnect linked accounts."""

    def __init__(self, accounts: AccountsLedgerPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            accounts: Ledger port for accounts.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._accounts = accounts
        self._logger = logger or get_app_logger()

    def connected_accounts(self) -> list[Account]:
        """Return visible accounts holding an access credential."""
        return self._accounts.fetch_connected()

    def disconnect_account(self, account_id: int) -> Account:
        """Detach an account from the aggregator and hide it.

        The account and its transactions stay in storage.

        Args:
            account_id: Local id of the account.

        Returns:
            Account: The hidden account.

        Raises:
            LookupError: If no account has that id.
        """
        account = self._accounts.fetch_by_id(account_id)
        if account is None:
            raise LookupError(f"Account {account_id} does not exist")
        account.external_id = None
        account.access_credential = None
        account.is_hidden = True
        self._accounts.commit()
        self._logger.info(f"Disconnected account {account_id}")
        return account


__all__ = ["ManageAccountsUseCase"]

"""Use case for user-driven transaction edits and lookups."""

from finledger.application.ports.ledger import TransactionsLedgerPort
from finledger.domain.models import Transaction, TransactionCategory
from finledger.infrastructure.logging.logger import get_app_logger


class ManageTransactionsUseCase:
    """Search transactions and edit their category and notes.

    Category and notes are user-owned: reconciliation refreshes amount,
    merchant, date and pending state but leaves these two untouched.
    """

    def __init__(self, transactions: TransactionsLedgerPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            transactions: Ledger port for transactions.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._transactions = transactions
        self._logger = logger or get_app_logger()

    def search(
        self,
        text: str = "",
        category: TransactionCategory | None = None,
        account_id: int | None = None,
    ) -> list[Transaction]:
        """Return visible transactions matching every given filter.

        Args:
            text: Matched against merchant or notes, case-insensitively.
                Blank text matches everything.
            category: Only transactions of this category, None for all.
            account_id: Only transactions of this account, None for all.

        Returns:
            list[Transaction]: Matches, newest first.
        """
        return self._transactions.search(
            text=(text or "").strip() or None,
            category=category,
            account_id=account_id,
        )

    def update_transaction(
        self,
        transaction_id: int,
        category: TransactionCategory,
        notes: str = "",
    ) -> Transaction:
        """Set the category and notes of a transaction.

        Raises:
            LookupError: If no transaction has that id.
        """
        transaction = self._transactions.fetch_by_id(transaction_id)
        if transaction is None:
            raise LookupError(f"Transaction {transaction_id} does not exist")
        transaction.category = TransactionCategory(category)
        transaction.notes = notes
        self._transactions.commit()
        self._logger.info(
            f"Updated transaction {transaction_id}: category={category}"
        )
        return transaction


__all__ = ["ManageTransactionsUseCase"]

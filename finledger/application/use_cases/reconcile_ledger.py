"""Use case reconciling aggregator data into the local ledger.

This module defines the reconciliation engine that:

* upserts aggregator accounts by their external id, translating balance signs;
* pages through the incremental transactions feed, upserting added and
  modified records and deleting removed ones;
* appends net worth snapshots computed from the visible accounts.

Category and notes of an existing transaction are never overwritten, so user
edits survive every sync.
"""

import asyncio
from dataclasses import dataclass

from finledger.application.ports.aggregator import (
    AggregatorAccount,
    AggregatorClientPort,
    AggregatorRemovedTransaction,
    AggregatorTransaction,
    TransactionsPage,
)
from finledger.application.ports.ledger import (
    AccountsLedgerPort,
    NetWorthLedgerPort,
    TransactionsLedgerPort,
)
from finledger.domain.constants import DEFAULT_INSTITUTION
from finledger.domain.errors import SyncCancelledError
from finledger.domain.models import (
    Account,
    NetWorthSnapshot,
    Transaction,
    utc_now,
)
from finledger.domain.services import (
    ledger_amount,
    map_account_kind,
    map_transaction_category,
    merchant_display,
    parse_aggregator_date,
    signed_account_balance,
    split_assets_liabilities,
)
from finledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class SyncAccountsResult:
    """Result of an account sync.

    Attributes:
        processed_count: Aggregator account records received.
        created_count: Accounts created locally.
        updated_count: Existing accounts refreshed.
        skipped_count: Malformed records that were logged and skipped.
    """

    processed_count: int
    created_count: int
    updated_count: int
    skipped_count: int = 0


@dataclass(frozen=True)
class SyncTransactionsResult:
    """Result of a transaction sync.

    Attributes:
        added_count: Added plus modified records upserted across pages.
        removed_count: Local transactions deleted.
        page_count: Pages fetched.
        next_cursor: Cursor to resume the next incremental sync from.
    """

    added_count: int
    removed_count: int
    page_count: int
    next_cursor: str | None


class ReconcileLedgerUseCase:
    """Reconcile aggregator accounts and transactions into the ledger."""

    def __init__(
        self,
        aggregator: AggregatorClientPort,
        accounts: AccountsLedgerPort,
        transactions: TransactionsLedgerPort,
        snapshots: NetWorthLedgerPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            aggregator: Port fetching balances and transaction pages.
            accounts: Ledger port for accounts.
            transactions: Ledger port for transactions.
            snapshots: Ledger port for net worth snapshots.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._aggregator = aggregator
        self._accounts = accounts
        self._transactions = transactions
        self._snapshots = snapshots
        self._logger = logger or get_app_logger()

    async def sync_accounts(
        self,
        credential: str,
        institution: str | None = None,
    ) -> SyncAccountsResult:
        """Upsert every account reachable through ``credential``.

        The whole batch is committed once. Aggregator errors propagate.

        Args:
            credential: Access credential of the linked institution.
            institution: Institution name for newly created accounts.

        Returns:
            SyncAccountsResult: Processed, created, updated and skipped
                counts.
        """
        records = await self._aggregator.fetch_balances(credential)
        self._logger.info(f"Fetched {len(records)} accounts from Plaid")

        created = 0
        updated = 0
        skipped = 0
        for record in records:
            try:
                was_created = self._upsert_account(
                    record,
                    credential,
                    institution or DEFAULT_INSTITUTION,
                )
            except ValueError as exc:
                self._logger.warning(f"Skipping account record: {exc}")
                skipped += 1
                continue
            if was_created:
                created += 1
            else:
                updated += 1

        self._accounts.commit()
        self._logger.info(
            f"Synced accounts: created={created}, updated={updated}, "
            f"skipped={skipped}"
        )
        return SyncAccountsResult(
            processed_count=len(records),
            created_count=created,
            updated_count=updated,
            skipped_count=skipped,
        )

    async def sync_transactions(
        self,
        credential: str,
        cursor: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> SyncTransactionsResult:
        """Page through the transactions feed and apply every change.

        Each page is committed before the next one is requested. A failing
        page fetch propagates and leaves earlier pages committed.

        Args:
            credential: Access credential of the linked institution.
            cursor: Cursor of a previous sync, or None for a full sync.
            cancel_event: Optional event checked between pages.

        Returns:
            SyncTransactionsResult: Counts and the cursor to resume from.

        Raises:
            SyncCancelledError: If ``cancel_event`` is set between pages.
        """
        added_count = 0
        removed_count = 0
        page_count = 0
        while True:
            page = await self._aggregator.fetch_transactions_page(
                credential,
                cursor,
            )
            page_count += 1
            removed_count += self._apply_removed(page.removed)
            added_count += self._apply_upserts(page)
            self._transactions.commit()
            cursor = page.next_cursor
            self._logger.info(
                f"Committed transactions page {page_count}: "
                f"added={len(page.added)}, modified={len(page.modified)}, "
                f"removed={len(page.removed)}"
            )
            if not page.has_more:
                break
            if cancel_event is not None and cancel_event.is_set():
                self._logger.warning(
                    f"Transaction sync cancelled after {page_count} pages"
                )
                raise SyncCancelledError(added_count, removed_count, cursor)

        self._logger.info(
            f"Synced transactions: upserted={added_count}, "
            f"removed={removed_count}, pages={page_count}"
        )
        return SyncTransactionsResult(
            added_count=added_count,
            removed_count=removed_count,
            page_count=page_count,
            next_cursor=cursor,
        )

    def take_net_worth_snapshot(self) -> NetWorthSnapshot:
        """Append a snapshot of the visible accounts dated now.

        Returns:
            NetWorthSnapshot: The stored snapshot.
        """
        accounts = self._accounts.fetch_visible()
        asset_total, liability_total = split_assets_liabilities(
            accounts,
            self._logger,
        )
        snapshot = NetWorthSnapshot(
            date=utc_now(),
            total_assets=asset_total,
            total_liabilities=liability_total,
        )
        self._snapshots.insert(snapshot)
        self._snapshots.commit()
        self._logger.info(
            f"Net worth snapshot: assets={asset_total}, "
            f"liabilities={liability_total}"
        )
        return snapshot

    def _upsert_account(
        self,
        record: AggregatorAccount,
        credential: str,
        institution: str,
    ) -> bool:
        """Create or refresh the account behind an aggregator record.

        Returns:
            bool: True when a new account was created.
        """
        if not record.external_id:
            raise ValueError("account record without an id")
        balance = signed_account_balance(
            record.account_type,
            record.balances.current,
            record.balances.available,
        )
        existing = self._accounts.fetch_by_external_id(record.external_id)
        if existing is not None:
            existing.balance = balance
            existing.last_synced = utc_now()
            return False

        name = record.official_name or record.name
        if not name:
            raise ValueError(f"account {record.external_id} has no name")
        self._accounts.insert(
            Account(
                name=name,
                institution=institution,
                kind=map_account_kind(record.account_type, record.subtype),
                balance=balance,
                external_id=record.external_id,
                access_credential=credential,
                last_synced=utc_now(),
            )
        )
        return True

    def _apply_removed(
        self,
        removed: list[AggregatorRemovedTransaction],
    ) -> int:
        count = 0
        for record in removed:
            if not record.external_id:
                continue
            existing = self._transactions.fetch_by_external_id(
                record.external_id
            )
            if existing is None:
                continue
            self._transactions.delete(existing)
            count += 1
        return count

    def _apply_upserts(self, page: TransactionsPage) -> int:
        count = 0
        for record in [*page.added, *page.modified]:
            try:
                self._upsert_transaction(record)
            except ValueError as exc:
                self._logger.warning(f"Skipping transaction record: {exc}")
                continue
            count += 1
        return count

    def _upsert_transaction(self, record: AggregatorTransaction) -> None:
        """Create or refresh the transaction behind an aggregator record.

        Existing transactions get amount, merchant, pending flag and date
        refreshed; category and notes stay as they are.
        """
        if not record.external_id:
            raise ValueError("transaction record without an id")
        if record.amount is None:
            raise ValueError(f"transaction {record.external_id} has no amount")
        amount = ledger_amount(record.amount)
        merchant = merchant_display(record.merchant_name, record.name)
        posted = parse_aggregator_date(record.date)

        existing = self._transactions.fetch_by_external_id(record.external_id)
        if existing is not None:
            existing.amount = amount
            existing.merchant = merchant
            existing.is_pending = record.pending
            existing.date = posted
            return

        account = None
        if record.external_account_id:
            account = self._accounts.fetch_by_external_id(
                record.external_account_id
            )
        self._transactions.insert(
            Transaction(
                date=posted,
                merchant=merchant,
                amount=amount,
                category=map_transaction_category(record.category_label),
                account=account,
                is_pending=record.pending,
                external_id=record.external_id,
            )
        )


__all__ = [
    "ReconcileLedgerUseCase",
    "SyncAccountsResult",
    "SyncTransactionsResult",
]

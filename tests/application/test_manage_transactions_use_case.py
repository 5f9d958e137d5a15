"""Tests for the ManageTransactionsUseCase."""

import asyncio
from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from finledger.application.use_cases.manage_transactions import (
    ManageTransactionsUseCase,
)
from finledger.application.use_cases.reconcile_ledger import (
    ReconcileLedgerUseCase,
)
from finledger.domain.models import (
    Account,
    AccountKind,
    Transaction,
    TransactionCategory,
)
from tests.factories import FakeAggregator, transaction_record, transactions_page


def _seed(ledger):
    checking = Account("Checking", "Bank", AccountKind.CHECKING, 100)
    card = Account("Card", "Bank", AccountKind.CREDIT_CARD, -50)
    ledger.accounts.insert(checking)
    ledger.accounts.insert(card)
    rows = [
        Transaction(
            datetime(2026, 10, 1),
            "Blue Bottle Coffee",
            -6,
            TransactionCategory.DINING,
            checking,
        ),
        Transaction(
            datetime(2026, 10, 2),
            "Whole Foods",
            -80,
            TransactionCategory.GROCERIES,
            card,
            notes="coffee beans and snacks",
        ),
        Transaction(
            datetime(2026, 10, 3),
            "Shell",
            -40,
            TransactionCategory.TRANSPORTATION,
            checking,
        ),
    ]
    for row in rows:
        ledger.transactions.insert(row)
    ledger.transactions.commit()
    return checking, card


def _merchants(transactions):
    return [transaction.merchant for transaction in transactions]


def test_search_matches_merchant_or_notes_case_insensitively(ledger):
    _seed(ledger)
    use_case = ManageTransactionsUseCase(ledger.transactions, logger=MagicMock())

    assert _merchants(use_case.search("COFFEE")) == [
        "Whole Foods",
        "Blue Bottle Coffee",
    ]
    assert _merchants(use_case.search("  ")) == [
        "Shell",
        "Whole Foods",
        "Blue Bottle Coffee",
    ]


def test_search_combines_category_and_account_filters(ledger):
    checking, card = _seed(ledger)
    use_case = ManageTransactionsUseCase(ledger.transactions, logger=MagicMock())

    assert _merchants(use_case.search(account_id=checking.id)) == [
        "Shell",
        "Blue Bottle Coffee",
    ]
    assert _merchants(
        use_case.search(category=TransactionCategory.GROCERIES)
    ) == ["Whole Foods"]
    assert use_case.search(
        "coffee",
        category=TransactionCategory.GROCERIES,
        account_id=checking.id,
    ) == []
    assert _merchants(use_case.search("coffee", account_id=card.id)) == [
        "Whole Foods"
    ]


def test_update_transaction_sets_category_and_notes(ledger):
    _seed(ledger)
    use_case = ManageTransactionsUseCase(ledger.transactions, logger=MagicMock())
    shell = use_case.search("shell")[0]

    updated = use_case.update_transaction(
        shell.id,
        TransactionCategory.TRAVEL,
        "road trip",
    )

    assert updated.category == TransactionCategory.TRAVEL
    assert updated.notes == "road trip"
    stored = ledger.transactions.fetch_by_id(shell.id)
    assert stored.category == TransactionCategory.TRAVEL
    assert stored.notes == "road trip"


def test_update_unknown_transaction_raises(ledger):
    use_case = ManageTransactionsUseCase(ledger.transactions, logger=MagicMock())

    with pytest.raises(LookupError):
        use_case.update_transaction(404, TransactionCategory.OTHER, "")


def test_user_edits_survive_a_later_sync(ledger):
    aggregator = FakeAggregator(
        pages=[transactions_page(added=[transaction_record("txn-1", amount=12.5)])]
    )
    reconcile = ReconcileLedgerUseCase(
        aggregator=aggregator,
        accounts=ledger.accounts,
        transactions=ledger.transactions,
        snapshots=ledger.snapshots,
        logger=MagicMock(),
    )
    asyncio.run(reconcile.sync_transactions("access-1"))
    use_case = ManageTransactionsUseCase(ledger.transactions, logger=MagicMock())
    uber = ledger.transactions.fetch_by_external_id("txn-1")

    use_case.update_transaction(uber.id, TransactionCategory.TRAVEL, "airport")
    aggregator.replay(
        [
            transactions_page(
                modified=[transaction_record("txn-1", amount=15)],
            )
        ]
    )
    asyncio.run(reconcile.sync_transactions("access-1", cursor="cursor-1"))

    refreshed = ledger.transactions.fetch_by_external_id("txn-1")
    assert refreshed.amount == Decimal("-15")
    assert refreshed.category == TransactionCategory.TRAVEL
    assert refreshed.notes == "airport"

"""Tests for the ReconcileLedgerUseCase."""

import asyncio
from datetime import datetime
from decimal import Decimal

import pytest

from finledger.application.use_cases.reconcile_ledger import (
    ReconcileLedgerUseCase,
)
from finledger.domain.errors import AggregatorUpstreamError, SyncCancelledError
from finledger.domain.models import (
    Account,
    AccountKind,
    Transaction,
    TransactionCategory,
)
from finledger.domain.services import compute_net_worth_summary
from tests.factories import (
    FakeAggregator,
    account_record,
    transaction_record,
    transactions_page,
)


def _use_case(ledger, aggregator) -> ReconcileLedgerUseCase:
    return ReconcileLedgerUseCase(
        aggregator=aggregator,
        accounts=ledger.accounts,
        transactions=ledger.transactions,
        snapshots=ledger.snapshots,
        logger=ledger.logger,
    )


def test_sync_accounts_creates_accounts_with_mapped_kind_and_sign(ledger):
    """New accounts get the mapped kind, signed balance and credential."""
    aggregator = FakeAggregator(
        accounts=[
            account_record("acc-chk", "depository", "checking", current=1200),
            account_record(
                "acc-card",
                "credit",
                "credit card",
                current=350.25,
                name="Card",
                official_name="Rewards Visa",
            ),
        ]
    )
    use_case = _use_case(ledger, aggregator)

    result = asyncio.run(use_case.sync_accounts("access-1"))

    assert result.processed_count == 2
    assert result.created_count == 2
    assert result.updated_count == 0
    card = ledger.accounts.fetch_by_external_id("acc-card")
    assert card.kind == AccountKind.CREDIT_CARD
    assert card.balance == Decimal("-350.25")
    assert card.name == "Rewards Visa"
    assert card.institution == "Connected Bank"
    assert card.access_credential == "access-1"
    assert card.last_synced is not None
    checking = ledger.accounts.fetch_by_external_id("acc-chk")
    assert checking.kind == AccountKind.CHECKING
    assert checking.balance == Decimal("1200")


def test_sync_accounts_is_idempotent(ledger):
    """A second sync updates balances without creating duplicates."""
    aggregator = FakeAggregator(
        accounts=[account_record("acc-chk", current=100)]
    )
    use_case = _use_case(ledger, aggregator)
    asyncio.run(use_case.sync_accounts("access-1"))
    ledger.accounts.fetch_by_external_id("acc-chk").name = "My Checking"
    ledger.accounts.commit()

    aggregator.accounts = [account_record("acc-chk", current=250)]
    result = asyncio.run(use_case.sync_accounts("access-1"))

    accounts = ledger.accounts.fetch_all()
    assert len(accounts) == 1
    assert accounts[0].balance == Decimal("250")
    assert accounts[0].name == "My Checking"
    assert result.created_count == 0
    assert result.updated_count == 1


def test_sync_accounts_liability_sign_is_negative_for_either_input_sign(ledger):
    """Credit and loan balances are stored as negative magnitudes."""
    aggregator = FakeAggregator(
        accounts=[
            account_record("acc-loan", "loan", "student", current=-5000),
            account_record("acc-mortgage", "loan", "mortgage", current=250000),
        ]
    )

    asyncio.run(_use_case(ledger, aggregator).sync_accounts("access-1"))

    loan = ledger.accounts.fetch_by_external_id("acc-loan")
    mortgage = ledger.accounts.fetch_by_external_id("acc-mortgage")
    assert loan.balance == Decimal("-5000")
    assert loan.kind == AccountKind.LOAN
    assert mortgage.balance == Decimal("-250000")
    assert mortgage.kind == AccountKind.MORTGAGE


def test_sync_accounts_falls_back_to_available_then_zero(ledger):
    aggregator = FakeAggregator(
        accounts=[
            account_record("acc-a", current=None, available=75),
            account_record("acc-b", current=None, available=None),
        ]
    )

    asyncio.run(_use_case(ledger, aggregator).sync_accounts("access-1"))

    assert ledger.accounts.fetch_by_external_id("acc-a").balance == Decimal("75")
    assert ledger.accounts.fetch_by_external_id("acc-b").balance == Decimal("0")


def test_sync_accounts_skips_malformed_records(ledger):
    """Records without an id are logged and skipped."""
    aggregator = FakeAggregator(
        accounts=[
            account_record(external_id=None, current=10),
            account_record("acc-ok", current=10),
        ]
    )

    result = asyncio.run(_use_case(ledger, aggregator).sync_accounts("access-1"))

    assert result.processed_count == 2
    assert result.created_count == 1
    assert result.skipped_count == 1
    assert len(ledger.accounts.fetch_all()) == 1
    ledger.logger.warning.assert_called()


def test_sync_accounts_skips_unparseable_balance_and_keeps_batch(ledger):
    aggregator = FakeAggregator(
        accounts=[
            account_record("acc-first", current=10),
            account_record("acc-bad", current="n/a"),
            account_record("acc-last", current=20),
        ]
    )

    result = asyncio.run(_use_case(ledger, aggregator).sync_accounts("access-1"))

    assert result.processed_count == 3
    assert result.created_count == 2
    assert result.skipped_count == 1
    assert ledger.accounts.fetch_by_external_id("acc-bad") is None
    assert ledger.accounts.fetch_by_external_id("acc-last").balance == 20
    ledger.logger.warning.assert_called()


def test_sync_transactions_skips_unparseable_amount_mid_page(ledger):
    aggregator = FakeAggregator(
        pages=[
            transactions_page(
                added=[
                    transaction_record("txn-good-1", amount=10),
                    transaction_record("txn-bad", amount="n/a"),
                    transaction_record("txn-good-2", amount=20),
                ]
            )
        ],
    )

    result = asyncio.run(
        _use_case(ledger, aggregator).sync_transactions("access-1")
    )

    assert result.added_count == 2
    assert ledger.transactions.fetch_by_external_id("txn-bad") is None
    second = ledger.transactions.fetch_by_external_id("txn-good-2")
    assert second.amount == Decimal("-20")
    ledger.logger.warning.assert_called()


def test_sync_transactions_flips_sign_and_maps_fields(ledger):
    aggregator = FakeAggregator(
        accounts=[account_record(current=100)],
        pages=[
            transactions_page(
                added=[
                    transaction_record("txn-1", amount=12.5),
                    transaction_record(
                        "txn-2",
                        amount=-2500,
                        name="PAYROLL ACME",
                        merchant_name=None,
                        category_label="INCOME",
                    ),
                    transaction_record(
                        "txn-3",
                        amount=4,
                        category_label="SOMETHING_NEW",
                        date="not-a-date",
                    ),
                ]
            )
        ],
    )
    use_case = _use_case(ledger, aggregator)
    asyncio.run(use_case.sync_accounts("access-1"))

    result = asyncio.run(use_case.sync_transactions("access-1"))

    assert result.added_count == 3
    assert result.page_count == 1
    assert result.next_cursor == "cursor-1"
    uber = ledger.transactions.fetch_by_external_id("txn-1")
    assert uber.amount == Decimal("-12.50")
    assert uber.merchant == "Uber"
    assert uber.category == TransactionCategory.TRANSPORTATION
    assert uber.date == datetime(2026, 10, 5)
    assert uber.account.external_id == "acc-checking"
    payroll = ledger.transactions.fetch_by_external_id("txn-2")
    assert payroll.amount == Decimal("2500")
    assert payroll.merchant == "PAYROLL ACME"
    assert payroll.category == TransactionCategory.INCOME
    unknown = ledger.transactions.fetch_by_external_id("txn-3")
    assert unknown.category == TransactionCategory.OTHER
    assert unknown.date is not None


def test_sync_transactions_tolerates_unknown_account(ledger):
    aggregator = FakeAggregator(
        pages=[
            transactions_page(
                added=[transaction_record(external_account_id="acc-missing")]
            )
        ]
    )

    asyncio.run(_use_case(ledger, aggregator).sync_transactions("access-1"))

    assert ledger.transactions.fetch_by_external_id("txn-1").account is None


def test_sync_transactions_preserves_user_category_and_notes(ledger):
    """Modified records refresh amounts but keep user edits."""
    aggregator = FakeAggregator(
        pages=[transactions_page(added=[transaction_record(amount=12.5)])]
    )
    use_case = _use_case(ledger, aggregator)
    asyncio.run(use_case.sync_transactions("access-1"))
    edited = ledger.transactions.fetch_by_external_id("txn-1")
    edited.category = TransactionCategory.TRAVEL
    edited.notes = "Airport ride"
    ledger.transactions.commit()

    aggregator.replay(
        [
            transactions_page(
                modified=[
                    transaction_record(
                        amount=15,
                        merchant_name="Uber Eats",
                        pending=True,
                        date="2026-10-06",
                        category_label="FOOD_AND_DRINK",
                    )
                ]
            )
        ]
    )
    asyncio.run(use_case.sync_transactions("access-1", cursor="cursor-1"))

    refreshed = ledger.transactions.fetch_by_external_id("txn-1")
    assert refreshed.amount == Decimal("-15")
    assert refreshed.merchant == "Uber Eats"
    assert refreshed.is_pending is True
    assert refreshed.date == datetime(2026, 10, 6)
    assert refreshed.category == TransactionCategory.TRAVEL
    assert refreshed.notes == "Airport ride"
    assert aggregator.cursors == ["cursor-1"]


def test_sync_transactions_repeated_full_sync_creates_no_duplicates(ledger):
    page = transactions_page(
        added=[transaction_record("txn-1"), transaction_record("txn-2")]
    )
    aggregator = FakeAggregator(pages=[page])
    use_case = _use_case(ledger, aggregator)

    asyncio.run(use_case.sync_transactions("access-1"))
    aggregator.replay([page])
    asyncio.run(use_case.sync_transactions("access-1"))

    assert len(ledger.transactions.fetch_all()) == 2


def test_sync_transactions_removed_is_deleted_then_noop(ledger):
    aggregator = FakeAggregator(
        pages=[transactions_page(added=[transaction_record("txn-1")])]
    )
    use_case = _use_case(ledger, aggregator)
    asyncio.run(use_case.sync_transactions("access-1"))

    aggregator.replay([transactions_page(removed=["txn-1"])])
    first = asyncio.run(use_case.sync_transactions("access-1"))
    aggregator.replay([transactions_page(removed=["txn-1"])])
    second = asyncio.run(use_case.sync_transactions("access-1"))

    assert first.removed_count == 1
    assert second.removed_count == 0
    assert ledger.transactions.fetch_by_external_id("txn-1") is None


def test_sync_transactions_pages_sequentially_with_cursor(ledger):
    aggregator = FakeAggregator(
        pages=[
            transactions_page(
                added=[transaction_record("txn-1")],
                next_cursor="c1",
                has_more=True,
            ),
            transactions_page(
                added=[transaction_record("txn-2")],
                next_cursor="c2",
                has_more=False,
            ),
        ]
    )

    result = asyncio.run(
        _use_case(ledger, aggregator).sync_transactions("access-1")
    )

    assert aggregator.cursors == [None, "c1"]
    assert result.page_count == 2
    assert result.added_count == 2
    assert result.next_cursor == "c2"


def test_sync_transactions_failure_keeps_earlier_pages(ledger):
    """A failing page fetch propagates; committed pages remain."""
    aggregator = FakeAggregator(
        pages=[
            transactions_page(
                added=[transaction_record("txn-1")],
                next_cursor="c1",
                has_more=True,
            ),
            AggregatorUpstreamError(500, "INTERNAL_SERVER_ERROR"),
        ]
    )

    with pytest.raises(AggregatorUpstreamError):
        asyncio.run(_use_case(ledger, aggregator).sync_transactions("access-1"))

    ledger.session.rollback()
    assert ledger.transactions.fetch_by_external_id("txn-1") is not None


def test_sync_transactions_stops_between_pages_when_cancelled(ledger):
    aggregator = FakeAggregator(
        pages=[
            transactions_page(
                added=[transaction_record("txn-1")],
                next_cursor="c1",
                has_more=True,
            ),
            transactions_page(added=[transaction_record("txn-2")]),
        ]
    )
    cancel = asyncio.Event()
    cancel.set()

    with pytest.raises(SyncCancelledError) as exc_info:
        asyncio.run(
            _use_case(ledger, aggregator).sync_transactions(
                "access-1",
                cancel_event=cancel,
            )
        )

    assert exc_info.value.added_count == 1
    assert exc_info.value.cursor == "c1"
    assert aggregator.cursors == [None]
    assert ledger.transactions.fetch_by_external_id("txn-1") is not None


def test_sync_transactions_skips_record_without_amount(ledger):
    aggregator = FakeAggregator(
        pages=[
            transactions_page(
                added=[
                    transaction_record("txn-bad", amount=None),
                    transaction_record("txn-good"),
                ]
            )
        ]
    )

    result = asyncio.run(
        _use_case(ledger, aggregator).sync_transactions("access-1")
    )

    assert result.added_count == 1
    assert ledger.transactions.fetch_by_external_id("txn-bad") is None


def test_take_net_worth_snapshot_uses_visible_accounts(ledger):
    ledger.accounts.insert(
        Account("Checking", "Bank", AccountKind.CHECKING, 5000, external_id="a")
    )
    ledger.accounts.insert(
        Account("Card", "Bank", AccountKind.CREDIT_CARD, -1200, external_id="b")
    )
    ledger.accounts.insert(
        Account(
            "Old",
            "Bank",
            AccountKind.SAVINGS,
            900,
            external_id="c",
            is_hidden=True,
        )
    )
    ledger.accounts.commit()

    snapshot = _use_case(ledger, FakeAggregator()).take_net_worth_snapshot()

    assert snapshot.total_assets == Decimal("5000")
    assert snapshot.total_liabilities == Decimal("1200")
    assert snapshot.net_worth == Decimal("3800")
    assert len(ledger.snapshots.fetch_all()) == 1


def test_take_net_worth_snapshot_does_not_deduplicate_same_day(ledger):
    use_case = _use_case(ledger, FakeAggregator())

    use_case.take_net_worth_snapshot()
    use_case.take_net_worth_snapshot()

    assert len(ledger.snapshots.fetch_all()) == 2


def test_end_to_end_sync_then_snapshot(ledger):
    """Fresh store: 2 accounts, 15 transactions, one matching snapshot."""
    aggregator = FakeAggregator(
        accounts=[
            account_record("acc-chk", "depository", "checking", current=4200),
            account_record("acc-card", "credit", "credit card", current=800),
        ],
        pages=[
            transactions_page(
                added=[
                    transaction_record(f"txn-{index}", amount=10 + index)
                    for index in range(15)
                ],
                has_more=False,
            )
        ],
    )
    use_case = _use_case(ledger, aggregator)

    accounts = asyncio.run(use_case.sync_accounts("access-1"))
    transactions = asyncio.run(use_case.sync_transactions("access-1"))
    snapshot = use_case.take_net_worth_snapshot()

    assert accounts.processed_count == 2
    assert transactions.added_count == 15
    assert len(ledger.snapshots.fetch_all()) == 1
    expected = compute_net_worth_summary(ledger.accounts.fetch_visible())
    assert snapshot.net_worth == expected.net_worth == Decimal("3400")


def test_transactions_are_deleted_with_their_account(ledger):
    account = Account("Checking", "Bank", AccountKind.CHECKING, 10)
    ledger.accounts.insert(account)
    ledger.transactions.insert(
        Transaction(
            datetime(2026, 10, 1),
            "Cafe",
            -4,
            TransactionCategory.DINING,
            account=account,
        )
    )
    ledger.accounts.commit()

    ledger.accounts.delete(account)
    ledger.accounts.commit()

    assert ledger.session.query(Transaction).count() == 0

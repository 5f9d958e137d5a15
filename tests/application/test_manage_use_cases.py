"""Tests for the account and budget management use cases."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from finledger.application.use_cases.manage_accounts import (
    ManageAccountsUseCase,
)
from finledger.application.use_cases.manage_budget import ManageBudgetUseCase
from finledger.domain.models import (
    Account,
    AccountKind,
    Transaction,
    TransactionCategory,
    utc_now,
)


def test_disconnect_hides_account_and_keeps_its_transactions(ledger):
    account = Account(
        "Checking",
        "Bank",
        AccountKind.CHECKING,
        100,
        external_id="acc-1",
        access_credential="access-1",
    )
    ledger.accounts.insert(account)
    ledger.transactions.insert(
        Transaction(utc_now(), "Cafe", -5, TransactionCategory.DINING, account)
    )
    ledger.accounts.commit()
    use_case = ManageAccountsUseCase(ledger.accounts, logger=MagicMock())
    assert use_case.connected_accounts() == [account]

    hidden = use_case.disconnect_account(account.id)

    assert hidden.is_hidden is True
    assert hidden.external_id is None
    assert hidden.access_credential is None
    assert use_case.connected_accounts() == []
    assert len(ledger.transactions.fetch_all()) == 1


def test_disconnect_unknown_account_raises(ledger):
    use_case = ManageAccountsUseCase(ledger.accounts, logger=MagicMock())

    with pytest.raises(LookupError):
        use_case.disconnect_account(404)


def test_budget_category_lifecycle(ledger):
    use_case = ManageBudgetUseCase(ledger.budgets, logger=MagicMock())

    budget = use_case.add_category(
        "  Dining Out ",
        "250",
        TransactionCategory.DINING,
    )
    use_case.update_limit(budget.id, 300)

    stored = use_case.list_categories()
    assert [(b.name, b.monthly_limit) for b in stored] == [
        ("Dining Out", Decimal("300"))
    ]

    use_case.delete_category(budget.id)
    assert use_case.list_categories() == []


@pytest.mark.parametrize(
    "name, limit",
    [("", 100), ("   ", 100), ("Travel", -1)],
)
def test_add_category_rejects_invalid_input(ledger, name, limit):
    use_case = ManageBudgetUseCase(ledger.budgets, logger=MagicMock())

    with pytest.raises(ValueError):
        use_case.add_category(name, limit, TransactionCategory.TRAVEL)
    assert use_case.list_categories() == []


def test_update_unknown_budget_raises(ledger):
    use_case = ManageBudgetUseCase(ledger.budgets, logger=MagicMock())

    with pytest.raises(LookupError):
        use_case.update_limit(7, 10)

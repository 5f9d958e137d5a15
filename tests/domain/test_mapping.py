"""Tests for aggregator-to-ledger mapping helpers."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from finledger.domain.models import AccountKind, TransactionCategory
from finledger.domain.services import mapping


@pytest.mark.parametrize(
    ("account_type", "subtype", "expected"),
    [
        ("depository", "savings", AccountKind.SAVINGS),
        ("depository", "checking", AccountKind.CHECKING),
        ("depository", "money market", AccountKind.CHECKING),
        ("credit", "credit card", AccountKind.CREDIT_CARD),
        ("investment", "401k", AccountKind.INVESTMENT),
        ("brokerage", None, AccountKind.INVESTMENT),
        ("loan", "home mortgage", AccountKind.MORTGAGE),
        ("loan", "student", AccountKind.LOAN),
        ("other", None, AccountKind.OTHER),
        (None, None, AccountKind.OTHER),
        ("  Depository ", "SAVINGS", AccountKind.SAVINGS),
    ],
)
def test_map_account_kind(account_type, subtype, expected):
    assert mapping.map_account_kind(account_type, subtype) is expected


def test_signed_balance_negates_liabilities_regardless_of_input_sign():
    assert mapping.signed_account_balance("credit", 500, None) == Decimal("-500")
    assert mapping.signed_account_balance("loan", -500, None) == Decimal("-500")


def test_signed_balance_keeps_asset_sign_and_prefers_current():
    assert mapping.signed_account_balance("depository", 10, 99) == Decimal("10")
    assert mapping.signed_account_balance("depository", -3, None) == Decimal("-3")
    assert mapping.signed_account_balance("depository", None, 99) == Decimal("99")
    assert mapping.signed_account_balance("investment", None, None) == 0


def test_map_transaction_category_uses_table_and_defaults_to_other():
    assert (
        mapping.map_transaction_category("food_and_drink")
        is TransactionCategory.DINING
    )
    assert (
        mapping.map_transaction_category("RENT_AND_UTILITIES")
        is TransactionCategory.HOUSING
    )
    assert mapping.map_transaction_category("LOAN_PAYMENTS") is (
        TransactionCategory.OTHER
    )
    assert mapping.map_transaction_category(None) is TransactionCategory.OTHER
    assert mapping.map_transaction_category("  ") is TransactionCategory.OTHER


def test_ledger_amount_flips_sign():
    assert mapping.ledger_amount(12.5) == Decimal("-12.5")
    assert mapping.ledger_amount(-2500) == Decimal("2500")


@pytest.mark.parametrize("raw", ["n/a", "", "NaN", "Infinity", "-inf"])
def test_unparseable_amounts_raise_value_error(raw):
    with pytest.raises(ValueError):
        mapping.ledger_amount(raw)
    with pytest.raises(ValueError):
        mapping.signed_account_balance("depository", raw, None)


def test_parse_amount_accepts_numeric_strings():
    assert mapping.parse_amount("12.50") == Decimal("12.50")
    assert mapping.parse_amount(None) == Decimal("0")


def test_merchant_display_prefers_merchant_name():
    assert mapping.merchant_display("Uber", "UBER *TRIP") == "Uber"
    assert mapping.merchant_display(None, "UBER *TRIP") == "UBER *TRIP"
    assert mapping.merchant_display("", None) == ""


def test_parse_aggregator_date_accepts_strings_and_dates():
    assert mapping.parse_aggregator_date("2026-10-05") == datetime(2026, 10, 5)
    assert mapping.parse_aggregator_date(date(2026, 1, 2)) == datetime(2026, 1, 2)


def test_parse_aggregator_date_falls_back_to_now(monkeypatch):
    fixed = datetime(2026, 10, 18, 9, 30)
    monkeypatch.setattr(mapping, "utc_now", lambda: fixed)

    assert mapping.parse_aggregator_date("10/05/2026") == fixed
    assert mapping.parse_aggregator_date(None) == fixed

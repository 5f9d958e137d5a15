"""Plaid adapter for the aggregator port.

SDK calls are blocking, so each one runs in a worker thread bounded by the
configured timeout. SDK and transport failures are mapped onto the typed
aggregator errors.
"""

import asyncio
import json
from typing import Any, Callable, Optional

import plaid
import urllib3
from plaid.api import plaid_api as plaid_api_module
from plaid.model.accounts_balance_get_request import AccountsBalanceGetRequest
from plaid.model.country_code import CountryCode
from plaid.model.item_public_token_exchange_request import (
    ItemPublicTokenExchangeRequest,
)
from plaid.model.link_token_create_request import LinkTokenCreateRequest
from plaid.model.link_token_create_request_user import (
    LinkTokenCreateRequestUser,
)
from plaid.model.products import Products
from plaid.model.transactions_sync_request import TransactionsSyncRequest

from finledger.application.ports.aggregator import (
    AggregatorAccount,
    AggregatorBalances,
    AggregatorClientPort,
    AggregatorRemovedTransaction,
    AggregatorTransaction,
    TransactionsPage,
)
from finledger.domain.errors import (
    AggregatorDecodingError,
    AggregatorNotConfiguredError,
    AggregatorTimeoutError,
    AggregatorTransportError,
    AggregatorUpstreamError,
)
from finledger.infrastructure.logging.logger import get_app_logger
from finledger.infrastructure.settings import FinLedgerSettings


CLIENT_NAME = "finledger"
CLIENT_USER_ID = "finledger-user"

_ENV_MAP = {
    "sandbox": plaid.Environment.Sandbox,
    "production": plaid.Environment.Production,
}


def build_plaid_api(settings: FinLedgerSettings) -> plaid_api_module.PlaidApi:
    """Return a Plaid API client for the configured environment."""
    host = _ENV_MAP.get(settings.plaid_env, plaid.Environment.Sandbox)
    configuration = plaid.Configuration(
        host=host,
        api_key={
            "clientId": settings.plaid_client_id,
            "secret": settings.plaid_secret,
        },
    )
    api_client = plaid.ApiClient(configuration)
    return plaid_api_module.PlaidApi(api_client)


class PlaidAggregatorClient(AggregatorClientPort):
    """AggregatorClientPort implementation backed by plaid-python."""

    def __init__(
        self,
        settings: FinLedgerSettings,
        api: Optional[plaid_api_module.PlaidApi] = None,
        logger=None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Settings providing credentials, timeout and page size.
            api: Optional prebuilt Plaid API, created lazily otherwise.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._settings = settings
        self._api = api
        self._logger = logger or get_app_logger()

    async def create_link_session(self) -> str:
        request = LinkTokenCreateRequest(
            products=[Products("transactions")],
            client_name=CLIENT_NAME,
            country_codes=[CountryCode("US")],
            language="en",
            user=LinkTokenCreateRequestUser(client_user_id=CLIENT_USER_ID),
        )
        payload = await self._call(
            "link_token_create",
            lambda api: api.link_token_create,
            request,
        )
        return _require_field(payload, "link_token")

    async def exchange_public_token(self, public_token: str) -> str:
        request = ItemPublicTokenExchangeRequest(public_token=public_token)
        payload = await self._call(
            "item_public_token_exchange",
            lambda api: api.item_public_token_exchange,
            request,
        )
        return _require_field(payload, "access_token")

    async def fetch_balances(self, credential: str) -> list[AggregatorAccount]:
        request = AccountsBalanceGetRequest(access_token=credential)
        payload = await self._call(
            "accounts_balance_get",
            lambda api: api.accounts_balance_get,
            request,
        )
        accounts = _require_field(payload, "accounts")
        return [parse_account(record) for record in accounts]

    async def fetch_transactions_page(
        self,
        credential: str,
        cursor: str | None = None,
    ) -> TransactionsPage:
        request_kwargs: dict[str, Any] = {
            "access_token": credential,
            "count": self._settings.plaid_page_size,
        }
        if cursor:
            request_kwargs["cursor"] = cursor
        payload = await self._call(
            "transactions_sync",
            lambda api: api.transactions_sync,
            TransactionsSyncRequest(**request_kwargs),
        )
        return parse_transactions_page(payload)

    def _require_configured(self) -> None:
        if not self._settings.is_aggregator_configured:
            raise AggregatorNotConfiguredError()

    def _get_api(self) -> plaid_api_module.PlaidApi:
        if self._api is None:
            self._api = build_plaid_api(self._settings)
        return self._api

    async def _call(
        self,
        operation: str,
        endpoint: Callable[[plaid_api_module.PlaidApi], Callable[..., Any]],
        request,
    ) -> dict[str, Any]:
        """Run one SDK call and return its response as a dictionary.

        Raises:
            AggregatorNotConfiguredError: If credentials are missing.
            AggregatorTimeoutError: If the call exceeds the timeout.
            AggregatorTransportError: On connection failures.
            AggregatorUpstreamError: On non-2xx responses.
            AggregatorDecodingError: If the response cannot be parsed.
        """
        self._require_configured()
        timeout = self._settings.plaid_timeout_seconds
        method = endpoint(self._get_api())
        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(method, request, _request_timeout=timeout),
                timeout=timeout,
            )
        except asyncio.TimeoutError as exc:
            self._logger.error(f"Plaid {operation} timed out after {timeout}s")
            raise AggregatorTimeoutError(
                f"Plaid {operation} timed out after {timeout}s"
            ) from exc
        except plaid.ApiException as exc:
            error = upstream_error(exc)
            self._logger.error(f"Plaid {operation} failed: {error}")
            raise error from exc
        except (plaid.ApiTypeError, plaid.ApiValueError) as exc:
            self._logger.error(f"Plaid {operation} returned bad data: {exc}")
            raise AggregatorDecodingError(str(exc)) from exc
        except urllib3.exceptions.TimeoutError as exc:
            self._logger.error(f"Plaid {operation} timed out: {exc}")
            raise AggregatorTimeoutError(str(exc)) from exc
        except urllib3.exceptions.HTTPError as exc:
            self._logger.error(f"Plaid {operation} transport error: {exc}")
            raise AggregatorTransportError(str(exc)) from exc

        try:
            return response.to_dict()
        except (AttributeError, TypeError, ValueError) as exc:
            raise AggregatorDecodingError(str(exc)) from exc


def upstream_error(exc: plaid.ApiException) -> AggregatorUpstreamError:
    """Build an upstream error from a Plaid API exception.

    The message is the first of ``error_message``, ``display_message`` and
    ``error_code`` found in the JSON body, else the raw body, else the
    status code.
    """
    status = getattr(exc, "status", None)
    body = getattr(exc, "body", None)
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    message = None
    if body:
        try:
            parsed = json.loads(body)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            for key in ("error_message", "display_message", "error_code"):
                if parsed.get(key):
                    message = str(parsed[key])
                    break
        if message is None:
            message = str(body)
    if message is None:
        message = f"HTTP {status}"
    return AggregatorUpstreamError(status, message)


def parse_account(record: dict[str, Any]) -> AggregatorAccount:
    balances = record.get("balances") or {}
    return AggregatorAccount(
        external_id=record.get("account_id"),
        name=record.get("name"),
        account_type=_as_text(record.get("type")),
        subtype=_as_text(record.get("subtype")),
        official_name=record.get("official_name"),
        balances=AggregatorBalances(
            current=balances.get("current"),
            available=balances.get("available"),
            limit=balances.get("limit"),
        ),
    )


def parse_transaction(record: dict[str, Any]) -> AggregatorTransaction:
    return AggregatorTransaction(
        external_id=record.get("transaction_id"),
        external_account_id=record.get("account_id"),
        amount=record.get("amount"),
        date=record.get("date"),
        name=record.get("name"),
        merchant_name=record.get("merchant_name"),
        pending=bool(record.get("pending", False)),
        category_label=category_label(record),
    )


def parse_transactions_page(payload: dict[str, Any]) -> TransactionsPage:
    """Convert a ``transactions_sync`` response into a page."""
    return TransactionsPage(
        added=[parse_transaction(item) for item in payload.get("added") or []],
        modified=[
            parse_transaction(item) for item in payload.get("modified") or []
        ],
        removed=[
            AggregatorRemovedTransaction(
                external_id=item.get("transaction_id"),
                external_account_id=item.get("account_id"),
            )
            for item in payload.get("removed") or []
        ],
        next_cursor=payload.get("next_cursor"),
        has_more=bool(payload.get("has_more", False)),
    )


def category_label(record: dict[str, Any]) -> str | None:
    """Return the coarse category label of a Plaid transaction.

    The personal finance category is preferred; the legacy category list is
    used when it is absent.
    """
    personal = record.get("personal_finance_category") or {}
    primary = personal.get("primary")
    if primary:
        return str(primary)
    legacy = record.get("category") or []
    if legacy:
        return str(legacy[0]).upper().replace(" ", "_")
    return None


def _as_text(value) -> str | None:
    if value is None:
        return None
    return str(getattr(value, "value", value))


def _require_field(payload: dict[str, Any], name: str):
    if name not in payload or payload[name] is None:
        raise AggregatorDecodingError(f"Plaid response is missing {name!r}")
    return payload[name]


__all__ = [
    "PlaidAggregatorClient",
    "build_plaid_api",
    "upstream_error",
    "parse_account",
    "parse_transaction",
    "parse_transactions_page",
    "category_label",
]

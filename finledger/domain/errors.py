"""Typed errors raised by the finledger core."""


class FinLedgerError(Exception):
    """Base class for every error raised by the core."""


class ConfigurationError(FinLedgerError):
    """Required configuration is missing; raised before any network call."""


class AggregatorNotConfiguredError(ConfigurationError):
    """Aggregator client id or secret is missing."""

    def __init__(self) -> None:
        super().__init__(
            "Plaid credentials are not configured. "
            "Set PLAID_CLIENT_ID and PLAID_SECRET."
        )


class AssistantNotConfiguredError(ConfigurationError):
    """Assistant API key is missing."""

    def __init__(self) -> None:
        super().__init__(
            "Assistant API key is not configured. Set GEMINI_API_KEY."
        )


class NoConnectedAccountsError(ConfigurationError):
    """No visible account holds an access credential."""

    def __init__(self) -> None:
        super().__init__("No connected accounts to sync.")


class AggregatorError(FinLedgerError):
    """Base class for failures talking to the bank-data aggregator."""

    retryable = False


class AggregatorTransportError(AggregatorError):
    """Connection failure; the operation may be retried safely."""

    retryable = True


class AggregatorTimeoutError(AggregatorTransportError):
    """The aggregator did not answer within the configured timeout."""


class AggregatorUpstreamError(AggregatorError):
    """The aggregator answered with a non-2xx status."""

    def __init__(self, status_code: int | None, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Plaid server error: {message}")


class AggregatorDecodingError(AggregatorError):
    """The aggregator response could not be parsed."""


class SyncCancelledError(FinLedgerError):
    """Transaction sync stopped between pages at the caller's request."""

    def __init__(self, added_count: int, removed_count: int, cursor: str | None) -> None:
        self.added_count = added_count
        self.removed_count = removed_count
        self.cursor = cursor
        super().__init__(
            f"Transaction sync cancelled after {added_count} upserts"
        )


class LedgerWriteError(FinLedgerError):
    """A batch could not be committed to the ledger store."""


class AssistantError(FinLedgerError):
    """The assistant session failed to produce a reply."""


__all__ = [
    "FinLedgerError",
    "ConfigurationError",
    "AggregatorNotConfiguredError",
    "AssistantNotConfiguredError",
    "NoConnectedAccountsError",
    "AggregatorError",
    "AggregatorTransportError",
    "AggregatorTimeoutError",
    "AggregatorUpstreamError",
    "AggregatorDecodingError",
    "SyncCancelledError",
    "LedgerWriteError",
    "AssistantError",
]

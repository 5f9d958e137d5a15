"""CLI adapter to refresh every connected institution.

This module wires the SyncAllAccountsUseCase to the ledger store and the
Plaid client and prints a summary of the refresh.
"""

import asyncio

from finledger.domain.errors import (
    AggregatorError,
    LedgerWriteError,
    NoConnectedAccountsError,
)
from finledger.infrastructure.container import (
    build_aggregator_client,
    build_ledger_repositories,
    build_settings,
    build_sync_all_use_case,
)
from finledger.infrastructure.logging.logger import get_app_logger
from finledger.utils.formatting import format_currency


def main() -> None:
    """Run the sync of every connected credential."""
    logger = get_app_logger()
    settings = build_settings()
    if not settings.is_aggregator_configured:
        logger.warning("PLAID_CLIENT_ID and PLAID_SECRET are required to sync.")
        return

    repositories = build_ledger_repositories(settings=settings)
    use_case = build_sync_all_use_case(
        repositories,
        build_aggregator_client(settings),
    )
    try:
        result = asyncio.run(use_case.run())
    except NoConnectedAccountsError as exc:
        logger.warning(str(exc))
        return
    except (AggregatorError, LedgerWriteError) as exc:
        logger.error(f"Sync failed: {exc}")
        return
    finally:
        repositories.session.close()

    print(
        f"Synchronized {result.account_count} accounts and "
        f"{result.transaction_count} transactions "
        f"({result.removed_count} removed) "
        f"across {result.credential_count} connections."
    )
    print(
        f"Net worth snapshot: "
        f"{format_currency(result.snapshot.net_worth)}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()

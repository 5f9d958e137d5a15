"""CLI adapter to inspect the ledger under the demo or live data source."""

import sys

from finledger.domain.models import ReportingPeriod, utc_now
from finledger.infrastructure.container import (
    build_ledger_repositories,
    build_settings,
    build_summary_use_case,
)
from finledger.infrastructure.logging.logger import get_app_logger
from finledger.utils.formatting import format_currency


MODES = {"demo": True, "live": False}


def _parse_mode(argv: list[str], default: bool, logger) -> bool:
    """Return demo mode from the first argument.

    Args:
        argv: Command-line arguments without the program name.
        default: Mode used when no valid argument is given.
        logger: Logger used for warnings.

    Returns:
        bool: True for demo data, False for live data.
    """
    if not argv:
        return default
    value = argv[0].strip().lower()
    if value not in MODES:
        logger.warning(f"Unknown data source '{argv[0]}'. Use demo or live.")
        return default
    return MODES[value]


def _mode_name(demo_mode: bool) -> str:
    return "demo" if demo_mode else "live"


def main(argv: list[str] | None = None) -> None:
    """Print visible accounts and totals for the selected data source.

    An explicit demo or live argument is stored as the new default.
    """
    logger = get_app_logger()
    settings = build_settings()
    args = sys.argv[1:] if argv is None else argv

    repositories = build_ledger_repositories(settings=settings)
    selector = repositories.selector
    demo_mode = _parse_mode(args, selector.demo_mode, logger)
    summary = build_summary_use_case(repositories)
    try:
        if demo_mode != selector.demo_mode:
            selector.set_demo_mode(demo_mode)
            repositories.preferences.save_demo_mode(demo_mode)
            repositories.preferences.commit()
            logger.info(f"Stored data source: {_mode_name(demo_mode)}")
        accounts = summary.accounts()
        net_worth = summary.net_worth()
        cashflow = summary.cashflow(ReportingPeriod.containing(utc_now().date()))
    finally:
        repositories.session.close()

    print(f"Data source: {_mode_name(demo_mode)}")
    for account in accounts:
        print(
            f"  {account.name} ({account.institution}): "
            f"{format_currency(account.balance)}"
        )
    print(
        f"Assets {format_currency(net_worth.asset_total)}, "
        f"liabilities {format_currency(net_worth.liability_total)}, "
        f"net worth {format_currency(net_worth.net_worth)}"
    )
    print(
        f"This month: income {format_currency(cashflow.income)}, "
        f"expenses {format_currency(cashflow.expenses)}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()

"""Composition root for wiring infrastructure adapters."""

from dataclasses import dataclass

from sqlalchemy.orm import Session

from finledger.application.ports.aggregator import AggregatorClientPort
from finledger.application.ports.assistant import AssistantSessionPort
from finledger.application.ports.database import DatabaseEnginePort
from finledger.application.use_cases.assistant_chat import AssistantChatUseCase
from finledger.application.use_cases.build_financial_context import (
    BuildFinancialContextUseCase,
)
from finledger.application.use_cases.connect_account import (
    ConnectAccountUseCase,
)
from finledger.application.use_cases.get_financial_summary import (
    GetFinancialSummaryUseCase,
)
from finledger.application.use_cases.manage_accounts import (
    ManageAccountsUseCase,
)
from finledger.application.use_cases.manage_budget import ManageBudgetUseCase
from finledger.application.use_cases.manage_transactions import (
    ManageTransactionsUseCase,
)
from finledger.application.use_cases.reconcile_ledger import (
    ReconcileLedgerUseCase,
)
from finledger.application.use_cases.sync_all_accounts import (
    SyncAllAccountsUseCase,
)
from finledger.domain.policies import DataSourceSelector
from finledger.infrastructure.db import (
    SqlAlchemyDatabaseEngineAdapter,
    open_ledger_session,
    prepare_ledger,
)
from finledger.infrastructure.gemini_assistant import GeminiAssistantSession
from finledger.infrastructure.ledger_repository import (
    SqlAlchemyAccountsRepository,
    SqlAlchemyBudgetRepository,
    SqlAlchemyChatRepository,
    SqlAlchemyNetWorthRepository,
    SqlAlchemyPreferencesRepository,
    SqlAlchemyTransactionsRepository,
)
from finledger.infrastructure.logging.logger import get_app_logger
from finledger.infrastructure.plaid_client import PlaidAggregatorClient
from finledger.infrastructure.settings import FinLedgerSettings


@dataclass(frozen=True)
class LedgerRepositories:
    """Repositories sharing one session and one data-source selector."""

    session: Session
    selector: DataSourceSelector
    accounts: SqlAlchemyAccountsRepository
    transactions: SqlAlchemyTransactionsRepository
    budgets: SqlAlchemyBudgetRepository
    snapshots: SqlAlchemyNetWorthRepository
    chat: SqlAlchemyChatRepository
    preferences: SqlAlchemyPreferencesRepository


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_settings() -> FinLedgerSettings:
    """Return settings sourced from the environment."""
    return FinLedgerSettings.from_env()


def build_ledger_repositories(
    db_port: DatabaseEnginePort | None = None,
    settings: FinLedgerSettings | None = None,
    selector: DataSourceSelector | None = None,
) -> LedgerRepositories:
    """Return repositories bound to a fresh session on the ledger store.

    The selector starts from the demo/live choice stored in the ledger;
    ``USE_DEMO_DATA`` only applies while nothing has been stored.
    """
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or build_settings()
    engine = resolved_db.get_ledger_engine()
    prepare_ledger(engine)
    session = open_ledger_session(engine)
    logger = get_app_logger()
    preferences = SqlAlchemyPreferencesRepository(session, logger=logger)
    resolved_selector = selector or DataSourceSelector(
        demo_mode=preferences.load_demo_mode(resolved_settings.use_demo_data)
    )
    return LedgerRepositories(
        session=session,
        selector=resolved_selector,
        accounts=SqlAlchemyAccountsRepository(
            session,
            resolved_selector,
            logger=logger,
        ),
        transactions=SqlAlchemyTransactionsRepository(
            session,
            resolved_selector,
            logger=logger,
        ),
        budgets=SqlAlchemyBudgetRepository(session, logger=logger),
        snapshots=SqlAlchemyNetWorthRepository(session, logger=logger),
        chat=SqlAlchemyChatRepository(session, logger=logger),
        preferences=preferences,
    )


def build_aggregator_client(
    settings: FinLedgerSettings | None = None,
) -> AggregatorClientPort:
    """Return the Plaid aggregator client."""
    return PlaidAggregatorClient(
        settings or build_settings(),
        logger=get_app_logger(),
    )


def build_assistant_session(
    settings: FinLedgerSettings | None = None,
) -> AssistantSessionPort:
    """Return the Gemini assistant session."""
    return GeminiAssistantSession(
        settings or build_settings(),
        logger=get_app_logger(),
    )


def build_reconcile_use_case(
    repositories: LedgerRepositories,
    aggregator: AggregatorClientPort | None = None,
) -> ReconcileLedgerUseCase:
    """Return the reconciliation use case."""
    return ReconcileLedgerUseCase(
        aggregator=aggregator or build_aggregator_client(),
        accounts=repositories.accounts,
        transactions=repositories.transactions,
        snapshots=repositories.snapshots,
        logger=get_app_logger(),
    )


def build_summary_use_case(
    repositories: LedgerRepositories,
) -> GetFinancialSummaryUseCase:
    """Return the financial summary use case."""
    return GetFinancialSummaryUseCase(
        accounts=repositories.accounts,
        transactions=repositories.transactions,
        budgets=repositories.budgets,
        snapshots=repositories.snapshots,
        logger=get_app_logger(),
    )


def build_context_use_case(
    repositories: LedgerRepositories,
) -> BuildFinancialContextUseCase:
    """Return the grounding document use case."""
    return BuildFinancialContextUseCase(
        build_summary_use_case(repositories),
        logger=get_app_logger(),
    )


def build_chat_use_case(
    repositories: LedgerRepositories,
    settings: FinLedgerSettings | None = None,
    assistant: AssistantSessionPort | None = None,
) -> AssistantChatUseCase:
    """Return the assistant chat use case."""
    resolved_settings = settings or build_settings()
    return AssistantChatUseCase(
        assistant=assistant or build_assistant_session(resolved_settings),
        chat=repositories.chat,
        context=build_context_use_case(repositories),
        history_limit=resolved_settings.assistant_history_limit,
        streaming=resolved_settings.assistant_streaming,
        logger=get_app_logger(),
    )


def build_sync_all_use_case(
    repositories: LedgerRepositories,
    aggregator: AggregatorClientPort | None = None,
) -> SyncAllAccountsUseCase:
    """Return the use case refreshing every connected credential."""
    return SyncAllAccountsUseCase(
        build_reconcile_use_case(repositories, aggregator),
        repositories.accounts,
        logger=get_app_logger(),
    )


def build_connect_use_case(
    repositories: LedgerRepositories,
    aggregator: AggregatorClientPort | None = None,
) -> ConnectAccountUseCase:
    """Return the bank-linking use case."""
    resolved_aggregator = aggregator or build_aggregator_client()
    return ConnectAccountUseCase(
        aggregator=resolved_aggregator,
        reconcile=build_reconcile_use_case(repositories, resolved_aggregator),
        selector=repositories.selector,
        preferences=repositories.preferences,
        logger=get_app_logger(),
    )


def build_manage_accounts_use_case(
    repositories: LedgerRepositories,
) -> ManageAccountsUseCase:
    """Return the account management use case."""
    return ManageAccountsUseCase(repositories.accounts, logger=get_app_logger())


def build_manage_budget_use_case(
    repositories: LedgerRepositories,
) -> ManageBudgetUseCase:
    """Return the budget management use case."""
    return ManageBudgetUseCase(repositories.budgets, logger=get_app_logger())


def build_manage_transactions_use_case(
    repositories: LedgerRepositories,
) -> ManageTransactionsUseCase:
    """Return the transaction editing and search use case."""
    return ManageTransactionsUseCase(
        repositories.transactions,
        logger=get_app_logger(),
    )


__all__ = [
    "LedgerRepositories",
    "build_database_adapter",
    "build_settings",
    "build_ledger_repositories",
    "build_aggregator_client",
    "build_assistant_session",
    "build_reconcile_use_case",
    "build_summary_use_case",
    "build_context_use_case",
    "build_chat_use_case",
    "build_sync_all_use_case",
    "build_connect_use_case",
    "build_manage_accounts_use_case",
    "build_manage_budget_use_case",
    "build_manage_transactions_use_case",
]

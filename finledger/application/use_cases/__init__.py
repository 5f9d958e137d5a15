"""Application use cases package."""

from .assistant_chat import AssistantChatUseCase
from .build_financial_context import (
    BuildFinancialContextUseCase,
    render_financial_context,
)
from .connect_account import ConnectAccountResult, ConnectAccountUseCase
from .get_financial_summary import GetFinancialSummaryUseCase
from .manage_accounts import ManageAccountsUseCase
from .manage_budget import ManageBudgetUseCase
from .manage_transactions import ManageTransactionsUseCase
from .reconcile_ledger import (
    ReconcileLedgerUseCase,
    SyncAccountsResult,
    SyncTransactionsResult,
)
from .sync_all_accounts import SyncAllAccountsResult, SyncAllAccountsUseCase

__all__ = [
    "AssistantChatUseCase",
    "BuildFinancialContextUseCase",
    "render_financial_context",
    "ConnectAccountResult",
    "ConnectAccountUseCase",
    "GetFinancialSummaryUseCase",
    "ManageAccountsUseCase",
    "ManageBudgetUseCase",
    "ManageTransactionsUseCase",
    "ReconcileLedgerUseCase",
    "SyncAccountsResult",
    "SyncTransactionsResult",
    "SyncAllAccountsResult",
    "SyncAllAccountsUseCase",
]

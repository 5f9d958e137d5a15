"""Application ports package."""

from .aggregator import (
    AggregatorAccount,
    AggregatorBalances,
    AggregatorClientPort,
    AggregatorRemovedTransaction,
    AggregatorTransaction,
    TransactionsPage,
)
from .assistant import AssistantSessionPort, ConversationTurn
from .database import DatabaseEnginePort
from .ledger import (
    AccountsLedgerPort,
    BudgetLedgerPort,
    ChatLedgerPort,
    NetWorthLedgerPort,
    PreferencesLedgerPort,
    TransactionsLedgerPort,
)

__all__ = [
    "AggregatorAccount",
    "AggregatorBalances",
    "AggregatorClientPort",
    "AggregatorRemovedTransaction",
    "AggregatorTransaction",
    "TransactionsPage",
    "AssistantSessionPort",
    "ConversationTurn",
    "DatabaseEnginePort",
    "AccountsLedgerPort",
    "BudgetLedgerPort",
    "ChatLedgerPort",
    "NetWorthLedgerPort",
    "PreferencesLedgerPort",
    "TransactionsLedgerPort",
]

"""Shared fixtures for ledger-backed tests."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from finledger.domain.models import Base
from finledger.domain.policies import DataSourceSelector
from finledger.infrastructure.ledger_repository import (
    SqlAlchemyAccountsRepository,
    SqlAlchemyBudgetRepository,
    SqlAlchemyChatRepository,
    SqlAlchemyNetWorthRepository,
    SqlAlchemyPreferencesRepository,
    SqlAlchemyTransactionsRepository,
)


@pytest.fixture
def engine():
    """In-memory SQLite engine with the ledger tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    session = Session(engine, expire_on_commit=False)
    yield session
    session.close()


@pytest.fixture
def selector():
    """Selector in live mode, as after a bank link."""
    return DataSourceSelector(demo_mode=False)


@pytest.fixture
def ledger(session, selector):
    """Repositories sharing one session and the selector fixture."""
    logger = MagicMock()
    return SimpleNamespace(
        session=session,
        selector=selector,
        logger=logger,
        accounts=SqlAlchemyAccountsRepository(session, selector, logger=logger),
        transactions=SqlAlchemyTransactionsRepository(
            session,
            selector,
            logger=logger,
        ),
        budgets=SqlAlchemyBudgetRepository(session, logger=logger),
        snapshots=SqlAlchemyNetWorthRepository(session, logger=logger),
        chat=SqlAlchemyChatRepository(session, logger=logger),
        preferences=SqlAlchemyPreferencesRepository(session, logger=logger),
    )

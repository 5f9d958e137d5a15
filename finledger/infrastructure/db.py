"""Database infrastructure for the finledger ledger store.

This module exposes concrete helpers to create and reuse the SQLAlchemy
engine backing the ledger, create its tables and open unit-of-work sessions.
It belongs to the infrastructure layer because it deals with external
systems (SQLite or any SQLAlchemy-supported database).
"""

import os
from pathlib import Path
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool

from finledger.application.ports.database import DatabaseEnginePort
from finledger.domain.models import Base
from finledger.utils.utils import get_project_root


LEDGER_DB_URL_VAR = "LEDGER_DB_URL"


def default_ledger_url() -> str:
    """Return the SQLite URL used when LEDGER_DB_URL is not set."""
    return f"sqlite:///{get_project_root() / 'data' / 'finledger.db'}"


def _get_env_var(name: str, default: str | None = None) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.
        default: Value returned when the variable is missing or empty.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing and no default
        is given.
    """
    dotenv.load_dotenv()
    value = os.getenv(name) or default
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine for the ledger database.

    SQLite files get a thread-agnostic connection; other databases get a
    small connection pool.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance with health checks enabled.
    """
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(
            db_url,
            connect_args={"check_same_thread": False},
            pool_pre_ping=True,
            future=True,
        )
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_ledger_engine: Optional[Engine] = None


def get_ledger_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the ledger database.

    Returns:
        Engine: Lazily initialized engine connected to the ledger store.
    """
    global _ledger_engine
    if _ledger_engine is None:
        db_url = _get_env_var(LEDGER_DB_URL_VAR, default_ledger_url())
        _ledger_engine = _create_engine(db_url)
    return _ledger_engine


def prepare_ledger(engine: Engine) -> None:
    """Create the ledger tables if they do not exist."""
    Base.metadata.create_all(engine)


def open_ledger_session(engine: Engine) -> Session:
    """Return a session whose objects stay usable after commit."""
    factory = sessionmaker(bind=engine, expire_on_commit=False)
    return factory()


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so application use cases can depend only on the protocol.
    """

    def get_ledger_engine(self) -> Engine:
        """Get the engine for the ledger database.

        Returns:
            Engine: SQLAlchemy engine connected to the ledger store.
        """
        return get_ledger_engine()


__all__ = [
    "default_ledger_url",
    "get_ledger_engine",
    "prepare_ledger",
    "open_ledger_session",
    "SqlAlchemyDatabaseEngineAdapter",
]

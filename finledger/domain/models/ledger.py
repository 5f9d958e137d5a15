"""Persistent ledger entities mapped with SQLAlchemy.

Monetary columns are ``Numeric(14, 2)`` and surface as ``Decimal``.
Timestamps are stored as naive UTC datetimes.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from finledger.domain.models.enums import (
    AccountKind,
    ChatRole,
    TransactionCategory,
)
from finledger.utils.decimal_utils import coerce_decimal


def utc_now() -> datetime:
    """Return the current UTC time as a naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class Base(DeclarativeBase):
    """Declarative base for ledger tables."""


class Account(Base):
    """A financial holding; liabilities carry a negative balance."""

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    institution: Mapped[str] = mapped_column(String(200))
    kind: Mapped[AccountKind] = mapped_column(
        Enum(
            AccountKind,
            native_enum=False,
            values_callable=_enum_values,
            length=32,
        )
    )
    balance: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    external_id: Mapped[Optional[str]] = mapped_column(
        String(128), unique=True, index=True
    )
    access_credential: Mapped[Optional[str]] = mapped_column(String(256))
    last_synced: Mapped[Optional[datetime]] = mapped_column(DateTime)
    is_hidden: Mapped[bool] = mapped_column(Boolean, default=False)

    transactions: Mapped[list["Transaction"]] = relationship(
        back_populates="account",
        cascade="all, delete",
    )

    def __init__(
        self,
        name: str,
        institution: str,
        kind: AccountKind,
        balance,
        external_id: str | None = None,
        access_credential: str | None = None,
        last_synced: datetime | None = None,
        is_hidden: bool = False,
    ) -> None:
        self.name = name
        self.institution = institution
        self.kind = kind
        self.balance = coerce_decimal(balance)
        self.external_id = external_id
        self.access_credential = access_credential
        self.last_synced = last_synced
        self.is_hidden = is_hidden

    @property
    def is_asset(self) -> bool:
        return AccountKind(self.kind).is_asset

    def __repr__(self) -> str:
        return (
            f"Account(id={self.id!r}, name={self.name!r}, "
            f"kind={self.kind!r}, balance={self.balance!r})"
        )


class Transaction(Base):
    """A single ledger movement; negative amounts are money out."""

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[datetime] = mapped_column(DateTime, index=True)
    merchant: Mapped[str] = mapped_column(String(200))
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    category: Mapped[TransactionCategory] = mapped_column(
        Enum(
            TransactionCategory,
            native_enum=False,
            values_callable=_enum_values,
            length=32,
        )
    )
    is_pending: Mapped[bool] = mapped_column(Boolean, default=False)
    notes: Mapped[str] = mapped_column(Text, default="")
    external_id: Mapped[Optional[str]] = mapped_column(
        String(128), unique=True, index=True
    )
    account_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE")
    )

    account: Mapped[Optional[Account]] = relationship(
        back_populates="transactions"
    )

    def __init__(
        self,
        date: datetime,
        merchant: str,
        amount,
        category: TransactionCategory,
        account: Account | None = None,
        is_pending: bool = False,
        notes: str = "",
        external_id: str | None = None,
    ) -> None:
        self.date = date
        self.merchant = merchant
        self.amount = coerce_decimal(amount)
        self.category = category
        self.account = account
        self.is_pending = is_pending
        self.notes = notes
        self.external_id = external_id

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @property
    def absolute_amount(self) -> Decimal:
        return abs(coerce_decimal(self.amount))

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self.id!r}, date={self.date!r}, "
            f"merchant={self.merchant!r}, amount={self.amount!r})"
        )


class BudgetCategory(Base):
    """Monthly spending target matched to a transaction category."""

    __tablename__ = "budget_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120))
    icon: Mapped[str] = mapped_column(String(16), default="")
    monthly_limit: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    category: Mapped[TransactionCategory] = mapped_column(
        Enum(
            TransactionCategory,
            native_enum=False,
            values_callable=_enum_values,
            length=32,
        )
    )

    def __init__(
        self,
        name: str,
        monthly_limit,
        category: TransactionCategory,
        icon: str = "",
    ) -> None:
        limit = coerce_decimal(monthly_limit)
        if limit < 0:
            raise ValueError("Budget monthly limit must be non-negative")
        self.name = name
        self.icon = icon
        self.monthly_limit = limit
        self.category = category

    def __repr__(self) -> str:
        return (
            f"BudgetCategory(id={self.id!r}, name={self.name!r}, "
            f"monthly_limit={self.monthly_limit!r})"
        )


class NetWorthSnapshot(Base):
    """Immutable point-in-time rollup of assets and liabilities."""

    __tablename__ = "net_worth_snapshots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[datetime] = mapped_column(DateTime, index=True)
    total_assets: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    total_liabilities: Mapped[Decimal] = mapped_column(Numeric(14, 2))

    def __init__(self, date: datetime, total_assets, total_liabilities) -> None:
        self.date = date
        self.total_assets = coerce_decimal(total_assets)
        self.total_liabilities = coerce_decimal(total_liabilities)

    @property
    def net_worth(self) -> Decimal:
        return coerce_decimal(self.total_assets) - coerce_decimal(
            self.total_liabilities
        )

    def __repr__(self) -> str:
        return (
            f"NetWorthSnapshot(id={self.id!r}, date={self.date!r}, "
            f"net_worth={self.net_worth!r})"
        )


class ChatMessage(Base):
    """One persisted turn of the assistant conversation."""

    __tablename__ = "chat_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime, index=True)
    role: Mapped[ChatRole] = mapped_column(
        Enum(
            ChatRole,
            native_enum=False,
            values_callable=_enum_values,
            length=16,
        )
    )
    content: Mapped[str] = mapped_column(Text, default="")

    def __init__(
        self,
        content: str,
        role: ChatRole,
        timestamp: datetime | None = None,
    ) -> None:
        self.content = content
        self.role = role
        self.timestamp = timestamp or utc_now()


class Preference(Base):
    """Key/value setting that outlives a single composition."""

    __tablename__ = "preferences"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(String(256))

    def __init__(self, key: str, value: str) -> None:
        self.key = key
        self.value = value


__all__ = [
    "Base",
    "Account",
    "Transaction",
    "BudgetCategory",
    "NetWorthSnapshot",
    "ChatMessage",
    "Preference",
    "utc_now",
]

"""Domain models for financial aggregates."""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from finledger.domain.models.enums import TransactionCategory


@dataclass(frozen=True)
class ReportingPeriod:
    """Inclusive date range over which aggregates are computed.

    Attributes:
        start: First day of the period.
        end: Last day of the period.
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError("Reporting period end precedes its start")

    @classmethod
    def for_month(cls, year: int, month: int) -> "ReportingPeriod":
        """Return the calendar month ``year``-``month``."""
        last_day = calendar.monthrange(year, month)[1]
        return cls(date(year, month, 1), date(year, month, last_day))

    @classmethod
    def containing(cls, day: date) -> "ReportingPeriod":
        """Return the calendar month that contains ``day``."""
        return cls.for_month(day.year, day.month)

    def shift_months(self, offset: int) -> "ReportingPeriod":
        """Return the calendar month ``offset`` months from this one."""
        index = self.start.year * 12 + (self.start.month - 1) + offset
        return ReportingPeriod.for_month(index // 12, index % 12 + 1)

    def previous_month(self) -> "ReportingPeriod":
        return self.shift_months(-1)

    @property
    def day_count(self) -> int:
        return (self.end - self.start).days + 1

    def bounds(self) -> tuple[datetime, datetime]:
        """Return the half-open datetime range ``[start, end + 1 day)``."""
        lower = datetime.combine(self.start, time.min)
        upper = datetime.combine(self.end + timedelta(days=1), time.min)
        return lower, upper

    def contains(self, moment: datetime | date) -> bool:
        day = moment.date() if isinstance(moment, datetime) else moment
        return self.start <= day <= self.end


@dataclass(frozen=True)
class NetWorthSummary:
    """Summary of net worth figures.

    Attributes:
        asset_total: Sum of asset balances.
        liability_total: Sum of liability magnitudes.
        net_worth: Assets minus liabilities.
        month_change: Latest snapshot minus the one before it.
        month_change_percent: ``month_change`` relative to the older snapshot.
    """

    asset_total: Decimal
    liability_total: Decimal
    net_worth: Decimal
    month_change: Decimal = Decimal("0")
    month_change_percent: Decimal = Decimal("0")
    has_history: bool = False


@dataclass(frozen=True)
class CashflowSummary:
    """Income and expense totals for a period."""

    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        """Return income minus expenses."""
        return self.income - self.expenses


@dataclass(frozen=True)
class MonthCashflow:
    """Cash flow of a single calendar month."""

    period: ReportingPeriod
    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class CategorySpend:
    """Expense total of a category and its share of all expenses."""

    category: TransactionCategory
    total: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class BudgetLine:
    """Progress of a single budget category in a period."""

    budget_id: int | None
    name: str
    icon: str
    category: TransactionCategory
    limit: Decimal
    spent: Decimal
    progress: Decimal

    @property
    def is_over_budget(self) -> bool:
        return self.progress > 1

    @property
    def remaining(self) -> Decimal:
        return self.limit - self.spent


@dataclass(frozen=True)
class BudgetOverview:
    """Budget progress for every category plus the totals."""

    lines: list[BudgetLine]
    total_budgeted: Decimal
    total_spent: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.total_budgeted - self.total_spent

    @property
    def is_over_budget(self) -> bool:
        return self.total_spent > self.total_budgeted


@dataclass(frozen=True)
class DailySpendingPoint:
    """Cumulative expenses from the first of the month through ``day``."""

    day: int
    cumulative: Decimal


@dataclass(frozen=True)
class SpendingTrend:
    """This month so far against the same day range of the prior month."""

    current: list[DailySpendingPoint]
    previous: list[DailySpendingPoint]

    @property
    def current_total(self) -> Decimal:
        return self.current[-1].cumulative if self.current else Decimal("0")

    @property
    def previous_total(self) -> Decimal:
        return self.previous[-1].cumulative if self.previous else Decimal("0")


@dataclass(frozen=True)
class ComparisonRow:
    """Category expenses in two periods."""

    category: TransactionCategory
    total_a: Decimal
    total_b: Decimal

    @property
    def difference(self) -> Decimal:
        return self.total_a - self.total_b


__all__ = [
    "ReportingPeriod",
    "NetWorthSummary",
    "CashflowSummary",
    "MonthCashflow",
    "CategorySpend",
    "BudgetLine",
    "BudgetOverview",
    "DailySpendingPoint",
    "SpendingTrend",
    "ComparisonRow",
]

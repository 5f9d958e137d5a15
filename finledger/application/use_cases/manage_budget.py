"""Use case for user-driven budget category changes."""

from finledger.application.ports.ledger import BudgetLedgerPort
from finledger.domain.models import BudgetCategory, TransactionCategory
from finledger.domain.services import validate_budget_limit
from finledger.infrastructure.logging.logger import get_app_logger
from finledger.utils.decimal_utils import coerce_decimal


class ManageBudgetUseCase:
    """Create, update and delete budget categories."""

    def __init__(self, budgets: BudgetLedgerPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            budgets: Ledger port for budget categories.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._budgets = budgets
        self._logger = logger or get_app_logger()

    def list_categories(self) -> list[BudgetCategory]:
        return self._budgets.fetch_all_categories()

    def add_category(
        self,
        name: str,
        monthly_limit,
        category: TransactionCategory,
        icon: str = "",
    ) -> BudgetCategory:
        """Create a budget category.

        Raises:
            ValueError: If the name is blank or the limit is negative.
        """
        if not name.strip():
            raise ValueError("Budget category name must not be blank")
        limit = validate_budget_limit(coerce_decimal(monthly_limit))
        budget = BudgetCategory(
            name=name.strip(),
            monthly_limit=limit,
            category=category,
            icon=icon,
        )
        self._budgets.insert_category(budget)
        self._budgets.commit()
        self._logger.info(f"Added budget category {budget.name}: {limit}")
        return budget

    def update_limit(self, budget_id: int, monthly_limit) -> BudgetCategory:
        """Change the monthly limit of a budget category.

        Raises:
            LookupError: If no category has that id.
            ValueError: If the limit is negative.
        """
        limit = validate_budget_limit(coerce_decimal(monthly_limit))
        budget = self._require(budget_id)
        budget.monthly_limit = limit
        self._budgets.commit()
        self._logger.info(f"Updated budget category {budget.name}: {limit}")
        return budget

    def delete_category(self, budget_id: int) -> None:
        """Delete a budget category; transactions are untouched."""
        budget = self._require(budget_id)
        self._budgets.delete_category(budget)
        self._budgets.commit()
        self._logger.info(f"Deleted budget category {budget.name}")

    def _require(self, budget_id: int) -> BudgetCategory:
        budget = self._budgets.fetch_category(budget_id)
        if budget is None:
            raise LookupError(f"Budget category {budget_id} does not exist")
        return budget


__all__ = ["ManageBudgetUseCase"]

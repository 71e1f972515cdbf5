"""Budget services module.

- BudgetService: budget CRUD and lookups used by enforcement
- BudgetPeriodCalculator: period windows anchored on the current date
- BudgetLedger: consumption of a category inside a window
- BudgetEnforcer: threshold and limit checks for a new transaction
"""

from budget.services.budget_service import BudgetService
from budget.services.enforcement_service import BudgetEnforcer, evaluate_budget
from budget.services.ledger_service import BudgetLedger
from budget.services.period_service import BudgetPeriodCalculator

__all__ = [
    "BudgetService",
    "BudgetPeriodCalculator",
    "BudgetLedger",
    "BudgetEnforcer",
    "evaluate_budget",
]

from decimal import Decimal

import structlog

from budget.constants import EXCESS_PERCENTAGE, PERIOD_TITLES, BudgetPeriod, BudgetState
from budget.entities import BudgetNotification
from budget.models import Budget
from budget.services.budget_service import BudgetService
from budget.services.ledger_service import BudgetLedger
from budget.services.period_service import BudgetPeriodCalculator
from finance.exceptions import BudgetLimitExceeded
from notifications.services import Notifier, budgets_topic, get_notifier

logger = structlog.get_logger()


def evaluate_budget(limit: Decimal, consumed: Decimal, amount: Decimal) -> BudgetState:
    projected = consumed + amount
    if projected > limit:
        return BudgetState.EXCEEDED
    if limit * EXCESS_PERCENTAGE <= projected < limit:
        return BudgetState.WARNING
    return BudgetState.OK


class BudgetEnforcer:
    def __init__(
        self,
        ledger: BudgetLedger | None = None,
        calculator: BudgetPeriodCalculator | None = None,
        notifier: Notifier | None = None,
    ):
        self.ledger = ledger or BudgetLedger()
        self.calculator = calculator or BudgetPeriodCalculator()
        self.notifier = notifier or get_notifier()

    def check_not_exceeded(self, user, category: str, amount: Decimal) -> None:
        """Check every budget of the category against a new expense.

        Must run before anything is persisted. Raises ``BudgetLimitExceeded``
        for the first budget whose limit would be crossed.
        """
        for budget in BudgetService.find_all_for(user, category):
            self._check_budget(user, budget, amount)

    def _check_budget(self, user, budget: Budget, amount: Decimal) -> BudgetState:
        start, end = self.calculator.window_for(budget.period)
        consumed = self.ledger.sum_in_window(user, budget.category, start, end)
        limit = budget.limit_amount
        state = evaluate_budget(limit, consumed, amount)

        if state == BudgetState.WARNING:
            logger.info(
                "budget.threshold_reached",
                user=str(user.uuid),
                budget=str(budget.uuid),
                consumed=str(consumed),
                amount=str(amount),
            )
            self.notifier.publish(
                budgets_topic(user.uuid),
                BudgetNotification(
                    message=(
                        f"Warning! You have spent more than "
                        f"{EXCESS_PERCENTAGE:.0%} of the {budget.category} budget"
                    ),
                    remaining_amount=limit - consumed,
                    category=budget.category,
                ),
            )
        elif state == BudgetState.EXCEEDED:
            remaining = limit - consumed
            logger.info(
                "budget.limit_exceeded",
                user=str(user.uuid),
                budget=str(budget.uuid),
                consumed=str(consumed),
                amount=str(amount),
            )
            self.notifier.publish(
                budgets_topic(user.uuid),
                BudgetNotification(
                    message=(
                        f"The {budget.category} budget limit is exceeded! "
                        f"New transactions can not be added"
                    ),
                    remaining_amount=Decimal("0"),
                    category=budget.category,
                ),
            )
            raise BudgetLimitExceeded(
                f"The {PERIOD_TITLES[BudgetPeriod(budget.period)]} spending limit "
                f"for the category is exceeded, remaining allowance "
                f"{remaining:.2f} {user.base_currency}",
                remaining=remaining,
            )

        return state

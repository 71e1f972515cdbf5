import datetime
from typing import Callable

from django.utils import timezone

from budget import utils
from budget.constants import BudgetPeriod
from finance.exceptions import IntegrationError

Window = tuple[datetime.datetime, datetime.datetime]


class BudgetPeriodCalculator:
    """Resolves a budget period to an inclusive [start, end] window.

    Windows are anchored on the current local date, never on the date of the
    transaction being checked.
    """

    def __init__(self, clock: Callable[[], datetime.date] = timezone.localdate):
        self.clock = clock

    def window_for(
        self, period: BudgetPeriod | str, reference_date: datetime.date | None = None
    ) -> Window:
        try:
            period = BudgetPeriod(period)
        except ValueError:
            raise IntegrationError(f"Unable to calculate budget window for {period!r}")

        today = reference_date or self.clock()
        if period == BudgetPeriod.DAY:
            first_day, last_day = today, today
        elif period == BudgetPeriod.WEEK:
            first_day = utils.get_first_day_of_current_week(today)
            last_day = utils.get_last_day_of_current_week(today)
        elif period == BudgetPeriod.MONTH:
            first_day = utils.get_first_day_of_current_month(today)
            last_day = utils.get_last_day_of_current_month(today)
        else:
            first_day = utils.get_first_day_of_current_year(today)
            last_day = utils.get_last_day_of_current_year(today)

        return utils.start_of_day(first_day), utils.end_of_day(last_day)

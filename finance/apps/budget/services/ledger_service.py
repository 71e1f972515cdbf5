import datetime
from decimal import Decimal

from django.db.models import Sum

from transactions.models import Transaction


class BudgetLedger:
    def sum_in_window(
        self,
        user,
        category: str,
        start: datetime.datetime,
        end: datetime.datetime,
    ) -> Decimal:
        # Amounts are summed as entered, in their own currencies
        total = Transaction.objects.in_window(
            user, start, end, category=category
        ).aggregate(total=Sum("initial_amount"))["total"]
        return total or Decimal("0")

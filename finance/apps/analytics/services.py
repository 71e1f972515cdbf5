from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Sum

from analytics.entities import (
    AnalyticsMetrics,
    AnalyticsTotals,
    CategoryDiff,
    CategoryShare,
    Period,
)
from transactions.constants import TransactionType
from transactions.services import TransactionService

PERCENT_PLACES = Decimal("0.01")
HUNDRED = Decimal("100")

TYPE_TITLES = {
    TransactionType.INCOME: "Income",
    TransactionType.EXPENSE: "Expenses",
}


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    return (part * HUNDRED / whole).quantize(PERCENT_PLACES, rounding=ROUND_HALF_UP)


def describe_difference(
    first: Decimal, second: Decimal, title: str, category: str | None = None
) -> str:
    """Human readable change of an amount between two periods.

    Growth from zero counts as 100%.
    """
    subject = f"{title} in category {category}" if category else title
    if first == second:
        return f"{subject} did not change."

    diff = abs(second - first)
    percent = HUNDRED if first == 0 else percent_of(diff, abs(first))
    direction = "increased" if second > first else "decreased"
    return f"{subject} {direction} by {diff:.2f} ({percent:.2f}%)"


class AnalyticsService:
    """Totals and comparisons in the user's base currency."""

    @classmethod
    def get_amount_by_type(cls, user, period: Period, transaction_type: TransactionType) -> Decimal:
        total = TransactionService.find_all_in_window(
            user, period.start, period.end, type=transaction_type.value
        ).aggregate(total=Sum("amount_in_base_currency"))["total"]
        return total or Decimal("0")

    @classmethod
    def get_amounts_by_category(
        cls, user, period: Period, transaction_type: TransactionType
    ) -> dict[str, Decimal]:
        rows = (
            TransactionService.find_all_in_window(
                user, period.start, period.end, type=transaction_type.value
            )
            .values("category")
            .annotate(total=Sum("amount_in_base_currency"))
            .order_by("category")
        )
        return {row["category"]: row["total"] for row in rows}

    @classmethod
    def get_totals(cls, user, period: Period) -> AnalyticsTotals:
        return AnalyticsTotals(
            income=cls.get_amount_by_type(user, period, TransactionType.INCOME),
            expenses=cls.get_amount_by_type(user, period, TransactionType.EXPENSE),
        )

    @classmethod
    def get_categories_share(
        cls, user, period: Period, transaction_type: TransactionType
    ) -> list[CategoryShare]:
        amounts = cls.get_amounts_by_category(user, period, transaction_type)
        total = sum(amounts.values(), Decimal("0"))
        if not total:
            return []
        return [
            CategoryShare(category=category, percent=percent_of(amount, total))
            for category, amount in amounts.items()
        ]

    @classmethod
    def get_metrics(cls, user, first: Period, second: Period) -> AnalyticsMetrics:
        diffs = {}
        category_diffs = {}
        for transaction_type, title in TYPE_TITLES.items():
            diffs[transaction_type] = describe_difference(
                cls.get_amount_by_type(user, first, transaction_type),
                cls.get_amount_by_type(user, second, transaction_type),
                title,
            )

            first_amounts = cls.get_amounts_by_category(user, first, transaction_type)
            second_amounts = cls.get_amounts_by_category(user, second, transaction_type)
            category_diffs[transaction_type] = [
                CategoryDiff(
                    transaction_type=transaction_type,
                    category=category,
                    diff=describe_difference(
                        first_amounts.get(category, Decimal("0")),
                        second_amounts.get(category, Decimal("0")),
                        title,
                        category,
                    ),
                )
                for category in sorted(first_amounts.keys() | second_amounts.keys())
            ]

        return AnalyticsMetrics(
            income_diff=diffs[TransactionType.INCOME],
            expense_diff=diffs[TransactionType.EXPENSE],
            income_categories=category_diffs[TransactionType.INCOME],
            expense_categories=category_diffs[TransactionType.EXPENSE],
        )

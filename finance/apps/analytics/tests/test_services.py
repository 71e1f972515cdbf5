import datetime
from decimal import Decimal

from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from parameterized import parameterized

from analytics.entities import Period
from analytics.services import AnalyticsService, describe_difference, percent_of
from transactions.constants import TransactionType
from transactions.models import Transaction
from users.models import User


def moment(day, hour=12):
    return timezone.make_aware(datetime.datetime(2025, 4, day, hour))


def create_transaction(user, type, category, amount, day, base_amount=None):
    return Transaction.objects.create(
        user=user,
        type=type,
        category=category,
        initial_amount=Decimal(amount),
        initial_currency="USD" if base_amount else "RUB",
        amount_in_base_currency=Decimal(base_amount or amount),
        date_time=moment(day),
    )


FIRST_HALF = Period(start=moment(1, 0), end=moment(15, 23))
SECOND_HALF = Period(start=moment(16, 0), end=moment(30, 23))


class TestDescribeDifference(SimpleTestCase):
    @parameterized.expand(
        [
            ("100", "110", "Income increased by 10.00 (10.00%)"),
            ("200", "150", "Income decreased by 50.00 (25.00%)"),
            ("0", "75", "Income increased by 75.00 (100.00%)"),
            ("30", "0", "Income decreased by 30.00 (100.00%)"),
            ("42", "42", "Income did not change."),
            ("3", "4", "Income increased by 1.00 (33.33%)"),
        ]
    )
    def test_totals(self, first, second, expected):
        self.assertEqual(
            describe_difference(Decimal(first), Decimal(second), "Income"), expected
        )

    def test_category(self):
        self.assertEqual(
            describe_difference(Decimal("10"), Decimal("5"), "Expenses", "FOOD"),
            "Expenses in category FOOD decreased by 5.00 (50.00%)",
        )

    def test_percent_rounds_half_up(self):
        self.assertEqual(percent_of(Decimal("1"), Decimal("8")), Decimal("12.50"))
        self.assertEqual(percent_of(Decimal("2"), Decimal("3")), Decimal("66.67"))


class TestAnalyticsService(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = User.objects.create_user(username="analyst", password="testpassword")
        cls.stranger = User.objects.create_user(username="stranger", password="testpassword")
        create_transaction(cls.user, "INCOME", "SALARY", "1000", 5)
        create_transaction(cls.user, "EXPENSE", "FOOD", "150", 6)
        create_transaction(cls.user, "EXPENSE", "TRAVEL", "10", 7, base_amount="905.00")
        create_transaction(cls.user, "EXPENSE", "FOOD", "300", 20)
        create_transaction(cls.user, "INCOME", "SALARY", "1200", 25)
        create_transaction(cls.user, "INCOME", "GIFTS", "50", 26)
        create_transaction(cls.stranger, "EXPENSE", "FOOD", "999", 6)

    def test_totals_use_base_currency_amounts(self):
        totals = AnalyticsService.get_totals(self.user, FIRST_HALF)

        self.assertEqual(totals.income, Decimal("1000"))
        self.assertEqual(totals.expenses, Decimal("1055"))

    def test_totals_of_empty_period(self):
        period = Period(start=moment(1, 0) - datetime.timedelta(days=60), end=moment(1, 0))

        totals = AnalyticsService.get_totals(self.user, period)

        self.assertEqual((totals.income, totals.expenses), (Decimal("0"), Decimal("0")))

    def test_categories_share(self):
        shares = AnalyticsService.get_categories_share(
            self.user, FIRST_HALF, TransactionType.EXPENSE
        )

        self.assertEqual(
            [(share.category, share.percent) for share in shares],
            [("FOOD", Decimal("14.22")), ("TRAVEL", Decimal("85.78"))],
        )

    def test_categories_share_without_transactions(self):
        shares = AnalyticsService.get_categories_share(
            self.stranger, SECOND_HALF, TransactionType.INCOME
        )

        self.assertEqual(shares, [])

    def test_metrics(self):
        metrics = AnalyticsService.get_metrics(self.user, FIRST_HALF, SECOND_HALF)

        self.assertEqual(metrics.income_diff, "Income increased by 250.00 (25.00%)")
        self.assertEqual(metrics.expense_diff, "Expenses decreased by 755.00 (71.56%)")
        self.assertEqual(
            [item.diff for item in metrics.income_categories],
            [
                "Income in category GIFTS increased by 50.00 (100.00%)",
                "Income in category SALARY increased by 200.00 (20.00%)",
            ],
        )
        self.assertEqual(
            [item.diff for item in metrics.expense_categories],
            [
                "Expenses in category FOOD increased by 150.00 (100.00%)",
                "Expenses in category TRAVEL decreased by 905.00 (100.00%)",
            ],
        )
        self.assertTrue(
            all(
                item.transaction_type == TransactionType.EXPENSE
                for item in metrics.expense_categories
            )
        )

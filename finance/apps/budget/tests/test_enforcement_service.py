import datetime
from decimal import Decimal
from unittest.mock import Mock

from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from parameterized import parameterized

from budget.constants import BudgetPeriod, BudgetState
from budget.models import Budget
from budget.services import BudgetEnforcer, BudgetLedger, evaluate_budget
from finance.exceptions import BudgetLimitExceeded
from notifications.services import CacheNotifier, budgets_topic
from transactions.constants import TransactionCategory, TransactionType
from transactions.models import Transaction
from users.models import User


class TestEvaluateBudget(SimpleTestCase):
    @parameterized.expand(
        [
            ("far_below", "1000", "100", "50", BudgetState.OK),
            ("just_below_threshold", "1000", "750", "49.99", BudgetState.OK),
            ("threshold", "1000", "750", "50", BudgetState.WARNING),
            ("between", "1000", "750", "200", BudgetState.WARNING),
            ("limit", "1000", "750", "250", BudgetState.OK),
            ("above_limit", "1000", "750", "250.01", BudgetState.EXCEEDED),
            ("already_over", "1000", "1200", "1", BudgetState.EXCEEDED),
        ]
    )
    def test_transition(self, _, limit, consumed, amount, expected):
        self.assertEqual(
            evaluate_budget(Decimal(limit), Decimal(consumed), Decimal(amount)), expected
        )


class TestBudgetEnforcer(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = User.objects.create_user(
            username="enforcer", password="testpassword", balance=Decimal("10000")
        )
        cls.budget = Budget.objects.create(
            user=cls.user,
            limit_amount=Decimal("1000"),
            period=BudgetPeriod.MONTH.value,
            category=TransactionCategory.FOOD.value,
        )

    def setUp(self):
        self.notifier = Mock()
        self.enforcer = BudgetEnforcer(notifier=self.notifier)

    def add_transaction(self, amount, currency="RUB", category=TransactionCategory.FOOD, date_time=None):
        return Transaction.objects.create(
            user=self.user,
            type=TransactionType.EXPENSE.value,
            category=category.value,
            initial_amount=Decimal(amount),
            initial_currency=currency,
            amount_in_base_currency=Decimal(amount),
            date_time=date_time or timezone.now(),
        )

    def published(self):
        return [call.args for call in self.notifier.publish.call_args_list]

    def test_below_threshold_is_silent(self):
        self.add_transaction("100")

        self.enforcer.check_not_exceeded(self.user, "FOOD", Decimal("100"))

        self.notifier.publish.assert_not_called()

    def test_threshold_warning(self):
        self.add_transaction("750")

        self.enforcer.check_not_exceeded(self.user, "FOOD", Decimal("50"))

        [(topic, payload)] = self.published()
        self.assertEqual(topic, budgets_topic(self.user.uuid))
        self.assertEqual(payload.remaining_amount, Decimal("250"))
        self.assertEqual(payload.category, "FOOD")
        self.assertIn("80%", payload.message)

    def test_reaching_limit_exactly_is_allowed(self):
        self.add_transaction("750")

        self.enforcer.check_not_exceeded(self.user, "FOOD", Decimal("250"))

        self.notifier.publish.assert_not_called()

    def test_exceeding_limit(self):
        self.add_transaction("750")

        with self.assertRaises(BudgetLimitExceeded) as error:
            self.enforcer.check_not_exceeded(self.user, "FOOD", Decimal("250.01"))

        self.assertEqual(error.exception.remaining, Decimal("250"))
        self.assertIn("monthly", error.exception.message)
        self.assertIn("250.00 RUB", error.exception.message)
        [(topic, payload)] = self.published()
        self.assertEqual(topic, budgets_topic(self.user.uuid))
        self.assertEqual(payload.remaining_amount, Decimal("0"))

    def test_no_budget_for_category(self):
        ledger = Mock()
        enforcer = BudgetEnforcer(ledger=ledger, notifier=self.notifier)

        enforcer.check_not_exceeded(self.user, "TRAVEL", Decimal("100000"))

        ledger.sum_in_window.assert_not_called()
        self.notifier.publish.assert_not_called()

    def test_other_categories_and_periods_are_ignored(self):
        self.add_transaction("900", category=TransactionCategory.TRAVEL)
        self.add_transaction("900", date_time=timezone.now() - datetime.timedelta(days=400))

        self.enforcer.check_not_exceeded(self.user, "FOOD", Decimal("100"))

        self.notifier.publish.assert_not_called()

    def test_first_exceeded_budget_stops_evaluation(self):
        Budget.objects.create(
            user=self.user,
            limit_amount=Decimal("100"),
            period=BudgetPeriod.DAY.value,
            category=TransactionCategory.FOOD.value,
        )
        ledger = Mock()
        ledger.sum_in_window.side_effect = [Decimal("0"), Decimal("90")]
        enforcer = BudgetEnforcer(ledger=ledger, notifier=self.notifier)

        with self.assertRaises(BudgetLimitExceeded):
            enforcer.check_not_exceeded(self.user, "FOOD", Decimal("1001"))

        self.assertEqual(ledger.sum_in_window.call_count, 1)

    def test_each_budget_warns_independently(self):
        Budget.objects.create(
            user=self.user,
            limit_amount=Decimal("900"),
            period=BudgetPeriod.DAY.value,
            category=TransactionCategory.FOOD.value,
        )
        self.add_transaction("700")

        self.enforcer.check_not_exceeded(self.user, "FOOD", Decimal("100"))

        remaining = [payload.remaining_amount for _, payload in self.published()]
        self.assertEqual(remaining, [Decimal("300"), Decimal("200")])

    def test_ledger_sums_amounts_in_their_own_currencies(self):
        # 10 USD worth 905 RUB is counted as 10 against a RUB limit
        Transaction.objects.create(
            user=self.user,
            type=TransactionType.EXPENSE.value,
            category=TransactionCategory.FOOD.value,
            initial_amount=Decimal("10"),
            initial_currency="USD",
            amount_in_base_currency=Decimal("905"),
            date_time=timezone.now(),
        )
        start, end = self.enforcer.calculator.window_for(BudgetPeriod.MONTH)

        self.assertEqual(
            BudgetLedger().sum_in_window(self.user, "FOOD", start, end), Decimal("10")
        )
        self.enforcer.check_not_exceeded(self.user, "FOOD", Decimal("900"))
        self.notifier.publish.assert_called_once()

    def test_failing_notifier_does_not_block(self):
        broken_cache = Mock()
        broken_cache.add.side_effect = ConnectionError("cache is down")
        enforcer = BudgetEnforcer(
            notifier=CacheNotifier(cache_backend=broken_cache, ttl=60, max_messages=10)
        )
        self.add_transaction("750")

        enforcer.check_not_exceeded(self.user, "FOOD", Decimal("100"))
        with self.assertRaises(BudgetLimitExceeded):
            enforcer.check_not_exceeded(self.user, "FOOD", Decimal("300"))

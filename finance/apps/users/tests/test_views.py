from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from parameterized import parameterized
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from transactions.services import TransactionService
from users.models import User


class TestUserViews(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = User.objects.create_user(
            username="member", password="testpassword", balance=Decimal("12.34")
        )

    def test_register(self):
        response = self.client.post(
            reverse("register"),
            {
                "username": "newcomer",
                "password": "Str0ng-passw0rd",
                "repeat_password": "Str0ng-passw0rd",
                "email": "newcomer@example.com",
                "base_currency": "usd",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        user = User.objects.get(username="newcomer")
        self.assertEqual(user.base_currency, "USD")
        self.assertEqual(user.balance, Decimal("0"))
        self.assertTrue(user.check_password("Str0ng-passw0rd"))
        self.assertNotIn("password", response.data)

    def test_register_password_mismatch(self):
        response = self.client.post(
            reverse("register"),
            {
                "username": "newcomer",
                "password": "Str0ng-passw0rd",
                "repeat_password": "another-passw0rd",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.filter(username="newcomer").exists())

    def test_login(self):
        response = self.client.post(
            reverse("user_auth"),
            {"username": "member", "password": "testpassword"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["token"], Token.objects.get(user=self.user).key)
        self.assertEqual(response.data["base_currency"], "RUB")

    def test_login_wrong_password(self):
        response = self.client.post(
            reverse("user_auth"),
            {"username": "member", "password": "wrong"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_token_authentication(self):
        token = Token.objects.create(user=self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

        response = self.client.get(reverse("current_user"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["username"], "member")
        self.assertEqual(response.data["balance"], "12.34")

    def test_me_requires_authentication(self):
        response = self.client.get(reverse("current_user"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_change_base_currency(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.patch(
            reverse("base_currency"), {"currency": "eur"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["base_currency"], "EUR")
        self.assertEqual(User.objects.get(pk=self.user.pk).base_currency, "EUR")

    def test_change_base_currency_invalid(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.put(
            reverse("base_currency"), {"currency": "euro"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def settle_expense(self, amount):
        TransactionService().create_transaction(
            self.user,
            {
                "type": "EXPENSE",
                "category": "FOOD",
                "initial_amount": Decimal(amount),
                "initial_currency": "RUB",
                "date_time": timezone.now(),
            },
        )

    def test_change_base_currency_keeps_settled_balance(self):
        # the authenticated user object still carries the balance read before settlement
        self.client.force_authenticate(user=self.user)
        self.settle_expense("10.00")

        response = self.client.put(
            reverse("base_currency"), {"currency": "usd"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["balance"], "2.34")
        user = User.objects.get(pk=self.user.pk)
        self.assertEqual(user.balance, Decimal("2.34"))
        self.assertEqual(user.base_currency, "USD")

    def test_update_profile(self):
        self.client.force_authenticate(user=self.user)
        self.settle_expense("2.34")

        response = self.client.patch(
            reverse("current_user"),
            {"email": "member@example.com", "first_name": "Mia", "base_currency": "eur"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], "member@example.com")
        self.assertEqual(response.data["base_currency"], "EUR")
        user = User.objects.get(pk=self.user.pk)
        self.assertEqual(user.first_name, "Mia")
        self.assertEqual(user.balance, Decimal("10.00"))

    def test_update_profile_empty(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.patch(reverse("current_user"), {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "EmptyRequest")

    def test_update_profile_taken_username(self):
        User.objects.create_user(username="occupied", password="testpassword")
        self.client.force_authenticate(user=self.user)

        response = self.client.patch(
            reverse("current_user"), {"username": "occupied"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("username", response.data)

    def test_update_profile_balance_is_read_only(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.patch(
            reverse("current_user"), {"balance": "1000000", "last_name": "Lee"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(User.objects.get(pk=self.user.pk).balance, Decimal("12.34"))

    def test_put_profile_not_allowed(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.put(reverse("current_user"), {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

    def test_change_password(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.patch(
            reverse("change_password"),
            {
                "old_password": "testpassword",
                "new_password": "Fresh-passw0rd",
                "repeat_password": "Fresh-passw0rd",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        user = User.objects.get(pk=self.user.pk)
        self.assertTrue(user.check_password("Fresh-passw0rd"))
        self.assertEqual(user.balance, Decimal("12.34"))

    @parameterized.expand(
        [
            ("wrong old password", "not-my-password", "Fresh-passw0rd", "Fresh-passw0rd"),
            ("mismatch", "testpassword", "Fresh-passw0rd", "Other-passw0rd"),
            ("too weak", "testpassword", "123", "123"),
        ]
    )
    def test_change_password_rejected(self, _, old_password, new_password, repeat_password):
        self.client.force_authenticate(user=self.user)

        response = self.client.patch(
            reverse("change_password"),
            {
                "old_password": old_password,
                "new_password": new_password,
                "repeat_password": repeat_password,
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(User.objects.get(pk=self.user.pk).check_password("testpassword"))

    def test_logout_revokes_token(self):
        token = Token.objects.create(user=self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

        response = self.client.post(reverse("user_logout"))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Token.objects.filter(user=self.user).exists())
        response = self.client.get(reverse("current_user"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

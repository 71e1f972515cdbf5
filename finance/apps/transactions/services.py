import datetime
from decimal import Decimal
from uuid import UUID

import structlog
from django.db import transaction as db_transaction
from django.db.models import QuerySet

from budget.services import BudgetEnforcer
from finance.exceptions import EmptyRequest, InsufficientFunds, NoRights, NotFound
from rates.services import CurrencyConverter
from rates.utils import round_amount
from transactions.constants import TransactionType
from transactions.models import Transaction
from users.models import User
from users.services import UserService

logger = structlog.get_logger()

UPDATABLE_FIELDS = (
    "type",
    "category",
    "initial_amount",
    "initial_currency",
    "date_time",
    "description",
)


def signed_amount(transaction_type: str, amount: Decimal) -> Decimal:
    """Effect of a transaction on the user balance."""
    if TransactionType(transaction_type) == TransactionType.INCOME:
        return amount
    return -amount


class TransactionService:
    """Settles transactions against the user balance and budgets.

    Every mutation runs in one atomic block holding a lock on the user row, so
    concurrent requests of the same user are checked and applied one by one.
    """

    def __init__(
        self,
        converter: CurrencyConverter | None = None,
        enforcer: BudgetEnforcer | None = None,
    ):
        self.converter = converter or CurrencyConverter()
        self.enforcer = enforcer or BudgetEnforcer()

    def create_transaction(self, user: User, data: dict) -> Transaction:
        amount = data["initial_amount"]
        currency = data["initial_currency"]
        transaction_type = data["type"]

        with db_transaction.atomic():
            user = UserService.lock(user.uuid)
            self._check_balance(user, transaction_type, amount)

            amount_in_base_currency = self.converter.to_base_currency(
                user, amount, currency
            ).amount
            self.enforcer.check_not_exceeded(
                user, data["category"], amount_in_base_currency
            )

            transaction = Transaction.objects.create(
                user=user,
                type=transaction_type,
                category=data["category"],
                initial_amount=amount,
                initial_currency=currency,
                amount_in_base_currency=round_amount(amount_in_base_currency),
                date_time=data["date_time"],
                description=data.get("description") or "",
            )
            user.balance += signed_amount(transaction_type, amount)
            UserService.save(user)

        logger.info(
            "transactions.created",
            transaction=str(transaction.uuid),
            user=user.username,
            type=transaction_type,
            amount=str(amount),
            currency=currency,
        )
        return transaction

    def get_transaction(self, user: User, transaction_uuid: UUID) -> Transaction:
        return self._find_for_user(user, transaction_uuid)

    def list_transactions(self, user: User) -> QuerySet[Transaction]:
        return Transaction.objects.filter(user=user).order_by("-date_time", "-id")

    def update_transaction(
        self, user: User, transaction_uuid: UUID, data: dict
    ) -> Transaction:
        changes = {
            field: data[field] for field in UPDATABLE_FIELDS if data.get(field) is not None
        }

        with db_transaction.atomic():
            user = UserService.lock(user.uuid)
            transaction = self._find_for_user(user, transaction_uuid)
            if not changes:
                logger.info("transactions.empty_update", transaction=str(transaction.uuid))
                raise EmptyRequest("Transaction update request is empty")

            new_type = changes.get("type", transaction.type)
            if "initial_amount" in changes:
                self._check_balance(user, new_type, changes["initial_amount"])

            old_effect = signed_amount(transaction.type, transaction.initial_amount)
            for field, value in changes.items():
                setattr(transaction, field, value)

            if "initial_amount" in changes or "initial_currency" in changes:
                transaction.amount_in_base_currency = round_amount(
                    self.converter.to_base_currency(
                        user, transaction.initial_amount, transaction.initial_currency
                    ).amount
                )
            transaction.save()

            if "initial_amount" in changes or "type" in changes:
                delta = signed_amount(transaction.type, transaction.initial_amount) - old_effect
                if delta:
                    user.balance += delta
                    UserService.save(user)

        logger.info(
            "transactions.updated",
            transaction=str(transaction.uuid),
            fields=sorted(changes),
        )
        return transaction

    def delete_transaction(self, user: User, transaction_uuid: UUID) -> None:
        # The balance is left as is
        with db_transaction.atomic():
            transaction = self._find_for_user(user, transaction_uuid)
            transaction.delete()
        logger.info("transactions.deleted", transaction=str(transaction_uuid), user=user.username)

    @staticmethod
    def find_all_in_window(
        user: User,
        start: datetime.datetime,
        end: datetime.datetime,
        type: str | None = None,
        category: str | None = None,
    ) -> QuerySet[Transaction]:
        return Transaction.objects.in_window(user, start, end, type=type, category=category)

    @staticmethod
    def _find_for_user(user: User, transaction_uuid: UUID) -> Transaction:
        try:
            transaction = Transaction.objects.get(uuid=transaction_uuid)
        except Transaction.DoesNotExist:
            raise NotFound("Transaction not found")

        if transaction.user_id != user.uuid:
            logger.info(
                "transactions.foreign_access",
                user=user.username,
                transaction=str(transaction_uuid),
            )
            raise NoRights("Transaction does not belong to the current user")
        return transaction

    @staticmethod
    def _check_balance(user: User, transaction_type: str, amount: Decimal) -> None:
        # Compared as entered, without conversion to the base currency
        if TransactionType(transaction_type) == TransactionType.EXPENSE and user.balance < amount:
            logger.info(
                "transactions.insufficient_funds",
                user=user.username,
                amount=str(amount),
                balance=str(user.balance),
            )
            raise InsufficientFunds("User balance is less than the transaction amount")

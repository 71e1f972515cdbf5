from decimal import Decimal
from uuid import UUID

import structlog
from django.db import transaction
from django.db.models import F

from finance.exceptions import EmptyRequest, NotFound
from users.models import User

logger = structlog.get_logger()

PROFILE_FIELDS = ("username", "email", "first_name", "last_name", "base_currency")


class UserService:
    @classmethod
    def find_by_id(cls, user_uuid: UUID) -> User:
        try:
            return User.objects.get(uuid=user_uuid)
        except User.DoesNotExist:
            raise NotFound("User not found")

    @classmethod
    def find_by_username(cls, username: str) -> User:
        try:
            return User.objects.get(username=username)
        except User.DoesNotExist:
            raise NotFound("User not found")

    @classmethod
    def lock(cls, user_uuid: UUID) -> User:
        """Re-read the user holding a row lock until the surrounding atomic block ends."""
        try:
            return User.objects.select_for_update().get(uuid=user_uuid)
        except User.DoesNotExist:
            raise NotFound("User not found")

    @classmethod
    def save(cls, user: User) -> User:
        """Persist a settled balance. Only call with a user taken from ``lock``."""
        user.save(update_fields=("balance", "modified_at"))
        return user

    @classmethod
    def update_profile(cls, user_uuid: UUID, data: dict) -> User:
        changes = {
            field: data[field] for field in PROFILE_FIELDS if data.get(field) is not None
        }
        if not changes:
            raise EmptyRequest("Profile update request is empty")

        with transaction.atomic():
            user = cls.lock(user_uuid)
            for field, value in changes.items():
                setattr(user, field, value)
            user.save(update_fields=(*changes, "modified_at"))

        logger.info("users.profile_updated", user=str(user_uuid), fields=sorted(changes))
        return user

    @classmethod
    def change_base_currency(cls, user_uuid: UUID, currency: str) -> User:
        return cls.update_profile(user_uuid, {"base_currency": currency})

    @classmethod
    def change_password(cls, user: User, password: str) -> None:
        user.set_password(password)
        user.save(update_fields=("password", "modified_at"))
        logger.info("users.password_changed", user=str(user.uuid))

    @classmethod
    def recalculate_balance(cls, user_uuid: UUID, delta: Decimal) -> None:
        updated = User.objects.filter(uuid=user_uuid).update(balance=F("balance") + delta)
        if not updated:
            raise NotFound("User not found")
        logger.info("users.balance_recalculated", user=str(user_uuid), delta=str(delta))

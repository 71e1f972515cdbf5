from uuid import UUID

import structlog
from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from budget.models import Budget
from finance.exceptions import BadData, EmptyRequest, NoRights, NotFound

logger = structlog.get_logger()

UPDATABLE_FIELDS = ("limit_amount", "period", "category")


class BudgetService:
    @classmethod
    def find_by_id(cls, budget_uuid: UUID) -> Budget:
        try:
            return Budget.objects.get(uuid=budget_uuid)
        except Budget.DoesNotExist:
            raise NotFound("Budget not found")

    @classmethod
    def exists_for(cls, user, period: str, category: str) -> bool:
        return Budget.objects.filter(user=user, period=period, category=category).exists()

    @classmethod
    def find_all_for(cls, user, category: str) -> QuerySet[Budget]:
        return Budget.objects.filter(user=user, category=category).order_by("created_at", "id")

    @classmethod
    def get_budgets(cls, user) -> QuerySet[Budget]:
        return Budget.objects.filter(user=user).order_by("-created_at", "-id")

    @classmethod
    def get_budget(cls, user, budget_uuid: UUID) -> Budget:
        budget = cls.find_by_id(budget_uuid)
        cls._check_owner(user, budget, "view")
        return budget

    @classmethod
    def create_budget(cls, user, data: dict) -> Budget:
        if cls.exists_for(user, data["period"], data["category"]):
            raise BadData("Budget for this category and period already exists")

        try:
            with transaction.atomic():
                budget = Budget.objects.create(
                    user=user,
                    limit_amount=data["limit_amount"],
                    period=data["period"],
                    category=data["category"],
                )
        except IntegrityError:
            # a concurrent request created the same budget first
            raise BadData("Budget for this category and period already exists")

        logger.info(
            "budget.created",
            user=str(user.uuid),
            budget=str(budget.uuid),
            period=budget.period,
            category=budget.category,
        )
        return budget

    @classmethod
    def update_budget(cls, user, budget_uuid: UUID, data: dict) -> Budget:
        changes = {
            field: data[field] for field in UPDATABLE_FIELDS if data.get(field) is not None
        }
        if not changes:
            raise EmptyRequest("Budget update request is empty")

        budget = cls.find_by_id(budget_uuid)
        cls._check_owner(user, budget, "update")

        for field, value in changes.items():
            setattr(budget, field, value)

        duplicates = Budget.objects.filter(
            user=user, period=budget.period, category=budget.category
        ).exclude(pk=budget.pk)
        if duplicates.exists():
            raise BadData("Budget for this category and period already exists")

        try:
            with transaction.atomic():
                budget.save(update_fields=(*changes, "modified_at"))
        except IntegrityError:
            raise BadData("Budget for this category and period already exists")

        logger.info("budget.updated", budget=str(budget.uuid), fields=sorted(changes))
        return budget

    @classmethod
    def delete_budget(cls, user, budget_uuid: UUID) -> None:
        budget = cls.find_by_id(budget_uuid)
        cls._check_owner(user, budget, "delete")
        budget.delete()
        logger.info("budget.deleted", user=str(user.uuid), budget=str(budget_uuid))

    @staticmethod
    def _check_owner(user, budget: Budget, action: str) -> None:
        if budget.user_id != user.uuid:
            logger.info(
                "budget.foreign_access",
                action=action,
                user=str(user.uuid),
                budget=str(budget.uuid),
            )
            raise NoRights(f"User has no rights to {action} this budget")

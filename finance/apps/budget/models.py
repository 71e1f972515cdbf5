import uuid

from django.core.validators import MinValueValidator
from django.db import models

from budget.constants import MIN_LIMIT_AMOUNT, PERIOD_CHOICES
from transactions.constants import CATEGORY_CHOICES


class Budget(models.Model):
    uuid = models.UUIDField(unique=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey("users.User", on_delete=models.CASCADE, to_field="uuid")
    limit_amount = models.DecimalField(
        max_digits=19,
        decimal_places=2,
        validators=[MinValueValidator(MIN_LIMIT_AMOUNT)],
    )
    period = models.CharField(max_length=10, choices=PERIOD_CHOICES)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)
    created_at = models.DateTimeField(auto_now_add=True)
    modified_at = models.DateTimeField(auto_now=True)

    def __repr__(self) -> str:
        return f"({self.category} / {self.period} / {self.limit_amount})"

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "period", "category"],
                name="unique_budget_per_period_and_category",
            )
        ]

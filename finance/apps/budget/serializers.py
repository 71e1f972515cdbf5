from rest_framework import serializers

from budget.constants import MIN_LIMIT_AMOUNT, PERIOD_CHOICES
from budget.models import Budget
from transactions.constants import CATEGORY_CHOICES


class BudgetSerializer(serializers.ModelSerializer):
    user = serializers.UUIDField(source="user_id", read_only=True)

    class Meta:
        model = Budget
        fields = (
            "uuid",
            "user",
            "limit_amount",
            "period",
            "category",
            "created_at",
            "modified_at",
        )


class CreateBudgetSerializer(serializers.Serializer):
    limit_amount = serializers.DecimalField(
        max_digits=19, decimal_places=2, min_value=MIN_LIMIT_AMOUNT
    )
    period = serializers.ChoiceField(choices=PERIOD_CHOICES)
    category = serializers.ChoiceField(choices=CATEGORY_CHOICES)


class UpdateBudgetSerializer(serializers.Serializer):
    limit_amount = serializers.DecimalField(
        max_digits=19,
        decimal_places=2,
        min_value=MIN_LIMIT_AMOUNT,
        required=False,
        allow_null=True,
    )
    period = serializers.ChoiceField(
        choices=PERIOD_CHOICES, required=False, allow_null=True
    )
    category = serializers.ChoiceField(
        choices=CATEGORY_CHOICES, required=False, allow_null=True
    )

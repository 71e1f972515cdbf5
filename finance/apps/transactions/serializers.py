from decimal import Decimal

from rest_framework import serializers

from rates.serializers import CurrencyCodeField
from transactions.constants import (
    CATEGORY_CHOICES,
    DESCRIPTION_MAX_LENGTH,
    TRANSACTION_TYPE_CHOICES,
)
from transactions.models import ImportJob, Transaction

MIN_AMOUNT = Decimal("0.01")


class TransactionSerializer(serializers.ModelSerializer):
    user = serializers.UUIDField(source="user_id", read_only=True)
    job = serializers.UUIDField(source="job_id", read_only=True, allow_null=True)

    class Meta:
        model = Transaction
        fields = (
            "uuid",
            "user",
            "type",
            "category",
            "initial_amount",
            "initial_currency",
            "amount_in_base_currency",
            "date_time",
            "description",
            "job",
            "created_at",
            "modified_at",
        )


class CreateTransactionSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=TRANSACTION_TYPE_CHOICES)
    category = serializers.ChoiceField(choices=CATEGORY_CHOICES)
    initial_amount = serializers.DecimalField(
        max_digits=19, decimal_places=2, min_value=MIN_AMOUNT
    )
    initial_currency = CurrencyCodeField()
    date_time = serializers.DateTimeField()
    description = serializers.CharField(
        max_length=DESCRIPTION_MAX_LENGTH, required=False, allow_blank=True
    )


class UpdateTransactionSerializer(serializers.Serializer):
    type = serializers.ChoiceField(
        choices=TRANSACTION_TYPE_CHOICES, required=False, allow_null=True
    )
    category = serializers.ChoiceField(
        choices=CATEGORY_CHOICES, required=False, allow_null=True
    )
    initial_amount = serializers.DecimalField(
        max_digits=19,
        decimal_places=2,
        min_value=MIN_AMOUNT,
        required=False,
        allow_null=True,
    )
    initial_currency = CurrencyCodeField(required=False, allow_null=True)
    date_time = serializers.DateTimeField(required=False, allow_null=True)
    description = serializers.CharField(
        max_length=DESCRIPTION_MAX_LENGTH,
        required=False,
        allow_null=True,
        allow_blank=True,
    )


class ImportFileSerializer(serializers.Serializer):
    file = serializers.FileField()


class ImportJobSerializer(serializers.ModelSerializer):
    class Meta:
        model = ImportJob
        fields = (
            "uuid",
            "status",
            "processed_count",
            "skipped_count",
            "balance_delta",
            "error",
            "created_at",
            "finished_at",
        )

from rest_framework import serializers

from transactions.constants import IMPORT_DATE_TIME_FORMAT, TRANSACTION_TYPE_CHOICES


def period_field():
    return serializers.DateTimeField(input_formats=[IMPORT_DATE_TIME_FORMAT])


class PeriodSerializer(serializers.Serializer):
    start_date = period_field()
    end_date = period_field()

    def validate(self, attrs):
        if attrs["start_date"] > attrs["end_date"]:
            raise serializers.ValidationError("start_date must not be after end_date")
        return attrs


class CategoriesRequestSerializer(PeriodSerializer):
    transaction_type = serializers.ChoiceField(choices=TRANSACTION_TYPE_CHOICES)

    def to_internal_value(self, data):
        data = data.copy()
        if isinstance(data.get("transaction_type"), str):
            data["transaction_type"] = data["transaction_type"].upper()
        return super().to_internal_value(data)


class MetricsRequestSerializer(serializers.Serializer):
    first_start_date = period_field()
    first_end_date = period_field()
    second_start_date = period_field()
    second_end_date = period_field()


class TotalsSerializer(serializers.Serializer):
    income = serializers.DecimalField(max_digits=19, decimal_places=2)
    expenses = serializers.DecimalField(max_digits=19, decimal_places=2)


class CategoryShareSerializer(serializers.Serializer):
    category = serializers.CharField()
    percent = serializers.DecimalField(max_digits=5, decimal_places=2)


class CategoryDiffSerializer(serializers.Serializer):
    transaction_type = serializers.CharField(source="transaction_type.value")
    category = serializers.CharField()
    diff = serializers.CharField()


class MetricsSerializer(serializers.Serializer):
    income_diff = serializers.CharField()
    expense_diff = serializers.CharField()
    income_categories = CategoryDiffSerializer(many=True)
    expense_categories = CategoryDiffSerializer(many=True)

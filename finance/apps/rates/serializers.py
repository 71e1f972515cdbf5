from rest_framework import serializers

from rates.models import ExchangeRate
from rates.utils import CURRENCY_CODE_RE


class CurrencyCodeField(serializers.RegexField):
    default_error_messages = {"invalid": "Currency must be a three letter ISO 4217 code."}

    def __init__(self, **kwargs):
        super().__init__(CURRENCY_CODE_RE, **kwargs)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = data.strip().upper()
        return super().to_internal_value(data)


class ExchangeRateSerializer(serializers.ModelSerializer):
    class Meta:
        model = ExchangeRate
        fields = ("uuid", "currency", "name", "value", "source", "updated_at")


class ConvertAmountSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=19, decimal_places=2, min_value=0)
    currency = CurrencyCodeField()


class MoneySerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=25, decimal_places=6)
    currency = serializers.CharField()

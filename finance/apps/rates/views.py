from rest_framework.generics import GenericAPIView, ListAPIView
from rest_framework.response import Response

from rates.serializers import (
    ConvertAmountSerializer,
    ExchangeRateSerializer,
    MoneySerializer,
)
from rates.services import CurrencyConverter, RateService
from users.services import UserService


class RateList(ListAPIView):
    serializer_class = ExchangeRateSerializer
    pagination_class = None

    def get_queryset(self):
        return RateService.get_current_rates()


class ConvertAmount(GenericAPIView):
    serializer_class = ConvertAmountSerializer

    def get(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        user = UserService.find_by_id(request.user.uuid)
        money = CurrencyConverter().to_base_currency(
            user,
            serializer.validated_data["amount"],
            serializer.validated_data["currency"],
        )
        return Response(MoneySerializer(money).data)

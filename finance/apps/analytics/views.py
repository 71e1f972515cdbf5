from rest_framework.response import Response
from rest_framework.views import APIView

from analytics import serializers
from analytics.entities import Period
from analytics.services import AnalyticsService
from transactions.constants import TransactionType


class TransactionTotals(APIView):
    def get(self, request, *args, **kwargs):
        params = serializers.PeriodSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        period = Period(
            start=params.validated_data["start_date"],
            end=params.validated_data["end_date"],
        )
        totals = AnalyticsService.get_totals(request.user, period)
        return Response(serializers.TotalsSerializer(totals).data)


class CategoriesShare(APIView):
    def get(self, request, *args, **kwargs):
        params = serializers.CategoriesRequestSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        period = Period(
            start=params.validated_data["start_date"],
            end=params.validated_data["end_date"],
        )
        shares = AnalyticsService.get_categories_share(
            request.user,
            period,
            TransactionType(params.validated_data["transaction_type"]),
        )
        return Response(serializers.CategoryShareSerializer(shares, many=True).data)


class Metrics(APIView):
    def get(self, request, *args, **kwargs):
        params = serializers.MetricsRequestSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        data = params.validated_data
        metrics = AnalyticsService.get_metrics(
            request.user,
            Period(start=data["first_start_date"], end=data["first_end_date"]),
            Period(start=data["second_start_date"], end=data["second_end_date"]),
        )
        return Response(serializers.MetricsSerializer(metrics).data)

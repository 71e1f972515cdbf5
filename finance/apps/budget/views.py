from rest_framework import status
from rest_framework.generics import ListCreateAPIView, RetrieveUpdateDestroyAPIView
from rest_framework.response import Response

from budget import serializers
from budget.services import BudgetService


class BudgetList(ListCreateAPIView):
    serializer_class = serializers.BudgetSerializer

    def get_queryset(self):
        return BudgetService.get_budgets(self.request.user)

    def create(self, request, *args, **kwargs):
        serializer = serializers.CreateBudgetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        budget = BudgetService.create_budget(request.user, serializer.validated_data)
        return Response(
            self.get_serializer(budget).data, status=status.HTTP_201_CREATED
        )


class BudgetDetails(RetrieveUpdateDestroyAPIView):
    serializer_class = serializers.BudgetSerializer
    http_method_names = ["get", "patch", "delete", "head", "options"]
    lookup_field = "uuid"

    def get_object(self):
        return BudgetService.get_budget(self.request.user, self.kwargs["uuid"])

    def update(self, request, *args, **kwargs):
        serializer = serializers.UpdateBudgetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        budget = BudgetService.update_budget(
            request.user, self.kwargs["uuid"], serializer.validated_data
        )
        return Response(self.get_serializer(budget).data)

    def destroy(self, request, *args, **kwargs):
        BudgetService.delete_budget(request.user, self.kwargs["uuid"])
        return Response(status=status.HTTP_204_NO_CONTENT)

from rest_framework import status
from rest_framework.generics import (
    CreateAPIView,
    ListCreateAPIView,
    RetrieveAPIView,
    RetrieveUpdateDestroyAPIView,
)
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response

from finance.exceptions import NotFound
from transactions.importer import BatchImportRunner
from transactions.models import ImportJob
from transactions.serializers import (
    CreateTransactionSerializer,
    ImportFileSerializer,
    ImportJobSerializer,
    TransactionSerializer,
    UpdateTransactionSerializer,
)
from transactions.services import TransactionService


class TransactionList(ListCreateAPIView):
    serializer_class = TransactionSerializer

    def get_queryset(self):
        return TransactionService().list_transactions(self.request.user)

    def create(self, request, *args, **kwargs):
        serializer = CreateTransactionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        transaction = TransactionService().create_transaction(
            request.user, serializer.validated_data
        )
        return Response(
            self.get_serializer(transaction).data, status=status.HTTP_201_CREATED
        )


class TransactionDetails(RetrieveUpdateDestroyAPIView):
    serializer_class = TransactionSerializer
    http_method_names = ["get", "patch", "delete", "head", "options"]
    lookup_field = "uuid"

    def get_object(self):
        return TransactionService().get_transaction(self.request.user, self.kwargs["uuid"])

    def update(self, request, *args, **kwargs):
        serializer = UpdateTransactionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        transaction = TransactionService().update_transaction(
            request.user, self.kwargs["uuid"], serializer.validated_data
        )
        return Response(self.get_serializer(transaction).data)

    def destroy(self, request, *args, **kwargs):
        TransactionService().delete_transaction(request.user, self.kwargs["uuid"])
        return Response(status=status.HTTP_204_NO_CONTENT)


class ImportTransactions(CreateAPIView):
    serializer_class = ImportFileSerializer
    parser_classes = (MultiPartParser, FormParser)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        job = BatchImportRunner().submit(serializer.validated_data["file"], request.user)
        return Response(ImportJobSerializer(job).data, status=status.HTTP_202_ACCEPTED)


class ImportJobDetails(RetrieveAPIView):
    serializer_class = ImportJobSerializer

    def get_object(self):
        try:
            return ImportJob.objects.get(uuid=self.kwargs["uuid"], user=self.request.user)
        except ImportJob.DoesNotExist:
            raise NotFound("Import job not found")

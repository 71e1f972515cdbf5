import uuid

from django.db import models

from transactions.constants import (
    CATEGORY_CHOICES,
    DESCRIPTION_MAX_LENGTH,
    IMPORT_JOB_STATUS_CHOICES,
    TRANSACTION_TYPE_CHOICES,
    ImportJobStatus,
)


class TransactionQuerySet(models.QuerySet):
    def in_window(self, user, start, end, type=None, category=None):
        queryset = self.filter(user=user, date_time__range=(start, end))
        if type is not None:
            queryset = queryset.filter(type=type)
        if category is not None:
            queryset = queryset.filter(category=category)
        return queryset


class ImportJob(models.Model):
    uuid = models.UUIDField(unique=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey("users.User", on_delete=models.CASCADE, to_field="uuid")
    status = models.CharField(
        max_length=10,
        choices=IMPORT_JOB_STATUS_CHOICES,
        default=ImportJobStatus.PENDING.value,
    )
    file_path = models.CharField(max_length=512, blank=True)
    processed_count = models.PositiveIntegerField(default=0)
    skipped_count = models.PositiveIntegerField(default=0)
    balance_delta = models.DecimalField(max_digits=19, decimal_places=2, default=0)
    error = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    finished_at = models.DateTimeField(null=True, blank=True)

    def __repr__(self) -> str:
        return f"(ImportJob {self.uuid} / {self.status})"


class Transaction(models.Model):
    uuid = models.UUIDField(unique=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey("users.User", on_delete=models.CASCADE, to_field="uuid")
    type = models.CharField(max_length=10, choices=TRANSACTION_TYPE_CHOICES)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)
    initial_amount = models.DecimalField(max_digits=19, decimal_places=2)
    initial_currency = models.CharField(max_length=3)
    amount_in_base_currency = models.DecimalField(max_digits=19, decimal_places=2)
    date_time = models.DateTimeField()
    description = models.CharField(max_length=DESCRIPTION_MAX_LENGTH, blank=True)
    job = models.ForeignKey(
        ImportJob,
        on_delete=models.SET_NULL,
        to_field="uuid",
        null=True,
        blank=True,
        related_name="transactions",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    modified_at = models.DateTimeField(auto_now=True)

    objects = TransactionQuerySet.as_manager()

    def __repr__(self) -> str:
        return f"({self.type} / {self.category} / {self.initial_amount} {self.initial_currency})"

    class Meta:
        indexes = [
            models.Index(
                fields=["user", "category", "date_time"],
                name="transaction_user_cat_date_idx",
            ),
        ]

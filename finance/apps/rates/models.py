import uuid

from django.db import models
from django.utils import timezone

from rates.constants import SOURCE_CHOICES


class ExchangeRate(models.Model):
    """One observation of a currency price in RUB. Rows are never updated."""

    uuid = models.UUIDField(unique=True, default=uuid.uuid4, editable=False)
    currency = models.CharField(max_length=3)
    name = models.CharField(max_length=128)
    value = models.DecimalField(max_digits=20, decimal_places=6)
    source = models.CharField(max_length=20, choices=SOURCE_CHOICES)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(
                fields=["currency", "source", "-updated_at"],
                name="rate_currency_source_idx",
            ),
        ]

    def __str__(self):
        return f"{self.currency} {self.value} ({self.source}, {self.updated_at:%Y-%m-%d %H:%M})"

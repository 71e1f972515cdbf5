import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models

from rates.constants import PIVOT_CURRENCY


class User(AbstractUser):
    uuid = models.UUIDField(unique=True, default=uuid.uuid4, editable=False)
    balance = models.DecimalField(max_digits=19, decimal_places=2, default=0)
    base_currency = models.CharField(max_length=3, default=PIVOT_CURRENCY)
    modified_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.username

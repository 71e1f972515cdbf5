import uuid

import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ExchangeRate",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("uuid", models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ("currency", models.CharField(max_length=3)),
                ("name", models.CharField(max_length=128)),
                ("value", models.DecimalField(decimal_places=6, max_digits=20)),
                (
                    "source",
                    models.CharField(
                        choices=[
                            ("CENTRAL_BANK", "Central bank"),
                            ("OPEN_EXCHANGE", "Open Exchange Rates"),
                        ],
                        max_length=20,
                    ),
                ),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "indexes": [
                    models.Index(
                        fields=["currency", "source", "-updated_at"],
                        name="rate_currency_source_idx",
                    )
                ],
            },
        ),
    ]

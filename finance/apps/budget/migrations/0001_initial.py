import uuid

import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Budget",
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
                (
                    "limit_amount",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=19,
                        validators=[django.core.validators.MinValueValidator(Decimal("1"))],
                    ),
                ),
                (
                    "period",
                    models.CharField(
                        choices=[
                            ("DAY", "Day"),
                            ("WEEK", "Week"),
                            ("MONTH", "Month"),
                            ("YEAR", "Year"),
                        ],
                        max_length=10,
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("FOOD", "Food"),
                            ("TRANSPORT", "Transport"),
                            ("HOUSING", "Housing"),
                            ("UTILITIES", "Utilities"),
                            ("HEALTH", "Health"),
                            ("ENTERTAINMENT", "Entertainment"),
                            ("EDUCATION", "Education"),
                            ("CLOTHING", "Clothing"),
                            ("TRAVEL", "Travel"),
                            ("GIFTS", "Gifts"),
                            ("SALARY", "Salary"),
                            ("INVESTMENTS", "Investments"),
                            ("OTHER_INCOME", "Other income"),
                            ("OTHER_EXPENSES", "Other expenses"),
                        ],
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("modified_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to=settings.AUTH_USER_MODEL,
                        to_field="uuid",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user", "period", "category"),
                        name="unique_budget_per_period_and_category",
                    )
                ],
            },
        ),
    ]

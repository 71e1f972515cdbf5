import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

CATEGORY_CHOICES = [
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
]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ImportJob",
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
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("RUNNING", "Running"),
                            ("COMPLETED", "Completed"),
                            ("FAILED", "Failed"),
                        ],
                        default="PENDING",
                        max_length=10,
                    ),
                ),
                ("file_path", models.CharField(blank=True, max_length=512)),
                ("processed_count", models.PositiveIntegerField(default=0)),
                ("skipped_count", models.PositiveIntegerField(default=0)),
                (
                    "balance_delta",
                    models.DecimalField(decimal_places=2, default=0, max_digits=19),
                ),
                ("error", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("finished_at", models.DateTimeField(blank=True, null=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to=settings.AUTH_USER_MODEL,
                        to_field="uuid",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="Transaction",
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
                    "type",
                    models.CharField(
                        choices=[("INCOME", "Income"), ("EXPENSE", "Expense")],
                        max_length=10,
                    ),
                ),
                ("category", models.CharField(choices=CATEGORY_CHOICES, max_length=20)),
                ("initial_amount", models.DecimalField(decimal_places=2, max_digits=19)),
                ("initial_currency", models.CharField(max_length=3)),
                (
                    "amount_in_base_currency",
                    models.DecimalField(decimal_places=2, max_digits=19),
                ),
                ("date_time", models.DateTimeField()),
                ("description", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("modified_at", models.DateTimeField(auto_now=True)),
                (
                    "job",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="transactions",
                        to="transactions.importjob",
                        to_field="uuid",
                    ),
                ),
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
                "indexes": [
                    models.Index(
                        fields=["user", "category", "date_time"],
                        name="transaction_user_cat_date_idx",
                    )
                ],
            },
        ),
    ]

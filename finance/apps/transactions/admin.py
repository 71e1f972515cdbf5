from django.contrib import admin

from transactions.models import ImportJob, Transaction


class TransactionAdmin(admin.ModelAdmin):
    list_display = (
        "username",
        "type",
        "category",
        "initial_amount",
        "initial_currency",
        "amount_in_base_currency",
        "date_time",
    )
    list_filter = ("type", "category")

    def username(self, obj):
        return obj.user.username


class ImportJobAdmin(admin.ModelAdmin):
    list_display = ("uuid", "status", "processed_count", "skipped_count", "created_at")
    list_filter = ("status",)


admin.site.register(Transaction, TransactionAdmin)
admin.site.register(ImportJob, ImportJobAdmin)

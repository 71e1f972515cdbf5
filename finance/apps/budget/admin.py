from django.contrib import admin

from budget.models import Budget


class BudgetAdmin(admin.ModelAdmin):
    list_display = ("username", "category", "period", "limit_amount", "created_at", "modified_at")
    list_filter = ("period", "category")

    def username(self, obj):
        return obj.user.username


admin.site.register(Budget, BudgetAdmin)

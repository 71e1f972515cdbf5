from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from users.models import User


class UserAdmin(BaseUserAdmin):
    list_display = ("username", "email", "balance", "base_currency", "is_staff")
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Finance", {"fields": ("balance", "base_currency")}),
    )


admin.site.register(User, UserAdmin)

from django.contrib import admin

from rates.models import ExchangeRate


class ExchangeRateAdmin(admin.ModelAdmin):
    list_display = ("currency", "name", "value", "source", "updated_at")
    list_filter = ("source",)
    search_fields = ("currency", "name")


admin.site.register(ExchangeRate, ExchangeRateAdmin)

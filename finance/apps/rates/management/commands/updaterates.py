from django.core.management.base import BaseCommand, CommandError

from finance.exceptions import IntegrationError
from rates.services import RateService


class Command(BaseCommand):
    help = "Append a fresh exchange rate table, central bank first, Open Exchange Rates as fallback"

    def handle(self, *args, **kwargs):
        try:
            count, source = RateService.refresh_rates()
        except IntegrationError as e:
            raise CommandError(e.message)

        self.stdout.write(self.style.SUCCESS(f"Saved {count} rates from {source.value}"))

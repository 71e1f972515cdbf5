from decimal import Decimal

import requests
import structlog
from django.db import transaction
from django.utils import timezone

from finance.exceptions import FinanceError, IntegrationError, RateNotFound
from rates.constants import PIVOT_CURRENCY, SOURCE_PRIORITY, CurrencySource
from rates.entities import Money, RateItem
from rates.models import ExchangeRate
from rates.sources import CentralBankRateSource, OpenExchangeRateSource, RateSource
from rates.utils import convert_amount

logger = structlog.get_logger()


class RateService:
    @classmethod
    def get_rate(cls, currency: str) -> ExchangeRate:
        """Most recent central bank rate, else most recent open exchange rate."""
        for source in SOURCE_PRIORITY:
            rate = (
                ExchangeRate.objects.filter(currency=currency, source=source.value)
                .order_by("-updated_at", "-id")
                .first()
            )
            if rate is not None:
                return rate

        raise RateNotFound(f"Rate for {currency} not found")

    @classmethod
    def get_rate_value(cls, currency: str) -> Decimal:
        if currency == PIVOT_CURRENCY:
            return Decimal("1")
        return cls.get_rate(currency).value

    @classmethod
    def get_current_rates(cls) -> list[ExchangeRate]:
        currencies = (
            ExchangeRate.objects.values_list("currency", flat=True)
            .distinct()
            .order_by("currency")
        )
        return [cls.get_rate(currency) for currency in currencies]

    @classmethod
    def save_rates(cls, items: list[RateItem], source: CurrencySource) -> int:
        updated_at = timezone.now()
        rows = [
            ExchangeRate(
                currency=item.currency,
                name=item.name[:128],
                value=item.value,
                source=source.value,
                updated_at=updated_at,
            )
            for item in items
        ]
        with transaction.atomic():
            ExchangeRate.objects.bulk_create(rows)

        logger.info("rates.saved", source=source.value, count=len(rows))
        return len(rows)

    @classmethod
    def refresh_rates(
        cls,
        primary: RateSource | None = None,
        secondary: RateSource | None = None,
    ) -> tuple[int, CurrencySource]:
        primary = primary or CentralBankRateSource()
        secondary = secondary or OpenExchangeRateSource()

        try:
            items = primary.fetch()
            return cls.save_rates(items, primary.source), primary.source
        except (requests.RequestException, FinanceError) as e:
            logger.warning(
                "rates.refresh.fallback",
                failed_source=primary.source.value,
                fallback_source=secondary.source.value,
                error=str(e),
            )

        try:
            items = secondary.fetch()
        except (requests.RequestException, FinanceError) as e:
            logger.error("rates.refresh.failed", error=str(e))
            raise IntegrationError("Unable to update currency rates") from e

        return cls.save_rates(items, secondary.source), secondary.source


class CurrencyConverter:
    def __init__(self, rate_service=RateService):
        self.rate_service = rate_service

    def to_base_currency(self, user, amount: Decimal, currency: str) -> Money:
        """Convert ``amount`` into the user's base currency.

        A RUB base keeps the product at full precision, any other base is
        rounded to cents.
        """
        base_currency = user.base_currency
        if currency == base_currency:
            return Money(amount=amount, currency=base_currency)

        rate = self.rate_service.get_rate_value(currency)
        if base_currency == PIVOT_CURRENCY:
            converted = convert_amount(amount, rate)
        else:
            base_rate = self.rate_service.get_rate_value(base_currency)
            converted = convert_amount(amount, rate, base_rate)

        logger.debug(
            "rates.converted",
            amount=str(amount),
            currency=currency,
            base_currency=base_currency,
            converted=str(converted),
        )
        return Money(amount=converted, currency=base_currency)

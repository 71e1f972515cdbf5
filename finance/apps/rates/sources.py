from decimal import Decimal

import pydantic
import requests
import structlog
from bs4 import BeautifulSoup
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from finance.config import get_settings
from finance.exceptions import IntegrationError
from rates.constants import PIVOT_CURRENCY, CurrencySource
from rates.entities import OpenExchangeRatesResponse, RateItem
from rates.utils import is_currency_code, parse_decimal, round_rate

logger = structlog.get_logger()

transient_http_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
    retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
    reraise=True,
)


class RateSource:
    """Fetches a full table of rates expressed in RUB per one currency unit."""

    source: CurrencySource

    def __init__(self, session: requests.Session | None = None, settings=None):
        self.session = session or requests.Session()
        self.settings = settings or get_settings().rates

    def fetch(self) -> list[RateItem]:
        raise NotImplementedError

    @transient_http_retry
    def _get(self, url: str, params: dict | None = None) -> requests.Response:
        response = self.session.get(url, params=params, timeout=self.settings.timeout)
        response.raise_for_status()
        return response


class CentralBankRateSource(RateSource):
    source = CurrencySource.CENTRAL_BANK

    def fetch(self) -> list[RateItem]:
        logger.info("rates.central_bank.fetch", url=self.settings.central_bank_url)
        response = self._get(self.settings.central_bank_url)
        return self.parse(response.text)

    @staticmethod
    def parse(html: str) -> list[RateItem]:
        """Parse the daily rate table.

        Columns are: numeric code, letter code, units, name, rate. The rate is
        quoted for ``units`` of the currency with a decimal comma.
        """
        soup = BeautifulSoup(html, "html.parser")
        table = soup.select_one("table.data")
        if table is None:
            logger.warning("rates.central_bank.table_missing")
            raise IntegrationError("Rate table not found on the central bank page")

        items = []
        for row in table.find_all("tr"):
            cols = [col.get_text(strip=True) for col in row.find_all("td")]
            if not cols:
                continue
            try:
                units = int(cols[2])
                value = parse_decimal(cols[4]) / Decimal(units)
                items.append(
                    RateItem(currency=cols[1], name=cols[3], value=round_rate(value))
                )
            except (IndexError, ValueError, ZeroDivisionError) as e:
                raise IntegrationError(f"Malformed central bank rate row: {cols}") from e

        logger.info("rates.central_bank.parsed", count=len(items))
        return items


class OpenExchangeRateSource(RateSource):
    source = CurrencySource.OPEN_EXCHANGE

    def fetch(self) -> list[RateItem]:
        url = self.settings.open_exchange_base_url.rstrip("/") + self.settings.open_exchange_path
        logger.info("rates.open_exchange.fetch", url=url)
        response = self._get(url, params={"app_id": self.settings.open_exchange_app_id})
        return self.parse(response.json(parse_float=Decimal))

    @staticmethod
    def parse(payload: dict) -> list[RateItem]:
        """Rebase a USD keyed table onto RUB.

        ``rates[code]`` is units of ``code`` per USD, so one unit of ``code``
        costs ``rates["RUB"] / rates[code]`` roubles.
        """
        try:
            response = OpenExchangeRatesResponse.model_validate(payload)
        except pydantic.ValidationError as e:
            raise IntegrationError("Malformed Open Exchange Rates response") from e

        rub_per_base = response.rates.get(PIVOT_CURRENCY)
        if not rub_per_base:
            logger.error("rates.open_exchange.pivot_missing", base=response.base)
            raise IntegrationError("RUB rate is missing in the Open Exchange Rates response")

        items = []
        for code, units_per_base in sorted(response.rates.items()):
            if not is_currency_code(code) or units_per_base <= 0:
                logger.debug("rates.open_exchange.skipped", currency=code)
                continue
            items.append(
                RateItem(
                    currency=code,
                    name=code,
                    value=round_rate(rub_per_base / units_per_base),
                )
            )

        logger.info("rates.open_exchange.parsed", count=len(items))
        return items

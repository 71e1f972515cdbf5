import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from rates.constants import AMOUNT_PLACES, RATE_PLACES

CURRENCY_CODE_RE = re.compile(r"^[A-Z]{3}$")


def round_amount(amount: Decimal) -> Decimal:
    return amount.quantize(AMOUNT_PLACES, rounding=ROUND_HALF_UP)


def round_rate(value: Decimal) -> Decimal:
    return value.quantize(RATE_PLACES, rounding=ROUND_HALF_UP)


def parse_decimal(raw: str) -> Decimal:
    """Parse numbers written as ``1 234,5678`` or ``1234.5678``."""
    cleaned = raw.strip().replace("\xa0", "").replace(" ", "").replace(",", ".")
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Not a number: {raw!r}")


def is_currency_code(code: str) -> bool:
    return bool(CURRENCY_CODE_RE.match(code))


def convert_amount(
    amount: Decimal, rate: Decimal, base_rate: Decimal | None = None
) -> Decimal:
    """Convert ``amount`` through RUB.

    Without ``base_rate`` the target currency is RUB itself and the product is
    returned unrounded. Otherwise the result is divided by the target currency
    rate and rounded to cents.
    """
    amount_in_pivot = amount * rate
    if base_rate is None:
        return amount_in_pivot
    return round_amount(amount_in_pivot / base_rate)

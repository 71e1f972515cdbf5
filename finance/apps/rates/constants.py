import enum
from decimal import Decimal

# Every stored rate is the price of one unit of a currency in RUB
PIVOT_CURRENCY = "RUB"

RATE_PLACES = Decimal("0.000001")
AMOUNT_PLACES = Decimal("0.01")


class CurrencySource(str, enum.Enum):
    CENTRAL_BANK = "CENTRAL_BANK"
    OPEN_EXCHANGE = "OPEN_EXCHANGE"


SOURCE_CHOICES = (
    (CurrencySource.CENTRAL_BANK.value, "Central bank"),
    (CurrencySource.OPEN_EXCHANGE.value, "Open Exchange Rates"),
)

# Resolution order when looking up the current rate of a currency
SOURCE_PRIORITY = (CurrencySource.CENTRAL_BANK, CurrencySource.OPEN_EXCHANGE)

import enum
from decimal import Decimal


class BudgetPeriod(str, enum.Enum):
    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    YEAR = "YEAR"


class BudgetState(str, enum.Enum):
    OK = "OK"
    WARNING = "WARNING"
    EXCEEDED = "EXCEEDED"


PERIOD_CHOICES = (
    (BudgetPeriod.DAY.value, "Day"),
    (BudgetPeriod.WEEK.value, "Week"),
    (BudgetPeriod.MONTH.value, "Month"),
    (BudgetPeriod.YEAR.value, "Year"),
)

PERIOD_TITLES = {
    BudgetPeriod.DAY: "daily",
    BudgetPeriod.WEEK: "weekly",
    BudgetPeriod.MONTH: "monthly",
    BudgetPeriod.YEAR: "yearly",
}

# Share of the limit after which every new transaction triggers a warning
EXCESS_PERCENTAGE = Decimal("0.8")

MIN_LIMIT_AMOUNT = Decimal("1")

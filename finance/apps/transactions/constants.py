import enum


class TransactionType(str, enum.Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class TransactionCategory(str, enum.Enum):
    FOOD = "FOOD"
    TRANSPORT = "TRANSPORT"
    HOUSING = "HOUSING"
    UTILITIES = "UTILITIES"
    HEALTH = "HEALTH"
    ENTERTAINMENT = "ENTERTAINMENT"
    EDUCATION = "EDUCATION"
    CLOTHING = "CLOTHING"
    TRAVEL = "TRAVEL"
    GIFTS = "GIFTS"
    SALARY = "SALARY"
    INVESTMENTS = "INVESTMENTS"
    OTHER_INCOME = "OTHER_INCOME"
    OTHER_EXPENSES = "OTHER_EXPENSES"


class ImportJobStatus(str, enum.Enum):
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


TRANSACTION_TYPE_CHOICES = tuple(
    (item.value, item.value.capitalize()) for item in TransactionType
)

CATEGORY_CHOICES = tuple(
    (item.value, item.value.replace("_", " ").capitalize()) for item in TransactionCategory
)

IMPORT_JOB_STATUS_CHOICES = tuple(
    (item.value, item.value.capitalize()) for item in ImportJobStatus
)

IMPORT_HEADER = ("type", "category", "amount", "currency", "date_time", "description")

IMPORT_DATE_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"

DESCRIPTION_MAX_LENGTH = 255

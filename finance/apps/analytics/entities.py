import datetime
from decimal import Decimal

import pydantic

from transactions.constants import TransactionType


class Period(pydantic.BaseModel):
    start: datetime.datetime
    end: datetime.datetime


class AnalyticsTotals(pydantic.BaseModel):
    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")


class CategoryShare(pydantic.BaseModel):
    category: str
    percent: Decimal


class CategoryDiff(pydantic.BaseModel):
    transaction_type: TransactionType
    category: str
    diff: str


class AnalyticsMetrics(pydantic.BaseModel):
    income_diff: str
    expense_diff: str
    income_categories: list[CategoryDiff] = pydantic.Field(default_factory=list)
    expense_categories: list[CategoryDiff] = pydantic.Field(default_factory=list)

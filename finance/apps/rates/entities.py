from decimal import Decimal

import pydantic


class RateItem(pydantic.BaseModel):
    currency: str = pydantic.Field(min_length=3, max_length=3)
    name: str
    value: Decimal = pydantic.Field(gt=0)


class Money(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    amount: Decimal
    currency: str


class OpenExchangeRatesResponse(pydantic.BaseModel):
    base: str = "USD"
    timestamp: int | None = None
    rates: dict[str, Decimal]

from decimal import Decimal

import pydantic


class BudgetNotification(pydantic.BaseModel):
    """Payload pushed to ``/topic/budgets/<user>``."""

    model_config = pydantic.ConfigDict(populate_by_name=True)

    message: str
    remaining_amount: Decimal = pydantic.Field(alias="remainingAmount")
    category: str

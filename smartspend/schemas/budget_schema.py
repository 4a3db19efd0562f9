from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from smartspend.schemas.general_schema import MAX_AMOUNT, UtcDatetime

BudgetPeriod = Literal["weekly", "monthly", "quarterly", "yearly"]


class BudgetCreate(BaseModel):
    category_id: Optional[int] = None
    amount: float = Field(..., gt=0, le=MAX_AMOUNT, allow_inf_nan=False)
    period: BudgetPeriod = "monthly"
    start_date: UtcDatetime
    end_date: Optional[UtcDatetime] = None


class BudgetUpdate(BaseModel):
    category_id: Optional[int] = None
    amount: Optional[float] = Field(default=None, gt=0, le=MAX_AMOUNT, allow_inf_nan=False)
    period: Optional[BudgetPeriod] = None
    start_date: Optional[UtcDatetime] = None
    end_date: Optional[UtcDatetime] = None


class Budget(BaseModel):
    budget_id: int
    user_id: int
    category_id: Optional[int]
    amount: float
    period: BudgetPeriod
    start_date: datetime
    end_date: Optional[datetime]

    class Config:
        from_attributes = True

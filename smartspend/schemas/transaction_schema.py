from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from smartspend.schemas.general_schema import MAX_AMOUNT, UtcDatetime


class TransactionCreate(BaseModel, str_strip_whitespace=True):
    category_id: Optional[int] = None
    amount: float = Field(..., ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    description: str
    date: Optional[UtcDatetime] = None
    is_income: bool = False


class TransactionUpdate(BaseModel, str_strip_whitespace=True):
    category_id: Optional[int] = None
    amount: Optional[float] = Field(default=None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    description: Optional[str] = None
    date: Optional[UtcDatetime] = None
    is_income: Optional[bool] = None


class Transaction(BaseModel):
    transaction_id: int
    user_id: int
    category_id: Optional[int]
    amount: float
    description: str
    date: datetime
    is_income: bool

    class Config:
        from_attributes = True


class TransactionUploadResponse(BaseModel):
    message: str
    file_url: str
    transactions: List[Transaction]

from typing import List, Optional

from pydantic import BaseModel

from smartspend.schemas.alert_schema import Alert
from smartspend.schemas.budget_schema import Budget
from smartspend.schemas.transaction_schema import Transaction


class BudgetRollup(Budget):
    spent: float
    remaining: float
    percent_used: int


class CategoryBreakdownEntry(BaseModel):
    category_id: Optional[int]
    name: str
    color: str
    icon: str
    amount: float
    percentage: int


class DashboardSummary(BaseModel):
    balance: float
    monthly_income: float
    monthly_expenses: float
    budget_remaining: float
    recent_transactions: List[Transaction]
    budget_summary: List[BudgetRollup]
    category_breakdown: List[CategoryBreakdownEntry]


class DashboardResponse(DashboardSummary):
    alerts: List[Alert]

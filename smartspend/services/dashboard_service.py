"""
Dashboard aggregation: balance, monthly totals, budget rollups and the
current month's expense breakdown by category.
"""

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence

from smartspend.schemas.budget_schema import Budget
from smartspend.schemas.dashboard_schema import (
    BudgetRollup,
    CategoryBreakdownEntry,
    DashboardSummary,
)
from smartspend.schemas.transaction_schema import Transaction

logger = logging.getLogger(__name__)

RECENT_TRANSACTIONS_LIMIT = 5

OTHER_CATEGORY_NAME = "Other"
OTHER_CATEGORY_COLOR = "#9E9E9E"
OTHER_CATEGORY_ICON = "help_outline"


class TransactionStore(Protocol):
    def list_transactions(
        self,
        user_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Sequence[Any]:
        """Transactions for a user, newest first, optionally within an inclusive date range."""
        ...


class BudgetStore(Protocol):
    def list_budgets(self, user_id: int) -> Iterable[Any]: ...


class CategoryStore(Protocol):
    def list_categories(self) -> Iterable[Any]: ...


def first_day_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def rounded_percentage(part: Decimal, whole: Decimal) -> int:
    if whole <= 0:
        return 0
    return int((part / whole * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def sum_amounts(transactions: Iterable[Any]) -> Decimal:
    return sum((to_decimal(t.amount) for t in transactions), Decimal(0))


class DashboardAggregator:
    """Computes a user's dashboard snapshot from the stores it is given.

    The aggregator holds no state of its own: every call re-reads the stores,
    and failures raised by a store propagate to the caller untouched.
    """

    def __init__(
        self,
        transaction_store: TransactionStore,
        budget_store: BudgetStore,
        category_store: CategoryStore,
    ):
        self.transaction_store = transaction_store
        self.budget_store = budget_store
        self.category_store = category_store

    def compute_dashboard_summary(self, user_id: int, now: datetime) -> DashboardSummary:
        month_start = first_day_of_month(now)

        monthly_transactions = list(
            self.transaction_store.list_transactions(user_id, month_start, now)
        )
        monthly_income = sum_amounts(t for t in monthly_transactions if t.is_income)
        monthly_expenses = sum_amounts(t for t in monthly_transactions if not t.is_income)

        # balance is all-time, independent of the monthly window
        all_transactions = list(self.transaction_store.list_transactions(user_id))
        balance = sum_amounts(t for t in all_transactions if t.is_income) - sum_amounts(
            t for t in all_transactions if not t.is_income
        )

        recent_transactions = [
            Transaction.model_validate(t)
            for t in monthly_transactions[:RECENT_TRANSACTIONS_LIMIT]
        ]

        budget_summary = self.roll_up_budgets(
            self.budget_store.list_budgets(user_id), monthly_transactions
        )
        budget_remaining = sum(
            (to_decimal(b.remaining) for b in budget_summary), Decimal(0)
        )

        category_breakdown = self.break_down_by_category(monthly_transactions)

        logger.debug(
            "Dashboard for user %s: %d monthly transactions, %d budgets, %d categories",
            user_id,
            len(monthly_transactions),
            len(budget_summary),
            len(category_breakdown),
        )

        return DashboardSummary(
            balance=float(balance),
            monthly_income=float(monthly_income),
            monthly_expenses=float(monthly_expenses),
            budget_remaining=float(budget_remaining),
            recent_transactions=recent_transactions,
            budget_summary=budget_summary,
            category_breakdown=category_breakdown,
        )

    def roll_up_budgets(
        self, budgets: Iterable[Any], monthly_transactions: List[Any]
    ) -> List[BudgetRollup]:
        rollups = []
        for budget in budgets:
            spent = sum_amounts(
                t
                for t in monthly_transactions
                if not t.is_income and same_category(t.category_id, budget.category_id)
            )
            amount = to_decimal(budget.amount)
            rollups.append(
                BudgetRollup(
                    **Budget.model_validate(budget).model_dump(),
                    spent=float(spent),
                    remaining=float(amount - spent),
                    percent_used=rounded_percentage(spent, amount),
                )
            )
        return rollups

    def break_down_by_category(
        self, monthly_transactions: List[Any]
    ) -> List[CategoryBreakdownEntry]:
        totals: Dict[Optional[int], Decimal] = {}
        for t in monthly_transactions:
            if t.is_income:
                continue
            totals[t.category_id] = totals.get(t.category_id, Decimal(0)) + to_decimal(t.amount)

        if not totals:
            return []

        total_expenses = sum(totals.values(), Decimal(0))
        categories = {c.category_id: c for c in self.category_store.list_categories()}

        breakdown = []
        for category_id, amount in totals.items():
            category = categories.get(category_id) if category_id is not None else None
            breakdown.append(
                CategoryBreakdownEntry(
                    category_id=category_id,
                    name=category.name if category else OTHER_CATEGORY_NAME,
                    color=category.color if category else OTHER_CATEGORY_COLOR,
                    icon=category.icon if category else OTHER_CATEGORY_ICON,
                    amount=float(amount),
                    percentage=rounded_percentage(amount, total_expenses),
                )
            )
        return breakdown


def same_category(left: Optional[int], right: Optional[int]) -> bool:
    if left is None or right is None:
        return left is None and right is None
    return left == right

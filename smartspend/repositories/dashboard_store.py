"""
Database-backed stores handed to the dashboard aggregator.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from smartspend.repositories import budget_crud, category_crud, transaction_crud
from smartspend.services.cache import LookupCache


class DatabaseTransactionStore:
    def __init__(self, db: Session):
        self.db = db

    def list_transactions(
        self,
        user_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ):
        return transaction_crud.get_transactions_by_user_id(
            db=self.db, user_id=user_id, start_date=start_date, end_date=end_date
        )


class DatabaseBudgetStore:
    def __init__(self, db: Session):
        self.db = db

    def list_budgets(self, user_id: int):
        return budget_crud.get_budgets_by_user_id(db=self.db, user_id=user_id)


class DatabaseCategoryStore:
    def __init__(self, db: Session, cache: Optional[LookupCache] = None):
        self.db = db
        self.cache = cache

    def list_categories(self):
        if self.cache is None:
            return category_crud.get_categories(db=self.db)
        return category_crud.get_cached_categories(db=self.db, cache=self.cache)

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from smartspend.database.connection import get_db
from smartspend.repositories import budget_crud
from smartspend.schemas import budget_schema, user_schema
from smartspend.security.user_security import get_current_user

budget_Router = APIRouter(prefix="/api/budgets", tags=["budgets"])


def get_owned_budget(db: Session, budget_id: int, user_id: int):
    budget = budget_crud.get_budget_by_id(db=db, budget_id=budget_id)
    if budget is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Budget not found")
    if budget.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return budget


def ensure_valid_period(start_date: datetime, end_date: Optional[datetime]):
    if end_date is not None and end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must not be before start_date",
        )


@budget_Router.get("", response_model=List[budget_schema.Budget])
def get_budgets(
    user: user_schema.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return budget_crud.get_budgets_by_user_id(db=db, user_id=user.user_id)


@budget_Router.post("", response_model=budget_schema.Budget, status_code=status.HTTP_201_CREATED)
def create_budget(
    budget: budget_schema.BudgetCreate,
    user: user_schema.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ensure_valid_period(budget.start_date, budget.end_date)
    return budget_crud.create_budget(db=db, user_id=user.user_id, budget=budget)


@budget_Router.put("/{budget_id}", response_model=budget_schema.Budget)
def update_budget(
    budget_id: int,
    budget: budget_schema.BudgetUpdate,
    user: user_schema.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    db_budget = get_owned_budget(db, budget_id, user.user_id)

    # validate the period the row will have once the update is applied
    changes = budget.model_dump(exclude_unset=True)
    start_date = changes.get("start_date") or db_budget.start_date
    end_date = changes["end_date"] if "end_date" in changes else db_budget.end_date
    ensure_valid_period(start_date, end_date)

    return budget_crud.update_budget(db=db, budget_id=budget_id, budget=budget)


@budget_Router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_budget(
    budget_id: int,
    user: user_schema.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    get_owned_budget(db, budget_id, user.user_id)
    if not budget_crud.delete_budget(db=db, budget_id=budget_id):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete budget",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

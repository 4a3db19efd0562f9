from decimal import Decimal

from sqlalchemy.orm import Session

from smartspend.models.model import Budget
from smartspend.schemas.budget_schema import BudgetCreate, BudgetUpdate


def get_budgets_by_user_id(db: Session, user_id: int):
    return (
        db.query(Budget)
        .filter(Budget.user_id == user_id)
        .order_by(Budget.budget_id)
        .all()
    )


def get_budget_by_id(db: Session, budget_id: int):
    return db.query(Budget).filter(Budget.budget_id == budget_id).first()


def create_budget(db: Session, user_id: int, budget: BudgetCreate):
    db_budget = Budget(
        user_id=user_id,
        category_id=budget.category_id,
        amount=Decimal(str(budget.amount)),
        period=budget.period,
        start_date=budget.start_date,
        end_date=budget.end_date,
    )
    db.add(db_budget)
    db.commit()
    db.refresh(db_budget)
    return db_budget


def update_budget(db: Session, budget_id: int, budget: BudgetUpdate):
    db_budget = get_budget_by_id(db=db, budget_id=budget_id)
    if db_budget is None:
        return None

    for field, value in budget.model_dump(exclude_unset=True).items():
        if value is None and field not in ("category_id", "end_date"):
            continue
        if field == "amount":
            value = Decimal(str(value))
        setattr(db_budget, field, value)

    db.commit()
    db.refresh(db_budget)
    return db_budget


def delete_budget(db: Session, budget_id: int) -> bool:
    db_budget = get_budget_by_id(db=db, budget_id=budget_id)
    if db_budget is None:
        return False
    db.delete(db_budget)
    db.commit()
    return True

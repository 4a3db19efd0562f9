from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from smartspend.models.model import Transaction
from smartspend.schemas.transaction_schema import TransactionCreate, TransactionUpdate


def get_transactions_by_user_id(
    db: Session,
    user_id: int,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
):
    query = db.query(Transaction).filter(Transaction.user_id == user_id)

    if start_date is not None:
        query = query.filter(Transaction.date >= start_date)
    if end_date is not None:
        query = query.filter(Transaction.date <= end_date)

    return query.order_by(Transaction.date.desc(), Transaction.transaction_id.desc()).all()


def get_transaction_by_id(db: Session, transaction_id: int):
    return (
        db.query(Transaction)
        .filter(Transaction.transaction_id == transaction_id)
        .first()
    )


def _build_transaction(user_id: int, transaction: TransactionCreate) -> Transaction:
    return Transaction(
        user_id=user_id,
        category_id=transaction.category_id,
        amount=Decimal(str(transaction.amount)),
        description=transaction.description,
        date=transaction.date or datetime.now(),
        is_income=transaction.is_income,
    )


def create_transaction(db: Session, user_id: int, transaction: TransactionCreate):
    db_transaction = _build_transaction(user_id, transaction)
    db.add(db_transaction)
    db.commit()
    db.refresh(db_transaction)
    return db_transaction


def create_many_transactions(
    db: Session, user_id: int, transactions: List[TransactionCreate]
):
    db_transactions = [_build_transaction(user_id, t) for t in transactions]
    db.add_all(db_transactions)
    db.commit()
    for db_transaction in db_transactions:
        db.refresh(db_transaction)
    return db_transactions


def update_transaction(db: Session, transaction_id: int, transaction: TransactionUpdate):
    db_transaction = get_transaction_by_id(db=db, transaction_id=transaction_id)
    if db_transaction is None:
        return None

    # category_id may be explicitly cleared, every other field ignores null
    for field, value in transaction.model_dump(exclude_unset=True).items():
        if value is None and field != "category_id":
            continue
        if field == "amount":
            value = Decimal(str(value))
        setattr(db_transaction, field, value)

    db.commit()
    db.refresh(db_transaction)
    return db_transaction


def delete_transaction(db: Session, transaction_id: int) -> bool:
    db_transaction = get_transaction_by_id(db=db, transaction_id=transaction_id)
    if db_transaction is None:
        return False
    db.delete(db_transaction)
    db.commit()
    return True

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status
from sqlalchemy.orm import Session

from smartspend.database.connection import get_db
from smartspend.repositories import category_crud, transaction_crud
from smartspend.repositories.settings import settings
from smartspend.schemas import transaction_schema, user_schema
from smartspend.security.user_security import get_current_user
from smartspend.services.csv_import import CsvImportError, parse_transactions_csv
from smartspend.services.file_storage import FileStorage, get_file_storage

logger = logging.getLogger(__name__)

transaction_Router = APIRouter(prefix="/api/transactions", tags=["transactions"])

CSV_CONTENT_TYPES = {"text/csv", "application/csv", "application/vnd.ms-excel"}
UPLOAD_CHUNK_SIZE = 64 * 1024


def get_owned_transaction(db: Session, transaction_id: int, user_id: int):
    transaction = transaction_crud.get_transaction_by_id(db=db, transaction_id=transaction_id)
    if transaction is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found"
        )
    if transaction.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return transaction


def ensure_category_exists(db: Session, category_id: Optional[int]):
    if category_id is None:
        return
    if category_crud.get_category_by_id(db=db, category_id=category_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Category {category_id} does not exist",
        )


@transaction_Router.get("", response_model=List[transaction_schema.Transaction])
def get_transactions(
    start_date: Optional[datetime] = Query(default=None, description="Start of the date range (inclusive)"),
    end_date: Optional[datetime] = Query(default=None, description="End of the date range (inclusive)"),
    user: user_schema.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    # a range filter applies only when both ends are given
    if start_date is not None and end_date is not None:
        return transaction_crud.get_transactions_by_user_id(
            db=db, user_id=user.user_id, start_date=start_date, end_date=end_date
        )
    return transaction_crud.get_transactions_by_user_id(db=db, user_id=user.user_id)


@transaction_Router.post(
    "",
    response_model=transaction_schema.Transaction,
    status_code=status.HTTP_201_CREATED,
)
def create_transaction(
    transaction: transaction_schema.TransactionCreate,
    user: user_schema.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ensure_category_exists(db, transaction.category_id)
    return transaction_crud.create_transaction(db=db, user_id=user.user_id, transaction=transaction)


@transaction_Router.put("/{transaction_id}", response_model=transaction_schema.Transaction)
def update_transaction(
    transaction_id: int,
    transaction: transaction_schema.TransactionUpdate,
    user: user_schema.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    get_owned_transaction(db, transaction_id, user.user_id)
    ensure_category_exists(db, transaction.category_id)
    return transaction_crud.update_transaction(
        db=db, transaction_id=transaction_id, transaction=transaction
    )


@transaction_Router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: int,
    user: user_schema.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    get_owned_transaction(db, transaction_id, user.user_id)
    if not transaction_crud.delete_transaction(db=db, transaction_id=transaction_id):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete transaction",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def read_upload(file: UploadFile, limit: int) -> bytes:
    """Read an uploaded file, stopping as soon as it grows past ``limit`` bytes."""
    chunks = []
    size = 0
    while True:
        chunk = file.file.read(UPLOAD_CHUNK_SIZE)
        if not chunk:
            break
        size += len(chunk)
        if size > limit:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File exceeds the {limit} byte limit",
            )
        chunks.append(chunk)
    return b"".join(chunks)


@transaction_Router.post(
    "/upload",
    response_model=transaction_schema.TransactionUploadResponse,
    status_code=status.HTTP_201_CREATED,
)
def upload_transactions(
    file: UploadFile = File(...),
    user: user_schema.User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
):
    filename = file.filename or "upload.csv"
    if file.content_type not in CSV_CONTENT_TYPES and not filename.lower().endswith(".csv"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed",
        )

    content = read_upload(file, settings.MAX_UPLOAD_SIZE)
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    try:
        transactions = parse_transactions_csv(content, now=datetime.now())
    except CsvImportError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    for category_id in {t.category_id for t in transactions}:
        ensure_category_exists(db, category_id)

    file_url = storage.save(content, filename)
    created = transaction_crud.create_many_transactions(
        db=db, user_id=user.user_id, transactions=transactions
    )
    logger.info(f"Imported {len(created)} transactions for user {user.user_id} from {file_url}")

    return {
        "message": f"Successfully imported {len(created)} transactions",
        "file_url": file_url,
        "transactions": created,
    }

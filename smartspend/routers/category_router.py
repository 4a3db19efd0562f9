from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from smartspend.database.connection import get_db
from smartspend.repositories import category_crud
from smartspend.schemas import category_schema, user_schema
from smartspend.security.user_security import get_current_user
from smartspend.services.cache import LookupCache, get_cache

category_Router = APIRouter(prefix="/api/categories", tags=["categories"])


@category_Router.get("", response_model=List[category_schema.Category])
def get_categories(
    db: Session = Depends(get_db),
    cache: LookupCache = Depends(get_cache),
):
    return category_crud.get_cached_categories(db=db, cache=cache)


@category_Router.post(
    "", response_model=category_schema.Category, status_code=status.HTTP_201_CREATED
)
def create_category(
    category: category_schema.CategoryCreate,
    user: user_schema.User = Depends(get_current_user),
    db: Session = Depends(get_db),
    cache: LookupCache = Depends(get_cache),
):
    return category_crud.create_category(db=db, category=category, cache=cache)

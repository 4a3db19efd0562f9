from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from smartspend.models.model import Category
from smartspend.schemas import category_schema
from smartspend.services.cache import LookupCache

CATEGORIES_CACHE_KEY = "all-categories"


def get_categories(db: Session):
    return db.query(Category).order_by(Category.category_id).all()


def get_cached_categories(db: Session, cache: LookupCache):
    cached = cache.get(CATEGORIES_CACHE_KEY)
    if cached is not None:
        return [category_schema.Category.model_validate(c) for c in cached]

    categories = [category_schema.Category.model_validate(c) for c in get_categories(db)]
    cache.set(CATEGORIES_CACHE_KEY, [c.model_dump() for c in categories])
    return categories


def get_category_by_id(db: Session, category_id: int):
    return db.query(Category).filter(Category.category_id == category_id).first()


def create_category(db: Session, category: category_schema.CategoryCreate, cache: LookupCache):
    existing_category = db.query(Category).filter(Category.name == category.name).first()
    if existing_category:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Category already exists"
        )

    db_category = Category(name=category.name, color=category.color, icon=category.icon)
    db.add(db_category)
    db.commit()
    db.refresh(db_category)

    cache.invalidate(CATEGORIES_CACHE_KEY)
    return db_category

from pydantic import BaseModel


class CategoryCreate(BaseModel, str_strip_whitespace=True):
    name: str
    color: str
    icon: str


class Category(CategoryCreate):
    category_id: int

    class Config:
        from_attributes = True

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CommunityTipCreate(BaseModel, str_strip_whitespace=True):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)


class CommunityTip(CommunityTipCreate):
    tip_id: int
    user_id: int
    created_at: datetime
    is_approved: bool
    likes: int

    class Config:
        from_attributes = True


class DealCreate(BaseModel, str_strip_whitespace=True):
    title: str = Field(..., min_length=1, max_length=200)
    description: str
    location: str
    valid_until: Optional[datetime] = None
    link: Optional[str] = None


class Deal(DealCreate):
    deal_id: int
    created_at: datetime

    class Config:
        from_attributes = True

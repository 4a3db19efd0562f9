from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from smartspend.database.connection import get_db
from smartspend.repositories import community_tip_crud, deal_crud
from smartspend.schemas import community_schema, user_schema
from smartspend.security.user_security import get_current_user

community_Router = APIRouter(prefix="/api")


@community_Router.get(
    "/community-tips", response_model=List[community_schema.CommunityTip], tags=["community"]
)
def get_community_tips(db: Session = Depends(get_db)):
    return community_tip_crud.get_approved_tips(db=db)


@community_Router.post(
    "/community-tips",
    response_model=community_schema.CommunityTip,
    status_code=status.HTTP_201_CREATED,
    tags=["community"],
)
def create_community_tip(
    tip: community_schema.CommunityTipCreate,
    user: user_schema.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return community_tip_crud.create_tip(db=db, user_id=user.user_id, tip=tip)


@community_Router.get("/deals", response_model=List[community_schema.Deal], tags=["deals"])
def get_deals(db: Session = Depends(get_db)):
    return deal_crud.get_deals(db=db)


@community_Router.post(
    "/deals",
    response_model=community_schema.Deal,
    status_code=status.HTTP_201_CREATED,
    tags=["deals"],
)
def create_deal(
    deal: community_schema.DealCreate,
    user: user_schema.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return deal_crud.create_deal(db=db, deal=deal)

from sqlalchemy.orm import Session

from smartspend.models.model import Deal
from smartspend.schemas.community_schema import DealCreate


def get_deals(db: Session):
    return db.query(Deal).order_by(Deal.created_at.desc(), Deal.deal_id.desc()).all()


def create_deal(db: Session, deal: DealCreate):
    db_deal = Deal(
        title=deal.title,
        description=deal.description,
        location=deal.location,
        valid_until=deal.valid_until,
        link=deal.link,
    )
    db.add(db_deal)
    db.commit()
    db.refresh(db_deal)
    return db_deal

from sqlalchemy.orm import Session

from smartspend.models.model import CommunityTip
from smartspend.schemas.community_schema import CommunityTipCreate


def get_approved_tips(db: Session):
    return (
        db.query(CommunityTip)
        .filter(CommunityTip.is_approved == True)
        .order_by(CommunityTip.created_at.desc(), CommunityTip.tip_id.desc())
        .all()
    )


def create_tip(db: Session, user_id: int, tip: CommunityTipCreate):
    # new tips wait for moderation before they are listed
    db_tip = CommunityTip(
        user_id=user_id,
        title=tip.title,
        content=tip.content,
        is_approved=False,
    )
    db.add(db_tip)
    db.commit()
    db.refresh(db_tip)
    return db_tip

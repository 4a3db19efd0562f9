from sqlalchemy.orm import Session

from smartspend.models.model import Alert


def get_alerts_by_user_id(db: Session, user_id: int):
    return (
        db.query(Alert)
        .filter(Alert.user_id == user_id)
        .order_by(Alert.created_at.desc(), Alert.alert_id.desc())
        .all()
    )


def get_alert_by_id(db: Session, alert_id: int):
    return db.query(Alert).filter(Alert.alert_id == alert_id).first()


def create_alert(db: Session, user_id: int, type: str, message: str):
    db_alert = Alert(user_id=user_id, type=type, message=message)
    db.add(db_alert)
    db.commit()
    db.refresh(db_alert)
    return db_alert


def mark_alert_as_read(db: Session, alert_id: int):
    db_alert = get_alert_by_id(db=db, alert_id=alert_id)
    if db_alert is None:
        return None
    db_alert.is_read = True
    db.commit()
    db.refresh(db_alert)
    return db_alert

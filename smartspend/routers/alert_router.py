from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from smartspend.database.connection import get_db
from smartspend.repositories import alert_crud
from smartspend.schemas import alert_schema, user_schema
from smartspend.security.user_security import get_current_user

alert_Router = APIRouter(prefix="/api/alerts", tags=["alerts"])


@alert_Router.get("", response_model=List[alert_schema.Alert])
def get_alerts(
    user: user_schema.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return alert_crud.get_alerts_by_user_id(db=db, user_id=user.user_id)


@alert_Router.put("/{alert_id}/read", response_model=alert_schema.Alert)
def mark_alert_as_read(
    alert_id: int,
    user: user_schema.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    alert = alert_crud.get_alert_by_id(db=db, alert_id=alert_id)
    if alert is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Alert not found")
    if alert.user_id != user.user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return alert_crud.mark_alert_as_read(db=db, alert_id=alert_id)

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from smartspend.database.connection import get_db
from smartspend.repositories import alert_crud
from smartspend.repositories.dashboard_store import (
    DatabaseBudgetStore,
    DatabaseCategoryStore,
    DatabaseTransactionStore,
)
from smartspend.schemas import alert_schema, dashboard_schema, user_schema
from smartspend.security.user_security import get_current_user
from smartspend.services.cache import LookupCache, get_cache
from smartspend.services.dashboard_service import DashboardAggregator

logger = logging.getLogger(__name__)

dashboard_Router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@dashboard_Router.get("", response_model=dashboard_schema.DashboardResponse)
def get_dashboard(
    user: user_schema.User = Depends(get_current_user),
    db: Session = Depends(get_db),
    cache: LookupCache = Depends(get_cache),
):
    aggregator = DashboardAggregator(
        transaction_store=DatabaseTransactionStore(db),
        budget_store=DatabaseBudgetStore(db),
        category_store=DatabaseCategoryStore(db, cache),
    )

    try:
        summary = aggregator.compute_dashboard_summary(user.user_id, datetime.now())
        alerts = alert_crud.get_alerts_by_user_id(db=db, user_id=user.user_id)
    except Exception as e:
        logger.exception("Dashboard aggregation failed for user %s", user.user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error generating dashboard: {str(e)}",
        )

    return dashboard_schema.DashboardResponse(
        **summary.model_dump(),
        alerts=[alert_schema.Alert.model_validate(a) for a in alerts],
    )

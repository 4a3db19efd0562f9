import logging
import platform

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from smartspend.database.connection import get_db
from smartspend.services.cache import LookupCache, get_cache
from smartspend.version import __version__

logger = logging.getLogger(__name__)

system_Router = APIRouter(prefix="/api", tags=["system"])


@system_Router.get("/sysinfo")
async def get_sysinfo():
    return {
        "api_version": __version__,
        "python_version": platform.python_version(),
    }


@system_Router.get("/health")
def health_check(
    db: Session = Depends(get_db),
    cache: LookupCache = Depends(get_cache),
):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable",
        )
    return {
        "status": "ok",
        "cache_backend": "redis" if cache.redis_client is not None else "memory",
    }

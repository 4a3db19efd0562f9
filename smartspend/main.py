import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from smartspend.database.connection import Base, engine
from smartspend.models import model
from smartspend.repositories.settings import settings
from smartspend.routers import (
    alert_router,
    budget_router,
    category_router,
    community_router,
    dashboard_router,
    system_router,
    transaction_router,
    user_router,
)
from smartspend.services.cache import LookupCache
from smartspend.services.file_storage import FileStorage
from smartspend.version import __version__

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # stuff to do when app starts
    Base.metadata.create_all(bind=engine)
    yield
    # stuff to do when app stops


app = FastAPI(title="SmartSpend", version=__version__, lifespan=lifespan)

app.state.cache = LookupCache.from_url(settings.REDIS_URL, default_ttl=settings.CATEGORY_CACHE_TTL)
app.state.file_storage = FileStorage(settings.UPLOAD_DIR)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    if request.url.path.startswith("/api"):
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} in {duration_ms:.0f}ms"
        )
    return response


app.include_router(user_router.user_Router)
app.include_router(dashboard_router.dashboard_Router)
app.include_router(transaction_router.transaction_Router)
app.include_router(budget_router.budget_Router)
app.include_router(category_router.category_Router)
app.include_router(community_router.community_Router)
app.include_router(alert_router.alert_Router)
app.include_router(system_router.system_Router)

if __name__ == "__main__":
    uvicorn.run(
        "smartspend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )

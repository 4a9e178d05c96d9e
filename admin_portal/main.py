# admin_portal/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from admin_portal.core.config import get_settings
from admin_portal.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from admin_portal.models import group as _group_models  # noqa: F401
from admin_portal.models import user as _user_models  # noqa: F401
from admin_portal.models import one_time_code as _otp_models  # noqa: F401
from admin_portal.models import transaction as _transaction_models  # noqa: F401

# Routers
from admin_portal.routers.auth import router as auth_router
from admin_portal.routers.users import router as users_router
from admin_portal.routers.transactions import router as transactions_router
from admin_portal.routers.groups import router as groups_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.

    Shutdown:
      - No special cleanup needed for sync engine.
    """
    logger.info("Startup: connecting to database...")
    try:
        create_db_and_tables()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(auth_router, prefix=settings.API_V1_STR)
app.include_router(users_router, prefix=settings.API_V1_STR)
app.include_router(transactions_router, prefix=settings.API_V1_STR)
app.include_router(groups_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "admin-portal"}

"""
HR Attendance Backend - Main Application Entry Point
"""
import logging
from urllib.parse import urlparse, urlunparse

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, OperationalError

from hr_attendance.api.router import api_router
from hr_attendance.core.config import settings
from hr_attendance.core.errors import (
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)
from hr_attendance.core.logging import setup_logging
from hr_attendance.db.session import SessionLocal
from hr_attendance.services import employee_service

# Setup logging first
setup_logging()
logger = logging.getLogger(__name__)


def _mask_database_url(url: str) -> str:
    """Mask password in DATABASE_URL for safe logging; show full path for sqlite."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return "***"
    if parsed.scheme.startswith("sqlite"):
        return url
    if parsed.password:
        netloc = f"{parsed.username}:****@{parsed.hostname or ''}"
        if parsed.port:
            netloc += f":{parsed.port}"
        return urlunparse(parsed._replace(netloc=netloc))
    return url


app = FastAPI(
    title="HR Attendance Backend",
    description="Check-in/check-out, attendance records and employee directory",
    version=settings.VERSION or "1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Include all API routes under /api/v1
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup_log_config() -> None:
    """Log DATABASE_URL at startup so it can be verified against Alembic."""
    logger.info("DATABASE_URL (app): %s", _mask_database_url(settings.DATABASE_URL))


@app.on_event("startup")
def bootstrap_initial_admin() -> None:
    """Make sure at least one usable admin account exists."""
    db = SessionLocal()
    try:
        admin = employee_service.bootstrap_initial_admin(db)
        if admin is None:
            logger.info("Usable admin user already exists, skipping initial bootstrap")
        else:
            logger.info("Initial admin user ready: user_id=%s email=%s", admin.user_id, admin.email)
            logger.info("Password: [set via INITIAL_ADMIN_PASSWORD environment variable]")
    except OperationalError as e:
        db.rollback()
        # Tables missing until `alembic upgrade head` has run
        if "no such table" in str(e).lower() or "does not exist" in str(e).lower():
            logger.warning("Database tables not ready yet, skipping initial bootstrap")
        else:
            logger.error("Database error during admin bootstrap: %s", e)
    except IntegrityError as e:
        db.rollback()
        logger.error("Could not create initial admin, conflicting user row: %s", e)
    finally:
        db.close()

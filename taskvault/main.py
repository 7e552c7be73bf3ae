"""taskvault - private task lists behind signed sessions."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from taskvault.core.config import settings
from taskvault.core.db_client import close_connection, init_db
from taskvault.core.logging import configure_logfire, instrument_fastapi
from taskvault.interface.auth_router import router as auth_router
from taskvault.interface.profile_router import router as profile_router
from taskvault.interface.responses import register_exception_handlers
from taskvault.interface.task_router import router as task_router


logger = logging.getLogger(__name__)


def validate_startup_configuration() -> None:
    """Validate required credentials, failing fast with a clear error message.

    Raises:
        SystemExit: If the session signing secret is missing
    """
    logger.info("startup_validation_begin")

    try:
        settings.require_credential("secret_key", "Session signing")
        logger.info("startup_validation", extra={"stage": "credentials", "status": "ok"})
    except ValueError as e:
        logger.error("startup_validation_failed", extra={"error": str(e)})
        print(f"\n❌ Startup validation failed: {e}\n", file=sys.stderr)  # noqa: T201
        sys.exit(1)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup
    # Configure logging first so validation logs are captured
    configure_logfire()
    validate_startup_configuration()

    await init_db()
    logger.info("Database initialized")
    yield
    # Shutdown
    await close_connection()


app = FastAPI(
    title="taskvault",
    description="Private task lists behind signed sessions",
    version="0.1.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

register_exception_handlers(app)

# Register routers
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(task_router)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=200)

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from commandgate.core.config import settings
from commandgate.core.observability import setup_logging
from commandgate.routers import offices as offices_router
from commandgate.core.errors import (
    CommandGateError,
    commandgate_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    logger.info("Command gate started (%s)", settings.APP_ENV)
    yield
    logger.info("Command gate shutting down")


app = FastAPI(
    title="Command Gate API",
    description=(
        "**Request-payload validation for create/update commands**\n\n"
        "Checks a command body against its resource schema before any "
        "business logic runs. Field violations are reported together in one "
        "response.\n\n"
        "All error responses follow the `{code, message, message_key, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(CommandGateError, commandgate_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(offices_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health():
    """
    Returns `{"status": "ok"}` when the API is up.
    Used by Railway / Render for liveness probes.
    """
    return {"status": "ok", "env": settings.APP_ENV}

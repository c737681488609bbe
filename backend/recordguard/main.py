"""recordguard — declarative record validation service.

FastAPI application exposing the validation engine, with structured logging
and global error handling.
"""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from recordguard import __version__
from recordguard.api.router import api_router
from recordguard.config import get_settings
from recordguard.customers import CUSTOMER_RULES


def configure_logging() -> None:
    """Configure structlog once for the whole process."""
    settings = get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings = get_settings()

    logger.info(
        "app_started",
        debug=settings.DEBUG,
        rule_set=CUSTOMER_RULES.name,
        fields=CUSTOMER_RULES.field_names,
    )

    yield

    logger.info("app_stopped")


# ── Create Application ──

app = FastAPI(
    title="recordguard",
    description=(
        "Declarative record validation. "
        "Records are checked against immutable rule sets and every violation is reported."
    ),
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ── Global Exception Handlers ──

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all error handler for unhandled exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again.",
        },
    )


# ── Routes ──

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint — API info."""
    return {
        "name": "recordguard",
        "version": __version__,
        "description": "Declarative record validation",
        "docs": "/docs",
        "health": "/api/v1/health",
    }


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())

"""Appibilities — accessibility and style linting for design documents.

Main FastAPI application with lifespan management, CORS, and global error handling.
"""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from appibilities.api.router import api_router
from appibilities.config import get_settings
from appibilities.errors import ConfigFileInvalid, DocumentMalformed
from appibilities.services.assistant_engine import assistant_engine


def configure_logging() -> None:
    """Configure structured logging from settings."""
    settings = get_settings()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.LOG_LEVEL.upper())
        ),
    )


configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings = get_settings()

    # ── Startup ──
    logger.info("app_starting", debug=settings.DEBUG)

    # Fail fast on a broken rule config instead of on the first request
    configs = assistant_engine.resolve_configs()
    logger.info(
        "assistant_loaded",
        assistant=assistant_engine.assistant.name,
        rules=len(assistant_engine.assistant.rules),
        active_rules=sum(1 for c in configs.values() if c.get("active", True)),
        config_path=assistant_engine.config_path or None,
    )

    logger.info("app_started")

    yield

    # ── Shutdown ──
    logger.info("app_stopped")


# ── Create Application ──

app = FastAPI(
    title="Appibilities",
    description=(
        "Accessibility and style linting for design documents. "
        "Checks artboard sizes, tap target sizes, system font usage and ellipsis usage."
    ),
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ── Middleware ──

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
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


@app.exception_handler(DocumentMalformed)
async def document_malformed_handler(request: Request, exc: DocumentMalformed):
    """The posted document cannot be indexed; no rule ran."""
    logger.info("document_rejected", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=422,
        content={"error": "document_malformed", "message": str(exc), "pointer": exc.pointer},
    )


@app.exception_handler(ConfigFileInvalid)
async def config_file_invalid_handler(request: Request, exc: ConfigFileInvalid):
    logger.error("rule_config_invalid", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=500,
        content={"error": "rule_config_invalid", "message": str(exc)},
    )


# ── Routes ──

app.include_router(api_router, prefix="/api/v1")


# ── Root endpoint ──

@app.get("/")
async def root():
    """Service info."""
    return {
        "name": "Appibilities",
        "version": "1.0.0",
        "assistant": assistant_engine.assistant.name,
        "docs": "/docs",
        "health": "/api/v1/health",
    }

"""
FastAPI application entry point for the energy monitor summary API.

Serves as the application factory. Settings are loaded from the environment
when the app is created; logging is configured at startup from those
settings. Serve the module-level ``app`` with any ASGI server.

Structured JSON logging is used for all events unless LOG_JSON is disabled.

CHANGELOG:
- 2026-10-17: Register current-data route via summary router
- 2026-10-16: Initial creation (STORY-008)

TODO:
- None
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from energymonitor.src.api.summary import router as summary_router
from energymonitor.src.config import SummarySettings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Structured JSON logging setup
# ---------------------------------------------------------------------------


class JsonFormatter(logging.Formatter):
    """Minimal JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """Configure the root logger with a single stderr handler.

    Args:
        level: Log level name, e.g. ``"INFO"``.
        json_logs: Use :class:`JsonFormatter` when true, a plain text
            format otherwise.
    """
    handler = logging.StreamHandler(sys.stderr)
    if json_logs:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def log_config_summary(settings: SummarySettings) -> None:
    """Log the effective configuration at startup."""
    logger.info(
        "Summary API starting with config: log_level=%s, log_json=%s, "
        "cors_origins=%s",
        settings.log_level,
        settings.log_json,
        settings.cors_origins,
    )


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: logging setup on startup, shutdown logging."""
    settings: SummarySettings = app.state.settings
    configure_logging(settings.log_level, settings.log_json)
    log_config_summary(settings)
    logger.info("Energy monitor summary API ready")
    yield
    logger.info("Energy monitor summary API shutting down")


def create_app(settings: SummarySettings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use. Loaded from the environment when omitted.

    Returns:
        FastAPI: The configured application.
    """
    if settings is None:
        settings = SummarySettings()

    application = FastAPI(
        title="Energy Monitor Summary API",
        description="Power-balance summaries derived from device telemetry.",
        version="0.1.0",
        lifespan=lifespan,
    )
    application.state.settings = settings

    if settings.cors_origins:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["Content-Type"],
        )

    application.include_router(summary_router)

    @application.get("/")
    async def root() -> dict[str, str]:
        """Root health check endpoint."""
        return {"status": "ok"}

    @application.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        """Health endpoint for Docker HEALTHCHECK and monitoring."""
        return {"status": "ok"}

    return application


app = create_app()

"""asyncflow API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map AsyncFlowError and anything else to JSON, never a crash
    - One shared httpx.AsyncClient per process, opened and closed by the lifespan

Design Decisions:
    - Lifespan over @app.on_event: single place for startup and cleanup
    - The JsonHttpClient lives on app.state; routes reach it through a dependency

Run with: uvicorn asyncflow.main:app (from backend/)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from asyncflow.api.error_handlers import register_error_handlers
from asyncflow.api.routes import health, temperature
from asyncflow.config import get_settings
from asyncflow.infrastructure.http_client import JsonHttpClient, build_async_client
from asyncflow.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    http = build_async_client(settings.request_timeout_seconds)
    app.state.http_client = JsonHttpClient(
        http, settings.request_timeout_seconds,
    )
    logger.info(
        "asyncflow API started",
        extra={"adapter": settings.temperature_adapter.value},
    )
    try:
        yield
    finally:
        await http.aclose()
        logger.info("asyncflow API shutting down")


app = FastAPI(title="asyncflow API", version="1.0.0", lifespan=lifespan)

app.include_router(health.router)
app.include_router(temperature.router)

register_error_handlers(app)

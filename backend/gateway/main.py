"""Integration Gateway — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to {"error": message}
    - CORS configured from settings (not hardcoded)
    - Settings load at import: missing secrets stop the process before it serves
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gateway import __version__
from gateway.api.error_handlers import register_error_handlers
from gateway.api.routes import health, messaging, moci, rop
from gateway.config import get_settings
from gateway.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(
        settings.log_level, settings.log_format, secrets=settings.secret_values,
    )
    logger.info("Integration gateway started")
    yield
    logger.info("Integration gateway shutting down")


app = FastAPI(
    title="Integration Gateway", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(rop.router)
app.include_router(messaging.router)
app.include_router(moci.router)

register_error_handlers(app)

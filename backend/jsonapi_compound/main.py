"""JSON:API Compound Document Service — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map JsonApiError → JSON:API error documents
    - CORS configured from settings (not hardcoded)
    - Resource policy applied on startup via lifespan, never at import time

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers (see api/error_handlers.py)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jsonapi_compound.api.error_handlers import register_error_handlers
from jsonapi_compound.api.resources import configure_resources
from jsonapi_compound.api.routes import health, posts
from jsonapi_compound.config import get_settings
from jsonapi_compound.core.includes import includes
from jsonapi_compound.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    configure_resources(settings)
    logger.info("JSON:API compound document service started")
    yield
    includes.flush()
    logger.info("JSON:API compound document service shutting down")


app = FastAPI(
    title="JSON:API Compound Documents", version="0.1.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(posts.router)

register_error_handlers(app)

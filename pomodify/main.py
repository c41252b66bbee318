"""Pomodify Sessions API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PomodifyError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py; main.py only wires them
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pomodify.api.error_handlers import register_error_handlers
from pomodify.api.routes import (
    health, session_commands, session_lifecycle, session_notes,
)
from pomodify.config import get_settings
from pomodify.infrastructure import database
from pomodify.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Pomodify API started")
    yield
    logger.info("Pomodify API shutting down")
    if database.db_manager:
        await database.db_manager.dispose()


app = FastAPI(
    title="Pomodify Sessions API", version="1.0.0", lifespan=lifespan,
)

# CORS origins come from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(session_lifecycle.router)
app.include_router(session_commands.router)
app.include_router(session_notes.router)

register_error_handlers(app)

"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that loads surveys and builds the engine once
  - CORS middleware
  - Global exception handlers (SDK ValueError/KeyError → 400/404)
  - All API routes mounted under ``/api/v1``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``survey-flow-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from survey_flow.engine import SurveyFlowEngine
from survey_flow.store import SurveyStore

from survey_flow_server.config import ServerSettings, load_settings
from survey_flow_server.errors import (
    generic_error_handler,
    key_error_handler,
    value_error_handler,
)
from survey_flow_server.routes import register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan: runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load surveys and build the engine at startup.

    Nothing needs tearing down: the engine owns no connections or files.
    """
    settings: ServerSettings = app.state.settings

    store = SurveyStore(survey_dir=settings.survey_dir)
    store.load()

    app.state.store = store
    app.state.engine = SurveyFlowEngine(store)

    yield

    logger.info("Survey flow server shutting down")


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build and return the configured FastAPI application."""
    if settings is None:
        settings = load_settings()

    # --- Configure logging ---
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Survey Flow API Server",
        description="REST API for conditional questionnaire navigation",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings so the lifespan handler can read them
    app.state.settings = settings

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Exception handlers ---
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(KeyError, key_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check (outside /api/v1 prefix) ---
    @app.get("/health")
    async def health(request: Request) -> dict:
        """Readiness probe — reports how many surveys are loaded."""
        store: SurveyStore = request.app.state.store
        return {"status": "ok", "surveys": len(store.surveys)}

    # --- Mount all API routes ---
    register_routes(app)

    return app


# ------------------------------------------------------------------
# CLI entry point
# ------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: ``survey-flow-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "survey_flow_server.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )

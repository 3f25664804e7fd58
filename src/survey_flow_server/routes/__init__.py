"""Route registration — mounts all routers under ``/api/v1``."""

from fastapi import FastAPI

from survey_flow_server.routes.navigation import router as navigation_router
from survey_flow_server.routes.surveys import router as surveys_router

API_PREFIX = "/api/v1"


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers under the versioned API prefix."""
    app.include_router(surveys_router, prefix=API_PREFIX)
    app.include_router(navigation_router, prefix=API_PREFIX)

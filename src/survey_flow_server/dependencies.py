"""FastAPI dependency injection — provides the engine and survey store.

Both are built once in the lifespan handler and stashed on ``app.state``.
"""

from fastapi import Request

from survey_flow.engine import SurveyFlowEngine
from survey_flow.store import SurveyStore


def get_engine(request: Request) -> SurveyFlowEngine:
    """Return the engine singleton from ``app.state``."""
    return request.app.state.engine


def get_store(request: Request) -> SurveyStore:
    """Return the SurveyStore singleton from ``app.state``."""
    return request.app.state.store

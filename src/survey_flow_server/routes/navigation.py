"""Respondent navigation endpoints.

The server is stateless: the client sends its current ``position`` and the
``answers`` collected so far with every request and receives the next
:class:`NavigationStep`.  Editing an earlier answer therefore takes effect
on the very next request.
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from survey_flow.engine import SurveyFlowEngine
from survey_flow.models.schema import RespondentInfo
from survey_flow.models.session import (
    NavigationStep,
    Position,
    QuestionPayload,
    TraceResult,
)

from survey_flow_server.dependencies import get_engine

router = APIRouter(prefix="/surveys/{survey_id}", tags=["navigation"])


# ------------------------------------------------------------------
# Request models
# ------------------------------------------------------------------

class NavigationRequest(BaseModel):
    """Body for step/next/back."""

    position: Position = Position()
    answers: dict[str, Any] = {}
    respondent: RespondentInfo | None = None


class TraceRequest(BaseModel):
    answers: dict[str, Any] = {}
    respondent: RespondentInfo | None = None


class RenderRequest(BaseModel):
    answers: dict[str, Any] = {}


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post("/start")
def start(
    survey_id: str,
    engine: SurveyFlowEngine = Depends(get_engine),
) -> NavigationStep:
    """First step of a new response (the welcome screen)."""
    return engine.start(survey_id)


@router.post("/step")
def current_step(
    survey_id: str,
    body: NavigationRequest,
    engine: SurveyFlowEngine = Depends(get_engine),
) -> NavigationStep:
    """Describe the given position without moving."""
    return engine.get_step(survey_id, body.position, body.answers, body.respondent)


@router.post("/next")
def go_next(
    survey_id: str,
    body: NavigationRequest,
    engine: SurveyFlowEngine = Depends(get_engine),
) -> NavigationStep:
    """Move forward.  The returned position equals the sent one when blocked."""
    return engine.advance(survey_id, body.position, body.answers, body.respondent)


@router.post("/back")
def go_back(
    survey_id: str,
    body: NavigationRequest,
    engine: SurveyFlowEngine = Depends(get_engine),
) -> NavigationStep:
    """Move backward to the previous visible question or screen."""
    return engine.go_back(survey_id, body.position, body.answers, body.respondent)


@router.post("/trace")
def trace(
    survey_id: str,
    body: TraceRequest,
    engine: SurveyFlowEngine = Depends(get_engine),
) -> TraceResult:
    """Replay the full forward path for a fixed answer set."""
    return engine.trace(survey_id, body.answers, body.respondent)


@router.post("/questions/{question_id}/render")
def render(
    survey_id: str,
    question_id: str,
    body: RenderRequest,
    engine: SurveyFlowEngine = Depends(get_engine),
) -> QuestionPayload:
    """Render one question with carry-forward options and piped text."""
    return engine.render(survey_id, question_id, body.answers)

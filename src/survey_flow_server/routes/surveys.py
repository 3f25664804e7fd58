"""Survey authoring endpoints — definitions, validation, and flow graphs.

The authoring UI calls ``POST /surveys/validate`` with a draft survey
before allowing publish; stored surveys can be checked with
``GET /surveys/{survey_id}/validation``.
"""

from fastapi import APIRouter, Depends

from survey_flow.graph import build_flow_graph, find_cycles
from survey_flow.models.schema import Survey
from survey_flow.models.validation import SurveyValidationReport
from survey_flow.store import SurveyStore
from survey_flow.validator import validate_survey

from survey_flow_server.dependencies import get_store

router = APIRouter(prefix="/surveys", tags=["surveys"])


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("")
def list_surveys(
    store: SurveyStore = Depends(get_store),
) -> list[dict]:
    """Return a summary of every loaded survey."""
    return [
        {
            "id": s.id,
            "title": s.title,
            "description": s.description,
            "is_anonymous": s.is_anonymous,
            "question_count": len(s.questions),
        }
        for s in store.list_surveys()
    ]


@router.post("/validate")
def validate_draft(body: Survey) -> SurveyValidationReport:
    """Validate an unsaved survey definition."""
    return validate_survey(body.questions)


@router.get("/{survey_id}")
def get_survey(
    survey_id: str,
    store: SurveyStore = Depends(get_store),
) -> Survey:
    """Return the full survey definition."""
    return store.get_survey(survey_id)


@router.get("/{survey_id}/validation")
def validate_stored(
    survey_id: str,
    store: SurveyStore = Depends(get_store),
) -> SurveyValidationReport:
    """Configuration report for a stored survey."""
    return validate_survey(store.get_survey(survey_id).questions)


@router.get("/{survey_id}/graph")
def get_graph(
    survey_id: str,
    store: SurveyStore = Depends(get_store),
) -> dict:
    """Flow graph (nodes and edges) plus any branch-jump cycles."""
    graph = build_flow_graph(store.get_survey(survey_id).questions)
    graph["cycles"] = find_cycles(graph)
    return graph

"""survey_flow — flow-control engine for multi-step questionnaires.

Public API:
    SurveyFlowEngine   — stateless façade: start / advance / go_back / render
    SurveyNavigator    — forward/backward positions for one survey
    SurveyStore        — loads YAML surveys into typed models
    ConditionEvaluator — evaluates and combines skip/branch conditions

Resolvers and helpers:
    should_show        — skip logic: is a question visible?
    resolve_branch     — branch logic: next, jump or end after a question
    can_proceed        — per-type proceed check for a question
    resolve_options    — carry-forward option filter
    pipe_answers       — ``{{questionId}}`` substitution
    validate_survey    — authoring-time configuration report
"""

from survey_flow.completion import can_proceed, missing_required
from survey_flow.engine import SurveyFlowEngine, render_question
from survey_flow.evaluator import ConditionEvaluator
from survey_flow.models.schema import RespondentInfo, Survey
from survey_flow.models.session import (
    NavigationStep,
    Position,
    PositionKind,
    QuestionPayload,
    TraceResult,
)
from survey_flow.navigator import SurveyNavigator
from survey_flow.options import resolve_options
from survey_flow.piping import pipe_answers
from survey_flow.resolver import resolve_branch, should_show
from survey_flow.store import SurveyStore
from survey_flow.validator import (
    validate_branch_logic,
    validate_carry_forward,
    validate_survey,
)

__all__ = [
    # Engine & store
    "SurveyFlowEngine",
    "SurveyNavigator",
    "SurveyStore",
    "ConditionEvaluator",
    # Resolvers
    "should_show",
    "resolve_branch",
    "can_proceed",
    "missing_required",
    "resolve_options",
    "pipe_answers",
    "render_question",
    # Validation
    "validate_branch_logic",
    "validate_carry_forward",
    "validate_survey",
    # Models
    "NavigationStep",
    "Position",
    "PositionKind",
    "QuestionPayload",
    "RespondentInfo",
    "Survey",
    "TraceResult",
]

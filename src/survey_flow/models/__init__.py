"""Public model re-exports for survey_flow.

Consumers should import from ``survey_flow.models`` rather than reaching
into sub-modules directly.
"""

# --- Actions ---
from survey_flow.models.action import (
    BranchAction,
    BranchOutcome,
    EndAction,
    JumpAction,
    NextAction,
)

# --- Questions ---
from survey_flow.models.question import (
    BranchLogic,
    BranchRule,
    CarryForward,
    OptionSource,
    Question,
    QuestionSettings,
    QuestionType,
    SkipCondition,
    SkipLogic,
)

# --- Survey ---
from survey_flow.models.schema import RespondentInfo, Survey

# --- Navigation ---
from survey_flow.models.session import (
    NavigationStep,
    Position,
    PositionKind,
    Progress,
    QuestionPayload,
    TraceResult,
)

# --- Validation ---
from survey_flow.models.validation import (
    ConfigIssue,
    SurveyValidationReport,
    ValidationResult,
)

__all__ = [
    # Actions
    "BranchAction",
    "BranchOutcome",
    "EndAction",
    "JumpAction",
    "NextAction",
    # Questions
    "BranchLogic",
    "BranchRule",
    "CarryForward",
    "OptionSource",
    "Question",
    "QuestionSettings",
    "QuestionType",
    "SkipCondition",
    "SkipLogic",
    # Survey
    "RespondentInfo",
    "Survey",
    # Navigation
    "NavigationStep",
    "Position",
    "PositionKind",
    "Progress",
    "QuestionPayload",
    "TraceResult",
    # Validation
    "ConfigIssue",
    "SurveyValidationReport",
    "ValidationResult",
]

"""Authoring-time validation results.

``ValidationResult`` is returned by the single-question checks;
``SurveyValidationReport`` aggregates them over a whole survey and adds
advisory warnings that never block publishing.
"""

from typing import List, Literal

from pydantic import BaseModel


class ValidationResult(BaseModel):
    """Outcome of one configuration check."""

    valid: bool = True
    errors: List[str] = []


class ConfigIssue(BaseModel):
    """A configuration problem attributed to the question that carries it."""

    question_id: str
    kind: Literal["branch_logic", "carry_forward", "skip_logic", "options", "duplicate_id", "cycle"]
    message: str


class SurveyValidationReport(BaseModel):
    """Errors block publishing; warnings are for the author's attention."""

    valid: bool = True
    errors: List[ConfigIssue] = []
    warnings: List[ConfigIssue] = []

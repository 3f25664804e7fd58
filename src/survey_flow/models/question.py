"""Question and flow-control configuration models.

A survey is a single ordered list of questions.  Position in that list is
the only addressing used for "before/after" relationships; everything else
refers to questions by their stable string ``id``.

Each question may carry a settings bag holding:
  - skip_logic: decides whether the question itself is shown
  - branch_logic: decides where the flow goes after it is answered
  - option_source: static options or options carried forward from an
    earlier question
  - type-specific values (``total`` for CONSTANT_SUM, scale bounds, labels)
"""

from __future__ import annotations

import enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from survey_flow.answers import answer_to_string

from .action import BranchAction


class QuestionType(str, enum.Enum):
    """Closed set of question kinds.

    The engine only distinguishes a few of them (display-only kinds and the
    composite kinds with bespoke proceed checks); the rest are rendering
    concerns of the caller.
    """

    # Text inputs
    SHORT_TEXT = "SHORT_TEXT"
    LONG_TEXT = "LONG_TEXT"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    NUMBER = "NUMBER"
    URL = "URL"
    DATE = "DATE"
    TIME = "TIME"
    # Choice inputs
    SINGLE_CHOICE = "SINGLE_CHOICE"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    DROPDOWN = "DROPDOWN"
    YES_NO = "YES_NO"
    IMAGE_CHOICE = "IMAGE_CHOICE"
    # Rating / scale inputs
    RATING = "RATING"
    SCALE = "SCALE"
    NPS = "NPS"
    SLIDER = "SLIDER"
    LIKERT = "LIKERT"
    # Composite inputs
    MATRIX = "MATRIX"
    RANKING = "RANKING"
    CONSTANT_SUM = "CONSTANT_SUM"
    ADDRESS = "ADDRESS"
    FILE_UPLOAD = "FILE_UPLOAD"
    SIGNATURE = "SIGNATURE"
    LEGAL = "LEGAL"
    # Display-only
    SECTION_HEADER = "SECTION_HEADER"
    WELCOME_SCREEN = "WELCOME_SCREEN"
    END_SCREEN = "END_SCREEN"
    STATEMENT = "STATEMENT"
    HIDDEN = "HIDDEN"


# --- Conditions ---

class SkipCondition(BaseModel):
    """A single condition on a prior answer.

    Operators:
      - equals, not_equals: string equality, or membership for list answers
      - contains: case-insensitive substring
      - greater_than, less_than: numeric comparison (``value`` parsed as number)
      - is_empty, is_not_empty: presence checks; ``value`` is ignored
    """

    question_id: str
    operator: Literal[
        "equals", "not_equals", "contains",
        "greater_than", "less_than",
        "is_empty", "is_not_empty",
    ]
    value: str = ""

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, v):
        # Unquoted YAML/JSON thresholds (3, 2.5, true) compare as their text
        if v is None:
            return ""
        if isinstance(v, (bool, int, float)):
            return answer_to_string(v)
        return v


class SkipLogic(BaseModel):
    """Show the owning question only when the conditions hold."""

    enabled: bool = False
    conditions: List[SkipCondition] = []
    logic: Literal["all", "any"] = "all"


class BranchRule(BaseModel):
    """If the conditions hold, take ``action``."""

    conditions: List[SkipCondition] = []
    logic: Literal["all", "any"] = "all"
    action: BranchAction


class BranchLogic(BaseModel):
    """Ordered rules deciding what follows the owning question.

    Rules are evaluated top to bottom and the first match wins.  When none
    matches, ``default_action`` applies.
    """

    enabled: bool = False
    rules: List[BranchRule] = []
    default_action: Literal["next", "end"] = "next"


# --- Option sources ---

class CarryForward(BaseModel):
    """Derive options from an earlier question's options and answer."""

    enabled: bool = False
    source_question_id: Optional[str] = None
    mode: Literal["selected", "not_selected", "all"] = "selected"


class OptionSource(BaseModel):
    """Where a question's options come from."""

    type: Literal["static", "carry_forward"] = "static"
    carry_forward: Optional[CarryForward] = None


# --- Question ---

class QuestionSettings(BaseModel):
    """Settings bag.  Unknown type-specific keys are kept as extra fields."""

    model_config = ConfigDict(extra="allow")

    skip_logic: Optional[SkipLogic] = None
    branch_logic: Optional[BranchLogic] = None
    option_source: Optional[OptionSource] = None
    # Allocation target for CONSTANT_SUM questions
    total: Optional[float] = None


class Question(BaseModel):
    """A single survey question."""

    id: str
    type: QuestionType
    title: str = Field(min_length=1, max_length=500)
    description: Optional[str] = Field(default=None, max_length=1000)
    required: bool = False
    options: Optional[List[str]] = None
    settings: Optional[QuestionSettings] = None

    @property
    def skip_logic(self) -> Optional[SkipLogic]:
        return self.settings.skip_logic if self.settings else None

    @property
    def branch_logic(self) -> Optional[BranchLogic]:
        return self.settings.branch_logic if self.settings else None

    @property
    def option_source(self) -> Optional[OptionSource]:
        return self.settings.option_source if self.settings else None

"""Navigation models — the contract between the engine and API callers.

The engine keeps no state between calls.  Callers hold a ``Position`` and
the answers collected so far and hand both back on every request.

Position kinds:
  - welcome: the welcome screen before any question
  - respondent_info: contact form (non-anonymous surveys only)
  - question: a question, addressed by its index in the survey
  - submitted: terminal; ``reason`` tells a natural finish ("completed")
    from an explicit branch ``end`` ("branch_end")
"""

from __future__ import annotations

import enum
from typing import Literal, Optional

from pydantic import BaseModel


class PositionKind(str, enum.Enum):
    """Where the respondent currently is."""

    WELCOME = "welcome"
    RESPONDENT_INFO = "respondent_info"
    QUESTION = "question"
    SUBMITTED = "submitted"


class Position(BaseModel):
    """A point in the traversal.  ``index`` is set only for question positions."""

    kind: PositionKind = PositionKind.WELCOME
    index: Optional[int] = None
    reason: Optional[Literal["completed", "branch_end"]] = None

    @classmethod
    def welcome(cls) -> Position:
        return cls(kind=PositionKind.WELCOME)

    @classmethod
    def respondent_info(cls) -> Position:
        return cls(kind=PositionKind.RESPONDENT_INFO)

    @classmethod
    def at_question(cls, index: int) -> Position:
        return cls(kind=PositionKind.QUESTION, index=index)

    @classmethod
    def submitted(cls, reason: Literal["completed", "branch_end"] = "completed") -> Position:
        return cls(kind=PositionKind.SUBMITTED, reason=reason)

    @property
    def is_terminal(self) -> bool:
        return self.kind == PositionKind.SUBMITTED


class Progress(BaseModel):
    """Progress through the answerable steps of a survey."""

    current_step: int
    total_steps: int
    percent: float


class QuestionPayload(BaseModel):
    """Question as the renderer should display it.

    Options are already resolved (carry-forward applied) and the title and
    description already have prior answers piped in.
    """

    id: str
    type: str
    title: str
    description: str | None = None
    required: bool = False
    options: list[str] | None = None
    # Type-specific settings the widget needs (scale bounds, totals, ...)
    settings: dict | None = None


class NavigationStep(BaseModel):
    """What to show at a position, and what the Next/Back buttons may do."""

    position: Position
    question: QuestionPayload | None = None
    can_proceed: bool
    can_go_back: bool
    progress: Progress
    # Populated only at submitted positions: visible required questions
    # still unanswered.
    missing_required: list[str] = []


class TraceResult(BaseModel):
    """Forward path replayed for a fixed answer set.

    ``outcome``:
      - submitted: reached a terminal position
      - blocked: a position refused to proceed with the given answers
      - cycle: the path revisited a question (branch jumps loop)
      - step_limit: the step cap was hit
    """

    positions: list[Position]
    outcome: Literal["submitted", "blocked", "cycle", "step_limit"]

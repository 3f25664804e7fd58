"""SurveyFlowEngine — stateless façade used by the API server.

Every call receives the survey id, the caller's current position and the
answers collected so far, and returns a :class:`NavigationStep` describing
what to show next.  No state is kept between calls; callers own the
response session and its persistence.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from survey_flow.completion import missing_required
from survey_flow.models.question import Question
from survey_flow.models.schema import RespondentInfo
from survey_flow.models.session import (
    NavigationStep,
    Position,
    PositionKind,
    QuestionPayload,
    TraceResult,
)
from survey_flow.models.validation import SurveyValidationReport
from survey_flow.navigator import SurveyNavigator
from survey_flow.options import resolve_options
from survey_flow.piping import pipe_answers
from survey_flow.store import SurveyStore
from survey_flow.validator import validate_survey

logger = logging.getLogger(__name__)

# Settings keys that drive flow control rather than widget rendering
_FLOW_SETTINGS = {"skip_logic", "branch_logic", "option_source"}


def render_question(
    question: Question,
    questions: Sequence[Question],
    answers: dict[str, Any],
) -> QuestionPayload:
    """Materialise a question for display: resolve options, pipe answers."""
    settings = None
    if question.settings is not None:
        settings = question.settings.model_dump(exclude=_FLOW_SETTINGS, exclude_none=True) or None

    options = None
    if question.options is not None or question.option_source is not None:
        options = resolve_options(question, questions, answers)

    return QuestionPayload(
        id=question.id,
        type=question.type.value,
        title=pipe_answers(question.title, questions, answers),
        description=pipe_answers(question.description, questions, answers),
        required=question.required,
        options=options,
        settings=settings,
    )


class SurveyFlowEngine:
    """Drives respondents through surveys held in a :class:`SurveyStore`.

    Args:
        store: a loaded :class:`SurveyStore` instance
    """

    def __init__(self, store: SurveyStore) -> None:
        self._store = store
        self._navigators: dict[str, SurveyNavigator] = {}

    def navigator(self, survey_id: str) -> SurveyNavigator:
        """Navigator for ``survey_id``.  Raises KeyError for unknown surveys."""
        survey = self._store.get_survey(survey_id)
        nav = self._navigators.get(survey_id)
        if nav is None or nav.survey is not survey:
            nav = SurveyNavigator(survey)
            self._navigators[survey_id] = nav
        return nav

    # ==================================================================
    # Step API
    # ==================================================================

    def start(self, survey_id: str) -> NavigationStep:
        """First step of a new response (the welcome screen)."""
        nav = self.navigator(survey_id)
        return self._build_step(nav, nav.start(), {}, None)

    def get_step(
        self,
        survey_id: str,
        position: Position,
        answers: dict[str, Any],
        respondent: RespondentInfo | None = None,
    ) -> NavigationStep:
        """Describe ``position`` without moving.  Read-only."""
        return self._build_step(self.navigator(survey_id), position, answers, respondent)

    def advance(
        self,
        survey_id: str,
        position: Position,
        answers: dict[str, Any],
        respondent: RespondentInfo | None = None,
    ) -> NavigationStep:
        """Move forward.  Stays put when the current step cannot proceed."""
        nav = self.navigator(survey_id)
        nxt = nav.next(position, answers, respondent)
        if nxt == position:
            logger.debug("survey %s: forward move blocked at %s", survey_id, position)
        return self._build_step(nav, nxt, answers, respondent)

    def go_back(
        self,
        survey_id: str,
        position: Position,
        answers: dict[str, Any],
        respondent: RespondentInfo | None = None,
    ) -> NavigationStep:
        """Move backward to the previous visible question or screen."""
        nav = self.navigator(survey_id)
        prev = nav.previous(position, answers)
        return self._build_step(nav, prev, answers, respondent)

    # ==================================================================
    # Content, replay & validation
    # ==================================================================

    def render(
        self, survey_id: str, question_id: str, answers: dict[str, Any]
    ) -> QuestionPayload:
        """Render one question by id.  Raises KeyError if it does not exist."""
        survey = self._store.get_survey(survey_id)
        index = survey.index_of(question_id)
        if index == -1:
            raise KeyError(f"Question '{question_id}' not found in survey '{survey_id}'")
        return render_question(survey.questions[index], survey.questions, answers)

    def trace(
        self,
        survey_id: str,
        answers: dict[str, Any],
        respondent: RespondentInfo | None = None,
    ) -> TraceResult:
        """Replay the forward path for a fixed answer set."""
        return self.navigator(survey_id).trace(answers, respondent)

    def validate(self, survey_id: str) -> SurveyValidationReport:
        """Authoring-time configuration report for a stored survey."""
        return validate_survey(self._store.get_survey(survey_id).questions)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _build_step(
        self,
        nav: SurveyNavigator,
        position: Position,
        answers: dict[str, Any],
        respondent: RespondentInfo | None,
    ) -> NavigationStep:
        questions = nav.survey.questions
        question = nav.question_at(position)
        payload = render_question(question, questions, answers) if question else None

        missing: list[str] = []
        if position.kind == PositionKind.SUBMITTED:
            missing = [q.id for q in missing_required(questions, answers)]

        return NavigationStep(
            position=position,
            question=payload,
            can_proceed=nav.can_proceed(position, answers, respondent),
            can_go_back=nav.can_go_back(position),
            progress=nav.progress(position),
            missing_required=missing,
        )

"""SurveyNavigator — forward/backward movement through one survey.

Position space::

    welcome -> [respondent_info] -> question(i) ... -> submitted

``respondent_info`` exists only for non-anonymous surveys.  Every move is a
pure function of (survey, position, answers): nothing is cached, so an edit
to an earlier answer is reflected the next time a move is computed.

Forward moves:
  - welcome: respondent_info if present, else the first visible question
  - respondent_info: the first visible question
  - question(i): branch logic of question i decides; ``end`` submits,
    ``jump`` goes to the target (or the next visible after it when the
    target is hidden), ``next`` scans forward from i+1
  - no visible question left: submitted

Forward moves are no-ops while :meth:`can_proceed` is false.

Backward moves scan skip logic only; branch logic is never replayed in
reverse, so after a forward jump "back" lands on the nearest visible
question before the current one, which may not be the question the
respondent jumped from.
"""

from __future__ import annotations

import logging
from typing import Any

from survey_flow.completion import (
    can_proceed as question_can_proceed,
    is_display_only,
    respondent_info_complete,
)
from survey_flow.constants import MAX_TRAVERSAL_STEPS
from survey_flow.models.action import EndAction
from survey_flow.models.question import Question
from survey_flow.models.schema import RespondentInfo, Survey
from survey_flow.models.session import Position, PositionKind, Progress, TraceResult
from survey_flow.resolver import (
    find_next_question,
    find_next_visible,
    find_prev_visible,
    resolve_branch,
)

logger = logging.getLogger(__name__)


class SurveyNavigator:
    """Computes next/previous positions for a survey.

    Args:
        survey: the (read-only) survey being answered
    """

    def __init__(self, survey: Survey) -> None:
        self._survey = survey
        self._questions = survey.questions

    @property
    def survey(self) -> Survey:
        return self._survey

    @property
    def has_respondent_info(self) -> bool:
        return not self._survey.is_anonymous

    def start(self) -> Position:
        """Position at which every response begins."""
        return Position.welcome()

    def question_at(self, position: Position) -> Question | None:
        """The question shown at ``position``, or None for pseudo-positions."""
        if position.kind != PositionKind.QUESTION:
            return None
        self._check_index(position)
        return self._questions[position.index]

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def can_proceed(
        self,
        position: Position,
        answers: dict[str, Any],
        respondent: RespondentInfo | None = None,
    ) -> bool:
        """True if a forward move from ``position`` is currently allowed."""
        if position.kind == PositionKind.WELCOME:
            return True
        if position.kind == PositionKind.RESPONDENT_INFO:
            return respondent_info_complete(respondent)
        if position.kind == PositionKind.QUESTION:
            return question_can_proceed(self.question_at(position), answers)
        return False

    def can_go_back(self, position: Position) -> bool:
        return position.kind in (PositionKind.RESPONDENT_INFO, PositionKind.QUESTION)

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def next(
        self,
        position: Position,
        answers: dict[str, Any],
        respondent: RespondentInfo | None = None,
    ) -> Position:
        """Forward move.  Returns ``position`` unchanged when blocked."""
        if not self.can_proceed(position, answers, respondent):
            return position

        if position.kind == PositionKind.WELCOME and self.has_respondent_info:
            return Position.respondent_info()

        if position.kind in (PositionKind.WELCOME, PositionKind.RESPONDENT_INFO):
            return self._visible_from(-1, answers)

        return self._after_question(position.index, answers)

    def previous(self, position: Position, answers: dict[str, Any]) -> Position:
        """Backward move.  Never blocked by validation, only by being at the start."""
        if position.kind == PositionKind.RESPONDENT_INFO:
            return Position.welcome()

        if position.kind != PositionKind.QUESTION:
            return position

        self._check_index(position)
        prev = find_prev_visible(self._questions, position.index, answers)
        if prev != -1:
            return Position.at_question(prev)
        if self.has_respondent_info:
            return Position.respondent_info()
        return Position.welcome()

    def _after_question(self, index: int, answers: dict[str, Any]) -> Position:
        if isinstance(resolve_branch(self._questions[index], answers), EndAction):
            return Position.submitted(reason="branch_end")
        nxt = find_next_question(self._questions, index, answers)
        if nxt == -1:
            return Position.submitted()
        return Position.at_question(nxt)

    def _visible_from(self, index: int, answers: dict[str, Any]) -> Position:
        nxt = find_next_visible(self._questions, index, answers)
        if nxt == -1:
            return Position.submitted()
        return Position.at_question(nxt)

    def _check_index(self, position: Position) -> None:
        if position.index is None or not 0 <= position.index < len(self._questions):
            raise ValueError(
                f"Invalid question index {position.index} for survey "
                f"'{self._survey.id}' with {len(self._questions)} questions"
            )

    # ------------------------------------------------------------------
    # Progress & replay
    # ------------------------------------------------------------------

    def progress(self, position: Position) -> Progress:
        """Answerable steps passed so far, counting respondent info as one step."""
        answerable = [q for q in self._questions if not is_display_only(q)]
        info_steps = 1 if self.has_respondent_info else 0
        total = len(answerable) + info_steps

        if position.kind == PositionKind.WELCOME:
            current = 0
        elif position.kind == PositionKind.RESPONDENT_INFO:
            current = info_steps
        elif position.kind == PositionKind.SUBMITTED:
            current = total
        else:
            self._check_index(position)
            passed = self._questions[: position.index + 1]
            current = info_steps + sum(1 for q in passed if not is_display_only(q))

        percent = round(current / total * 100, 1) if total > 0 else 0.0
        return Progress(current_step=current, total_steps=total, percent=percent)

    def trace(
        self,
        answers: dict[str, Any],
        respondent: RespondentInfo | None = None,
        max_steps: int = MAX_TRAVERSAL_STEPS,
    ) -> TraceResult:
        """Replay the forward path from the welcome screen for fixed answers.

        The same answers always produce the same path.  Stops at the first
        terminal position, blocked position, revisited question, or after
        ``max_steps`` moves.
        """
        position = self.start()
        positions = [position]
        visited: set[int] = set()

        for _ in range(max_steps):
            if not self.can_proceed(position, answers, respondent):
                return TraceResult(positions=positions, outcome="blocked")
            nxt = self.next(position, answers, respondent)
            positions.append(nxt)
            if nxt.is_terminal:
                return TraceResult(positions=positions, outcome="submitted")
            if nxt.kind == PositionKind.QUESTION:
                if nxt.index in visited:
                    logger.warning(
                        "survey %s: path revisits question %s; branch jumps form a cycle",
                        self._survey.id,
                        self._questions[nxt.index].id,
                    )
                    return TraceResult(positions=positions, outcome="cycle")
                visited.add(nxt.index)
            position = nxt

        return TraceResult(positions=positions, outcome="step_limit")

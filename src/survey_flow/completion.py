"""Per-question proceed checks and the submit-time completeness check.

:func:`can_proceed` gates every forward move of the navigator.  Display-only
questions always pass; optional questions always pass; a required question
passes once its answer is complete for its type:

    - LEGAL: the answer is exactly ``True``
    - ADDRESS: a non-blank ``street``
    - MATRIX: every row (option) rated
    - RANKING: every option ranked
    - CONSTANT_SUM: allocations sum exactly to the configured total
    - anything else: not absent, not ``""``, not ``[]``
"""

from __future__ import annotations

from typing import Any, Sequence

from survey_flow.answers import is_empty_answer
from survey_flow.constants import DEFAULT_CONSTANT_SUM_TOTAL, DISPLAY_ONLY_TYPES
from survey_flow.models.question import Question, QuestionType
from survey_flow.models.schema import RespondentInfo
from survey_flow.resolver import should_show


def is_display_only(question: Question) -> bool:
    """True for kinds that carry no answer (headers, statements, screens)."""
    return question.type.value in DISPLAY_ONLY_TYPES


def can_proceed(question: Question, answers: dict[str, Any]) -> bool:
    """Return True if the respondent may move forward past ``question``."""
    if is_display_only(question):
        return True
    if not question.required:
        return True

    answer = answers.get(question.id)
    qt = question.type

    if qt == QuestionType.LEGAL:
        return answer is True
    if qt == QuestionType.ADDRESS:
        return _address_complete(answer)
    if qt == QuestionType.MATRIX:
        return _matrix_complete(answer, question.options or [])
    if qt == QuestionType.RANKING:
        return isinstance(answer, list) and len(answer) == len(question.options or [])
    if qt == QuestionType.CONSTANT_SUM:
        return _constant_sum_complete(answer, _constant_sum_total(question))

    return not is_empty_answer(answer)


def respondent_info_complete(info: RespondentInfo | None) -> bool:
    """The contact form needs at least a plausible email address."""
    return info is not None and "@" in info.email


def missing_required(
    questions: Sequence[Question], answers: dict[str, Any]
) -> list[Question]:
    """Visible required questions that still have no answer.

    Hidden questions are exempt: skip logic removed them from the path.
    """
    missing = []
    for q in questions:
        if not q.required or is_display_only(q):
            continue
        if not should_show(q, answers):
            continue
        if is_empty_answer(answers.get(q.id)):
            missing.append(q)
    return missing


# ------------------------------------------------------------------
# Composite answer checks
# ------------------------------------------------------------------

def _address_complete(answer: Any) -> bool:
    if not isinstance(answer, dict):
        return False
    street = answer.get("street")
    return isinstance(street, str) and bool(street.strip())


def _matrix_complete(answer: Any, rows: list[str]) -> bool:
    if not isinstance(answer, dict):
        return False
    return all(answer.get(row) is not None for row in rows)


def _constant_sum_total(question: Question) -> float:
    total = question.settings.total if question.settings else None
    # A zero total is treated as unset
    return total or DEFAULT_CONSTANT_SUM_TOTAL


def _constant_sum_complete(answer: Any, total: float) -> bool:
    if not isinstance(answer, dict):
        return False
    try:
        allocated = sum(float(v) for v in answer.values())
    except (TypeError, ValueError):
        return False
    return allocated == total

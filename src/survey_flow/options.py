"""Carry-forward option filter.

A question whose option source is ``carry_forward`` takes its options from
an earlier question instead of its own list:

    - selected: the source options the respondent picked
    - not_selected: the source options the respondent did not pick
    - all: every source option, regardless of the answer

Any misconfiguration (disabled, no source id, source missing) falls back to
the question's own static options.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from survey_flow.answers import answer_to_string_list
from survey_flow.models.question import Question

logger = logging.getLogger(__name__)


def has_carry_forward(question: Question) -> bool:
    """True if the question has an enabled carry-forward with a source id."""
    source = question.option_source
    return (
        source is not None
        and source.type == "carry_forward"
        and source.carry_forward is not None
        and source.carry_forward.enabled
        and bool(source.carry_forward.source_question_id)
    )


def get_carry_forward_source(question: Question) -> Optional[str]:
    """Source question id of an enabled carry-forward, else None."""
    if not has_carry_forward(question):
        return None
    return question.option_source.carry_forward.source_question_id


def resolve_options(
    question: Question,
    questions: Sequence[Question],
    answers: dict[str, Any],
) -> list[str]:
    """Return the options to display for ``question`` given prior answers."""
    static = list(question.options or [])
    if not has_carry_forward(question):
        return static

    cf = question.option_source.carry_forward
    source = next((q for q in questions if q.id == cf.source_question_id), None)
    if source is None:
        logger.warning(
            "question %s carries options from unknown question %s; using static options",
            question.id,
            cf.source_question_id,
        )
        return static

    selected = answer_to_string_list(answers.get(source.id))
    pool = list(source.options or [])

    if cf.mode == "selected":
        # Ignore stale or invalid values that are not source options
        return [opt for opt in selected if opt in pool]
    if cf.mode == "not_selected":
        return [opt for opt in pool if opt not in selected]
    return pool

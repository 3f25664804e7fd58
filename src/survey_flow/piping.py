"""Answer piping — substitute ``{{questionId}}`` placeholders with prior answers.

Unanswered references render as a bracketed preview of the referenced
question's title, e.g. ``[Your name is very very lon...]``, so the text is
always displayable.
"""

from __future__ import annotations

import json
import re
from typing import Any, Sequence

from survey_flow.answers import answer_to_string
from survey_flow.constants import ADDRESS_FIELDS, PIPE_PLACEHOLDER_TITLE_CHARS
from survey_flow.models.question import Question

_PLACEHOLDER = re.compile(r"\{\{([^}]+)\}\}")


def pipe_answers(
    text: str | None,
    questions: Sequence[Question],
    answers: dict[str, Any],
) -> str | None:
    """Replace every ``{{questionId}}`` in ``text`` with a rendered answer."""
    if not text:
        return text

    def _substitute(match: re.Match) -> str:
        question_id = match.group(1).strip()
        return _render(question_id, questions, answers)

    return _PLACEHOLDER.sub(_substitute, text)


def has_answer_piping(text: str | None) -> bool:
    """True if ``text`` contains at least one placeholder."""
    if not text:
        return False
    return _PLACEHOLDER.search(text) is not None


def extract_piped_question_ids(text: str | None) -> list[str]:
    """Question ids referenced by placeholders, in order of appearance."""
    if not text:
        return []
    return [m.strip() for m in _PLACEHOLDER.findall(text)]


def _render(question_id: str, questions: Sequence[Question], answers: dict[str, Any]) -> str:
    answer = answers.get(question_id)

    if answer is None or answer == "":
        question = next((q for q in questions if q.id == question_id), None)
        name = question.title[:PIPE_PLACEHOLDER_TITLE_CHARS] if question else question_id
        return f"[{name}...]"

    if isinstance(answer, (list, tuple)):
        return ", ".join(answer_to_string(a) for a in answer)

    if isinstance(answer, dict):
        if "street" in answer:
            parts = [answer.get(f) for f in ADDRESS_FIELDS]
            return ", ".join(str(p) for p in parts if p)
        return json.dumps(answer, ensure_ascii=False)

    return answer_to_string(answer)

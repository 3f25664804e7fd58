"""Skip-logic and branch-logic resolvers plus index-scanning helpers.

Both resolvers look only at the question they are given.  They are pure
functions of (question, answers), so results are never cached: when a
respondent edits an earlier answer the next call simply sees the new
answers.

Index helpers return ``-1`` for "no such question", which the navigator
turns into the submit transition.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from survey_flow.evaluator import ConditionEvaluator
from survey_flow.models.action import BranchOutcome, EndAction, JumpAction, NextAction
from survey_flow.models.question import Question

logger = logging.getLogger(__name__)

_evaluator = ConditionEvaluator()


def should_show(question: Question, answers: dict[str, Any]) -> bool:
    """Return True if the question's skip logic lets it be shown.

    Disabled skip logic, or skip logic with no conditions, always shows.
    """
    skip = question.skip_logic
    if skip is None or not skip.enabled or not skip.conditions:
        return True
    return _evaluator.evaluate_all(skip.conditions, skip.logic, answers)


def resolve_branch(question: Question, answers: dict[str, Any]) -> BranchOutcome:
    """Decide what follows ``question``: next, jump, or end.

    Rules are scanned in authored order and the first satisfied rule's
    action is returned.  With no match the default action applies.
    """
    branch = question.branch_logic
    if branch is None or not branch.enabled or not branch.rules:
        return NextAction()

    for rule in branch.rules:
        if _evaluator.evaluate_all(rule.conditions, rule.logic, answers):
            return rule.action

    if branch.default_action == "end":
        return EndAction()
    return NextAction()


def get_visible_questions(
    questions: Sequence[Question], answers: dict[str, Any]
) -> list[Question]:
    """All questions whose skip logic currently permits display, in order."""
    return [q for q in questions if should_show(q, answers)]


def find_next_visible(
    questions: Sequence[Question], from_index: int, answers: dict[str, Any]
) -> int:
    """First visible index strictly after ``from_index``, or -1."""
    for i in range(from_index + 1, len(questions)):
        if should_show(questions[i], answers):
            return i
    return -1


def find_prev_visible(
    questions: Sequence[Question], from_index: int, answers: dict[str, Any]
) -> int:
    """Last visible index strictly before ``from_index``, or -1."""
    for i in range(min(from_index, len(questions)) - 1, -1, -1):
        if should_show(questions[i], answers):
            return i
    return -1


def find_next_question(
    questions: Sequence[Question], current_index: int, answers: dict[str, Any]
) -> int:
    """Next index to display after answering ``questions[current_index]``.

    Applies the current question's branch logic first:
      - end: -1 (submit)
      - jump: the target if visible, else the next visible after it;
        a dangling target falls through to the default forward scan
      - next: the next visible question after the current one

    Returns -1 when the survey should be submitted.
    """
    outcome = resolve_branch(questions[current_index], answers)

    if isinstance(outcome, EndAction):
        return -1

    if isinstance(outcome, JumpAction):
        target = _index_of(questions, outcome.target_question_id)
        if target != -1:
            if should_show(questions[target], answers):
                return target
            # Target hidden by its own skip logic: keep the branch's intent
            # and continue from the target, not from the current question.
            return find_next_visible(questions, target, answers)
        logger.warning(
            "question %s jumps to unknown question %s; continuing in sequence",
            questions[current_index].id,
            outcome.target_question_id,
        )

    return find_next_visible(questions, current_index, answers)


def _index_of(questions: Sequence[Question], question_id: str) -> int:
    for i, q in enumerate(questions):
        if q.id == question_id:
            return i
    return -1

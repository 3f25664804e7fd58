"""ConditionEvaluator — evaluates skip/branch conditions against prior answers.

A condition names a source question, an operator and a comparison value.
:meth:`ConditionEvaluator.evaluate` resolves one condition;
:meth:`ConditionEvaluator.combine` folds a list of results with ALL/ANY
semantics.

Evaluation never raises.  Missing or malformed answers make a condition
false ("not yet satisfied"), except for ``is_empty`` which is true for a
missing answer.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from survey_flow.answers import (
    answer_to_number,
    answer_to_string,
    is_empty_answer,
)
from survey_flow.models.question import SkipCondition

logger = logging.getLogger(__name__)


class ConditionEvaluator:
    """Evaluates single conditions and combines their results."""

    def evaluate(self, condition: SkipCondition, answers: dict[str, Any]) -> bool:
        """Evaluate one condition against the answers collected so far.

        Args:
            condition: the condition to test
            answers: prior answers keyed by question id

        Returns:
            True if the condition holds.
        """
        answer = answers.get(condition.question_id)
        op = condition.operator

        # Presence checks never look at condition.value
        if op == "is_empty":
            return is_empty_answer(answer)
        if op == "is_not_empty":
            return not is_empty_answer(answer)

        # A missing prior answer never satisfies a positive condition
        if answer is None:
            return False

        return self._compare(op, answer, condition.value)

    def combine(self, results: Iterable[bool], logic: str = "all") -> bool:
        """Fold condition results with ``all`` or ``any`` semantics.

        An empty ``all`` is vacuously true; an empty ``any`` is false.
        """
        if logic == "any":
            return any(results)
        return all(results)

    def evaluate_all(
        self,
        conditions: Iterable[SkipCondition],
        logic: str,
        answers: dict[str, Any],
    ) -> bool:
        """Evaluate every condition and combine the results."""
        return self.combine(
            (self.evaluate(c, answers) for c in conditions), logic
        )

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    @staticmethod
    def _compare(op: str, answer: Any, value: str) -> bool:
        """Apply an operator to a present answer.

        List answers test membership for equals/not_equals and are joined
        with ``,`` for every other operator.
        """
        if op == "equals":
            if isinstance(answer, (list, tuple)):
                return value in [answer_to_string(a) for a in answer]
            return answer_to_string(answer) == value

        if op == "not_equals":
            if isinstance(answer, (list, tuple)):
                return value not in [answer_to_string(a) for a in answer]
            return answer_to_string(answer) != value

        if op == "contains":
            return value.lower() in answer_to_string(answer).lower()

        # NaN on either side makes both comparisons false
        if op == "greater_than":
            return answer_to_number(answer) > answer_to_number(value)
        if op == "less_than":
            return answer_to_number(answer) < answer_to_number(value)

        logger.warning("Unknown condition operator: %s", op)
        return False

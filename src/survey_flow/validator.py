"""Authoring-time configuration checks.

These run before a survey is published, never on the respondent path.
Problems are reported as human-readable messages; nothing here raises for
a bad configuration.

Errors (block publishing):
  - question ids that repeat
  - branch logic conditions or jump targets naming unknown questions
  - carry-forward sources that are unset, unknown, option-less, or not
    strictly before the question using them

Warnings (advisory):
  - skip-logic conditions naming unknown, later, or self questions
  - duplicate options within a question
  - branch jumps that can loop
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Optional, Sequence

from survey_flow.graph import build_flow_graph, find_cycles
from survey_flow.models.action import JumpAction
from survey_flow.models.question import BranchLogic, Question
from survey_flow.models.validation import (
    ConfigIssue,
    SurveyValidationReport,
    ValidationResult,
)

logger = logging.getLogger(__name__)


def validate_branch_logic(
    branch_logic: Optional[BranchLogic], all_question_ids: Sequence[str]
) -> ValidationResult:
    """Check that every referenced question id exists.

    Jump direction is not checked: jumps may legally move backwards.
    """
    if branch_logic is None or not branch_logic.enabled:
        return ValidationResult()

    known = set(all_question_ids)
    errors: list[str] = []
    for rule in branch_logic.rules:
        for condition in rule.conditions:
            if condition.question_id not in known:
                errors.append(
                    f"Condition references non-existent question: {condition.question_id}"
                )
        if isinstance(rule.action, JumpAction) and rule.action.target_question_id not in known:
            errors.append(
                f"Jump target question does not exist: {rule.action.target_question_id}"
            )

    return ValidationResult(valid=not errors, errors=errors)


def validate_carry_forward(
    question: Question, questions: Sequence[Question]
) -> ValidationResult:
    """Check a carry-forward source: set, existing, has options, comes first."""
    source_cfg = question.option_source
    if source_cfg is None or source_cfg.type != "carry_forward":
        return ValidationResult()

    cf = source_cfg.carry_forward
    if cf is None or not cf.enabled:
        return ValidationResult()

    if not cf.source_question_id:
        return ValidationResult(
            valid=False, errors=["Carry-forward source question is not specified"]
        )

    ids = [q.id for q in questions]
    if cf.source_question_id not in ids:
        return ValidationResult(
            valid=False,
            errors=[f"Carry-forward source question does not exist: {cf.source_question_id}"],
        )

    source = questions[ids.index(cf.source_question_id)]
    if not source.options:
        return ValidationResult(
            valid=False, errors=["Carry-forward source question has no options"]
        )

    errors: list[str] = []
    current_index = ids.index(question.id) if question.id in ids else -1
    if ids.index(cf.source_question_id) >= current_index:
        errors.append("Carry-forward source question must come before the current question")

    return ValidationResult(valid=not errors, errors=errors)


def validate_survey(questions: Sequence[Question]) -> SurveyValidationReport:
    """Run every check over a full question list."""
    ids = [q.id for q in questions]
    # First occurrence wins, matching lookups by id
    position: dict[str, int] = {}
    for i, qid in enumerate(ids):
        position.setdefault(qid, i)
    errors: list[ConfigIssue] = []
    warnings: list[ConfigIssue] = []

    for qid, count in Counter(ids).items():
        if count > 1:
            errors.append(
                ConfigIssue(question_id=qid, kind="duplicate_id", message=f"Duplicate question id: {qid}")
            )

    for i, q in enumerate(questions):
        for msg in validate_branch_logic(q.branch_logic, ids).errors:
            errors.append(ConfigIssue(question_id=q.id, kind="branch_logic", message=msg))
        for msg in validate_carry_forward(q, questions).errors:
            errors.append(ConfigIssue(question_id=q.id, kind="carry_forward", message=msg))

        # Skip-logic references are not enforced, only flagged
        skip = q.skip_logic
        if skip is not None and skip.enabled:
            for condition in skip.conditions:
                ref = condition.question_id
                if ref not in position:
                    msg = f"Skip condition references non-existent question: {ref}"
                elif position[ref] >= i:
                    msg = f"Skip condition references a question that does not come before this one: {ref}"
                else:
                    continue
                warnings.append(ConfigIssue(question_id=q.id, kind="skip_logic", message=msg))

        for option, count in Counter(q.options or []).items():
            if count > 1:
                warnings.append(
                    ConfigIssue(question_id=q.id, kind="options", message=f"Duplicate option: {option}")
                )

    for cycle in find_cycles(build_flow_graph(questions)):
        loop = " -> ".join(cycle + [cycle[0]])
        logger.warning("Branch jumps can loop: %s", loop)
        warnings.append(
            ConfigIssue(question_id=cycle[0], kind="cycle", message=f"Branch jumps can loop: {loop}")
        )

    return SurveyValidationReport(valid=not errors, errors=errors, warnings=warnings)

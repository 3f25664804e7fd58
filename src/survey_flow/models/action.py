"""Action models for branch logic.

Actions define where the flow goes after a question is answered:
  - NextAction: continue with the next visible question in sequence
  - JumpAction: move to a specific question by id
  - EndAction: stop asking and treat the response as ready to submit

Branch rules may only carry a jump or an end; ``next`` exists solely as the
resolver's "no rule applied" outcome.  Both discriminated unions use the
``type`` field as their discriminator so YAML dicts deserialise directly.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class NextAction(BaseModel):
    """Continue with the next visible question."""

    type: Literal["next"] = "next"


class JumpAction(BaseModel):
    """Move to the question identified by ``target_question_id``."""

    type: Literal["jump"] = "jump"
    target_question_id: str


class EndAction(BaseModel):
    """End the questionnaire early."""

    type: Literal["end"] = "end"


# Actions an authored branch rule can carry.
BranchAction = Annotated[Union[JumpAction, EndAction], Field(discriminator="type")]

# Everything the branch resolver can return.
BranchOutcome = Annotated[
    Union[NextAction, JumpAction, EndAction], Field(discriminator="type")
]

"""Survey-level models.

These mirror the YAML files under ``surveys/``:

    - Survey: root container holding the ordered question list
    - RespondentInfo: contact details collected before the first question
      of a non-anonymous survey
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .question import Question


class Survey(BaseModel):
    """A published (or draft) questionnaire.

    ``is_anonymous`` controls whether the respondent-info screen is shown
    between the welcome screen and the first question.
    """

    id: str
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    is_anonymous: bool = True
    questions: List[Question] = []

    @property
    def question_ids(self) -> list[str]:
        return [q.id for q in self.questions]

    def index_of(self, question_id: str) -> int:
        """Position of ``question_id`` in the sequence, or -1 if absent."""
        for i, q in enumerate(self.questions):
            if q.id == question_id:
                return i
        return -1


class RespondentInfo(BaseModel):
    """Contact details for non-anonymous surveys."""

    email: str = ""
    name: Optional[str] = Field(default=None, max_length=200)

"""SurveyStore — loads survey definitions from YAML into typed models.

Each ``*.yaml`` file under the survey directory holds one survey.  The store
is loaded once at startup; surveys are treated as read-only afterwards
(published surveys never change while respondents answer them).

Usage::

    store = SurveyStore()           # defaults to surveys/ relative to repo root
    store.load()

    survey = store.get_survey("customer_feedback")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from survey_flow.models.schema import Survey

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------

def find_repo_root(start: Optional[Path] = None) -> Path:
    """Walk upwards from *start* to find the repo root (dir with pyproject.toml or .git).

    Falls back to cwd if no marker is found.
    """
    p = (start or Path(__file__).resolve()).parent
    for parent in [p, *p.parents]:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent
    return Path.cwd()


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


# ---------------------------------------------------------------------------
# SurveyStore
# ---------------------------------------------------------------------------

class SurveyStore:
    """Loads every survey YAML in a directory and provides lookup by id."""

    def __init__(self, survey_dir: str | Path | None = None) -> None:
        if survey_dir is None:
            survey_dir = find_repo_root() / "surveys"
        self._base = Path(survey_dir)
        # Populated by load(), in file-name order
        self.surveys: dict[str, Survey] = {}

    def load(self) -> None:
        """Parse all ``*.yaml`` files under the survey directory.

        Raises:
            FileNotFoundError: if the directory does not exist.
            ValueError: if a file is not a valid survey or an id repeats.
        """
        if not self._base.is_dir():
            raise FileNotFoundError(f"Missing survey directory: {self._base}")

        for path in sorted(self._base.glob("*.yaml")):
            survey = self._parse(path, load_yaml(path))
            if survey.id in self.surveys:
                raise ValueError(f"Duplicate survey id '{survey.id}' in {path.name}")
            self.surveys[survey.id] = survey

        logger.info("SurveyStore loaded %d surveys from %s", len(self.surveys), self._base)

    @staticmethod
    def _parse(path: Path, raw: Any) -> Survey:
        if not isinstance(raw, dict):
            raise ValueError(f"Survey file {path.name} must contain a mapping")
        # The file stem is the default id
        raw.setdefault("id", path.stem)
        try:
            return Survey(**raw)
        except ValidationError as exc:
            raise ValueError(f"Invalid survey in {path.name}: {exc}") from exc

    def add(self, survey: Survey) -> None:
        """Register a survey built in code (tests, embedding callers)."""
        self.surveys[survey.id] = survey

    def get_survey(self, survey_id: str) -> Survey:
        """Look up a survey by id.

        Raises:
            KeyError: if no survey has that id.
        """
        return self.surveys[survey_id]

    def list_surveys(self) -> list[Survey]:
        return list(self.surveys.values())

import pytest

from survey_flow.evaluator import ConditionEvaluator
from survey_flow.store import SurveyStore


@pytest.fixture
def evaluator():
    """Fresh ConditionEvaluator for each test."""
    return ConditionEvaluator()


@pytest.fixture(scope="session")
def store():
    """Load the repo's surveys/ directory once for the entire test session."""
    s = SurveyStore()
    s.load()
    return s


@pytest.fixture(scope="session")
def feedback(store):
    """The sample customer_feedback survey."""
    return store.get_survey("customer_feedback")

"""SurveyNavigator — forward/back movement, guards, progress and path replay.

Most flows are exercised against the sample ``customer_feedback`` survey:

    0 intro (header)   1 name   2 tools   3 favorite (carry-forward)
    4 satisfaction (< 3 jumps to complaint)   5 praise (shown if > 3)
    6 budget (constant sum)   7 complaint (shown if < 3; ends unless "refund")
    8 consent (legal)   9 thanks (end screen)
"""

import pytest

from survey_flow.models.schema import RespondentInfo
from survey_flow.models.session import Position, PositionKind
from survey_flow.navigator import SurveyNavigator

from helpers.factories import branch, cond, q, rule, skip, survey

RESPONDENT = RespondentInfo(email="ada@example.com", name="Ada")


def _happy_answers(satisfaction=5, **overrides):
    answers = {
        "name": "Ada",
        "tools": ["Figma", "Sketch"],
        "favorite": "Figma",
        "satisfaction": satisfaction,
        "praise": "Fast",
        "budget": {"Design": 50, "Research": 30, "Testing": 20},
        "consent": True,
    }
    answers.update(overrides)
    return answers


@pytest.fixture
def nav(feedback):
    return SurveyNavigator(feedback)


def _indices(positions):
    return [p.index for p in positions if p.kind == PositionKind.QUESTION]


# =====================================================================
# Pre-question screens
# =====================================================================


class TestEntryScreens:

    def test_start_is_welcome(self, nav):
        assert nav.start() == Position.welcome()

    def test_non_anonymous_shows_respondent_info(self, nav):
        assert nav.next(Position.welcome(), {}) == Position.respondent_info()

    def test_respondent_info_requires_email(self, nav):
        """The contact form blocks until the email contains '@'."""
        info = Position.respondent_info()
        assert nav.next(info, {}, RespondentInfo(email="ada")) == info
        assert nav.next(info, {}, RESPONDENT) == Position.at_question(0)

    def test_anonymous_goes_straight_to_first_question(self):
        nav = SurveyNavigator(survey(q("q1"), q("q2")))
        assert nav.next(Position.welcome(), {}) == Position.at_question(0)

    def test_first_question_hidden(self):
        nav = SurveyNavigator(
            survey(q("q1", skip_logic=skip(cond("q9", "equals", "x"))), q("q2"))
        )
        assert nav.next(Position.welcome(), {}) == Position.at_question(1)

    def test_all_hidden_submits(self):
        nav = SurveyNavigator(survey(q("q1", skip_logic=skip(cond("q9", "equals", "x")))))
        assert nav.next(Position.welcome(), {}) == Position.submitted()


# =====================================================================
# Forward movement
# =====================================================================


class TestForward:

    def test_required_blocks(self, nav):
        """Next is a no-op while a required answer is missing."""
        pos = Position.at_question(1)
        assert nav.can_proceed(pos, {}) is False
        assert nav.next(pos, {}) == pos

    def test_header_always_proceeds(self, nav):
        assert nav.next(Position.at_question(0), {}) == Position.at_question(1)

    def test_high_rating_shows_praise(self, nav):
        answers = _happy_answers(satisfaction=5)
        assert nav.next(Position.at_question(4), answers) == Position.at_question(5)

    def test_low_rating_jumps_to_complaint(self, nav):
        answers = _happy_answers(satisfaction=2)
        assert nav.next(Position.at_question(4), answers) == Position.at_question(7)

    def test_hidden_complaint_skipped(self, nav):
        answers = _happy_answers(satisfaction=5)
        assert nav.next(Position.at_question(6), answers) == Position.at_question(8)

    def test_branch_default_end(self, nav):
        """Complaint without 'refund' ends the survey via branch logic."""
        answers = _happy_answers(satisfaction=2, complaint="too slow")
        nxt = nav.next(Position.at_question(7), answers)
        assert nxt == Position.submitted(reason="branch_end")
        assert nxt.is_terminal

    def test_branch_rule_jump(self, nav):
        answers = _happy_answers(satisfaction=2, complaint="I want a REFUND")
        assert nav.next(Position.at_question(7), answers) == Position.at_question(8)

    def test_end_screen_submits(self, nav):
        nxt = nav.next(Position.at_question(9), _happy_answers())
        assert nxt == Position.submitted(reason="completed")

    def test_submitted_is_stuck(self, nav):
        pos = Position.submitted()
        assert nav.can_proceed(pos, {}) is False
        assert nav.next(pos, {}) == pos

    def test_jump_to_hidden_target(self):
        """A hidden jump target continues after the target, not after the jumper."""
        nav = SurveyNavigator(
            survey(
                q("q1", branch_logic=branch(rule(jump="q3"))),
                q("q2"),
                q("q3", skip_logic=skip(cond("q1", "equals", "show"))),
                q("q4"),
            )
        )
        assert nav.next(Position.at_question(0), {"q1": "x"}) == Position.at_question(3)

    def test_dangling_jump_continues(self):
        nav = SurveyNavigator(survey(q("q1", branch_logic=branch(rule(jump="gone"))), q("q2")))
        assert nav.next(Position.at_question(0), {}) == Position.at_question(1)

    def test_invalid_index_raises(self, nav):
        with pytest.raises(ValueError, match="Invalid question index"):
            nav.next(Position.at_question(42), {})


# =====================================================================
# Backward movement
# =====================================================================


class TestBackward:

    def test_back_skips_hidden(self, nav):
        """Back from consent with a high rating skips the hidden complaint."""
        answers = _happy_answers(satisfaction=5)
        assert nav.previous(Position.at_question(8), answers) == Position.at_question(6)

    def test_back_after_jump_uses_skip_logic_only(self, nav):
        """Back from complaint lands on budget, not on the question that jumped."""
        answers = _happy_answers(satisfaction=2)
        assert nav.previous(Position.at_question(7), answers) == Position.at_question(6)

    def test_back_from_first_question(self, nav):
        assert nav.previous(Position.at_question(0), {}) == Position.respondent_info()

    def test_back_from_first_question_anonymous(self):
        nav = SurveyNavigator(survey(q("q1")))
        assert nav.previous(Position.at_question(0), {}) == Position.welcome()

    def test_back_from_respondent_info(self, nav):
        assert nav.previous(Position.respondent_info(), {}) == Position.welcome()

    def test_back_from_welcome_is_noop(self, nav):
        assert nav.can_go_back(Position.welcome()) is False
        assert nav.previous(Position.welcome(), {}) == Position.welcome()

    def test_back_ignores_required(self, nav):
        """Backward moves are never blocked by an incomplete answer."""
        assert nav.previous(Position.at_question(2), {}) == Position.at_question(1)

    def test_forward_back_round_trip(self, nav):
        answers = _happy_answers()
        pos = Position.at_question(2)
        assert nav.previous(nav.next(pos, answers), answers) == pos


# =====================================================================
# Progress
# =====================================================================


class TestProgress:

    def test_counts_answerable_and_info_step(self, nav):
        """8 answerable questions plus the respondent-info step."""
        assert nav.progress(Position.welcome()).total_steps == 9
        assert nav.progress(Position.welcome()).current_step == 0
        assert nav.progress(Position.respondent_info()).current_step == 1

    def test_welcome_is_step_zero_before_info(self, nav):
        """The welcome screen precedes the respondent-info step."""
        welcome = nav.progress(Position.welcome())
        assert welcome.current_step == 0
        assert welcome.percent == 0.0

    def test_mid_survey(self, nav):
        p = nav.progress(Position.at_question(2))
        assert p.current_step == 3
        assert p.percent == round(3 / 9 * 100, 1)

    def test_submitted_is_complete(self, nav):
        p = nav.progress(Position.submitted(reason="branch_end"))
        assert p.current_step == p.total_steps
        assert p.percent == 100.0

    def test_empty_survey(self):
        p = SurveyNavigator(survey()).progress(Position.welcome())
        assert p.total_steps == 0
        assert p.percent == 0.0


# =====================================================================
# Path replay
# =====================================================================


class TestTrace:

    def test_happy_path(self, nav):
        result = nav.trace(_happy_answers(satisfaction=5), RESPONDENT)
        assert result.outcome == "submitted"
        assert result.positions[0] == Position.welcome()
        assert result.positions[1] == Position.respondent_info()
        assert _indices(result.positions) == [0, 1, 2, 3, 4, 5, 6, 8, 9]
        assert result.positions[-1] == Position.submitted(reason="completed")

    def test_complaint_path_ends_early(self, nav):
        answers = _happy_answers(satisfaction=2, complaint="too slow")
        result = nav.trace(answers, RESPONDENT)
        assert result.outcome == "submitted"
        assert _indices(result.positions) == [0, 1, 2, 3, 4, 7]
        assert result.positions[-1].reason == "branch_end"

    def test_refund_path(self, nav):
        answers = _happy_answers(satisfaction=2, complaint="refund please")
        result = nav.trace(answers, RESPONDENT)
        assert _indices(result.positions) == [0, 1, 2, 3, 4, 7, 8, 9]
        assert result.positions[-1].reason == "completed"

    def test_blocked(self, nav):
        answers = _happy_answers()
        del answers["budget"]
        result = nav.trace(answers, RESPONDENT)
        assert result.outcome == "blocked"
        assert result.positions[-1] == Position.at_question(6)

    def test_blocked_at_respondent_info(self, nav):
        result = nav.trace(_happy_answers())
        assert result.outcome == "blocked"
        assert result.positions[-1] == Position.respondent_info()

    def test_deterministic(self, nav):
        answers = _happy_answers(satisfaction=2, complaint="refund")
        assert nav.trace(answers, RESPONDENT) == nav.trace(answers, RESPONDENT)

    def test_cycle_detected(self, caplog):
        """A backward jump that always fires loops and is reported."""
        nav = SurveyNavigator(
            survey(q("q1"), q("q2", branch_logic=branch(rule(jump="q1"))), q("q3"))
        )
        with caplog.at_level("WARNING", logger="survey_flow.navigator"):
            result = nav.trace({})
        assert result.outcome == "cycle"
        assert _indices(result.positions) == [0, 1, 0]
        assert "cycle" in caplog.text

    def test_self_jump_is_cycle(self):
        nav = SurveyNavigator(survey(q("q1", branch_logic=branch(rule(jump="q1")))))
        assert nav.trace({}).outcome == "cycle"

    def test_step_limit(self):
        nav = SurveyNavigator(survey(q("q1"), q("q2"), q("q3")))
        result = nav.trace({}, max_steps=2)
        assert result.outcome == "step_limit"
        assert len(result.positions) == 3


class TestRoundTrip:

    def test_skip_only_flow(self):
        """N forward moves then N backward moves return to the start."""
        gate = skip(cond("q1", "equals", "yes"))
        nav = SurveyNavigator(
            survey(q("q1"), q("q2", skip_logic=gate), q("q3"), q("q4", skip_logic=gate), q("q5"))
        )
        for answers in ({"q1": "yes"}, {"q1": "no"}):
            start = Position.at_question(0)
            pos = start
            moves = 0
            while True:
                nxt = nav.next(pos, answers)
                if nxt.kind != PositionKind.QUESTION:
                    break
                pos = nxt
                moves += 1
            for _ in range(moves):
                pos = nav.previous(pos, answers)
            assert pos == start

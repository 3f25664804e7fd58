"""Answer coercion helpers."""

import math

import pytest

from survey_flow.answers import answer_to_number, answer_to_string, answer_to_string_list


class TestAnswerToNumber:

    @pytest.mark.parametrize(
        "value, expected",
        [
            (3, 3.0),
            (2.5, 2.5),
            ("10", 10.0),
            (" 7 ", 7.0),
            ("-1.5", -1.5),
            (".5", 0.5),
            ("1e3", 1000.0),
            ("0x10", 16.0),
            ("", 0.0),
            ("   ", 0.0),
            ([], 0.0),
            (["4"], 4.0),
        ],
    )
    def test_parses(self, value, expected):
        assert answer_to_number(value) == expected

    def test_infinity_spelling(self):
        assert answer_to_number("Infinity") == math.inf
        assert answer_to_number("-Infinity") == -math.inf

    @pytest.mark.parametrize(
        "value", [True, False, "abc", "1_000", "inf", "nan", "-0x10", "1,2", {"a": 1}, ["1", "2"]]
    )
    def test_not_a_number(self, value):
        assert math.isnan(answer_to_number(value))


class TestAnswerToString:

    def test_shapes(self):
        assert answer_to_string(None) == ""
        assert answer_to_string(True) == "true"
        assert answer_to_string(5.0) == "5"
        assert answer_to_string(2.5) == "2.5"
        assert answer_to_string(["a", 1]) == "a,1"

    def test_string_list(self):
        assert answer_to_string_list("x") == ["x"]
        assert answer_to_string_list(["x", 1]) == ["x"]
        assert answer_to_string_list({"x": 1}) == []

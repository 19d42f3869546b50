"""Tests for lead-quiz scoring, the question catalogue and the step flow."""

import pytest

from academy.quiz import (
    QUIZ_QUESTIONS,
    QuizFlow,
    calculate_result,
    format_capital,
    get_question,
    progress_percentage,
)
from academy.quiz.scoring import calculate_score, level_for_score, recommend


# ─────────────────────────────────────────────────────────────────
# Scoring
# ─────────────────────────────────────────────────────────────────


class TestScore:
    @pytest.mark.parametrize(
        "experience, expected",
        [("never", 0), ("months", 25), ("year_plus", 50), ("profitable", 80), (None, 0)],
    )
    def test_experience_points(self, experience, expected):
        assert calculate_score({"2": experience}) == expected

    def test_bonus_points(self):
        answers = {"2": "months", "5": "correct", "6": "hold_stop", "8": "advanced"}
        assert calculate_score(answers) == 25 + 10 + 10 + 15

    def test_wrong_answers_earn_nothing(self):
        assert calculate_score({"5": "wrong", "6": "move_stop", "8": "basic"}) == 0

    @pytest.mark.parametrize(
        "score, level",
        [
            (0, "einsteiger"),
            (19, "einsteiger"),
            (20, "fortgeschrittener_einsteiger"),
            (44, "fortgeschrittener_einsteiger"),
            (45, "erfahren"),
            (69, "erfahren"),
            (70, "fortgeschritten"),
            (115, "fortgeschritten"),
        ],
    )
    def test_level_boundaries(self, score, level):
        assert level_for_score(score) == level


class TestRecommendation:
    def test_beginner(self):
        rec = recommend("einsteiger", "500_plus")
        assert (rec.primary, rec.secondary) == ("free", "academy")

    def test_advanced_beginner(self):
        rec = recommend("fortgeschrittener_einsteiger", None)
        assert (rec.primary, rec.secondary) == ("academy", None)

    def test_experienced_with_big_budget(self):
        rec = recommend("erfahren", "500_plus")
        assert (rec.primary, rec.secondary) == ("elite", "academy")

    def test_experienced_with_small_budget(self):
        rec = recommend("erfahren", "100_500")
        assert (rec.primary, rec.secondary) == ("academy", "elite")

    def test_advanced(self):
        rec = recommend("fortgeschritten", None)
        assert (rec.primary, rec.secondary) == ("elite", None)


class TestCalculateResult:
    def test_full_result(self):
        result = calculate_result({"2": "year_plus", "11": "500_plus"})

        assert result.score == 50
        assert result.level == "erfahren"
        assert result.levelLabel == "Erfahrener Trader"
        assert result.strengths
        assert result.recommendation.primary == "elite"

    def test_empty_answers(self):
        result = calculate_result({})
        assert result.score == 0
        assert result.level == "einsteiger"

    def test_non_option_answers_score_nothing(self):
        result = calculate_result({"2": ["months"], "5": {"x": 1}, "8": 15, "11": ["500_plus"]})
        assert result.score == 0
        assert result.recommendation.primary == "free"


# ─────────────────────────────────────────────────────────────────
# Questions
# ─────────────────────────────────────────────────────────────────


class TestQuestions:
    def test_twelve_questions_in_order(self):
        assert [q.id for q in QUIZ_QUESTIONS] == list(range(1, 13))

    def test_question_types(self):
        assert get_question(4).type == "slider"
        assert get_question(5).type == "chart"
        assert get_question(9).type == "multi"
        assert get_question(12).type == "contact"

    def test_slider_config(self):
        slider = get_question(4).sliderConfig
        assert (slider.min, slider.max, slider.step) == (500, 50000, 500)

    def test_chart_question_has_feedback(self):
        assert get_question(5).feedback

    def test_unknown_question(self):
        assert get_question(13) is None

    @pytest.mark.parametrize(
        "value, label",
        [(500, "€500"), (12500, "€12.500"), (50000, "€50.000+"), (60000, "€50.000+")],
    )
    def test_capital_label(self, value, label):
        assert format_capital(value) == label


# ─────────────────────────────────────────────────────────────────
# Flow
# ─────────────────────────────────────────────────────────────────


class TestProgressPercentage:
    def test_fraction(self):
        assert progress_percentage(3, 12) == 25.0

    def test_empty_quiz(self):
        assert progress_percentage(0, 0) == 0.0


class TestQuizFlow:
    def test_starts_at_first_question(self):
        flow = QuizFlow()
        assert flow.is_first
        assert not flow.is_last
        assert flow.question.id == 1
        assert flow.progress == pytest.approx(100 / 12)

    def test_back_on_first_is_noop(self):
        flow = QuizFlow()
        flow.back()
        assert flow.index == 0

    def test_single_choice_needs_answer(self):
        flow = QuizFlow()
        assert not flow.can_proceed()
        flow.answer("wealth")
        assert flow.can_proceed()
        assert flow.answers == {"1": "wealth"}

    def test_slider_can_always_proceed(self):
        flow = QuizFlow()
        flow.index = 3
        assert flow.question.type == "slider"
        assert flow.can_proceed()

    def test_multi_needs_a_selection(self):
        flow = QuizFlow()
        flow.index = 8
        flow.answer([])
        assert not flow.can_proceed()
        flow.answer(["books"])
        assert flow.can_proceed()

    def test_contact_needs_name_and_email(self):
        flow = QuizFlow()
        flow.index = 11
        assert not flow.can_proceed()
        flow.set_contact("name", "Max")
        flow.set_contact("email", "max@example.com")
        assert flow.can_proceed()

    def test_unknown_contact_field(self):
        with pytest.raises(ValueError):
            QuizFlow().set_contact("address", "Hauptstraße 1")

    def test_walk_to_result(self):
        flow = QuizFlow()
        flow.answer("side_income")
        assert flow.next() is None
        flow.answer("profitable")
        for _ in range(10):
            assert flow.next() is None
        assert flow.is_last
        assert flow.progress == 100.0

        result = flow.next()

        assert result.score == 80
        assert result.level == "fortgeschritten"

    def test_back_keeps_answers(self):
        flow = QuizFlow()
        flow.answer("wealth")
        flow.next()
        flow.back()
        assert flow.question.id == 1
        assert flow.answers["1"] == "wealth"

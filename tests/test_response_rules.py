"""Tests for the ordered response rules of the quiz assistant."""

import pytest

from quizmaster_app.core.response_rules import DEFAULT_RULE_NAME, evaluate, generate_response
from quizmaster_app.core.scoring import score_quiz


@pytest.fixture
def one_wrong(three_question_quiz, fixed_clock):
    # q2 answered "Lyon" instead of "Paris".
    return score_quiz(three_question_quiz, {"q1": 1, "q2": 1, "q3": 2}, completed_at=fixed_clock())


@pytest.fixture
def all_right(three_question_quiz, fixed_clock):
    return score_quiz(three_question_quiz, {"q1": 1, "q2": 0, "q3": 2}, completed_at=fixed_clock())


class TestWrongAnswersRule:
    def test_reports_wrong_count(self, one_wrong, three_question_quiz):
        match = evaluate("What was wrong?", one_wrong, three_question_quiz)
        assert match.rule_name == "wrong_answers"
        assert "1 question(s) wrong." in match.text

    def test_incorrect_keyword_and_case(self, one_wrong, three_question_quiz):
        assert evaluate("Which were INCORRECT", one_wrong, three_question_quiz).rule_name == "wrong_answers"

    def test_congratulates_perfect_score(self, all_right, three_question_quiz):
        text = generate_response("anything wrong?", all_right, three_question_quiz)
        assert "Perfect score" in text

    def test_takes_precedence_over_question_number(self, one_wrong, three_question_quiz):
        assert evaluate("why was question 2 wrong", one_wrong, three_question_quiz).rule_name == "wrong_answers"


class TestQuestionNumberRule:
    def test_reports_correct_option_and_selection(self, one_wrong, three_question_quiz):
        match = evaluate("explain question 2", one_wrong, three_question_quiz)
        assert match.rule_name == "question_number"
        assert 'Question 2: "What is the capital of France?"' in match.text
        assert "The correct answer is: Paris" in match.text
        assert "You selected: Lyon" in match.text

    def test_right_answer_is_acknowledged(self, one_wrong, three_question_quiz):
        text = generate_response("Question 1 please", one_wrong, three_question_quiz)
        assert "The correct answer is: Tashkent" in text
        assert "You got this one right!" in text
        assert "You selected" not in text

    def test_uses_first_number(self, one_wrong, three_question_quiz):
        text = generate_response("question 3 or 1?", one_wrong, three_question_quiz)
        assert "Question 3:" in text

    @pytest.mark.parametrize("query", ["question 9", "question 0"])
    def test_out_of_range_falls_through_to_default(self, one_wrong, three_question_quiz, query):
        assert evaluate(query, one_wrong, three_question_quiz).rule_name == DEFAULT_RULE_NAME

    def test_out_of_range_falls_through_to_later_rule(self, one_wrong, three_question_quiz):
        assert evaluate("explain question 12", one_wrong, three_question_quiz).rule_name == "explain"


class TestRemainingRules:
    def test_explain(self, one_wrong, three_question_quiz):
        assert evaluate("Why is that?", one_wrong, three_question_quiz).rule_name == "explain"

    def test_improve_reports_percentage_and_band(self, one_wrong, three_question_quiz):
        match = evaluate("How can I do better", one_wrong, three_question_quiz)
        assert match.rule_name == "improve"
        assert "(67%)" in match.text
        assert "good understanding" in match.text
        assert "• Take your time to read each question carefully" in match.text

    def test_improve_excellent(self, all_right, three_question_quiz):
        assert "excellent understanding" in generate_response("improve", all_right, three_question_quiz)

    def test_study(self, one_wrong, three_question_quiz):
        match = evaluate("Any resources?", one_wrong, three_question_quiz)
        assert match.rule_name == "study"
        assert "study recommendations" in match.text

    def test_default_lists_examples(self, one_wrong, three_question_quiz):
        match = evaluate("hello there", one_wrong, three_question_quiz)
        assert match.rule_name == DEFAULT_RULE_NAME
        assert "'How can I improve my score?'" in match.text

"""Tests for quiz authoring and the simulated AI generator."""

import pytest

from quizmaster_app.core.errors import QuizValidationError
from quizmaster_app.core.quiz_generator import generate_questions
from quizmaster_app.core.services.quiz_builder import QuizBuilder
from quizmaster_app.core.services.quiz_repository import QuizRepository


@pytest.fixture
def repository(store):
    return QuizRepository(store)


@pytest.fixture
def builder(repository):
    return QuizBuilder(repository)


def _fill_question(builder, text, options, correct):
    question = builder.add_question(option_count=len(options))
    builder.update_question_text(question.id, text)
    for index, option in enumerate(options):
        builder.update_option(question.id, index, option)
    builder.set_correct_option(question.id, correct)
    return question


def test_manual_quiz_is_saved(builder, repository):
    builder.set_title("  Python Basics ")
    builder.set_description("Warm-up")
    builder.add_tag(" python ")
    _fill_question(builder, "Which keyword defines a function?", ["func", " def ", "fn"], 1)

    saved = builder.save()

    assert saved.title == "Python Basics"
    assert saved.tags == ["python"]
    assert saved.questions[0].options == ["func", "def", "fn"]
    assert saved.created_at is not None
    assert repository.get_quiz(saved.id).questions[0].correct_option_index == 1


def test_second_save_replaces_in_place(builder, repository):
    builder.set_title("Draft")
    _fill_question(builder, "Yes?", ["yes", "no"], 0)
    first = builder.save()
    builder.set_title("Final")
    second = builder.save()

    assert second.id == first.id
    assert [q.title for q in repository.list_quizzes()] == ["Final"]


def test_new_question_defaults(builder):
    question = builder.add_question()
    assert question.question_text == ""
    assert question.options == ["", "", "", ""]
    assert question.correct_option_index == 0


@pytest.mark.parametrize("option_count", [1, 7])
def test_option_count_bounds(builder, option_count):
    with pytest.raises(QuizValidationError):
        builder.add_question(option_count=option_count)


def test_save_requires_title(builder):
    _fill_question(builder, "Q?", ["a", "b"], 0)
    with pytest.raises(QuizValidationError, match="title"):
        builder.save()


def test_save_requires_questions(builder):
    builder.set_title("Empty")
    with pytest.raises(QuizValidationError, match="at least one question"):
        builder.save()


def test_save_rejects_blank_options(builder):
    builder.set_title("Blank")
    builder.add_question()
    question = builder.draft.questions[0]
    builder.update_question_text(question.id, "Something?")
    with pytest.raises(QuizValidationError, match="empty option"):
        builder.save()


def test_tags_are_unique_and_removable(builder):
    assert builder.add_tag("math") is True
    assert builder.add_tag("math") is False
    assert builder.add_tag("   ") is False
    builder.remove_tag("math")
    assert builder.draft.tags == []


def test_remove_question_and_unknown_ids(builder):
    question = builder.add_question()
    builder.remove_question(question.id)
    assert builder.draft.questions == []
    with pytest.raises(QuizValidationError):
        builder.update_question_text(question.id, "gone")


def test_generate_with_ai_fills_metadata(builder):
    generated = builder.generate_with_ai("Biology", 3)

    assert len(generated) == 3
    assert builder.draft.title == "Biology Quiz"
    assert builder.draft.description == "AI-generated quiz about Biology"
    assert builder.draft.tags == ["biology"]
    saved = builder.save()
    assert saved.question_count == 3


def test_generate_with_ai_keeps_existing_metadata(builder):
    builder.set_title("My Quiz")
    builder.add_tag("biology")
    builder.generate_with_ai("Biology", 1)
    assert builder.draft.title == "My Quiz"
    assert builder.draft.tags == ["biology"]


def test_edit_existing_quiz(repository, three_question_quiz):
    repository.save_quiz(three_question_quiz)
    builder = QuizBuilder.for_existing(repository, "quiz-geo")
    builder.remove_question("q2")
    builder.save()

    assert [q.id for q in repository.get_quiz("quiz-geo").questions] == ["q1", "q3"]
    assert three_question_quiz.question_count == 3


class TestGenerator:
    def test_template_questions(self):
        questions = generate_questions(" History ", 2)
        assert questions[0].question_text == "What is the most important concept in History? (Question 1)"
        assert questions[1].options[0] == "Primary concept of History"
        assert all(q.correct_option_index == 0 for q in questions)
        assert len({q.id for q in questions}) == 2

    @pytest.mark.parametrize("topic,count", [("", 5), ("Math", 0), ("Math", 21)])
    def test_invalid_input(self, topic, count):
        with pytest.raises(QuizValidationError):
            generate_questions(topic, count)

"""
Pytest configuration and fixtures for QuizMaster tests.
"""
from datetime import datetime, timezone

import pytest

from quizmaster_app.core.models import Quiz, QuizQuestion
from quizmaster_app.core.services.key_value_store import InMemoryKeyValueStore
from quizmaster_app.core.services.quiz_session import QuizSession

FIXED_NOW = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def three_question_quiz():
    """Three questions whose correct answers sit at indices 1, 0 and 2."""
    return Quiz(
        id="quiz-geo",
        title="World Capitals",
        description="Capitals of a few countries",
        tags=["geography"],
        questions=[
            QuizQuestion(
                id="q1",
                question_text="What is the capital of Uzbekistan?",
                options=["Samarkand", "Tashkent", "Bukhara", "Khiva"],
                correct_option_index=1,
            ),
            QuizQuestion(
                id="q2",
                question_text="What is the capital of France?",
                options=["Paris", "Lyon"],
                correct_option_index=0,
            ),
            QuizQuestion(
                id="q3",
                question_text="What is the capital of Japan?",
                options=["Osaka", "Kyoto", "Tokyo"],
                correct_option_index=2,
            ),
        ],
    )


@pytest.fixture
def two_question_quiz():
    return Quiz(
        id="quiz-js",
        title="JavaScript Fundamentals",
        description="Test your knowledge of JavaScript basics",
        questions=[
            QuizQuestion(id="a", question_text="Declare a variable?", options=["var x = 5;", "variable x = 5;"], correct_option_index=0),
            QuizQuestion(id="b", question_text="Append to an array?", options=["pop()", "push()"], correct_option_index=1),
        ],
    )


@pytest.fixture
def session(three_question_quiz, fixed_clock):
    """Started session with auto-ticking disabled."""
    return QuizSession.begin(three_question_quiz, clock=fixed_clock, auto_tick=False)

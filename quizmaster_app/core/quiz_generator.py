"""Simulated AI question generator used by the quiz builder.

No model is called; questions are filled from a fixed template so authors can
try the workflow offline.
"""

from __future__ import annotations

from uuid import uuid4

from quizmaster_app.constants.quiz_constants import AI_MAX_QUESTION_COUNT, AI_MIN_QUESTION_COUNT
from quizmaster_app.core.errors import QuizValidationError
from quizmaster_app.core.models import QuizQuestion


def generate_questions(topic: str, count: int) -> list[QuizQuestion]:
    """Return ``count`` template questions about ``topic``."""

    cleaned_topic = topic.strip()
    if not cleaned_topic:
        raise QuizValidationError("Please enter a topic for AI generation.")
    if not AI_MIN_QUESTION_COUNT <= count <= AI_MAX_QUESTION_COUNT:
        raise QuizValidationError(
            f"Question count must be between {AI_MIN_QUESTION_COUNT} and {AI_MAX_QUESTION_COUNT}."
        )

    batch = uuid4().hex[:8]
    return [
        QuizQuestion(
            id=f"ai-{batch}-{i}",
            question_text=f"What is the most important concept in {cleaned_topic}? (Question {i + 1})",
            options=[
                f"Primary concept of {cleaned_topic}",
                f"Secondary aspect of {cleaned_topic}",
                f"Advanced technique in {cleaned_topic}",
                f"Basic principle of {cleaned_topic}",
            ],
            correct_option_index=0,
        )
        for i in range(count)
    ]

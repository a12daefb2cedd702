"""Scoring of a finished quiz attempt."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
import math

from quizmaster_app.constants.quiz_constants import EXCELLENT_THRESHOLD, GOOD_THRESHOLD
from quizmaster_app.core.errors import IncompleteSubmissionError
from quizmaster_app.core.models import AnswerRecord, Quiz, QuizResult
from quizmaster_app.utils.clock import utc_now


def score_quiz(
    quiz: Quiz,
    selections: Mapping[str, int],
    completed_at: datetime | None = None,
    time_taken_seconds: int | None = None,
) -> QuizResult:
    """Score ``selections`` (question id -> option index) against ``quiz``.

    Answers follow the quiz's question order. Only exact index equality counts
    as correct; there is no partial credit.
    """

    missing = [q.id for q in quiz.questions if q.id not in selections]
    if missing:
        raise IncompleteSubmissionError(missing)

    answers = tuple(
        AnswerRecord(
            question_id=question.id,
            selected_option_index=selections[question.id],
            is_correct=selections[question.id] == question.correct_option_index,
        )
        for question in quiz.questions
    )
    return QuizResult(
        quiz_id=quiz.id,
        score=sum(1 for answer in answers if answer.is_correct),
        total_questions=len(quiz.questions),
        completed_at=completed_at or utc_now(),
        answers=answers,
        time_taken_seconds=time_taken_seconds,
    )


def score_percent(score: int, total: int) -> int:
    """Percentage rounded half up, 0 for an empty total."""
    if total <= 0:
        return 0
    return math.floor(score / total * 100 + 0.5)


def performance_band(score: int, total: int) -> str:
    if total > 0 and score >= total * EXCELLENT_THRESHOLD:
        return "excellent"
    if total > 0 and score >= total * GOOD_THRESHOLD:
        return "good"
    return "developing"


def percent_band(percent: int) -> str:
    """Band for an already rounded percentage, as shown on the result screen."""
    if percent >= round(EXCELLENT_THRESHOLD * 100):
        return "excellent"
    if percent >= round(GOOD_THRESHOLD * 100):
        return "good"
    return "developing"

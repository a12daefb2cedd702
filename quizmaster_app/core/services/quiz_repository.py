"""Service for managing the global quiz catalog."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from quizmaster_app.constants.storage_constants import QUIZZES_KEY
from quizmaster_app.core.errors import QuizNotFoundError, QuizValidationError
from quizmaster_app.core.models import Quiz, QuizQuestion
from quizmaster_app.core.schemas import QuizRecord
from quizmaster_app.core.services.json_collection import load_collection, save_collection
from quizmaster_app.core.services.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


def demo_quizzes() -> list[Quiz]:
    """Quizzes written to an empty catalog so learners have something to take."""
    return [
        Quiz(
            id="mock-1",
            title="JavaScript Fundamentals",
            description="Test your knowledge of JavaScript basics",
            tags=["javascript", "programming", "web-development"],
            questions=[
                QuizQuestion(
                    id="q1",
                    question_text="What is the correct way to declare a variable in JavaScript?",
                    options=["var myVar = 5;", "variable myVar = 5;", "v myVar = 5;", "declare myVar = 5;"],
                    correct_option_index=0,
                ),
                QuizQuestion(
                    id="q2",
                    question_text="Which method is used to add an element to the end of an array?",
                    options=["push()", "pop()", "shift()", "unshift()"],
                    correct_option_index=0,
                ),
            ],
            created_at="2024-01-15",
            attempts=24,
        ),
        Quiz(
            id="mock-2",
            title="React Basics",
            description="Understanding React components and hooks",
            tags=["react", "javascript", "frontend"],
            questions=[
                QuizQuestion(
                    id="q3",
                    question_text="What is JSX?",
                    options=["JavaScript XML", "Java Syntax Extension", "JSON XML", "JavaScript Extension"],
                    correct_option_index=0,
                ),
            ],
            created_at="2024-01-20",
            attempts=18,
        ),
    ]


class QuizRepository:
    """Loads and persists the quiz collection stored under a single key."""

    def __init__(self, store: KeyValueStore, key: str = QUIZZES_KEY) -> None:
        self._store = store
        self._key = key

    def list_quizzes(self) -> list[Quiz]:
        return [record.to_domain() for record in load_collection(self._store, self._key, QuizRecord)]

    def ensure_seeded(self) -> list[Quiz]:
        """Write the demo quizzes when the catalog is empty and return the catalog."""
        quizzes = self.list_quizzes()
        if quizzes:
            return quizzes
        quizzes = demo_quizzes()
        self._write(quizzes)
        logger.info("Seeded empty quiz catalog with %d demo quizzes", len(quizzes))
        return quizzes

    def has_quizzes(self) -> bool:
        return bool(self.list_quizzes())

    def get_quiz(self, quiz_id: str) -> Quiz:
        quiz = next((q for q in self.list_quizzes() if q.id == quiz_id), None)
        if quiz is None:
            raise QuizNotFoundError(f"Quiz {quiz_id!r} does not exist.")
        return quiz

    def save_quiz(self, quiz: Quiz) -> Quiz:
        """Insert ``quiz`` or replace the stored quiz with the same id."""
        quizzes = self.list_quizzes()
        index = next((i for i, q in enumerate(quizzes) if q.id == quiz.id), None)
        if index is None:
            quizzes.append(quiz)
        else:
            quizzes[index] = quiz
        self._write(quizzes)
        logger.info("Saved quiz %s (%d questions)", quiz.id, quiz.question_count)
        return quiz

    def delete_quiz(self, quiz_id: str) -> bool:
        quizzes = self.list_quizzes()
        remaining = [q for q in quizzes if q.id != quiz_id]
        if len(remaining) == len(quizzes):
            return False
        self._write(remaining)
        logger.info("Deleted quiz %s", quiz_id)
        return True

    def search(self, search_term: str = "", tag: str = "") -> list[Quiz]:
        """Filter by title/description substring (case-insensitive) and exact tag."""
        needle = search_term.strip().lower()
        return [
            quiz
            for quiz in self.list_quizzes()
            if (needle in quiz.title.lower() or needle in quiz.description.lower())
            and (not tag or tag in quiz.tags)
        ]

    def all_tags(self) -> list[str]:
        tags: list[str] = []
        for quiz in self.list_quizzes():
            for tag in quiz.tags:
                if tag not in tags:
                    tags.append(tag)
        return tags

    def _write(self, quizzes: list[Quiz]) -> None:
        try:
            records = [QuizRecord.from_domain(quiz) for quiz in quizzes]
        except ValidationError as exc:
            raise QuizValidationError(str(exc)) from exc
        save_collection(self._store, self._key, records)

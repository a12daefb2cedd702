"""Domain models for the quiz application."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


@dataclass(slots=True)
class QuizQuestion:
    """Multiple-choice question with two or more options."""

    id: str
    question_text: str
    options: list[str]
    correct_option_index: int


@dataclass(slots=True)
class Quiz:
    """Ordered set of questions with a title and description."""

    id: str
    title: str
    description: str
    questions: list[QuizQuestion]
    tags: list[str] = field(default_factory=list)
    created_at: str | None = None
    attempts: int = 0

    @property
    def question_count(self) -> int:
        return len(self.questions)

    def question_by_id(self, question_id: str) -> QuizQuestion | None:
        return next((q for q in self.questions if q.id == question_id), None)


@dataclass(frozen=True, slots=True)
class AnswerRecord:
    """A learner's final choice for one question, as scored on submission."""

    question_id: str
    selected_option_index: int
    is_correct: bool


@dataclass(frozen=True, slots=True)
class QuizResult:
    """Immutable outcome of a submitted quiz session."""

    quiz_id: str
    score: int
    total_questions: int
    completed_at: datetime
    answers: tuple[AnswerRecord, ...]
    time_taken_seconds: int | None = None

    @property
    def wrong_count(self) -> int:
        return sum(1 for answer in self.answers if not answer.is_correct)

    def answer_for(self, question_id: str) -> AnswerRecord | None:
        return next((a for a in self.answers if a.question_id == question_id), None)


@dataclass(slots=True)
class UserAccount:
    """Mock account of a learner or an administrator."""

    id: str
    email: str
    name: str
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN


@dataclass(slots=True)
class ChatMessage:
    """Single entry in the assistant conversation."""

    id: str
    content: str
    is_bot: bool
    timestamp: datetime

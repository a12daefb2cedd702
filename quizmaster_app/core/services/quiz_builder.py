"""Service for authoring a quiz before it is saved to the catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
import logging
from pathlib import Path
from uuid import uuid4

from quizmaster_app.constants.quiz_constants import (
    AI_DEFAULT_QUESTION_COUNT,
    DEFAULT_OPTION_COUNT,
    MAX_OPTION_COUNT,
    MIN_OPTION_COUNT,
)
from quizmaster_app.core.errors import QuizValidationError
from quizmaster_app.core.models import Quiz, QuizQuestion
from quizmaster_app.core.quiz_exporter import save_quiz_to_file
from quizmaster_app.core.quiz_generator import generate_questions
from quizmaster_app.core.quiz_importer import load_quiz_from_file
from quizmaster_app.core.services.quiz_repository import QuizRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class QuizDraft:
    """Editable quiz; unlike a stored Quiz it may be incomplete."""

    id: str = ""
    title: str = ""
    description: str = ""
    tags: list[str] = field(default_factory=list)
    questions: list[QuizQuestion] = field(default_factory=list)
    created_at: str | None = None
    attempts: int = 0

    @classmethod
    def from_quiz(cls, quiz: Quiz) -> QuizDraft:
        return cls(
            id=quiz.id,
            title=quiz.title,
            description=quiz.description,
            tags=list(quiz.tags),
            questions=[
                QuizQuestion(q.id, q.question_text, list(q.options), q.correct_option_index)
                for q in quiz.questions
            ],
            created_at=quiz.created_at,
            attempts=quiz.attempts,
        )


class QuizBuilder:
    """Edits a QuizDraft and saves it through the QuizRepository."""

    def __init__(self, repository: QuizRepository, draft: QuizDraft | None = None) -> None:
        self._repository = repository
        self._draft = draft or QuizDraft()

    @classmethod
    def for_existing(cls, repository: QuizRepository, quiz_id: str) -> QuizBuilder:
        return cls(repository, QuizDraft.from_quiz(repository.get_quiz(quiz_id)))

    @property
    def draft(self) -> QuizDraft:
        return self._draft

    # --- Metadata ---

    def set_title(self, title: str) -> None:
        self._draft.title = title

    def set_description(self, description: str) -> None:
        self._draft.description = description

    def add_tag(self, tag: str) -> bool:
        cleaned = tag.strip()
        if not cleaned or cleaned in self._draft.tags:
            return False
        self._draft.tags.append(cleaned)
        return True

    def remove_tag(self, tag: str) -> None:
        self._draft.tags = [t for t in self._draft.tags if t != tag]

    # --- Questions ---

    def add_question(self, option_count: int = DEFAULT_OPTION_COUNT) -> QuizQuestion:
        if not MIN_OPTION_COUNT <= option_count <= MAX_OPTION_COUNT:
            raise QuizValidationError(
                f"A question needs between {MIN_OPTION_COUNT} and {MAX_OPTION_COUNT} options."
            )
        question = QuizQuestion(
            id=uuid4().hex,
            question_text="",
            options=[""] * option_count,
            correct_option_index=0,
        )
        self._draft.questions.append(question)
        return question

    def update_question_text(self, question_id: str, text: str) -> None:
        self._question(question_id).question_text = text

    def update_option(self, question_id: str, option_index: int, text: str) -> None:
        question = self._question(question_id)
        if not 0 <= option_index < len(question.options):
            raise QuizValidationError(f"Option {option_index} does not exist.")
        question.options[option_index] = text

    def set_correct_option(self, question_id: str, option_index: int) -> None:
        question = self._question(question_id)
        if not 0 <= option_index < len(question.options):
            raise QuizValidationError(f"Option {option_index} does not exist.")
        question.correct_option_index = option_index

    def remove_question(self, question_id: str) -> None:
        self._draft.questions = [q for q in self._draft.questions if q.id != question_id]

    def generate_with_ai(self, topic: str, count: int = AI_DEFAULT_QUESTION_COUNT) -> list[QuizQuestion]:
        """Append simulated AI questions and fill in blank metadata from the topic."""
        generated = generate_questions(topic, count)
        cleaned_topic = topic.strip()
        self._draft.questions.extend(generated)
        if not self._draft.title:
            self._draft.title = f"{cleaned_topic} Quiz"
        if not self._draft.description:
            self._draft.description = f"AI-generated quiz about {cleaned_topic}"
        self.add_tag(cleaned_topic.lower())
        logger.info("Generated %d questions about %s", len(generated), cleaned_topic)
        return generated

    # --- Files ---

    def import_file(self, file_path: Path) -> int:
        """Append questions from a text quiz file; blank metadata is taken from its header."""
        imported = load_quiz_from_file(file_path)
        existing_ids = {q.id for q in self._draft.questions}
        for question in imported.questions:
            if question.id in existing_ids:
                question.id = uuid4().hex
            self._draft.questions.append(question)
        if not self._draft.title:
            self._draft.title = imported.title
        if not self._draft.description:
            self._draft.description = imported.description
        for tag in imported.tags:
            self.add_tag(tag)
        return len(imported.questions)

    def export_file(self, file_path: Path) -> None:
        save_quiz_to_file(file_path, self._validated_quiz(self._draft.id or "draft"))

    # --- Saving ---

    def save(self) -> Quiz:
        """Validate the draft and insert or replace it in the catalog."""
        quiz = self._validated_quiz(self._draft.id or uuid4().hex)
        if quiz.created_at is None:
            quiz.created_at = date.today().isoformat()
        self._repository.save_quiz(quiz)
        self._draft.id = quiz.id
        self._draft.created_at = quiz.created_at
        return quiz

    def _validated_quiz(self, quiz_id: str) -> Quiz:
        title = self._draft.title.strip()
        if not title:
            raise QuizValidationError("Please enter a quiz title.")
        if not self._draft.questions:
            raise QuizValidationError("Please add at least one question.")
        return Quiz(
            id=quiz_id,
            title=title,
            description=self._draft.description.strip(),
            questions=[self._prepare_question(q, n) for n, q in enumerate(self._draft.questions, 1)],
            tags=list(self._draft.tags),
            created_at=self._draft.created_at,
            attempts=self._draft.attempts,
        )

    @staticmethod
    def _prepare_question(question: QuizQuestion, number: int) -> QuizQuestion:
        cleaned_text = question.question_text.strip()
        if not cleaned_text:
            raise QuizValidationError(f"Question {number} text must not be empty.")
        options = [option.strip() for option in question.options]
        if len(options) < MIN_OPTION_COUNT:
            raise QuizValidationError(f"Question {number} needs at least {MIN_OPTION_COUNT} options.")
        if any(not option for option in options):
            raise QuizValidationError(f"Question {number} has an empty option.")
        if not 0 <= question.correct_option_index < len(options):
            raise QuizValidationError(f"Question {number} has no valid correct option.")
        return QuizQuestion(
            id=question.id,
            question_text=cleaned_text,
            options=options,
            correct_option_index=question.correct_option_index,
        )

    def _question(self, question_id: str) -> QuizQuestion:
        question = next((q for q in self._draft.questions if q.id == question_id), None)
        if question is None:
            raise QuizValidationError(f"Question {question_id!r} is not part of this quiz.")
        return question

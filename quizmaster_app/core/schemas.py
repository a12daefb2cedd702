"""Pydantic records validating JSON collections at the storage boundary.

Stored blobs keep the camelCase keys of the browser-era data. Records are
validated strictly here and converted into the dataclasses of
``quizmaster_app.core.models``; scoring and session code never sees
unvalidated payloads.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from quizmaster_app.constants.quiz_constants import MIN_OPTION_COUNT
from quizmaster_app.core.models import (
    AnswerRecord,
    Quiz,
    QuizQuestion,
    QuizResult,
    UserAccount,
    UserRole,
)


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class QuestionRecord(_Record):
    id: str = Field(min_length=1)
    question: str
    options: list[str] = Field(min_length=MIN_OPTION_COUNT)
    correct_answer: int = Field(alias="correctAnswer", ge=0)

    @model_validator(mode="after")
    def _check_correct_answer(self) -> QuestionRecord:
        if self.correct_answer >= len(self.options):
            raise ValueError(
                f"correctAnswer {self.correct_answer} is outside the {len(self.options)} options"
            )
        return self

    def to_domain(self) -> QuizQuestion:
        return QuizQuestion(
            id=self.id,
            question_text=self.question,
            options=list(self.options),
            correct_option_index=self.correct_answer,
        )

    @classmethod
    def from_domain(cls, question: QuizQuestion) -> QuestionRecord:
        return cls(
            id=question.id,
            question=question.question_text,
            options=list(question.options),
            correct_answer=question.correct_option_index,
        )


class QuizRecord(_Record):
    id: str = Field(min_length=1)
    title: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    questions: list[QuestionRecord] = Field(default_factory=list)
    created_at: str | None = Field(default=None, alias="createdAt")
    attempts: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_unique_question_ids(self) -> QuizRecord:
        ids = [q.id for q in self.questions]
        if len(ids) != len(set(ids)):
            raise ValueError(f"quiz {self.id!r} has duplicate question ids")
        return self

    def to_domain(self) -> Quiz:
        return Quiz(
            id=self.id,
            title=self.title,
            description=self.description,
            questions=[q.to_domain() for q in self.questions],
            tags=list(self.tags),
            created_at=self.created_at,
            attempts=self.attempts,
        )

    @classmethod
    def from_domain(cls, quiz: Quiz) -> QuizRecord:
        return cls(
            id=quiz.id,
            title=quiz.title,
            description=quiz.description,
            tags=list(quiz.tags),
            questions=[QuestionRecord.from_domain(q) for q in quiz.questions],
            created_at=quiz.created_at,
            attempts=quiz.attempts,
        )


class AnswerRecordModel(_Record):
    question_id: str = Field(alias="questionId", min_length=1)
    selected_answer: int = Field(alias="selectedAnswer", ge=0)
    correct: bool


class ResultRecord(_Record):
    quiz_id: str = Field(alias="quizId", min_length=1)
    score: int = Field(ge=0)
    total_questions: int = Field(alias="totalQuestions", ge=0)
    completed_at: datetime = Field(alias="completedAt")
    answers: list[AnswerRecordModel]
    time_taken: int | None = Field(default=None, alias="timeTaken", ge=0)

    @model_validator(mode="after")
    def _check_score(self) -> ResultRecord:
        if len(self.answers) != self.total_questions:
            raise ValueError("totalQuestions does not match the number of answers")
        if self.score != sum(1 for a in self.answers if a.correct):
            raise ValueError("score does not match the number of correct answers")
        return self

    def to_domain(self) -> QuizResult:
        return QuizResult(
            quiz_id=self.quiz_id,
            score=self.score,
            total_questions=self.total_questions,
            completed_at=self.completed_at,
            answers=tuple(
                AnswerRecord(
                    question_id=a.question_id,
                    selected_option_index=a.selected_answer,
                    is_correct=a.correct,
                )
                for a in self.answers
            ),
            time_taken_seconds=self.time_taken,
        )

    @classmethod
    def from_domain(cls, result: QuizResult) -> ResultRecord:
        return cls(
            quiz_id=result.quiz_id,
            score=result.score,
            total_questions=result.total_questions,
            completed_at=result.completed_at,
            answers=[
                AnswerRecordModel(
                    question_id=a.question_id,
                    selected_answer=a.selected_option_index,
                    correct=a.is_correct,
                )
                for a in result.answers
            ],
            time_taken=result.time_taken_seconds,
        )


class UserRecord(_Record):
    id: str = Field(min_length=1)
    email: str = Field(min_length=1)
    name: str
    role: UserRole = UserRole.USER

    def to_domain(self) -> UserAccount:
        return UserAccount(id=self.id, email=self.email, name=self.name, role=self.role)

    @classmethod
    def from_domain(cls, user: UserAccount) -> UserRecord:
        return cls(id=user.id, email=user.email, name=user.name, role=user.role)

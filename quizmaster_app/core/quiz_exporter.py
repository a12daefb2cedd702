"""Utilities for exporting quizzes to the plain-text format used for imports."""

from __future__ import annotations

from pathlib import Path

from quizmaster_app.core.models import Quiz, QuizQuestion
from quizmaster_app.core.quiz_importer import OPTION_LETTERS


def save_quiz_to_file(file_path: Path, quiz: Quiz) -> None:
    """Persist the provided quiz to disk in the text import format."""

    if not quiz.questions:
        raise ValueError("Cannot export an empty quiz.")

    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(serialize_quiz(quiz), encoding="utf-8")


def serialize_quiz(quiz: Quiz) -> str:
    blocks = [_serialize_header(quiz)]
    blocks.extend(_serialize_question(question) for question in quiz.questions)
    return "\n\n---\n\n".join(blocks) + "\n"


def _serialize_header(quiz: Quiz) -> str:
    lines = [f"TITLE: {quiz.title}"]
    if quiz.description:
        lines.append(f"DESCRIPTION: {quiz.description}")
    if quiz.tags:
        lines.append(f"TAGS: {', '.join(quiz.tags)}")
    return "\n".join(lines)


def _serialize_question(question: QuizQuestion) -> str:
    if len(question.options) > len(OPTION_LETTERS):
        raise ValueError(f"Question {question.id!r} has more options than the format supports.")

    lines: list[str] = []
    question_lines = question.question_text.splitlines() or [""]
    lines.append(f"Q: {question_lines[0]}")
    lines.extend(question_lines[1:])

    for letter, option_text in zip(OPTION_LETTERS, question.options):
        option_lines = option_text.splitlines() or [""]
        lines.append(f"{letter}: {option_lines[0]}")
        lines.extend(option_lines[1:])

    lines.append(f"CORRECT: {OPTION_LETTERS[question.correct_option_index]}")
    return "\n".join(lines)

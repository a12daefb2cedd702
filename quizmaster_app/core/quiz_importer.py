"""Utilities for importing quizzes from a human-friendly text file.

File format (blocks separated by blank lines or '---'):

    TITLE: Quiz title
    DESCRIPTION: Optional one-line description
    TAGS: optional, comma, separated

    Q: Question text. Additional lines until the next marker are treated as
       part of the question.
    A: First option text
    B: Second option text
    C: Optional third option (up to F)
    CORRECT: A|B|...

The header block is optional when the title is supplied some other way, but a
quiz imported without one gets an empty title that the builder will refuse to
save.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from quizmaster_app.constants.quiz_constants import MAX_OPTION_COUNT, MIN_OPTION_COUNT
from quizmaster_app.core.models import QuizQuestion


class QuizImportError(Exception):
    """Raised when a quiz definition cannot be parsed."""


@dataclass(slots=True)
class ImportedQuiz:
    """Container for imported quiz metadata and questions."""

    source_path: Path | None
    title: str
    description: str
    questions: list[QuizQuestion]
    tags: list[str] = field(default_factory=list)


OPTION_LETTERS = "ABCDEF"[:MAX_OPTION_COUNT]
_HEADER_KEYS = ("TITLE:", "DESCRIPTION:", "TAGS:")


def load_quiz_from_file(file_path: Path) -> ImportedQuiz:
    text = file_path.read_text(encoding="utf-8")
    imported = parse_quiz_text(text)
    imported.source_path = file_path
    return imported


def parse_quiz_text(text: str) -> ImportedQuiz:
    blocks = _split_blocks(text)
    title = ""
    description = ""
    tags: list[str] = []
    if blocks and blocks[0].lstrip().upper().startswith(_HEADER_KEYS):
        title, description, tags = _parse_header(blocks.pop(0))

    questions = [
        _parse_block(block, question_id=f"q{number}")
        for number, block in enumerate(blocks, start=1)
    ]
    if not questions:
        raise QuizImportError("Quiz file did not contain any questions.")
    return ImportedQuiz(
        source_path=None,
        title=title,
        description=description,
        questions=questions,
        tags=tags,
    )


def _split_blocks(text: str) -> list[str]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())
    return [block for block in blocks if block]


def _parse_header(block: str) -> tuple[str, str, list[str]]:
    title = ""
    description = ""
    tags: list[str] = []
    for raw_line in block.splitlines():
        line = raw_line.strip()
        key, _, value = line.partition(":")
        key = key.strip().upper()
        value = value.strip()
        if key == "TITLE":
            title = value
        elif key == "DESCRIPTION":
            description = value
        elif key == "TAGS":
            for tag in (part.strip() for part in value.split(",")):
                if tag and tag not in tags:
                    tags.append(tag)
        else:
            raise QuizImportError(f"Unknown header line: '{line}'.")
    return title, description, tags


def _parse_block(block: str, question_id: str) -> QuizQuestion:
    question_lines: list[str] = []
    options: dict[str, str] = {}
    correct_letter: str | None = None
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            correct_letter = line.split(":", 1)[1].strip().upper()
            current_section = None
            continue

        if len(line) > 2 and line[0].upper() in OPTION_LETTERS and line[1] == ":":
            letter = line[0].upper()
            options[letter] = line[2:].strip()
            current_section = letter
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section in OPTION_LETTERS:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise QuizImportError(
                f"Encountered text outside of a known section: '{line}'."
            )

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuizImportError("Question text missing (Q: ...)")

    letters = OPTION_LETTERS[: len(options)]
    if len(options) < MIN_OPTION_COUNT or set(options) != set(letters):
        raise QuizImportError(
            f"Each question must define {MIN_OPTION_COUNT} to {MAX_OPTION_COUNT} "
            f"consecutive options starting at A."
        )
    option_list = [options[letter].strip() for letter in letters]
    if any(not opt for opt in option_list):
        raise QuizImportError("Option text cannot be empty.")

    if correct_letter is None:
        raise QuizImportError("CORRECT is required for every question.")
    if correct_letter not in letters:
        raise QuizImportError(f"CORRECT must be one of {', '.join(letters)}.")

    return QuizQuestion(
        id=question_id,
        question_text=question_text,
        options=option_list,
        correct_option_index=letters.index(correct_letter),
    )

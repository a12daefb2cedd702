"""Exceptions raised by the quiz core.

Every error is an input-validation signal the caller can recover from by
re-prompting or re-rendering. Each one also derives from the builtin a caller
would naturally catch for that kind of problem.
"""

from __future__ import annotations

from collections.abc import Iterable


class QuizError(Exception):
    """Base class for all quiz core errors."""


class EmptyQuizError(QuizError, ValueError):
    """Raised when a session is started for a quiz without questions."""


class InvalidOptionError(QuizError, ValueError):
    """Raised when a selected option index is outside the question's options."""

    def __init__(self, question_id: str, option_index: int, option_count: int) -> None:
        super().__init__(
            f"Option {option_index} is not valid for question {question_id!r} "
            f"(expected 0..{option_count - 1})."
        )
        self.question_id = question_id
        self.option_index = option_index
        self.option_count = option_count


class OutOfRangeError(QuizError, IndexError):
    """Raised when navigating to a question index that does not exist."""

    def __init__(self, index: int, total: int) -> None:
        super().__init__(f"Question index {index} out of range (0..{total - 1}).")
        self.index = index
        self.total = total


class IncompleteSubmissionError(QuizError, ValueError):
    """Raised when a quiz is submitted before every question is answered."""

    def __init__(self, missing_question_ids: Iterable[str]) -> None:
        self.missing_question_ids: list[str] = list(missing_question_ids)
        super().__init__(
            "Please answer all questions before submitting. Missing: "
            + ", ".join(self.missing_question_ids)
        )


class SessionClosedError(QuizError, RuntimeError):
    """Raised when a submitted or abandoned session is mutated."""


class SessionNotStartedError(QuizError, RuntimeError):
    """Raised when a session is used before start()."""


class SessionAlreadyStartedError(QuizError, RuntimeError):
    """Raised when start() is called on a session that has already begun."""


class UnknownQuestionError(QuizError, KeyError):
    """Raised when an answer names a question that is not part of the quiz."""


class QuizNotFoundError(QuizError, KeyError):
    """Raised when a quiz id is not present in the catalog."""


class QuizValidationError(QuizError, ValueError):
    """Raised when a quiz or question fails authoring validation."""


class StorageFormatError(QuizError, ValueError):
    """Raised when a stored blob is not a JSON list of records."""


class AccountError(QuizError, ValueError):
    """Raised when mock login or registration input is incomplete."""

"""Service for one learner's attempt at a quiz.

The session moves through ``NOT_STARTED -> IN_PROGRESS -> SUBMITTED`` (or
``ABANDONED`` when the view is torn down without submitting). While in
progress it tracks the current position, the selected option per question and
an advisory elapsed-time counter fed by an ``ElapsedTicker``. Submitting
scores the selections and closes the session for good.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
import logging
from threading import Lock

from quizmaster_app.constants.quiz_constants import TICK_INTERVAL_SECONDS
from quizmaster_app.core.errors import (
    EmptyQuizError,
    IncompleteSubmissionError,
    InvalidOptionError,
    OutOfRangeError,
    SessionAlreadyStartedError,
    SessionClosedError,
    SessionNotStartedError,
    UnknownQuestionError,
)
from quizmaster_app.core.models import Quiz, QuizQuestion, QuizResult
from quizmaster_app.core.scoring import score_quiz
from quizmaster_app.core.services.elapsed_ticker import ElapsedTicker
from quizmaster_app.utils.clock import utc_now

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"
    ABANDONED = "abandoned"


@dataclass(frozen=True, slots=True)
class QuestionStatus:
    """Navigation-strip entry for one question."""

    index: int
    question_id: str
    answered: bool
    is_current: bool


def format_elapsed(seconds: int) -> str:
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes}:{secs:02d}"


class QuizSession:
    """Manages the state of a single quiz attempt.

    Mutations and the views over answers and position all take the same lock
    as the ticker thread, so a view never sees a half-applied change.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        tick_interval_seconds: float = TICK_INTERVAL_SECONDS,
        auto_tick: bool = True,
    ) -> None:
        self._lock = Lock()
        self._clock = clock
        self._tick_interval = tick_interval_seconds
        self._auto_tick = auto_tick
        self._state = SessionState.NOT_STARTED
        self._quiz: Quiz | None = None
        self._current_index: int = 0
        self._selections: dict[str, int] = {}
        self._elapsed_seconds: int = 0
        self._ticker: ElapsedTicker | None = None
        self._result: QuizResult | None = None

    @classmethod
    def begin(cls, quiz: Quiz, **kwargs) -> QuizSession:
        """Create a session and start it for ``quiz``."""
        session = cls(**kwargs)
        session.start(quiz)
        return session

    # --- Lifecycle ---

    def start(self, quiz: Quiz) -> None:
        with self._lock:
            if self._state is not SessionState.NOT_STARTED:
                raise SessionAlreadyStartedError(f"Session is already {self._state.value}.")
            if not quiz.questions:
                raise EmptyQuizError(f"Quiz {quiz.id!r} has no questions.")
            self._quiz = quiz
            self._current_index = 0
            self._selections = {}
            self._elapsed_seconds = 0
            self._state = SessionState.IN_PROGRESS

        if self._auto_tick:
            self._ticker = ElapsedTicker(self.tick, interval_seconds=self._tick_interval)
            self._ticker.start()
        logger.info("Started session for quiz %s (%d questions)", quiz.id, quiz.question_count)

    def tick(self) -> None:
        """Advance the elapsed-time counter by one tick; ignored once closed."""
        with self._lock:
            if self._state is SessionState.IN_PROGRESS:
                self._elapsed_seconds += 1

    def submit(self) -> QuizResult:
        with self._lock:
            quiz = self._require_open()
            missing = [q.id for q in quiz.questions if q.id not in self._selections]
            if missing:
                raise IncompleteSubmissionError(missing)
            result = score_quiz(
                quiz,
                self._selections,
                completed_at=self._clock(),
                time_taken_seconds=self._elapsed_seconds,
            )
            self._result = result
            self._state = SessionState.SUBMITTED

        self._stop_ticker()
        logger.info(
            "Submitted quiz %s: %d/%d in %ss",
            result.quiz_id,
            result.score,
            result.total_questions,
            result.time_taken_seconds,
        )
        return result

    def abandon(self) -> None:
        """Tear the session down without scoring it."""
        with self._lock:
            if self._state in (SessionState.SUBMITTED, SessionState.ABANDONED):
                return
            self._state = SessionState.ABANDONED
        self._stop_ticker()
        logger.info("Abandoned quiz session")

    # --- Mutations ---

    def select_answer(self, question_id: str, option_index: int) -> None:
        with self._lock:
            quiz = self._require_open()
            question = quiz.question_by_id(question_id)
            if question is None:
                raise UnknownQuestionError(question_id)
            if not 0 <= option_index < len(question.options):
                raise InvalidOptionError(question_id, option_index, len(question.options))
            self._selections[question_id] = option_index

    def select_current_answer(self, option_index: int) -> None:
        self.select_answer(self.current_question.id, option_index)

    def go_to(self, index: int) -> None:
        with self._lock:
            quiz = self._require_open()
            if not 0 <= index < len(quiz.questions):
                raise OutOfRangeError(index, len(quiz.questions))
            self._current_index = index

    def next(self) -> None:
        with self._lock:
            quiz = self._require_open()
            if self._current_index < len(quiz.questions) - 1:
                self._current_index += 1

    def previous(self) -> None:
        with self._lock:
            self._require_open()
            if self._current_index > 0:
                self._current_index -= 1

    # --- Read-only views ---

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is SessionState.IN_PROGRESS

    @property
    def quiz(self) -> Quiz:
        return self._require_started()

    @property
    def result(self) -> QuizResult | None:
        return self._result

    @property
    def current_index(self) -> int:
        with self._lock:
            self._require_started()
            return self._current_index

    @property
    def total_questions(self) -> int:
        return len(self._require_started().questions)

    @property
    def current_question(self) -> QuizQuestion:
        with self._lock:
            return self._require_started().questions[self._current_index]

    @property
    def progress(self) -> float:
        """Position-based progress, ``(index + 1) / total``."""
        with self._lock:
            quiz = self._require_started()
            return (self._current_index + 1) / len(quiz.questions)

    @property
    def answered_count(self) -> int:
        with self._lock:
            return len(self._selections)

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed_seconds

    @property
    def formatted_elapsed(self) -> str:
        return format_elapsed(self._elapsed_seconds)

    def selected_option(self, question_id: str) -> int | None:
        with self._lock:
            return self._selections.get(question_id)

    def is_answered(self, question_id: str) -> bool:
        with self._lock:
            return question_id in self._selections

    def is_current_answered(self) -> bool:
        return self.is_answered(self.current_question.id)

    def is_last_question(self) -> bool:
        with self._lock:
            quiz = self._require_started()
            return self._current_index == len(quiz.questions) - 1

    def unanswered_question_ids(self) -> list[str]:
        with self._lock:
            return [q.id for q in self._require_started().questions if q.id not in self._selections]

    def question_statuses(self) -> list[QuestionStatus]:
        with self._lock:
            quiz = self._require_started()
            return [
                QuestionStatus(
                    index=index,
                    question_id=question.id,
                    answered=question.id in self._selections,
                    is_current=index == self._current_index,
                )
                for index, question in enumerate(quiz.questions)
            ]

    # --- Internals ---

    def _require_started(self) -> Quiz:
        if self._quiz is None:
            raise SessionNotStartedError("Session has not been started.")
        return self._quiz

    def _require_open(self) -> Quiz:
        quiz = self._require_started()
        if self._state is not SessionState.IN_PROGRESS:
            raise SessionClosedError(f"Session is {self._state.value}; no further changes allowed.")
        return quiz

    def _stop_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.stop()
            self._ticker = None

"""Business logic tying accounts, catalog, sessions and the assistant together."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
import logging

from quizmaster_app.constants.quiz_constants import TICK_INTERVAL_SECONDS
from quizmaster_app.core.errors import AccountError, QuizError
from quizmaster_app.core.markdown_renderer import renderer
from quizmaster_app.core.models import Quiz, QuizQuestion, QuizResult, UserAccount, UserRole
from quizmaster_app.core.services.account_service import AccountService
from quizmaster_app.core.services.chat_assistant import ChatAssistant
from quizmaster_app.core.services.key_value_store import KeyValueStore
from quizmaster_app.core.services.learner_dashboard import LearnerDashboard
from quizmaster_app.core.services.quiz_builder import QuizBuilder
from quizmaster_app.core.services.quiz_repository import QuizRepository
from quizmaster_app.core.services.quiz_session import QuizSession, SessionState
from quizmaster_app.core.services.result_repository import ResultRepository
from quizmaster_app.utils.clock import utc_now

logger = logging.getLogger(__name__)


class QuizManager:
    """Facade for quiz services: accounts, catalog, sessions, results and assistant.

    The manager holds at most one active session and one assistant
    conversation, both scoped to the logged-in learner.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], datetime] = utc_now,
        tick_interval_seconds: float = TICK_INTERVAL_SECONDS,
        auto_tick: bool = True,
    ) -> None:
        self._clock = clock
        self._tick_interval = tick_interval_seconds
        self._auto_tick = auto_tick

        # Services
        self._accounts = AccountService(store)
        self._quizzes = QuizRepository(store)
        self._results = ResultRepository(store)

        self._session: QuizSession | None = None
        self._assistant: ChatAssistant | None = None

    # --- Accounts ---

    def login(self, email: str, password: str) -> UserAccount:
        self._reset_learner_state()
        return self._accounts.login(email, password)

    def register(self, email: str, password: str, name: str, role: UserRole = UserRole.USER) -> UserAccount:
        self._reset_learner_state()
        return self._accounts.register(email, password, name, role)

    def logout(self) -> None:
        self._reset_learner_state()
        self._accounts.logout()

    def current_user(self) -> UserAccount | None:
        return self._accounts.current_user()

    # --- Catalog ---

    def ensure_catalog(self) -> list[Quiz]:
        return self._quizzes.ensure_seeded()

    def list_quizzes(self, search_term: str = "", tag: str = "") -> list[Quiz]:
        return self._quizzes.search(search_term, tag)

    def all_tags(self) -> list[str]:
        return self._quizzes.all_tags()

    def get_quiz(self, quiz_id: str) -> Quiz:
        return self._quizzes.get_quiz(quiz_id)

    def delete_quiz(self, quiz_id: str) -> bool:
        return self._quizzes.delete_quiz(quiz_id)

    def new_quiz_builder(self) -> QuizBuilder:
        return QuizBuilder(self._quizzes)

    def edit_quiz(self, quiz_id: str) -> QuizBuilder:
        return QuizBuilder.for_existing(self._quizzes, quiz_id)

    # --- Learner flow ---

    def dashboard(self) -> LearnerDashboard:
        return LearnerDashboard(self._require_user(), self._quizzes, self._results)

    def start_quiz(self, quiz_id: str) -> QuizSession:
        """Begin a new attempt, abandoning any attempt still in progress."""
        user = self._require_user()
        quiz = self._quizzes.get_quiz(quiz_id)
        self.abandon_active_session()
        self._assistant = None
        self._session = QuizSession.begin(
            quiz,
            clock=self._clock,
            tick_interval_seconds=self._tick_interval,
            auto_tick=self._auto_tick,
        )
        logger.info("Learner %s started quiz %s", user.id, quiz.id)
        return self._session

    @property
    def active_session(self) -> QuizSession | None:
        return self._session

    def submit_active_session(self) -> QuizResult:
        """Score the active attempt, store it for the learner and open the assistant.

        If storing fails the submitted session stays active, so calling this
        again stores the same result instead of losing the attempt.
        """
        user = self._require_user()
        session = self._session
        if session is None:
            raise QuizError("No quiz is in progress.")
        if session.state is SessionState.SUBMITTED and session.result is not None:
            result = session.result
        else:
            result = session.submit()
        try:
            self._results.add_result(user.id, result)
        except QuizError as exc:
            logger.warning("Could not store result for quiz %s; keeping it for a retry: %s", result.quiz_id, exc)
            raise
        self._assistant = ChatAssistant(result, session.quiz, clock=self._clock)
        self._session = None
        return result

    @property
    def has_unsaved_result(self) -> bool:
        """True when the active session was scored but its result is not stored yet."""
        return self._session is not None and self._session.state is SessionState.SUBMITTED

    def abandon_active_session(self) -> None:
        if self._session is not None:
            self._session.abandon()
            self._session = None

    @property
    def assistant(self) -> ChatAssistant | None:
        return self._assistant

    def close_assistant(self) -> None:
        self._assistant = None

    def render_question_html(self, question: QuizQuestion) -> str:
        return renderer.render_fragment(question.question_text)

    def shutdown(self) -> None:
        """Release the ticker thread of any open session."""
        self._reset_learner_state()

    # --- Internals ---

    def _require_user(self) -> UserAccount:
        user = self._accounts.current_user()
        if user is None:
            raise AccountError("Please log in first.")
        return user

    def _reset_learner_state(self) -> None:
        self.abandon_active_session()
        self._assistant = None

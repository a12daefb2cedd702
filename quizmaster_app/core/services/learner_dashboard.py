"""Service behind a learner's dashboard: available quizzes and past scores."""

from __future__ import annotations

from dataclasses import dataclass

from quizmaster_app.core.models import Quiz, QuizResult, UserAccount
from quizmaster_app.core.scoring import score_percent
from quizmaster_app.core.services.quiz_repository import QuizRepository
from quizmaster_app.core.services.result_repository import ResultRepository


@dataclass(frozen=True, slots=True)
class DashboardStats:
    """Immutable snapshot returned to consumers."""

    available_quizzes: int
    completed_quizzes: int
    average_score_percent: int


class LearnerDashboard:
    """Quiz listing and result statistics scoped to one learner."""

    def __init__(
        self,
        learner: UserAccount,
        quizzes: QuizRepository,
        results: ResultRepository,
    ) -> None:
        self._learner = learner
        self._quizzes = quizzes
        self._results = results

    @property
    def learner(self) -> UserAccount:
        return self._learner

    def available_quizzes(self, search_term: str = "", tag: str = "") -> list[Quiz]:
        return self._quizzes.search(search_term, tag)

    def all_tags(self) -> list[str]:
        return self._quizzes.all_tags()

    def results(self) -> list[QuizResult]:
        return self._results.list_results(self._learner.id)

    def record_result(self, result: QuizResult) -> list[QuizResult]:
        return self._results.add_result(self._learner.id, result)

    def has_attempted(self, quiz_id: str) -> bool:
        return any(result.quiz_id == quiz_id for result in self.results())

    def quiz_score_percent(self, quiz_id: str) -> int:
        """Percentage of the learner's first attempt at ``quiz_id``; 0 if never taken."""
        result = next((r for r in self.results() if r.quiz_id == quiz_id), None)
        if result is None:
            return 0
        return score_percent(result.score, result.total_questions)

    def average_score_percent(self) -> int:
        results = self.results()
        if not results:
            return 0
        total = sum(r.score / r.total_questions * 100 for r in results if r.total_questions)
        return int(total / len(results) + 0.5)

    def stats(self) -> DashboardStats:
        return DashboardStats(
            available_quizzes=len(self._quizzes.list_quizzes()),
            completed_quizzes=len(self.results()),
            average_score_percent=self.average_score_percent(),
        )

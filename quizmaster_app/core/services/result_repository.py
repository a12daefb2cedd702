"""Service for storing each learner's quiz results."""

from __future__ import annotations

import logging

from quizmaster_app.constants.storage_constants import RESULTS_KEY_TEMPLATE
from quizmaster_app.core.models import QuizResult
from quizmaster_app.core.schemas import ResultRecord
from quizmaster_app.core.services.json_collection import load_collection, save_collection
from quizmaster_app.core.services.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class ResultRepository:
    """Per-learner result lists, one storage key per learner."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    @staticmethod
    def key_for(learner_id: str) -> str:
        if not learner_id:
            raise ValueError("Learner id must not be empty.")
        return RESULTS_KEY_TEMPLATE.format(learner_id=learner_id)

    def list_results(self, learner_id: str) -> list[QuizResult]:
        records = load_collection(self._store, self.key_for(learner_id), ResultRecord)
        return [record.to_domain() for record in records]

    def add_result(self, learner_id: str, result: QuizResult) -> list[QuizResult]:
        """Append ``result`` to the learner's history and return the full history."""
        key = self.key_for(learner_id)
        records = load_collection(self._store, key, ResultRecord)
        records.append(ResultRecord.from_domain(result))
        save_collection(self._store, key, records)
        logger.info(
            "Stored result for learner %s on quiz %s: %d/%d",
            learner_id,
            result.quiz_id,
            result.score,
            result.total_questions,
        )
        return [record.to_domain() for record in records]

"""Tests for record validation and the key-value stores."""

import json

import pytest
from pydantic import ValidationError

from quizmaster_app.core.errors import StorageFormatError
from quizmaster_app.core.schemas import QuestionRecord, QuizRecord, ResultRecord
from quizmaster_app.core.scoring import score_quiz
from quizmaster_app.core.services.json_collection import load_collection, save_collection
from quizmaster_app.core.services.key_value_store import FileKeyValueStore, InMemoryKeyValueStore


def _question(**overrides):
    payload = {"id": "q1", "question": "2 + 2?", "options": ["3", "4"], "correctAnswer": 1}
    payload.update(overrides)
    return payload


class TestQuestionRecord:
    def test_valid_question_maps_to_domain(self):
        question = QuestionRecord.model_validate(_question()).to_domain()
        assert question.question_text == "2 + 2?"
        assert question.correct_option_index == 1

    @pytest.mark.parametrize(
        "overrides",
        [
            {"correctAnswer": 2},
            {"correctAnswer": -1},
            {"options": ["only one"]},
            {"id": ""},
            {"question": None},
        ],
    )
    def test_malformed_question_is_rejected(self, overrides):
        with pytest.raises(ValidationError):
            QuestionRecord.model_validate(_question(**overrides))


def test_quiz_record_rejects_duplicate_question_ids():
    with pytest.raises(ValidationError):
        QuizRecord.model_validate({"id": "x", "title": "T", "questions": [_question(), _question()]})


def test_result_record_checks_score_against_answers(three_question_quiz, fixed_clock):
    result = score_quiz(three_question_quiz, {"q1": 1, "q2": 1, "q3": 2}, completed_at=fixed_clock())
    payload = ResultRecord.from_domain(result).model_dump(mode="json", by_alias=True)

    assert payload["quizId"] == "quiz-geo"
    assert payload["totalQuestions"] == 3
    assert payload["answers"][1] == {"questionId": "q2", "selectedAnswer": 1, "correct": False}
    assert ResultRecord.model_validate(payload).to_domain() == result

    with pytest.raises(ValidationError):
        ResultRecord.model_validate({**payload, "score": 3})
    with pytest.raises(ValidationError):
        ResultRecord.model_validate({**payload, "totalQuestions": 2})


class TestJsonCollection:
    def test_missing_key_is_empty(self):
        assert load_collection(InMemoryKeyValueStore(), "quizzes", QuizRecord) == []

    def test_malformed_records_are_skipped(self, caplog):
        good = {"id": "ok", "title": "Fine", "questions": [_question()]}
        bad = {"id": "bad", "title": "Broken", "questions": [_question(correctAnswer=7)]}
        store = InMemoryKeyValueStore({"quizzes": json.dumps([good, bad, "junk"]).encode()})

        records = load_collection(store, "quizzes", QuizRecord)

        assert [r.id for r in records] == ["ok"]
        assert "Skipping malformed QuizRecord" in caplog.text

    @pytest.mark.parametrize("blob", [b"not json", b'{"id": "x"}'])
    def test_non_list_blob_raises(self, blob):
        with pytest.raises(StorageFormatError):
            load_collection(InMemoryKeyValueStore({"quizzes": blob}), "quizzes", QuizRecord)

    def test_save_uses_camel_case_keys(self):
        store = InMemoryKeyValueStore()
        save_collection(store, "quizzes", [QuizRecord.model_validate({"id": "x", "title": "T", "questions": [_question()]})])
        assert store.keys() == ["quizzes"]
        stored = json.loads(store.get("quizzes"))
        assert stored[0]["questions"][0]["correctAnswer"] == 1
        assert "createdAt" in stored[0]


class TestFileKeyValueStore:
    def test_put_get_delete(self, tmp_path):
        store = FileKeyValueStore(tmp_path / "data")
        assert store.root == (tmp_path / "data").resolve()
        assert store.get("quiz_results_abc") is None

        store.put("quiz_results_abc", b"[]")
        assert store.get("quiz_results_abc") == b"[]"
        assert (tmp_path / "data" / "quiz_results_abc.json").exists()

        store.delete("quiz_results_abc")
        store.delete("quiz_results_abc")
        assert store.get("quiz_results_abc") is None

    def test_unsafe_key_characters_stay_inside_root(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        store.put("../escape/key", b"1")
        assert store.get("../escape/key") == b"1"
        assert [p.name for p in tmp_path.iterdir()] == [".._escape_key.json"]
        assert not (tmp_path.parent / "escape").exists()

    def test_empty_key_is_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            FileKeyValueStore(tmp_path).put("", b"1")

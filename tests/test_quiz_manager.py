"""Integration tests for the quiz manager facade."""

import pytest

from quizmaster_app.core.errors import AccountError, QuizError, QuizNotFoundError, StorageFormatError
from quizmaster_app.core.quiz_manager import QuizManager
from quizmaster_app.core.services.key_value_store import FileKeyValueStore
from quizmaster_app.core.services.quiz_session import SessionState


@pytest.fixture
def manager(store, fixed_clock):
    manager = QuizManager(store, clock=fixed_clock, auto_tick=False)
    manager.ensure_catalog()
    yield manager
    manager.shutdown()


def test_learner_flow_stores_result_and_opens_assistant(manager, fixed_clock):
    user = manager.login("sam@example.com", "pw")
    session = manager.start_quiz("mock-1")
    assert manager.active_session is session

    session.select_answer("q1", 0)
    session.select_answer("q2", 0)
    session.tick()
    result = manager.submit_active_session()

    assert result.quiz_id == "mock-1"
    assert result.total_questions == 2
    assert result.time_taken_seconds == 1
    assert result.completed_at == fixed_clock()
    assert manager.active_session is None

    dashboard = manager.dashboard()
    assert dashboard.learner == user
    assert dashboard.results() == [result]
    assert dashboard.has_attempted("mock-1")

    assistant = manager.assistant
    assert assistant is not None
    assert "JavaScript Fundamentals" in assistant.messages[0].content
    manager.close_assistant()
    assert manager.assistant is None


def test_learner_operations_require_login(manager):
    with pytest.raises(AccountError):
        manager.dashboard()
    with pytest.raises(AccountError):
        manager.start_quiz("mock-1")


def test_incomplete_submission_keeps_session_open(manager):
    manager.login("sam@example.com", "pw")
    session = manager.start_quiz("mock-1")
    session.select_answer("q1", 0)

    with pytest.raises(QuizError):
        manager.submit_active_session()
    assert manager.active_session is session
    assert session.state is SessionState.IN_PROGRESS


def test_submit_without_session(manager):
    manager.login("sam@example.com", "pw")
    with pytest.raises(QuizError):
        manager.submit_active_session()


def test_starting_again_abandons_previous_attempt(manager):
    manager.login("sam@example.com", "pw")
    first = manager.start_quiz("mock-1")
    second = manager.start_quiz("mock-2")
    assert first.state is SessionState.ABANDONED
    assert manager.active_session is second


def test_unknown_quiz(manager):
    manager.login("sam@example.com", "pw")
    with pytest.raises(QuizNotFoundError):
        manager.start_quiz("missing")


def test_logout_abandons_session(manager):
    manager.login("sam@example.com", "pw")
    session = manager.start_quiz("mock-2")
    manager.logout()
    assert session.state is SessionState.ABANDONED
    assert manager.current_user() is None


def test_catalog_operations(manager):
    assert [q.id for q in manager.list_quizzes()] == ["mock-1", "mock-2"]
    assert "react" in manager.all_tags()
    builder = manager.edit_quiz("mock-2")
    builder.set_title("React Essentials")
    builder.save()
    assert manager.get_quiz("mock-2").title == "React Essentials"
    assert manager.delete_quiz("mock-2")
    assert [q.id for q in manager.list_quizzes(search_term="react")] == []


def test_render_question_html(manager):
    question = manager.get_quiz("mock-1").questions[0]
    assert manager.render_question_html(question).startswith("<p>")


def test_catalog_survives_restart_on_disk(tmp_path, fixed_clock):
    first = QuizManager(FileKeyValueStore(tmp_path), clock=fixed_clock, auto_tick=False)
    first.ensure_catalog()
    first.login("sam@example.com", "pw")
    session = first.start_quiz("mock-2")
    session.select_answer("q3", 0)
    first.submit_active_session()
    first.shutdown()

    second = QuizManager(FileKeyValueStore(tmp_path), clock=fixed_clock, auto_tick=False)
    assert second.current_user().email == "sam@example.com"
    assert len(second.dashboard().results()) == 1
    assert len(second.ensure_catalog()) == 2


def test_failed_store_keeps_result_for_retry(manager, store):
    user = manager.login("sam@example.com", "pw")
    session = manager.start_quiz("mock-2")
    session.select_answer("q3", 0)
    results_key = f"quiz_results_{user.id}"
    store.put(results_key, b"{not json")

    with pytest.raises(StorageFormatError):
        manager.submit_active_session()
    assert manager.has_unsaved_result
    assert manager.active_session is session
    assert manager.assistant is None

    store.delete(results_key)
    result = manager.submit_active_session()

    assert result is session.result
    assert not manager.has_unsaved_result
    assert manager.dashboard().results() == [result]
    assert manager.assistant is not None

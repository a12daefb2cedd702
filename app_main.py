"""Console entry point for QuizMaster Pro."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from quizmaster_app.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from quizmaster_app.constants.assistant_constants import RESULT_SUMMARY_MESSAGES
from quizmaster_app.constants.storage_constants import DEFAULT_DATA_DIR
from quizmaster_app.core.errors import QuizError
from quizmaster_app.core.quiz_importer import QuizImportError
from quizmaster_app.core.quiz_manager import QuizManager
from quizmaster_app.core.scoring import percent_band, score_percent
from quizmaster_app.core.services.key_value_store import FileKeyValueStore
from quizmaster_app.core.services.quiz_session import QuizSession, format_elapsed
from quizmaster_app.utils.logging_config import configure_logging


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=APP_ABOUT_TEXT,
        epilog=HELP_TEXT,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION} ({APP_LICENSE})")
    parser.add_argument("--data-dir", type=Path, default=Path(DEFAULT_DATA_DIR), help="Where quizzes and results are stored")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def _ask(prompt: str) -> str:
    return input(prompt).strip()


def _login(manager: QuizManager) -> None:
    user = manager.current_user()
    if user is not None:
        print(f"Welcome back, {user.name}!")
        return
    while True:
        try:
            user = manager.login(_ask("Email: "), _ask("Password: "))
        except QuizError as exc:
            print(exc)
            continue
        print(f"Logged in as {user.role.value}.")
        return


def _take_quiz(session: QuizSession) -> None:
    """Drive the session until every question has an answer."""
    while True:
        question = session.current_question
        print(f"\nQuestion {session.current_index + 1} of {session.total_questions} "
              f"({session.answered_count}/{session.total_questions} answered, {session.formatted_elapsed})")
        print(question.question_text)
        for index, option in enumerate(question.options, start=1):
            marker = "*" if session.selected_option(question.id) == index - 1 else " "
            print(f" {marker} {index}. {option}")
        command = _ask("Answer number, [n]ext, [p]revious, [s]ubmit: ").lower()
        try:
            if command == "n":
                session.next()
            elif command == "p":
                session.previous()
            elif command == "s":
                return
            elif command.isdigit():
                session.select_current_answer(int(command) - 1)
                if not session.is_last_question():
                    session.next()
            else:
                print("Unknown command.")
        except QuizError as exc:
            print(exc)


def _chat(manager: QuizManager) -> None:
    assistant = manager.assistant
    if assistant is None:
        return
    print(f"\nAssistant: {assistant.messages[0].content}")
    print("Try: " + " | ".join(assistant.quick_questions))
    while True:
        text = _ask("You (blank to leave): ")
        reply = assistant.send(text)
        if reply is None:
            manager.close_assistant()
            return
        print(f"Assistant: {reply.content}")


def _import_quiz(manager: QuizManager) -> None:
    builder = manager.new_quiz_builder()
    try:
        count = builder.import_file(Path(_ask("Quiz file: ")))
        quiz = builder.save()
    except (QuizError, QuizImportError, OSError) as exc:
        print(exc)
        return
    print(f"Saved \"{quiz.title}\" with {count} questions.")


def _run(manager: QuizManager) -> None:
    _login(manager)
    dashboard = manager.dashboard()
    while True:
        quizzes = dashboard.available_quizzes()
        stats = dashboard.stats()
        print(f"\n{stats.completed_quizzes} completed, average {stats.average_score_percent}%")
        for number, quiz in enumerate(quizzes, start=1):
            taken = f" (scored {dashboard.quiz_score_percent(quiz.id)}%)" if dashboard.has_attempted(quiz.id) else ""
            print(f"{number}. {quiz.title} - {quiz.question_count} questions{taken}")
        prompt = "Pick a quiz number, [i]mport a quiz file, or [q]uit: " if dashboard.learner.is_admin else "Pick a quiz number, or [q]uit: "
        choice = _ask(prompt).lower()
        if choice == "q":
            return
        if choice == "i" and dashboard.learner.is_admin:
            _import_quiz(manager)
            continue
        if not choice.isdigit() or not 1 <= int(choice) <= len(quizzes):
            print("Unknown quiz.")
            continue

        session = manager.start_quiz(quizzes[int(choice) - 1].id)
        while True:
            if manager.has_unsaved_result:
                _ask("Your result could not be saved. Press Enter to try again.")
            else:
                _take_quiz(session)
            try:
                result = manager.submit_active_session()
                break
            except QuizError as exc:
                print(exc)
        percent = score_percent(result.score, result.total_questions)
        print(f"\nQuiz complete! {result.score}/{result.total_questions} ({percent}%) "
              f"in {format_elapsed(result.time_taken_seconds or 0)}")
        print(RESULT_SUMMARY_MESSAGES[percent_band(percent)])
        _chat(manager)


def main() -> None:
    """Initialize logging, open the store and run the console front end."""
    args = _parse_args()
    logger = configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    logger.info("Starting %s %s", APP_NAME, APP_VERSION)

    manager = QuizManager(store=FileKeyValueStore(args.data_dir))
    manager.ensure_catalog()
    try:
        _run(manager)
    except (EOFError, KeyboardInterrupt):
        print()
    finally:
        manager.shutdown()


if __name__ == "__main__":
    main()

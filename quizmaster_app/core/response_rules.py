"""Ordered pattern rules that turn a learner's question into canned feedback.

Matching is a case-insensitive substring search over the query. The first rule
that produces a reply wins; when none does, the default help text is returned.
There is no language understanding beyond that.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import re

from quizmaster_app.constants import assistant_constants as texts
from quizmaster_app.core.models import Quiz, QuizResult
from quizmaster_app.core.scoring import performance_band, score_percent

_NUMBER_PATTERN = re.compile(r"\d+")

RuleHandler = Callable[[str, QuizResult, Quiz], "str | None"]


@dataclass(frozen=True, slots=True)
class ResponseRule:
    """Named rule; ``handler`` returns None when the rule does not apply."""

    name: str
    handler: RuleHandler


@dataclass(frozen=True, slots=True)
class RuleMatch:
    rule_name: str
    text: str


def _mentions(query: str, *keywords: str) -> bool:
    return any(keyword in query for keyword in keywords)


def _wrong_answers_rule(query: str, result: QuizResult, quiz: Quiz) -> str | None:
    if not _mentions(query, "wrong", "incorrect"):
        return None
    wrong = result.wrong_count
    if wrong == 0:
        return texts.ALL_CORRECT_MESSAGE
    return texts.WRONG_COUNT_TEMPLATE.format(count=wrong)


def _question_number_rule(query: str, result: QuizResult, quiz: Quiz) -> str | None:
    if "question" not in query:
        return None
    match = _NUMBER_PATTERN.search(query)
    if match is None:
        return None
    number = int(match.group())
    if not 1 <= number <= quiz.question_count:
        return None

    question = quiz.questions[number - 1]
    correct_text = question.options[question.correct_option_index]
    parts = [
        texts.QUESTION_HEADER_TEMPLATE.format(
            number=number, prompt=question.question_text, correct=correct_text
        )
    ]
    answer = result.answer_for(question.id)
    if answer is None or not 0 <= answer.selected_option_index < len(question.options):
        # Quiz edited after the attempt.
        parts.append(texts.QUESTION_UNANSWERED_MESSAGE)
    elif answer.selected_option_index == question.correct_option_index:
        parts.append(texts.QUESTION_RIGHT_MESSAGE)
    else:
        parts.append(
            texts.QUESTION_WRONG_TEMPLATE.format(
                selected=question.options[answer.selected_option_index],
                correct=correct_text,
            )
        )
    parts.append(texts.QUESTION_FOLLOW_UP)
    return "\n\n".join(parts)


def _explain_rule(query: str, result: QuizResult, quiz: Quiz) -> str | None:
    if not _mentions(query, "explain", "why"):
        return None
    return texts.EXPLAIN_MESSAGE


def _improve_rule(query: str, result: QuizResult, quiz: Quiz) -> str | None:
    if not _mentions(query, "improve", "better"):
        return None
    return texts.IMPROVE_TEMPLATE.format(
        percent=score_percent(result.score, result.total_questions),
        suggestions="\n".join(f"• {tip}" for tip in texts.IMPROVE_SUGGESTIONS),
        band=performance_band(result.score, result.total_questions),
    )


def _study_rule(query: str, result: QuizResult, quiz: Quiz) -> str | None:
    if not _mentions(query, "study", "resources"):
        return None
    return texts.STUDY_MESSAGE


DEFAULT_RULE_NAME = "default"

RULES: tuple[ResponseRule, ...] = (
    ResponseRule("wrong_answers", _wrong_answers_rule),
    ResponseRule("question_number", _question_number_rule),
    ResponseRule("explain", _explain_rule),
    ResponseRule("improve", _improve_rule),
    ResponseRule("study", _study_rule),
)


def evaluate(
    query: str,
    result: QuizResult,
    quiz: Quiz,
    rules: tuple[ResponseRule, ...] = RULES,
) -> RuleMatch:
    """Return the first matching rule and its reply for ``query``."""

    normalized = query.lower()
    for rule in rules:
        text = rule.handler(normalized, result, quiz)
        if text is not None:
            return RuleMatch(rule_name=rule.name, text=text)
    return RuleMatch(rule_name=DEFAULT_RULE_NAME, text=texts.DEFAULT_MESSAGE)


def generate_response(query: str, result: QuizResult, quiz: Quiz) -> str:
    return evaluate(query, result, quiz).text

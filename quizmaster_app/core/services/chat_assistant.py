"""Conversation with the rule-based quiz assistant after a submission."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from uuid import uuid4

from quizmaster_app.constants.assistant_constants import GREETING_TEMPLATE, QUICK_QUESTIONS
from quizmaster_app.core.markdown_renderer import MarkdownRenderer, renderer
from quizmaster_app.core.models import ChatMessage, Quiz, QuizResult
from quizmaster_app.core.response_rules import evaluate
from quizmaster_app.core.scoring import score_percent
from quizmaster_app.utils.clock import utc_now


class ChatAssistant:
    """Keeps the message history for one result and answers learner queries."""

    def __init__(
        self,
        result: QuizResult,
        quiz: Quiz,
        clock: Callable[[], datetime] = utc_now,
        markdown: MarkdownRenderer = renderer,
    ) -> None:
        self._result = result
        self._quiz = quiz
        self._clock = clock
        self._markdown = markdown
        self._messages: list[ChatMessage] = [self._message(self.greeting(), is_bot=True)]

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def quick_questions(self) -> tuple[str, ...]:
        return QUICK_QUESTIONS

    def greeting(self) -> str:
        return GREETING_TEMPLATE.format(
            title=self._quiz.title,
            score=self._result.score,
            total=self._result.total_questions,
            percent=score_percent(self._result.score, self._result.total_questions),
        )

    def send(self, text: str) -> ChatMessage | None:
        """Record the learner's message and return the assistant's reply.

        Blank input is ignored and returns None.
        """
        if not text.strip():
            return None
        self._messages.append(self._message(text, is_bot=False))
        reply = self._message(evaluate(text, self._result, self._quiz).text, is_bot=True)
        self._messages.append(reply)
        return reply

    def render_html(self, message: ChatMessage) -> str:
        return self._markdown.render_fragment(message.content)

    def _message(self, content: str, is_bot: bool) -> ChatMessage:
        return ChatMessage(id=uuid4().hex, content=content, is_bot=is_bot, timestamp=self._clock())

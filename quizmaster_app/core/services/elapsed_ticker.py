"""Cancellable fixed-interval ticker backing the session's elapsed-time counter."""

from __future__ import annotations

from collections.abc import Callable
import logging
from threading import Event, Thread, current_thread

from quizmaster_app.constants.quiz_constants import TICK_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


class ElapsedTicker:
    """Calls ``on_tick`` every ``interval_seconds`` until stopped."""

    def __init__(
        self,
        on_tick: Callable[[], None],
        interval_seconds: float = TICK_INTERVAL_SECONDS,
        name: str = "QuizElapsedTicker",
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("Tick interval must be positive.")
        self._on_tick = on_tick
        self._interval = interval_seconds
        self._name = name
        self._stop_event = Event()
        self._thread: Thread | None = None

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Ticker has already been started.")
        self._thread = Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Signal the ticker to stop and wait for its thread to exit."""
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread.is_alive() and thread is not current_thread():
            thread.join(timeout if timeout is not None else self._interval * 2)

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop_event.is_set()

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self._on_tick()
            except Exception:
                logger.exception("Elapsed-time tick failed; stopping ticker")
                self._stop_event.set()

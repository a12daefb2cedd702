"""Logging configuration helpers for the quiz application."""

from __future__ import annotations

import logging
from logging import Logger

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: int = logging.INFO) -> Logger:
    """Configure basic logging for the application and return its logger."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return logging.getLogger("quizmaster_app")

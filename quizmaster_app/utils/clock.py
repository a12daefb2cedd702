"""Wall-clock helper injected wherever a timestamp is recorded."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)

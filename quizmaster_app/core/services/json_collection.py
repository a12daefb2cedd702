"""Reading and writing JSON lists of validated records through a key-value store."""

from __future__ import annotations

from collections.abc import Sequence
import json
import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from quizmaster_app.core.errors import StorageFormatError
from quizmaster_app.core.services.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def load_collection(store: KeyValueStore, key: str, record_type: type[RecordT]) -> list[RecordT]:
    """Load the list stored at ``key``, skipping records that fail validation.

    A missing key is an empty collection. A blob that is not a JSON list
    raises StorageFormatError.
    """

    raw = store.get(key)
    if raw is None:
        return []
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise StorageFormatError(f"Stored value for {key!r} is not valid JSON.") from exc
    if not isinstance(payload, list):
        raise StorageFormatError(f"Stored value for {key!r} must be a JSON list.")

    records: list[RecordT] = []
    for position, item in enumerate(payload):
        try:
            records.append(record_type.model_validate(item))
        except ValidationError as exc:
            logger.warning(
                "Skipping malformed %s at %s[%d]: %s",
                record_type.__name__,
                key,
                position,
                exc.errors(include_url=False),
            )
    return records


def save_collection(store: KeyValueStore, key: str, records: Sequence[BaseModel]) -> None:
    payload = [record.model_dump(mode="json", by_alias=True) for record in records]
    store.put(key, json.dumps(payload, ensure_ascii=False).encode("utf-8"))

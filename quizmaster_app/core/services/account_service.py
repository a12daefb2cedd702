"""Mock account handling; no credentials are checked or stored."""

from __future__ import annotations

import json
import logging
from uuid import uuid4

from pydantic import ValidationError

from quizmaster_app.constants.storage_constants import CURRENT_USER_KEY
from quizmaster_app.core.errors import AccountError
from quizmaster_app.core.models import UserAccount, UserRole
from quizmaster_app.core.schemas import UserRecord
from quizmaster_app.core.services.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class AccountService:
    """Signs users in and remembers the current one in the store."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def login(self, email: str, password: str) -> UserAccount:
        email = self._require(email, "Email")
        self._require(password, "Password")
        role = UserRole.ADMIN if "admin" in email.lower() else UserRole.USER
        user = UserAccount(id=uuid4().hex, email=email, name=email.split("@", 1)[0], role=role)
        self._remember(user)
        logger.info("Logged in %s as %s", user.email, user.role.value)
        return user

    def register(
        self,
        email: str,
        password: str,
        name: str,
        role: UserRole = UserRole.USER,
    ) -> UserAccount:
        email = self._require(email, "Email")
        self._require(password, "Password")
        name = self._require(name, "Name")
        try:
            role = UserRole(role)
        except ValueError as exc:
            raise AccountError(f"Unknown role {role!r}.") from exc
        user = UserAccount(id=uuid4().hex, email=email, name=name, role=role)
        self._remember(user)
        logger.info("Registered %s as %s", user.email, user.role.value)
        return user

    def logout(self) -> None:
        self._store.delete(CURRENT_USER_KEY)

    def current_user(self) -> UserAccount | None:
        raw = self._store.get(CURRENT_USER_KEY)
        if raw is None:
            return None
        try:
            return UserRecord.model_validate_json(raw).to_domain()
        except ValidationError:
            logger.warning("Discarding malformed stored user")
            self._store.delete(CURRENT_USER_KEY)
            return None

    def _remember(self, user: UserAccount) -> None:
        record = UserRecord.from_domain(user)
        self._store.put(CURRENT_USER_KEY, json.dumps(record.model_dump(mode="json")).encode("utf-8"))

    @staticmethod
    def _require(value: str, label: str) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            raise AccountError(f"{label} is required.")
        return cleaned

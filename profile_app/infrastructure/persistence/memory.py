import secrets
import threading
from dataclasses import replace
from typing import Dict, Optional

from ...domain.exceptions import DuplicateEmailError
from ...domain.models import ProfileFields, UserRecord


class InMemoryUserStore:
    """Process-local user repository, used by tests and ``STORE_BACKEND=memory``."""

    def __init__(self) -> None:
        self._users: Dict[str, UserRecord] = {}
        self._id_by_email: Dict[str, str] = {}
        self._lock = threading.Lock()

    def close(self) -> None:
        with self._lock:
            self._users.clear()
            self._id_by_email.clear()

    def create_user(self, fields: ProfileFields) -> UserRecord:
        with self._lock:
            if fields.email in self._id_by_email:
                raise DuplicateEmailError("Email already exists")
            user_id = secrets.token_hex(12)
            while user_id in self._users:
                user_id = secrets.token_hex(12)
            record = UserRecord(
                id=user_id,
                name=fields.name,
                email=fields.email,
                hobbies=fields.hobbies,
                location=fields.location,
            )
            self._users[user_id] = record
            self._id_by_email[fields.email] = user_id
        return replace(record)

    def get_user_by_id(self, user_id: str) -> Optional[UserRecord]:
        with self._lock:
            record = self._users.get(user_id.lower())
        return replace(record) if record else None

    def update_user(self, user_id: str, fields: ProfileFields) -> Optional[UserRecord]:
        key = user_id.lower()
        with self._lock:
            existing = self._users.get(key)
            if existing is None:
                return None
            owner = self._id_by_email.get(fields.email)
            if owner is not None and owner != key:
                raise DuplicateEmailError("Email already exists")
            del self._id_by_email[existing.email]
            self._id_by_email[fields.email] = key
            record = UserRecord(
                id=key,
                name=fields.name,
                email=fields.email,
                hobbies=fields.hobbies,
                location=fields.location,
            )
            self._users[key] = record
        return replace(record)

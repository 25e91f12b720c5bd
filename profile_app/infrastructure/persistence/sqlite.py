import secrets
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ...domain.exceptions import DuplicateEmailError, StoreError
from ...domain.models import ProfileFields, UserRecord


class SQLiteUserStore:
    """SQLite-backed implementation of the user repository."""

    def __init__(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self._initialize()

    def _initialize(self) -> None:
        with self._conn:
            self._conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    email TEXT NOT NULL UNIQUE,
                    hobbies TEXT NOT NULL DEFAULT '',
                    location TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )

    def close(self) -> None:
        self._conn.close()

    # UserRepository API ----------------------------------------------------
    def create_user(self, fields: ProfileFields) -> UserRecord:
        now = self._now()
        try:
            with self._lock, self._conn:
                user_id = self._new_id()
                self._conn.execute(
                    """
                    INSERT INTO users (id, name, email, hobbies, location, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (user_id, fields.name, fields.email, fields.hobbies, fields.location, now, now),
                )
                cur = self._conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
                row = cur.fetchone()
        except sqlite3.IntegrityError as exc:
            raise self._translate_integrity_error(exc) from exc
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to persist user: {exc}") from exc
        if not row:
            raise StoreError("Failed to persist user.")
        return self._row_to_user(row)

    def get_user_by_id(self, user_id: str) -> Optional[UserRecord]:
        try:
            with self._lock:
                cur = self._conn.execute("SELECT * FROM users WHERE id = ?", (user_id.lower(),))
                row = cur.fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to load user {user_id}: {exc}") from exc
        return self._row_to_user(row) if row else None

    def update_user(self, user_id: str, fields: ProfileFields) -> Optional[UserRecord]:
        key = user_id.lower()
        try:
            with self._lock, self._conn:
                self._conn.execute(
                    """
                    UPDATE users
                    SET name = ?, email = ?, hobbies = ?, location = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (fields.name, fields.email, fields.hobbies, fields.location, self._now(), key),
                )
                cur = self._conn.execute("SELECT * FROM users WHERE id = ?", (key,))
                row = cur.fetchone()
        except sqlite3.IntegrityError as exc:
            raise self._translate_integrity_error(exc) from exc
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to update user {user_id}: {exc}") from exc
        return self._row_to_user(row) if row else None

    # Helpers ----------------------------------------------------------------
    def _new_id(self) -> str:
        # Caller holds the lock.
        while True:
            candidate = secrets.token_hex(12)
            cur = self._conn.execute("SELECT 1 FROM users WHERE id = ?", (candidate,))
            if cur.fetchone() is None:
                return candidate

    @staticmethod
    def _translate_integrity_error(exc: sqlite3.IntegrityError) -> Exception:
        if "users.email" in str(exc):
            return DuplicateEmailError("Email already exists")
        return StoreError(f"Integrity error: {exc}")

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).replace(microsecond=0).isoformat()

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> UserRecord:
        return UserRecord(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            hobbies=row["hobbies"] or "",
            location=row["location"],
        )

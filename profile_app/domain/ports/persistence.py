from __future__ import annotations

from typing import Optional, Protocol

from ..models import ProfileFields, UserRecord


class UserRepository(Protocol):
    """Abstract storage for user profile records.

    Implementations own identifier generation and email uniqueness. Writes that
    collide on email raise ``DuplicateEmailError``; any other backend failure
    raises ``StoreError``.
    """

    def create_user(self, fields: ProfileFields) -> UserRecord:
        ...

    def get_user_by_id(self, user_id: str) -> Optional[UserRecord]:
        ...

    def update_user(self, user_id: str, fields: ProfileFields) -> Optional[UserRecord]:
        ...

    def close(self) -> None:
        ...

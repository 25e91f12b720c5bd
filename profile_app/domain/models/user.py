"""User profile domain model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ProfileFields:
    """Normalized profile values handed to the store on create and update."""

    name: str
    email: str
    location: str
    hobbies: str = ""


@dataclass(slots=True)
class UserRecord:
    """
    Stored user profile.

    Attributes:
        id: 24-character hex identifier assigned by the store
        name: Display name
        email: Email address (unique across all records)
        location: Free-text location
        hobbies: Optional free-text hobbies
    """

    id: str
    name: str
    email: str
    location: str
    hobbies: str = ""

    def __repr__(self) -> str:
        return f"<UserRecord id={self.id} email={self.email}>"

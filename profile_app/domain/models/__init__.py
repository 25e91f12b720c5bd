"""Domain models for the profile application."""

from .user import ProfileFields, UserRecord

__all__ = [
    "ProfileFields",
    "UserRecord",
]

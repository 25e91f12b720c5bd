"""Errors raised by the profile service and its stores."""


class ProfileError(Exception):
    """Base class for profile application errors."""


class ValidationError(ProfileError):
    """A submitted field or identifier is malformed, missing or out of bounds."""


class NotFoundError(ProfileError):
    """No record exists for the requested identifier."""


class DuplicateEmailError(ProfileError):
    """The store rejected a write because the email belongs to another record."""


class StoreError(ProfileError):
    """Any other store failure."""

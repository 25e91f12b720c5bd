from __future__ import annotations

import logging
from typing import Optional

from ...domain.exceptions import NotFoundError, StoreError, ValidationError
from ...domain.models import UserRecord
from ...domain.ports.persistence import UserRepository
from ..validation import clean_profile_fields, is_valid_identifier

logger = logging.getLogger(__name__)


class ProfileService:
    """Validates profile submissions and drives the user repository."""

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    def register(
        self,
        name: Optional[str],
        email: Optional[str],
        hobbies: Optional[str],
        location: Optional[str],
    ) -> UserRecord:
        """
        Create a new profile.

        Raises:
            ValidationError: If any field is missing or malformed
            DuplicateEmailError: If the email belongs to another record
            StoreError: On any other store failure (already logged)
        """
        fields = clean_profile_fields(name, email, hobbies, location)
        try:
            user = self._repository.create_user(fields)
        except StoreError:
            logger.exception("Error saving user")
            raise
        logger.info("Registered user %s", user.id)
        return user

    def get_profile(self, user_id: Optional[str]) -> UserRecord:
        self._require_identifier(user_id)
        try:
            user = self._repository.get_user_by_id(user_id)
        except StoreError:
            logger.exception("Error loading profile %s", user_id)
            raise
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update(
        self,
        user_id: Optional[str],
        name: Optional[str],
        email: Optional[str],
        hobbies: Optional[str],
        location: Optional[str],
    ) -> str:
        """Replace the mutable fields of ``user_id`` and return the identifier.

        An unknown identifier is not reported as an error; the caller redirects
        to the profile page either way.
        """
        self._require_identifier(user_id)
        fields = clean_profile_fields(name, email, hobbies, location)
        try:
            updated = self._repository.update_user(user_id, fields)
        except StoreError:
            logger.exception("Error updating user %s", user_id)
            raise
        if updated is None:
            logger.info("Update for unknown user %s ignored", user_id)
        return user_id

    @staticmethod
    def _require_identifier(user_id: Optional[str]) -> None:
        if not is_valid_identifier(user_id):
            raise ValidationError("Invalid user id")

"""Normalization and syntactic checks for submitted profile fields."""

from __future__ import annotations

import re
from typing import Any, Optional

from ..domain.exceptions import ValidationError
from ..domain.models import ProfileFields

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 254
EMAIL_MIN_LENGTH = 3
HOBBIES_MAX_LENGTH = 200
LOCATION_MAX_LENGTH = 100
IDENTIFIER_LENGTH = 24

# Permissive shape check (local@domain.tld), not RFC 5322.
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s]+$")
_IDENTIFIER_PATTERN = re.compile(r"^[0-9a-fA-F]{%d}$" % IDENTIFIER_LENGTH)


def normalize_text(value: Any, max_len: int) -> str:
    """Return ``value`` as a stripped string truncated to ``max_len`` characters."""
    if value is None:
        return ""
    return str(value).strip()[:max_len]


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def is_valid_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    candidate = value.strip()
    if not EMAIL_MIN_LENGTH <= len(candidate) <= EMAIL_MAX_LENGTH:
        return False
    return _EMAIL_PATTERN.fullmatch(candidate) is not None


def is_valid_identifier(value: Any) -> bool:
    """Return True for a 24-character hexadecimal string (any case).

    Checked before every store lookup so malformed keys never reach the store.
    """
    return isinstance(value, str) and _IDENTIFIER_PATTERN.fullmatch(value) is not None


def clean_profile_fields(
    name: Optional[str],
    email: Optional[str],
    hobbies: Optional[str],
    location: Optional[str],
) -> ProfileFields:
    """Normalize raw form values, raising ``ValidationError`` when any is unusable."""
    clean_name = normalize_text(name, NAME_MAX_LENGTH)
    clean_location = normalize_text(location, LOCATION_MAX_LENGTH)
    if not clean_name or not clean_location or not is_non_empty_string(email):
        raise ValidationError("Missing required fields")
    if not is_valid_email(email):
        raise ValidationError("Invalid email address")
    return ProfileFields(
        name=clean_name,
        email=normalize_text(email, EMAIL_MAX_LENGTH),
        hobbies=normalize_text(hobbies, HOBBIES_MAX_LENGTH),
        location=clean_location,
    )

from __future__ import annotations

import base64
import binascii
import logging
import secrets
from typing import Optional

from fastapi.security.utils import get_authorization_scheme_param

logger = logging.getLogger(__name__)

REALM = "profile-update"


class BasicAuthGate:
    """Optional HTTP Basic credential check for the update endpoint.

    The gate is active only when both a username and a password are configured;
    otherwise every request passes.
    """

    def __init__(self, username: Optional[str], password: Optional[str]) -> None:
        self._username = username or ""
        self._password = password or ""

    @property
    def enabled(self) -> bool:
        return bool(self._username) and bool(self._password)

    @property
    def challenge(self) -> str:
        return f'Basic realm="{REALM}"'

    def is_authorized(self, authorization: Optional[str]) -> bool:
        if not self.enabled:
            return True
        credentials = self._parse(authorization)
        if credentials is None:
            return False
        username, password = credentials
        user_ok = secrets.compare_digest(username.encode("utf-8"), self._username.encode("utf-8"))
        pass_ok = secrets.compare_digest(password.encode("utf-8"), self._password.encode("utf-8"))
        return user_ok and pass_ok

    @staticmethod
    def _parse(authorization: Optional[str]) -> Optional[tuple[str, str]]:
        scheme, param = get_authorization_scheme_param(authorization)
        if not authorization or scheme.lower() != "basic" or not param:
            return None
        try:
            decoded = base64.b64decode(param, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError, ValueError):
            return None
        username, separator, password = decoded.partition(":")
        if not separator:
            return None
        return username, password

import logging

from fastapi import Depends, HTTPException, Request, status

from ...core.dependencies import get_access_gate, get_write_limiter
from ..security.basic_auth import BasicAuthGate
from ..security.rate_limit import FixedWindowRateLimiter, client_key, enforce

logger = logging.getLogger(__name__)


def require_update_access(
    request: Request,
    gate: BasicAuthGate = Depends(get_access_gate),
) -> None:
    if not gate.is_authorized(request.headers.get("Authorization")):
        logger.warning("Rejected update credentials from %s", client_key(request))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": gate.challenge},
        )


def enforce_write_limit(
    request: Request,
    limiter: FixedWindowRateLimiter = Depends(get_write_limiter),
) -> None:
    enforce(limiter, request)

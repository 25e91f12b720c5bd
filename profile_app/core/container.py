from dataclasses import dataclass

from ..application.rendering import TemplateCache
from ..application.services.profile_service import ProfileService
from ..domain.ports.persistence import UserRepository
from ..presentation.security.basic_auth import BasicAuthGate
from ..presentation.security.rate_limit import FixedWindowRateLimiter
from .config import Settings


@dataclass(slots=True)
class ApplicationContainer:
    """Components shared by every request of one application instance."""

    settings: Settings
    repository: UserRepository
    templates: TemplateCache
    profile_service: ProfileService
    global_limiter: FixedWindowRateLimiter
    write_limiter: FixedWindowRateLimiter
    access_gate: BasicAuthGate

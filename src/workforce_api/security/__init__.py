"""Security package."""

from workforce_api.security.identity import (
    IdentityProvider,
    SessionIdentityProvider,
    require_current_user,
)

__all__ = [
    "IdentityProvider",
    "SessionIdentityProvider",
    "require_current_user",
]

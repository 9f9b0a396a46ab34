"""Current-identity access."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from workforce_api.exceptions import UnauthenticatedError
from workforce_api.models.domain.identity import Identity

logger = logging.getLogger(__name__)


class IdentityProvider(ABC):
    """Source of the currently authenticated identity."""

    @abstractmethod
    def current_user(self) -> Identity | None:
        """Get the current identity, or None when nobody is logged in."""
        raise NotImplementedError

    def is_logged_in(self) -> bool:
        """Check if an identity is established."""
        return self.current_user() is not None


class SessionIdentityProvider(IdentityProvider):
    """Holds the identity established by the external sign-in flow.

    There is one session per process, as in a single-user desktop client:
    establishing an identity replaces it for every caller. Listeners
    registered with ``add_listener`` fire on every change of identity so
    identity-scoped caches can be dropped.
    """

    def __init__(self, identity: Identity | None = None) -> None:
        self._identity = identity
        self._listeners: list[Callable[[], None]] = []

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Register a callback fired on login and logout."""
        self._listeners.append(callback)

    def current_user(self) -> Identity | None:
        return self._identity

    def login(self, identity: Identity) -> Identity:
        """Establish ``identity`` as the current session."""
        self._identity = identity
        logger.info("Session established for %s (%s)", identity.uid, identity.role)
        self._notify()
        return identity

    def clear(self) -> None:
        """End the current session."""
        if self._identity is not None:
            logger.info("Session cleared for %s", self._identity.uid)
        self._identity = None
        self._notify()

    def _notify(self) -> None:
        for callback in self._listeners:
            callback()


def require_current_user(provider: IdentityProvider) -> Identity:
    """Get the current identity or fail.

    Raises:
        UnauthenticatedError: If nobody is logged in
    """
    identity = provider.current_user()
    if identity is None:
        raise UnauthenticatedError()
    return identity

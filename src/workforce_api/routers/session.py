"""Session router.

The session is process-wide, modelling a single-user client: the identity
established here is the current identity for every request until it is
replaced or cleared. Deploy one instance per user.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from workforce_api.dependencies import get_identity_provider
from workforce_api.models.domain.identity import Identity
from workforce_api.models.dto.auth import SessionResponse
from workforce_api.security.identity import SessionIdentityProvider

router = APIRouter()


@router.get("", response_model=SessionResponse)
async def get_session(
    provider: Annotated[SessionIdentityProvider, Depends(get_identity_provider)],
) -> SessionResponse:
    """Get the current session."""
    identity = provider.current_user()
    return SessionResponse(logged_in=identity is not None, identity=identity)


@router.put("", response_model=SessionResponse)
async def establish_session(
    identity: Identity,
    provider: Annotated[SessionIdentityProvider, Depends(get_identity_provider)],
) -> SessionResponse:
    """Establish the identity produced by the external sign-in flow.

    Any cached workspace of a previous identity is dropped.
    """
    provider.login(identity)
    return SessionResponse(logged_in=True, identity=identity)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_session(
    provider: Annotated[SessionIdentityProvider, Depends(get_identity_provider)],
) -> None:
    """End the current session."""
    provider.clear()

"""Session DTOs."""

from pydantic import BaseModel

from workforce_api.models.domain.identity import Identity


class SessionResponse(BaseModel):
    """Current session state."""

    logged_in: bool
    identity: Identity | None = None

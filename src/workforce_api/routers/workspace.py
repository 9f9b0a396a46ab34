"""Employee workspace router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from workforce_api.dependencies import get_workspace_service, require_employee
from workforce_api.models.domain.identity import Identity
from workforce_api.models.dto.workspace import WorkspaceResponse, WorkspaceSection
from workforce_api.services.workspace_service import WorkspaceService

router = APIRouter()


@router.get("", response_model=WorkspaceResponse)
async def get_default_section(
    current_user: Annotated[Identity, Depends(require_employee)],
    workspace_service: Annotated[WorkspaceService, Depends(get_workspace_service)],
    refresh: bool = Query(default=False, description="Bypass the workspace cache"),
) -> WorkspaceResponse:
    """Get the default workspace section (My Tasks)."""
    return await workspace_service.load_section(WorkspaceSection.MY_TASKS, force_refresh=refresh)


@router.get("/{section}", response_model=WorkspaceResponse)
async def get_section(
    section: str,
    current_user: Annotated[Identity, Depends(require_employee)],
    workspace_service: Annotated[WorkspaceService, Depends(get_workspace_service)],
    refresh: bool = Query(default=False, description="Bypass the workspace cache"),
) -> WorkspaceResponse:
    """Get one workspace section.

    Unknown section names fall back to My Tasks. The underlying aggregate is
    served from cache while fresh.
    """
    return await workspace_service.load_section(
        WorkspaceSection.resolve(section), force_refresh=refresh
    )

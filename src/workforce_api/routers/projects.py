"""Projects router."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from workforce_api.dependencies import get_project_service, require_management
from workforce_api.models.domain.identity import Identity
from workforce_api.models.domain.project import Project
from workforce_api.models.dto.project import ProjectListResponse
from workforce_api.services.project_service import ProjectService

router = APIRouter()


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    current_user: Annotated[Identity, Depends(require_management)],
    project_service: Annotated[ProjectService, Depends(get_project_service)],
) -> ProjectListResponse:
    """List projects."""
    projects = await project_service.list_projects()
    return ProjectListResponse(items=projects, total=len(projects))


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(
    project: Project,
    current_user: Annotated[Identity, Depends(require_management)],
    project_service: Annotated[ProjectService, Depends(get_project_service)],
) -> Project:
    """Create a project."""
    return await project_service.create_project(project)


@router.get("/{project_id}", response_model=Project)
async def get_project(
    project_id: str,
    current_user: Annotated[Identity, Depends(require_management)],
    project_service: Annotated[ProjectService, Depends(get_project_service)],
) -> Project:
    """Get one project."""
    return await project_service.get_project(project_id)


@router.put("/{project_id}", response_model=Project)
async def update_project(
    project_id: str,
    project: Project,
    current_user: Annotated[Identity, Depends(require_management)],
    project_service: Annotated[ProjectService, Depends(get_project_service)],
) -> Project:
    """Replace a project."""
    return await project_service.update_project(project_id, project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    current_user: Annotated[Identity, Depends(require_management)],
    project_service: Annotated[ProjectService, Depends(get_project_service)],
) -> None:
    """Delete a project."""
    await project_service.delete_project(project_id)

"""Project DTOs."""

from pydantic import BaseModel

from workforce_api.models.domain.project import Project


class ProjectListResponse(BaseModel):
    """Project list response DTO."""

    items: list[Project]
    total: int

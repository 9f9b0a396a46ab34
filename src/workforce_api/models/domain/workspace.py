"""Workspace aggregate domain model."""

from pydantic import BaseModel, Field

from workforce_api.models.domain.employee import Employee
from workforce_api.models.domain.project import Project


class WorkspaceAggregate(BaseModel):
    """Snapshot of one identity's workspace.

    Rebuilt wholesale on every refresh and never mutated afterwards.
    """

    identity_uid: str
    current_employee: Employee | None = None
    all_employees: list[Employee] = Field(default_factory=list)
    assigned_projects: list[Project] = Field(default_factory=list)
    computed_at: int

    class Config:
        """Pydantic config."""

        frozen = True

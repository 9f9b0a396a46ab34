"""Domain models package."""

from workforce_api.models.domain.employee import Employee, EmployeeStatus
from workforce_api.models.domain.identity import Identity, Role
from workforce_api.models.domain.invoice import Invoice
from workforce_api.models.domain.project import Project, ProjectPriority, ProjectStatus
from workforce_api.models.domain.workspace import WorkspaceAggregate

__all__ = [
    "Employee",
    "EmployeeStatus",
    "Identity",
    "Role",
    "Invoice",
    "Project",
    "ProjectPriority",
    "ProjectStatus",
    "WorkspaceAggregate",
]

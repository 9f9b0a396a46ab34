"""Data Transfer Objects package."""

from workforce_api.models.dto.auth import SessionResponse
from workforce_api.models.dto.dashboard import DashboardResponse, EmployeeDashboardResponse
from workforce_api.models.dto.employee import EmployeeListResponse, EmployeeResponse
from workforce_api.models.dto.invoice import InvoiceListResponse
from workforce_api.models.dto.project import ProjectListResponse
from workforce_api.models.dto.workspace import SectionView, WorkspaceResponse, WorkspaceSection

__all__ = [
    "SessionResponse",
    "DashboardResponse",
    "EmployeeDashboardResponse",
    "EmployeeResponse",
    "EmployeeListResponse",
    "InvoiceListResponse",
    "ProjectListResponse",
    "SectionView",
    "WorkspaceResponse",
    "WorkspaceSection",
]

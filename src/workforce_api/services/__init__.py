"""Services package."""

from workforce_api.services.cache_service import WorkspaceCache
from workforce_api.services.dashboard_service import DashboardService
from workforce_api.services.employee_service import EmployeeService
from workforce_api.services.finance_service import FinanceService
from workforce_api.services.project_service import ProjectService
from workforce_api.services.workspace_service import WorkspaceService

__all__ = [
    "DashboardService",
    "EmployeeService",
    "FinanceService",
    "ProjectService",
    "WorkspaceCache",
    "WorkspaceService",
]

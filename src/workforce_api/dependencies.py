"""Centralized dependency injection factories for FastAPI.

Services live on the ``AppContext`` built at startup; these factories hand
them to route handlers.
"""

from typing import Annotated

from fastapi import Depends, Request

from workforce_api.context import AppContext
from workforce_api.exceptions import ForbiddenError
from workforce_api.models.domain.identity import Identity, Role
from workforce_api.security.identity import SessionIdentityProvider, require_current_user
from workforce_api.services.dashboard_service import DashboardService
from workforce_api.services.employee_service import EmployeeService
from workforce_api.services.finance_service import FinanceService
from workforce_api.services.project_service import ProjectService
from workforce_api.services.workspace_service import WorkspaceService


def get_context(request: Request) -> AppContext:
    """Get the application context."""
    return request.app.state.context


# =============================================================================
# Session
# =============================================================================


def get_identity_provider(
    context: Annotated[AppContext, Depends(get_context)],
) -> SessionIdentityProvider:
    """Get the session identity provider."""
    return context.identity


def require_identity(
    provider: Annotated[SessionIdentityProvider, Depends(get_identity_provider)],
) -> Identity:
    """Get the current identity.

    Raises:
        UnauthenticatedError: If nobody is logged in (mapped to 401)
    """
    return require_current_user(provider)


def require_management(
    current_user: Annotated[Identity, Depends(require_identity)],
) -> Identity:
    """Require a managing director or project manager.

    Employees have their own dashboard and workspace instead.

    Raises:
        ForbiddenError: If the identity is an employee (mapped to 403)
    """
    if current_user.is_employee():
        raise ForbiddenError(current_user.role, [Role.MANAGING_DIRECTOR, Role.PROJECT_MANAGER])
    return current_user


def require_managing_director(
    current_user: Annotated[Identity, Depends(require_identity)],
) -> Identity:
    """Require the managing director role (finance).

    Raises:
        ForbiddenError: If the identity has another role (mapped to 403)
    """
    if not current_user.is_managing_director():
        raise ForbiddenError(current_user.role, [Role.MANAGING_DIRECTOR])
    return current_user


def require_employee(
    current_user: Annotated[Identity, Depends(require_identity)],
) -> Identity:
    """Require the employee role (employee workspace).

    Raises:
        ForbiddenError: If the identity has another role (mapped to 403)
    """
    if not current_user.is_employee():
        raise ForbiddenError(current_user.role, [Role.EMPLOYEE])
    return current_user


# =============================================================================
# Service Factories
# =============================================================================


def get_dashboard_service(context: Annotated[AppContext, Depends(get_context)]) -> DashboardService:
    """Get DashboardService instance."""
    return context.dashboard


def get_workspace_service(context: Annotated[AppContext, Depends(get_context)]) -> WorkspaceService:
    """Get WorkspaceService instance."""
    return context.workspace


def get_employee_service(context: Annotated[AppContext, Depends(get_context)]) -> EmployeeService:
    """Get EmployeeService instance."""
    return context.employees


def get_project_service(context: Annotated[AppContext, Depends(get_context)]) -> ProjectService:
    """Get ProjectService instance."""
    return context.projects


def get_finance_service(context: Annotated[AppContext, Depends(get_context)]) -> FinanceService:
    """Get FinanceService instance."""
    return context.finance

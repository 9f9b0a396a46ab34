"""Dashboard router."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from workforce_api.dependencies import (
    get_dashboard_service,
    get_workspace_service,
    require_employee,
    require_management,
)
from workforce_api.models.domain.identity import Identity
from workforce_api.models.dto.dashboard import (
    DashboardResponse,
    EmployeeDashboardResponse,
    MonthDrilldown,
    RevenuePoint,
    StatusDrilldown,
)
from workforce_api.services.dashboard_service import DashboardService
from workforce_api.services.insight_service import parse_month_key, resolve_range_months
from workforce_api.services.workspace_service import WorkspaceService

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    current_user: Annotated[Identity, Depends(require_management)],
    dashboard_service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> DashboardResponse:
    """Get dashboard overview data.

    Returns headline metrics, the most recently touched projects, the
    activity feed and portfolio insights. Always computed from a fresh
    snapshot of the directory store.
    """
    return await dashboard_service.load_dashboard()


@router.get("/employee", response_model=EmployeeDashboardResponse)
async def get_employee_dashboard(
    current_user: Annotated[Identity, Depends(require_employee)],
    workspace_service: Annotated[WorkspaceService, Depends(get_workspace_service)],
    refresh: bool = Query(default=False, description="Bypass the workspace cache"),
) -> EmployeeDashboardResponse:
    """Get the current employee's dashboard."""
    return await workspace_service.load_employee_dashboard(force_refresh=refresh)


@router.get("/revenue", response_model=list[RevenuePoint])
async def get_revenue_trend(
    current_user: Annotated[Identity, Depends(require_management)],
    dashboard_service: Annotated[DashboardService, Depends(get_dashboard_service)],
    range_: str = Query(default="6M", alias="range", description="3M, 6M or 12M"),
    mode: str = Query(default="paid", description="paid or total"),
) -> list[RevenuePoint]:
    """Get monthly revenue over a trailing window."""
    return await dashboard_service.load_revenue_trend(
        months=resolve_range_months(range_),
        paid_only=mode.strip().lower() != "total",
    )


@router.get("/drilldown/month/{month}", response_model=MonthDrilldown)
async def get_month_drilldown(
    month: str,
    current_user: Annotated[Identity, Depends(require_management)],
    dashboard_service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> MonthDrilldown:
    """Get the breakdown of one month given as YYYY-MM."""
    try:
        selected = parse_month_key(month)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid request",
        ) from None
    return await dashboard_service.load_month_drilldown(selected)


@router.get("/drilldown/status/{label}", response_model=StatusDrilldown)
async def get_status_drilldown(
    label: str,
    current_user: Annotated[Identity, Depends(require_management)],
    dashboard_service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> StatusDrilldown:
    """Get the breakdown of one project status slice, e.g. "At Risk"."""
    return await dashboard_service.load_status_drilldown(label)

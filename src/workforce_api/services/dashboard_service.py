"""Dashboard aggregation.

The module-level functions are pure: they take already-fetched collections
plus a reference time and never touch the store. ``DashboardService`` wires
them to a snapshot load for the current identity.
"""

import logging
import sys
from collections.abc import Iterable
from datetime import date
from typing import TypeVar
from zoneinfo import ZoneInfo

from workforce_api.config import Settings
from workforce_api.models.domain.employee import Employee, EmployeeStatus
from workforce_api.models.domain.invoice import Invoice
from workforce_api.models.domain.project import Project
from workforce_api.models.domain.workspace import WorkspaceAggregate
from workforce_api.models.dto.dashboard import (
    ActivityEntry,
    ActivityItem,
    DashboardMetrics,
    DashboardResponse,
    EmployeeDashboardResponse,
    MonthDrilldown,
    ProjectOverview,
    RevenuePoint,
    StatusDrilldown,
    TaskItem,
)
from workforce_api.repositories.base import DirectoryStore
from workforce_api.security.identity import IdentityProvider, require_current_user
from workforce_api.services.assignment_service import sort_by_last_touched
from workforce_api.services.insight_service import (
    DEFAULT_RANGE_MONTHS,
    compute_portfolio_insights,
    month_drilldown,
    monthly_revenue_trend,
    project_status_breakdown,
    status_drilldown,
)
from workforce_api.services.snapshot_service import DirectorySnapshot, load_snapshot
from workforce_api.utils.clock import Clock, now_millis
from workforce_api.utils.formatting import (
    UTC,
    days_until,
    due_date_label,
    format_currency,
    relative_time_label,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Each 25 points of remaining completion count as one unit of work
WORK_UNIT_PERCENT = 25

DEFAULT_TOP_PROJECTS = 3
DEFAULT_FEED_LIMIT = 3

NO_ACTIVITY_TITLE = "No recent activity"

# Projects due within this many days are "due soon" on the employee dashboard
DUE_SOON_DAYS = 2


def _present(items: Iterable[T | None] | None) -> list[T]:
    return [item for item in items or () if item is not None]


def remaining_work_units(project: Project) -> int:
    """Coarse count of work units left on a project.

    ``(100 - completion + 24) // 25``: every started 25 points of remaining
    completion is one unit. Exact integer arithmetic.
    """
    remaining = 100 - project.completion_percentage
    return max(0, (remaining + WORK_UNIT_PERCENT - 1) // WORK_UNIT_PERCENT)


def compute_dashboard_metrics(
    projects: Iterable[Project | None],
    employees: Iterable[Employee | None],
    invoices: Iterable[Invoice | None],
) -> DashboardMetrics:
    """Compute the headline dashboard counters.

    Args:
        projects: All projects
        employees: All employees (counted unfiltered)
        invoices: All invoices

    Returns:
        DashboardMetrics
    """
    projects = _present(projects)
    return DashboardMetrics(
        active_project_count=sum(1 for project in projects if project.is_active),
        employee_count=len(_present(employees)),
        pending_work_items=sum(
            remaining_work_units(project) for project in projects if not project.is_completed
        ),
        recognized_revenue=sum(invoice.amount for invoice in _present(invoices) if invoice.paid),
    )


def top_recent_projects(projects: Iterable[Project | None], n: int = DEFAULT_TOP_PROJECTS) -> list[Project]:
    """Get the ``n`` most recently touched projects."""
    return sort_by_last_touched(_present(projects))[:n]


def build_activity_feed(
    projects: Iterable[Project | None],
    employees: Iterable[Employee | None],
    invoices: Iterable[Invoice | None],
    n: int = DEFAULT_FEED_LIMIT,
) -> list[ActivityEntry]:
    """Merge project, employee and invoice events into one recent-first feed.

    Entries without a positive timestamp are dropped. An empty result is
    valid here; callers render it with ``activity_feed_or_placeholder``.

    Args:
        projects: All projects
        employees: All employees
        invoices: All invoices
        n: Maximum number of entries

    Returns:
        Newest entries first
    """
    entries: list[ActivityEntry] = []

    for project in _present(projects):
        timestamp = project.created_at if project.created_at > 0 else project.updated_at
        entries.append(
            ActivityEntry(title=f"Project updated: {project.display_name}", timestamp=timestamp, color="blue")
        )

    for employee in _present(employees):
        entries.append(
            ActivityEntry(
                title=f"Employee added: {employee.full_name}",
                timestamp=employee.created_at,
                color="orange",
            )
        )

    for invoice in _present(invoices):
        entries.append(
            ActivityEntry(
                title=f"Invoice {'paid' if invoice.paid else 'issued'}: {invoice.id}",
                timestamp=invoice.issued_at,
                color="green" if invoice.paid else "blue",
            )
        )

    recent = [entry for entry in entries if entry.timestamp > 0]
    recent.sort(key=lambda entry: entry.timestamp, reverse=True)
    return recent[:n]


def activity_feed_or_placeholder(
    entries: list[ActivityEntry],
    now: int,
    tz: ZoneInfo = UTC,
) -> list[ActivityItem]:
    """Render feed entries, substituting a single placeholder when empty."""
    if not entries:
        return [ActivityItem(title=NO_ACTIVITY_TITLE, time_label="Just now", color="blue")]
    return [
        ActivityItem(
            title=entry.title,
            time_label=relative_time_label(entry.timestamp, now, tz),
            color=entry.color,
        )
        for entry in entries
    ]


def project_overview(project: Project, now: int, tz: ZoneInfo = UTC) -> ProjectOverview:
    """Render a project card with its due label and remaining work units."""
    units = remaining_work_units(project)
    due_label = due_date_label(project.end_date, now, tz)
    return ProjectOverview(
        id=project.id,
        name=project.display_name,
        completion_percentage=project.completion_percentage,
        remaining_units=units,
        due_label=due_label,
        meta=f"{due_label} • {units} tasks remaining",
    )


def build_dashboard(
    snapshot: DirectorySnapshot,
    now: int,
    tz: ZoneInfo = UTC,
    top_n: int = DEFAULT_TOP_PROJECTS,
    feed_n: int = DEFAULT_FEED_LIMIT,
) -> DashboardResponse:
    """Assemble the management dashboard from a snapshot.

    Args:
        snapshot: Employees, projects and invoices fetched together
        now: Reference time in epoch milliseconds
        tz: Display timezone
        top_n: Number of overview project cards
        feed_n: Number of activity entries

    Returns:
        DashboardResponse
    """
    metrics = compute_dashboard_metrics(snapshot.projects, snapshot.employees, snapshot.invoices)
    feed = build_activity_feed(snapshot.projects, snapshot.employees, snapshot.invoices, feed_n)
    return DashboardResponse(
        metrics=metrics,
        recognized_revenue_label=format_currency(metrics.recognized_revenue),
        top_projects=[
            project_overview(project, now, tz) for project in top_recent_projects(snapshot.projects, top_n)
        ],
        activity_feed=activity_feed_or_placeholder(feed, now, tz),
        insights=compute_portfolio_insights(snapshot.projects, snapshot.invoices, now),
        revenue_trend=monthly_revenue_trend(snapshot.invoices, now, tz, DEFAULT_RANGE_MONTHS),
        status_breakdown=project_status_breakdown(snapshot.projects, now),
        generated_at=now,
    )


# =============================================================================
# Employee dashboard
# =============================================================================


def effective_due_date(project: Project) -> int:
    """Get the end date, or a far-future sentinel for projects without one."""
    return project.end_date if project.end_date > 0 else sys.maxsize


def is_due_today(project: Project, now: int, tz: ZoneInfo = UTC) -> bool:
    """Check if the project's end date falls on ``now``'s calendar day."""
    return project.end_date > 0 and days_until(project.end_date, now, tz) == 0


def is_due_soon(project: Project, now: int, tz: ZoneInfo = UTC) -> bool:
    """Check if the project is due today or within the next two days."""
    if project.end_date <= 0:
        return False
    return 0 <= days_until(project.end_date, now, tz) <= DUE_SOON_DAYS


def open_work(projects: Iterable[Project], now: int) -> list[Project]:
    """Active or overdue projects, earliest due date first."""
    relevant = [project for project in projects if project.is_active or project.is_overdue(now)]
    return sorted(relevant, key=effective_due_date)


def task_priority(project: Project, now: int, tz: ZoneInfo = UTC) -> str:
    """Classify a task as high (overdue), medium (due soon) or low."""
    if project.is_overdue(now):
        return "high"
    if is_due_soon(project, now, tz):
        return "medium"
    return "low"


def leave_metric(employee: Employee | None) -> str:
    """Leave balance shown on the employee dashboard."""
    if employee is not None and employee.status == EmployeeStatus.ON_LEAVE:
        return "0"
    return "N/A"


def build_employee_dashboard(
    aggregate: WorkspaceAggregate,
    now: int,
    tz: ZoneInfo = UTC,
    limit: int = DEFAULT_TOP_PROJECTS,
) -> EmployeeDashboardResponse:
    """Assemble the employee dashboard from a workspace aggregate.

    Args:
        aggregate: Current workspace aggregate
        now: Reference time in epoch milliseconds
        tz: Display timezone
        limit: Number of tasks, project cards and activity entries

    Returns:
        EmployeeDashboardResponse
    """
    assigned = aggregate.assigned_projects

    tasks = [
        TaskItem(
            title=f"Progress update: {project.display_name}",
            project_name=project.display_name,
            due_label=due_date_label(project.end_date, now, tz),
            priority=task_priority(project, now, tz),
        )
        for project in open_work(assigned, now)[:limit]
    ]

    activity = [
        ActivityEntry(
            title=f"Project updated: {project.display_name}",
            timestamp=project.last_touched_at,
            color="green",
        )
        for project in sort_by_last_touched(assigned)[:limit]
    ]

    return EmployeeDashboardResponse(
        employee=aggregate.current_employee,
        due_today_count=sum(1 for project in assigned if is_due_today(project, now, tz)),
        active_project_count=sum(1 for project in assigned if project.is_active),
        leave_metric=leave_metric(aggregate.current_employee),
        tasks=tasks,
        projects=[project_overview(project, now, tz) for project in assigned[:limit]],
        activity=activity_feed_or_placeholder(activity, now, tz),
        computed_at=aggregate.computed_at,
    )


class DashboardService:
    """Service for the management dashboard."""

    def __init__(
        self,
        store: DirectoryStore,
        identity_provider: IdentityProvider,
        settings: Settings,
        clock: Clock = now_millis,
    ) -> None:
        """Initialize service with its collaborators."""
        self.store = store
        self.identity_provider = identity_provider
        self.settings = settings
        self.clock = clock

    async def load_snapshot(self) -> DirectorySnapshot:
        """Fetch all three collections for the current identity.

        Raises:
            UnauthenticatedError: If nobody is logged in
        """
        identity = require_current_user(self.identity_provider)
        logger.debug("Loading dashboard snapshot for %s", identity.uid)
        return await load_snapshot(self.store)

    async def load_dashboard(self) -> DashboardResponse:
        """Load metrics, top projects, activity feed and insights.

        Returns:
            DashboardResponse

        Raises:
            UnauthenticatedError: If nobody is logged in
            StoreUnavailableError: If any collection fetch fails
            StoreTimeoutError: If any collection fetch times out
        """
        snapshot = await self.load_snapshot()
        return build_dashboard(
            snapshot,
            self.clock(),
            self.settings.tz,
            self.settings.dashboard_top_projects,
            self.settings.activity_feed_limit,
        )

    async def load_revenue_trend(
        self,
        months: int = DEFAULT_RANGE_MONTHS,
        paid_only: bool = True,
    ) -> list[RevenuePoint]:
        """Load the monthly revenue trend for a trailing window."""
        snapshot = await self.load_snapshot()
        return monthly_revenue_trend(snapshot.invoices, self.clock(), self.settings.tz, months, paid_only)

    async def load_month_drilldown(self, month: date) -> MonthDrilldown:
        """Load the breakdown of one revenue month."""
        snapshot = await self.load_snapshot()
        return month_drilldown(month, snapshot.projects, snapshot.invoices, self.settings.tz)

    async def load_status_drilldown(self, label: str) -> StatusDrilldown:
        """Load the breakdown of one project status slice."""
        snapshot = await self.load_snapshot()
        return status_drilldown(label, snapshot.projects, self.clock())

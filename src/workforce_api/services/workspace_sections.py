"""Rendering of workspace sections from a workspace aggregate.

Each renderer is pure: aggregate plus reference time in, ``SectionView`` out.
"""

from collections.abc import Callable
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from workforce_api.models.domain.employee import Employee, EmployeeStatus
from workforce_api.models.domain.workspace import WorkspaceAggregate
from workforce_api.models.dto.workspace import SectionItem, SectionView, SummaryCard, WorkspaceSection
from workforce_api.services.dashboard_service import is_due_today, open_work
from workforce_api.utils.formatting import UTC, due_date_label, format_date

WEEKLY_HOURS_TARGET = 40
HOURS_PER_ACTIVE_PROJECT = 8
TIME_SHEET_PROJECT_LIMIT = 6
DOCUMENT_PROJECT_LIMIT = 5

WORK_STATUS_LABELS = {
    EmployeeStatus.ACTIVE: "Clocked In",
    EmployeeStatus.ON_LEAVE: "On Leave",
    EmployeeStatus.TERMINATED: "Inactive",
}


@dataclass(frozen=True)
class RenderContext:
    """Inputs shared by all section renderers."""

    aggregate: WorkspaceAggregate
    now: int
    tz: ZoneInfo = UTC
    list_limit: int = 8
    team_limit: int = 10


def or_na(value: str | None) -> str:
    """Get the value, or "N/A" when missing or blank."""
    if value is None or not value.strip():
        return "N/A"
    return value


def _lower(value: str | None) -> str:
    return (value or "").strip().lower()


def work_status_label(employee: Employee | None) -> str:
    """Describe the employee's working state."""
    if employee is None:
        return "Status Unavailable"
    return WORK_STATUS_LABELS.get(employee.status, "Status Unavailable")


def _card(title: str, value: str, subtitle: str, style: str) -> SummaryCard:
    return SummaryCard(title=title, value=value, subtitle=subtitle, style=style)


def _item(title: str, meta: str, badge: str) -> SectionItem:
    return SectionItem(title=title, meta=meta, badge=badge)


def render_my_tasks(ctx: RenderContext) -> tuple[list[SummaryCard], list[SectionItem]]:
    tasks = open_work(ctx.aggregate.assigned_projects, ctx.now)
    cards = [
        _card("Tasks", str(len(tasks)), "Assigned work items", "blue"),
        _card(
            "Due Today",
            str(sum(1 for task in tasks if is_due_today(task, ctx.now, ctx.tz))),
            "Needs attention now",
            "orange",
        ),
        _card("Overdue", str(sum(1 for task in tasks if task.is_overdue(ctx.now))), "Follow up required", "red"),
    ]
    if not tasks:
        return cards, [_item("No assigned tasks", "You are all caught up", "INFO")]

    items = [
        _item(
            task.display_name,
            f"{due_date_label(task.end_date, ctx.now, ctx.tz)} • Progress {task.completion_percentage}%",
            "HIGH" if task.is_overdue(ctx.now) else "OPEN",
        )
        for task in tasks[: ctx.list_limit]
    ]
    return cards, items


def render_my_projects(ctx: RenderContext) -> tuple[list[SummaryCard], list[SectionItem]]:
    projects = ctx.aggregate.assigned_projects
    cards = [
        _card("Assigned", str(len(projects)), "All tracked projects", "purple"),
        _card("Active", str(sum(1 for p in projects if p.is_active)), "In progress now", "green"),
        _card("Completed", str(sum(1 for p in projects if p.is_completed)), "Delivered projects", "blue"),
    ]
    if not projects:
        return cards, [_item("No assigned projects", "Projects will appear here once assigned", "INFO")]

    items = [
        _item(
            project.display_name,
            f"Status: {project.status} • Due {format_date(project.end_date, ctx.tz)}",
            f"{project.completion_percentage}%",
        )
        for project in projects[: ctx.list_limit]
    ]
    return cards, items


def render_time_sheet(ctx: RenderContext) -> tuple[list[SummaryCard], list[SectionItem]]:
    active = [project for project in ctx.aggregate.assigned_projects if project.is_active]
    estimated = min(WEEKLY_HOURS_TARGET, len(active) * HOURS_PER_ACTIVE_PROJECT)
    remaining = max(0, WEEKLY_HOURS_TARGET - estimated)

    cards = [
        _card("This Week", f"{estimated}h", "Estimated from active projects", "green"),
        _card("Remaining", f"{remaining}h", f"Until {WEEKLY_HOURS_TARGET}h weekly target", "blue"),
        _card("Entries", str(len(active)), "Project time slots", "purple"),
    ]
    items = [
        _item("Weekly check-in", "Submit your final timesheet before Friday 6 PM", "REMINDER"),
        _item("Time allocation", "Split hours across projects based on actual effort", "TIP"),
    ]
    items.extend(
        _item(
            f"Log hours: {project.display_name}",
            f"Current progress {project.completion_percentage}%",
            "PROJECT",
        )
        for project in active[:TIME_SHEET_PROJECT_LIMIT]
    )
    return cards, items


def render_requests(ctx: RenderContext) -> tuple[list[SummaryCard], list[SectionItem]]:
    employee = ctx.aggregate.current_employee
    status = "UNKNOWN" if employee is None else str(employee.status)

    cards = [
        _card("Current Status", status, "Employment availability", "orange"),
        _card("Annual Leave", "N/A", "Configured by HR policy", "blue"),
        _card("Pending", "0", "No open leave approvals", "purple"),
    ]
    items = [
        _item("Request process", "Contact HR or your manager to file formal leave requests", "INFO"),
        _item("Sick leave", "Notify your manager before start of shift when possible", "POLICY"),
        _item("Status", f"Your current recorded status is: {status}", "PROFILE"),
    ]
    return cards, items


def render_documents(ctx: RenderContext) -> tuple[list[SummaryCard], list[SectionItem]]:
    projects = ctx.aggregate.assigned_projects
    cards = [
        _card("My Docs", str(max(1, len(projects))), "Document groups", "blue"),
        _card("Policies", "3", "Core employee policies", "green"),
        _card("Templates", "2", "Reusable reporting templates", "purple"),
    ]
    items = [
        _item("Employee Handbook", "Company policy and conduct reference", "POLICY"),
        _item("Timesheet Template", "Weekly template for hour reporting", "TEMPLATE"),
        _item("Leave Request Template", "Request format for manager/HR approval", "TEMPLATE"),
    ]
    items.extend(
        _item(
            f"Project Brief: {project.display_name}",
            f"Latest update {format_date(project.updated_at, ctx.tz)}",
            "PROJECT",
        )
        for project in projects[:DOCUMENT_PROJECT_LIMIT]
    )
    return cards, items


def team_members(aggregate: WorkspaceAggregate) -> list[Employee]:
    """Active colleagues in the current employee's department.

    Without a known department every active colleague is included. The
    current employee is never listed.
    """
    current = aggregate.current_employee
    department = _lower(current.department) if current is not None else ""
    current_id = current.id if current is not None else None

    members = [
        employee
        for employee in aggregate.all_employees
        if employee.is_active
        and (current_id is None or employee.id != current_id)
        and (not department or _lower(employee.department) == department)
    ]
    return sorted(members, key=lambda employee: _lower(employee.full_name))


def render_team(ctx: RenderContext) -> tuple[list[SummaryCard], list[SectionItem]]:
    current = ctx.aggregate.current_employee
    department = _lower(current.department) if current is not None else ""
    members = team_members(ctx.aggregate)

    cards = [
        _card("Department", department.upper() if department else "All", "Team scope", "green"),
        _card("Members", str(len(members)), "Active colleagues", "blue"),
        _card(
            "Shared Projects",
            str(len(ctx.aggregate.assigned_projects)),
            "Projects in your queue",
            "purple",
        ),
    ]
    if not members:
        return cards, [
            _item("No team members found", "No matching active employees in your department", "INFO")
        ]

    items = [
        _item(
            or_na(member.full_name),
            f"{or_na(member.position)} • {or_na(member.email)}",
            str(member.status),
        )
        for member in members[: ctx.team_limit]
    ]
    return cards, items


def render_profile(ctx: RenderContext) -> tuple[list[SummaryCard], list[SectionItem]]:
    employee = ctx.aggregate.current_employee
    if employee is None:
        return (
            [_card("Profile", "Unavailable", "No employee record matched your account", "red")],
            [_item("Profile not found", "Try reloading from dashboard", "ERROR")],
        )

    cards = [
        _card("Department", or_na(employee.department), "Assigned department", "green"),
        _card("Position", or_na(employee.position), "Current role", "blue"),
        _card("Status", str(employee.status), "Employment status", "purple"),
    ]
    items = [
        _item("Name", or_na(employee.full_name), "PROFILE"),
        _item("Email", or_na(employee.email), "CONTACT"),
        _item("Phone", or_na(employee.phone), "CONTACT"),
        _item("Employee ID", or_na(employee.id), "ID"),
    ]
    return cards, items


Renderer = Callable[[RenderContext], tuple[list[SummaryCard], list[SectionItem]]]

SECTION_RENDERERS: dict[WorkspaceSection, tuple[str, Renderer]] = {
    WorkspaceSection.MY_TASKS: ("Track your active and upcoming work items.", render_my_tasks),
    WorkspaceSection.MY_PROJECTS: ("Projects where you are assigned as a contributor.", render_my_projects),
    WorkspaceSection.TIME_SHEET: ("Your weekly utilization and reporting snapshot.", render_time_sheet),
    WorkspaceSection.REQUESTS: ("Review leave status and request guidance.", render_requests),
    WorkspaceSection.DOCUMENTS: ("Quick access to employee and project documents.", render_documents),
    WorkspaceSection.TEAM: ("Team members related to your department.", render_team),
    WorkspaceSection.PROFILE: ("Your employee profile overview.", render_profile),
}


def build_section_view(section: WorkspaceSection, ctx: RenderContext) -> SectionView:
    """Render one workspace section.

    Args:
        section: Section to render
        ctx: Aggregate, reference time and list limits

    Returns:
        SectionView
    """
    subtitle, renderer = SECTION_RENDERERS[section]
    cards, items = renderer(ctx)
    return SectionView(
        section=section,
        title=section.display_name,
        subtitle=subtitle,
        cards=cards,
        items=items,
        work_status=work_status_label(ctx.aggregate.current_employee),
        status_message=f"Showing {section.display_name}",
    )

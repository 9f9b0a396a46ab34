"""Dashboard DTOs."""

from pydantic import BaseModel

from workforce_api.models.domain.employee import Employee


class DashboardMetrics(BaseModel):
    """Headline counters for the management dashboard."""

    active_project_count: int
    employee_count: int
    pending_work_items: int
    recognized_revenue: float


class ActivityEntry(BaseModel):
    """One entry of the merged activity feed."""

    title: str
    timestamp: int
    color: str


class ActivityItem(BaseModel):
    """Activity entry rendered for display."""

    title: str
    time_label: str
    color: str


class ProjectOverview(BaseModel):
    """Project card for overview lists."""

    id: str | None = None
    name: str
    completion_percentage: int
    remaining_units: int
    due_label: str
    meta: str


class PortfolioInsights(BaseModel):
    """Portfolio health figures derived from projects and invoices."""

    portfolio_health: int  # % of projects completed
    collection_rate: int  # % of invoiced amount paid
    overdue_projects: int
    average_progress: int
    on_track_projects: int
    at_risk_projects: int
    open_invoices: int


class RevenuePoint(BaseModel):
    """Revenue bucket for one calendar month."""

    month: str  # YYYY-MM
    label: str  # short month name
    amount: float


class StatusBucket(BaseModel):
    """Project count for one status slice."""

    label: str
    count: int


class MonthDrilldown(BaseModel):
    """Breakdown of one revenue month."""

    label: str
    revenue: float
    invoice_count: int
    paid_count: int
    project_count: int
    highlights: list[str]


class StatusDrilldown(BaseModel):
    """Breakdown of one project status slice."""

    label: str
    project_count: int
    average_progress: int
    highlights: list[str]


class DashboardResponse(BaseModel):
    """Dashboard response DTO."""

    metrics: DashboardMetrics
    recognized_revenue_label: str
    top_projects: list[ProjectOverview]
    activity_feed: list[ActivityItem]
    insights: PortfolioInsights
    revenue_trend: list[RevenuePoint]
    status_breakdown: list[StatusBucket]
    generated_at: int


class TaskItem(BaseModel):
    """Work item shown on the employee dashboard."""

    title: str
    project_name: str
    due_label: str
    priority: str  # high / medium / low


class EmployeeDashboardResponse(BaseModel):
    """Employee dashboard response DTO."""

    employee: Employee | None = None
    due_today_count: int
    active_project_count: int
    leave_metric: str
    tasks: list[TaskItem]
    projects: list[ProjectOverview]
    activity: list[ActivityItem]
    computed_at: int

"""Portfolio analytics: health figures, revenue trend and drill-downs."""

from collections.abc import Iterable
from datetime import date
from zoneinfo import ZoneInfo

from workforce_api.models.domain.invoice import Invoice
from workforce_api.models.domain.project import Project, ProjectStatus
from workforce_api.models.dto.dashboard import (
    MonthDrilldown,
    PortfolioInsights,
    RevenuePoint,
    StatusBucket,
    StatusDrilldown,
)
from workforce_api.utils.clock import to_local_date
from workforce_api.utils.formatting import (
    MONTH_FORMAT,
    MONTH_YEAR_FORMAT,
    UTC,
    format_currency,
    round_half_up,
)

# Projects below this completion count as at risk even when not overdue
AT_RISK_PROGRESS_THRESHOLD = 35

DEFAULT_RANGE_MONTHS = 6
RANGE_MONTHS = {"3M": 3, "6M": 6, "12M": 12}

STATUS_IN_PROGRESS = "In Progress"
STATUS_COMPLETED = "Completed"
STATUS_PLANNING = "Planning"
STATUS_AT_RISK = "At Risk"
STATUS_NO_DATA = "No Data"
STATUS_LABELS = (STATUS_IN_PROGRESS, STATUS_COMPLETED, STATUS_PLANNING, STATUS_AT_RISK)

HIGHLIGHT_LIMIT = 3


def _percent(part: float, whole: float) -> int:
    if whole <= 0:
        return 0
    return round_half_up(part * 100 / whole)


def _present(items: Iterable | None) -> list:
    return [item for item in items or () if item is not None]


def resolve_range_months(value: str | None) -> int:
    """Map a range filter ("3M", "6M", "12M") to a month count, default 6."""
    if not value:
        return DEFAULT_RANGE_MONTHS
    return RANGE_MONTHS.get(value.strip().upper(), DEFAULT_RANGE_MONTHS)


def compute_portfolio_insights(
    projects: Iterable[Project | None],
    invoices: Iterable[Invoice | None],
    now: int,
) -> PortfolioInsights:
    """Compute portfolio health figures.

    Args:
        projects: All projects
        invoices: All invoices
        now: Reference time in epoch milliseconds

    Returns:
        PortfolioInsights with whole-number percentages
    """
    projects = _present(projects)
    invoices = _present(invoices)

    total_invoiced = sum(invoice.amount for invoice in invoices)
    total_paid = sum(invoice.amount for invoice in invoices if invoice.paid)
    completed = sum(1 for project in projects if project.is_completed)
    progress = sum(project.completion_percentage for project in projects)

    return PortfolioInsights(
        portfolio_health=_percent(completed, len(projects)),
        collection_rate=_percent(total_paid, total_invoiced),
        overdue_projects=sum(1 for project in projects if project.is_overdue(now)),
        average_progress=round_half_up(progress / len(projects)) if projects else 0,
        on_track_projects=sum(
            1 for project in projects if not project.is_completed and not project.is_overdue(now)
        ),
        at_risk_projects=sum(
            1
            for project in projects
            if project.is_overdue(now) or project.completion_percentage < AT_RISK_PROGRESS_THRESHOLD
        ),
        open_invoices=sum(1 for invoice in invoices if not invoice.paid),
    )


def _month_start(value: date) -> date:
    return value.replace(day=1)


def _shift_months(month: date, offset: int) -> date:
    index = month.year * 12 + (month.month - 1) + offset
    return date(index // 12, index % 12 + 1, 1)


def month_key(month: date) -> str:
    """Render a month as "YYYY-MM"."""
    return f"{month.year:04d}-{month.month:02d}"


def parse_month_key(value: str) -> date:
    """Parse a "YYYY-MM" month key.

    Raises:
        ValueError: If the value is not a valid month key
    """
    year, _, month = value.partition("-")
    return date(int(year), int(month), 1)


def monthly_revenue_trend(
    invoices: Iterable[Invoice | None],
    now: int,
    tz: ZoneInfo = UTC,
    months: int = DEFAULT_RANGE_MONTHS,
    paid_only: bool = True,
) -> list[RevenuePoint]:
    """Sum invoice amounts per calendar month over a trailing window.

    Every month in the window is present, oldest first, even with no
    invoices. Invoices without an issue date or outside the window are
    ignored and negative amounts count as zero.

    Args:
        invoices: All invoices
        now: Reference time; its month is the last in the window
        tz: Zone the calendar months are taken in
        months: Window length
        paid_only: Count only paid invoices (collected revenue)

    Returns:
        One RevenuePoint per month
    """
    current = _month_start(to_local_date(now, tz))
    window = [_shift_months(current, -offset) for offset in range(months - 1, -1, -1)]
    totals = {month: 0.0 for month in window}

    for invoice in _present(invoices):
        if paid_only and not invoice.paid:
            continue
        if invoice.issued_at <= 0:
            continue
        month = _month_start(to_local_date(invoice.issued_at, tz))
        if month in totals:
            totals[month] += max(0.0, invoice.amount)

    return [
        RevenuePoint(month=month_key(month), label=month.strftime(MONTH_FORMAT), amount=amount)
        for month, amount in totals.items()
    ]


def status_bucket(project: Project, now: int) -> str:
    """Classify a project into a status slice; overdue wins over status."""
    if project.is_overdue(now):
        return STATUS_AT_RISK
    if project.status == ProjectStatus.COMPLETED:
        return STATUS_COMPLETED
    if project.status == ProjectStatus.IN_PROGRESS:
        return STATUS_IN_PROGRESS
    return STATUS_PLANNING


def project_status_breakdown(projects: Iterable[Project | None], now: int) -> list[StatusBucket]:
    """Count projects per status slice.

    Empty slices are omitted; with no projects at all a single "No Data"
    slice of 1 is returned so charts always have something to draw.
    """
    counts = dict.fromkeys(STATUS_LABELS, 0)
    for project in _present(projects):
        counts[status_bucket(project, now)] += 1

    buckets = [StatusBucket(label=label, count=count) for label, count in counts.items() if count > 0]
    if not buckets:
        buckets.append(StatusBucket(label=STATUS_NO_DATA, count=1))
    return buckets


def month_drilldown(
    month: date,
    projects: Iterable[Project | None],
    invoices: Iterable[Invoice | None],
    tz: ZoneInfo = UTC,
) -> MonthDrilldown:
    """Break down one month: invoices issued and projects touched in it.

    Args:
        month: Any date within the month
        projects: All projects
        invoices: All invoices
        tz: Zone the calendar months are taken in

    Returns:
        MonthDrilldown
    """
    month = _month_start(month)

    def in_month(epoch_millis: int) -> bool:
        return epoch_millis > 0 and _month_start(to_local_date(epoch_millis, tz)) == month

    month_invoices = [invoice for invoice in _present(invoices) if in_month(invoice.issued_at)]
    month_projects = [project for project in _present(projects) if in_month(project.last_touched_at)]

    highlights = [
        f"{invoice.display_id} • {format_currency(invoice.amount)}"
        for invoice in month_invoices[:HIGHLIGHT_LIMIT]
    ]
    if not highlights:
        highlights = ["No invoice records for this month."]

    return MonthDrilldown(
        label=month.strftime(MONTH_YEAR_FORMAT),
        revenue=sum(invoice.amount for invoice in month_invoices),
        invoice_count=len(month_invoices),
        paid_count=sum(1 for invoice in month_invoices if invoice.paid),
        project_count=len(month_projects),
        highlights=highlights,
    )


def status_drilldown(label: str, projects: Iterable[Project | None], now: int) -> StatusDrilldown:
    """Break down one status slice.

    Unknown labels match no projects.
    """
    matching = [project for project in _present(projects) if status_bucket(project, now) == label]

    highlights = [
        f"{project.display_name} • {project.completion_percentage}%"
        for project in matching[:HIGHLIGHT_LIMIT]
    ]
    if not highlights:
        highlights = ["No projects in this segment."]

    progress = sum(project.completion_percentage for project in matching)
    return StatusDrilldown(
        label=label,
        project_count=len(matching),
        average_progress=round_half_up(progress / len(matching)) if matching else 0,
        highlights=highlights,
    )

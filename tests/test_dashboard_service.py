"""Dashboard aggregation tests."""

import asyncio

import pytest

from workforce_api.exceptions import StoreUnavailableError, UnauthenticatedError
from workforce_api.models.domain.employee import Employee, EmployeeStatus
from workforce_api.models.domain.invoice import Invoice
from workforce_api.models.domain.project import Project, ProjectStatus
from workforce_api.models.domain.workspace import WorkspaceAggregate
from workforce_api.repositories.memory_store import InMemoryDirectoryStore
from workforce_api.security.identity import SessionIdentityProvider
from workforce_api.services.assignment_service import sort_by_last_touched
from workforce_api.services.dashboard_service import (
    NO_ACTIVITY_TITLE,
    DashboardService,
    activity_feed_or_placeholder,
    build_activity_feed,
    build_employee_dashboard,
    compute_dashboard_metrics,
    leave_metric,
    project_overview,
    remaining_work_units,
    top_recent_projects,
)
from workforce_api.services.snapshot_service import DirectorySnapshot
from workforce_api.utils.clock import MILLIS_PER_DAY, MILLIS_PER_HOUR, MILLIS_PER_MINUTE


class TestRemainingWorkUnits:
    """Remaining work unit arithmetic."""

    @pytest.mark.parametrize(
        "completion,units",
        [
            (0, 4),
            (1, 4),
            (25, 3),
            (50, 2),
            (76, 1),
            (99, 1),
            (100, 0),
        ],
    )
    def test_units(self, completion, units):
        assert remaining_work_units(Project(id="p", completion_percentage=completion)) == units


class TestDashboardMetrics:
    """Headline counters."""

    def test_metrics(self):
        projects = [
            Project(id="p1", status=ProjectStatus.IN_PROGRESS, completion_percentage=50),
            Project(id="p2", status=ProjectStatus.COMPLETED, completion_percentage=100),
            None,
        ]
        employees = [Employee(id="e1"), Employee(id="e2", status=EmployeeStatus.TERMINATED)]
        invoices = [
            Invoice(id="i1", amount=100.0, paid=True),
            Invoice(id="i2", amount=40.0, paid=False),
        ]

        metrics = compute_dashboard_metrics(projects, employees, invoices)

        assert metrics.active_project_count == 1
        assert metrics.employee_count == 2
        assert metrics.pending_work_items == 2
        assert metrics.recognized_revenue == 100.0

    def test_completed_projects_add_no_pending_work(self):
        projects = [Project(id="p1", status=ProjectStatus.COMPLETED, completion_percentage=10)]
        assert compute_dashboard_metrics(projects, [], []).pending_work_items == 0

    def test_empty_collections(self):
        metrics = compute_dashboard_metrics([], [], [])

        assert metrics.active_project_count == 0
        assert metrics.employee_count == 0
        assert metrics.pending_work_items == 0
        assert metrics.recognized_revenue == 0

    def test_top_recent_projects(self):
        projects = [Project(id=f"p{i}", updated_at=i) for i in range(1, 6)]
        assert [project.id for project in top_recent_projects(projects, 3)] == ["p5", "p4", "p3"]


class TestActivityFeed:
    """Merged activity feed."""

    def test_merged_newest_first(self, now):
        projects = [
            Project(id="p1", name="Alpha", created_at=now - 2 * MILLIS_PER_HOUR),
            Project(id="p2", name="Untouched"),
        ]
        employees = [
            Employee(id="e1", first_name="Ann", last_name="Lee", created_at=now - 30 * MILLIS_PER_MINUTE),
            Employee(id="e2", first_name="Old", last_name="Timer", created_at=0),
        ]
        invoices = [
            Invoice(id="inv-1", amount=10.0, paid=True, issued_at=now - 10 * MILLIS_PER_MINUTE),
            Invoice(id="inv-2", amount=10.0, paid=False, issued_at=now - 3 * MILLIS_PER_DAY),
        ]

        feed = build_activity_feed(projects, employees, invoices, 3)

        assert [(entry.title, entry.color) for entry in feed] == [
            ("Invoice paid: inv-1", "green"),
            ("Employee added: Ann Lee", "orange"),
            ("Project updated: Alpha", "blue"),
        ]

        rendered = activity_feed_or_placeholder(feed, now)
        assert [item.time_label for item in rendered] == [
            "10 minutes ago",
            "30 minutes ago",
            "2 hours ago",
        ]

    def test_project_timestamp_falls_back_to_updated_at(self, now):
        projects = [Project(id="p1", name="Alpha", updated_at=now - MILLIS_PER_HOUR)]
        feed = build_activity_feed(projects, [], [], 3)
        assert feed[0].timestamp == now - MILLIS_PER_HOUR

    def test_unpaid_invoice_is_issued(self, now):
        feed = build_activity_feed([], [], [Invoice(id="inv-9", issued_at=now - 1000)], 3)
        assert feed[0].title == "Invoice issued: inv-9"
        assert feed[0].color == "blue"

    def test_empty_feed_gets_placeholder(self, now):
        feed = build_activity_feed([Project(id="p1")], [Employee(id="e1")], [], 3)
        assert feed == []

        rendered = activity_feed_or_placeholder(feed, now)

        assert len(rendered) == 1
        assert rendered[0].title == NO_ACTIVITY_TITLE
        assert rendered[0].time_label == "Just now"


class TestProjectOverview:
    """Project overview cards."""

    def test_meta(self, now):
        project = Project(id="p1", name="Alpha", completion_percentage=60, end_date=now + 10 * MILLIS_PER_DAY)

        overview = project_overview(project, now)

        assert overview.remaining_units == 2
        assert overview.due_label == "Due in 10 days"
        assert overview.meta == "Due in 10 days • 2 tasks remaining"

    def test_unnamed_project(self, now):
        overview = project_overview(Project(id="p1", completion_percentage=100), now)

        assert overview.name == "Untitled Project"
        assert overview.meta == "No due date • 0 tasks remaining"


class TestDashboardService:
    """Dashboard service wiring."""

    def _service(self, settings, clock, store, identity=None):
        return DashboardService(store, SessionIdentityProvider(identity), settings, clock)

    def test_requires_identity(self, settings, clock):
        service = self._service(settings, clock, InMemoryDirectoryStore())

        with pytest.raises(UnauthenticatedError):
            asyncio.run(service.load_dashboard())

    def test_load_dashboard(self, settings, clock, now, identity):
        store = InMemoryDirectoryStore(
            employees=[Employee(id="e1", created_at=now - MILLIS_PER_DAY)],
            projects=[
                Project(id="p1", name="Alpha", status=ProjectStatus.IN_PROGRESS, completion_percentage=50),
                Project(id="p2", name="Beta", status=ProjectStatus.COMPLETED, completion_percentage=100),
            ],
            invoices=[Invoice(id="i1", amount=100.0, paid=True, issued_at=now - MILLIS_PER_HOUR)],
        )
        service = self._service(settings, clock, store, identity)

        dashboard = asyncio.run(service.load_dashboard())

        assert dashboard.metrics.active_project_count == 1
        assert dashboard.metrics.employee_count == 1
        assert dashboard.metrics.pending_work_items == 2
        assert dashboard.recognized_revenue_label == "$100.00"
        assert len(dashboard.top_projects) == 2
        assert dashboard.activity_feed[0].title == "Invoice paid: i1"
        assert len(dashboard.revenue_trend) == 6
        assert dashboard.revenue_trend[-1].amount == 100.0
        assert dashboard.generated_at == now

    def test_store_failure_propagates(self, settings, clock, identity, recording_store_factory):
        store = recording_store_factory()
        store.fail_with = StoreUnavailableError()
        service = self._service(settings, clock, store, identity)

        with pytest.raises(StoreUnavailableError):
            asyncio.run(service.load_dashboard())

    def test_revenue_trend_range(self, settings, clock, identity):
        service = self._service(settings, clock, InMemoryDirectoryStore(), identity)

        trend = asyncio.run(service.load_revenue_trend(months=3))

        assert [point.month for point in trend] == ["2026-01", "2026-02", "2026-03"]


class TestEmployeeDashboard:
    """Employee dashboard built from a workspace aggregate."""

    @pytest.fixture
    def aggregate(self, now):
        projects = [
            Project(
                id="a",
                name="A",
                status=ProjectStatus.IN_PROGRESS,
                end_date=now + MILLIS_PER_DAY,
                updated_at=now - 3 * MILLIS_PER_HOUR,
            ),
            Project(
                id="b",
                name="B",
                status=ProjectStatus.IN_PROGRESS,
                end_date=now - 2 * MILLIS_PER_DAY,
                updated_at=now - MILLIS_PER_HOUR,
            ),
            Project(
                id="c",
                name="C",
                status=ProjectStatus.PLANNING,
                end_date=now + 20 * MILLIS_PER_DAY,
                updated_at=now - 2 * MILLIS_PER_HOUR,
            ),
            Project(
                id="d",
                name="D",
                status=ProjectStatus.COMPLETED,
                end_date=now + 2 * MILLIS_PER_HOUR,
                updated_at=now - 4 * MILLIS_PER_HOUR,
            ),
            Project(
                id="e",
                name="E",
                status=ProjectStatus.ON_HOLD,
                end_date=now + 5 * MILLIS_PER_HOUR,
                updated_at=now - 5 * MILLIS_PER_HOUR,
            ),
        ]
        employee = Employee(id="u-jane", first_name="Jane", last_name="Doe")
        return WorkspaceAggregate(
            identity_uid="u-jane",
            current_employee=employee,
            all_employees=[employee],
            assigned_projects=sort_by_last_touched(projects),
            computed_at=now,
        )

    def test_counters(self, aggregate, now):
        dashboard = build_employee_dashboard(aggregate, now)

        assert dashboard.due_today_count == 2
        assert dashboard.active_project_count == 3
        assert dashboard.leave_metric == "N/A"
        assert dashboard.computed_at == now

    def test_tasks_ordered_by_due_date_with_priority(self, aggregate, now):
        dashboard = build_employee_dashboard(aggregate, now)

        assert [(task.title, task.priority) for task in dashboard.tasks] == [
            ("Progress update: B", "high"),
            ("Progress update: A", "medium"),
            ("Progress update: C", "low"),
        ]
        assert dashboard.tasks[0].due_label == "Overdue by 2 days"

    def test_projects_and_activity_most_recent_first(self, aggregate, now):
        dashboard = build_employee_dashboard(aggregate, now)

        assert [project.name for project in dashboard.projects] == ["B", "C", "A"]
        assert [item.title for item in dashboard.activity] == [
            "Project updated: B",
            "Project updated: C",
            "Project updated: A",
        ]
        assert dashboard.activity[0].time_label == "1 hour ago"
        assert dashboard.activity[0].color == "green"

    def test_empty_workspace(self, now):
        aggregate = WorkspaceAggregate(identity_uid="u1", computed_at=now)

        dashboard = build_employee_dashboard(aggregate, now)

        assert dashboard.employee is None
        assert dashboard.tasks == []
        assert dashboard.projects == []
        assert [item.title for item in dashboard.activity] == [NO_ACTIVITY_TITLE]

    @pytest.mark.parametrize(
        "status,expected",
        [
            (EmployeeStatus.ACTIVE, "N/A"),
            (EmployeeStatus.ON_LEAVE, "0"),
            (EmployeeStatus.TERMINATED, "N/A"),
        ],
    )
    def test_leave_metric(self, status, expected):
        assert leave_metric(Employee(id="e1", status=status)) == expected

    def test_leave_metric_without_employee(self):
        assert leave_metric(None) == "N/A"


def test_snapshot_defaults_are_empty():
    snapshot = DirectorySnapshot()
    assert snapshot.employees == [] and snapshot.projects == [] and snapshot.invoices == []

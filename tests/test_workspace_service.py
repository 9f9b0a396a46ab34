"""Employee workspace tests."""

import asyncio

import pytest

from workforce_api.context import build_context
from workforce_api.exceptions import StoreUnavailableError, UnauthenticatedError
from workforce_api.models.domain.employee import Employee, EmployeeStatus
from workforce_api.models.domain.identity import Identity
from workforce_api.models.domain.project import Project, ProjectStatus
from workforce_api.models.dto.workspace import WorkspaceSection
from workforce_api.security.identity import SessionIdentityProvider
from workforce_api.services.cache_service import CacheState
from workforce_api.services.workspace_sections import team_members, work_status_label
from workforce_api.utils.clock import MILLIS_PER_DAY, MILLIS_PER_HOUR


@pytest.fixture
def store(now, recording_store_factory):
    employees = [
        Employee(
            id="e-jane",
            first_name="Jane",
            last_name="Doe",
            email="jane@example.com",
            department="Engineering",
            position="Developer",
        ),
        Employee(
            id="e-bob",
            first_name="Bob",
            last_name="Brown",
            email="bob@example.com",
            department="engineering",
            position="QA",
        ),
        Employee(
            id="e-amy",
            first_name="Amy",
            last_name="Adams",
            email="amy@example.com",
            department="Engineering ",
            position="Designer",
        ),
        Employee(
            id="e-tim",
            first_name="Tim",
            last_name="Tan",
            department="Engineering",
            status=EmployeeStatus.TERMINATED,
        ),
        Employee(id="e-sue", first_name="Sue", last_name="Sato", department="Sales"),
    ]
    projects = [
        Project(
            id="p1",
            name="Website",
            status=ProjectStatus.IN_PROGRESS,
            completion_percentage=40,
            team_member_ids=["u-jane"],
            end_date=now - MILLIS_PER_DAY,
            updated_at=now - MILLIS_PER_HOUR,
        ),
        Project(
            id="p2",
            name="Mobile",
            status=ProjectStatus.PLANNING,
            completion_percentage=10,
            project_manager_id="u-jane",
            end_date=now + 3 * MILLIS_PER_HOUR,
            updated_at=now - 2 * MILLIS_PER_HOUR,
        ),
        Project(
            id="p3",
            name="Archive",
            status=ProjectStatus.COMPLETED,
            completion_percentage=100,
            team_member_ids=["u-jane"],
            end_date=now - 10 * MILLIS_PER_DAY,
            updated_at=now - 3 * MILLIS_PER_HOUR,
        ),
        Project(id="p4", name="Other", team_member_ids=["u-bob"], updated_at=now),
    ]
    return recording_store_factory(employees=employees, projects=projects)


@pytest.fixture
def context(settings, store, clock, identity):
    context = build_context(settings, store=store, clock=clock)
    context.identity.login(identity)
    return context


def _section(context, section, force_refresh=False):
    return asyncio.run(context.workspace.load_section(section, force_refresh=force_refresh))


class TestWorkspaceLoading:
    """Aggregate loading and caching."""

    def test_aggregate(self, context):
        aggregate = asyncio.run(context.workspace.load_workspace())

        assert aggregate.identity_uid == "u-jane"
        assert aggregate.current_employee.id == "e-jane"
        assert len(aggregate.all_employees) == 5
        assert [project.id for project in aggregate.assigned_projects] == ["p1", "p2", "p3"]

    def test_requires_identity(self, context):
        context.identity.clear()

        with pytest.raises(UnauthenticatedError):
            asyncio.run(context.workspace.load_workspace())

    def test_invoices_are_not_fetched(self, context, store):
        asyncio.run(context.workspace.load_workspace())

        assert store.list_calls["invoices"] == 0

    def test_fresh_aggregate_is_reused(self, context, store):
        first = _section(context, WorkspaceSection.MY_TASKS)
        second = _section(context, WorkspaceSection.TEAM)

        assert store.list_calls["employees"] == 1
        assert store.list_calls["projects"] == 1
        assert first.cache_state == CacheState.EMPTY
        assert second.cache_state == CacheState.FRESH
        assert second.computed_at == first.computed_at

    def test_force_refresh(self, context, store):
        _section(context, WorkspaceSection.MY_TASKS)
        _section(context, WorkspaceSection.MY_TASKS, force_refresh=True)

        assert store.list_calls["employees"] == 2

    def test_parallel_reads_share_one_load(self, context, store):
        store.delay = 0.01

        async def scenario():
            return await asyncio.gather(
                context.workspace.load_employee_dashboard(),
                context.workspace.load_section(WorkspaceSection.MY_TASKS),
            )

        dashboard, response = asyncio.run(scenario())

        assert dashboard.employee.id == "e-jane"
        assert response.view.section == WorkspaceSection.MY_TASKS
        assert store.list_calls["employees"] == 1
        assert store.list_calls["projects"] == 1

    def test_stale_aggregate_is_reloaded(self, context, store, clock, settings):
        _section(context, WorkspaceSection.MY_TASKS)
        clock.advance(settings.workspace_cache_ttl_ms + 1)

        response = _section(context, WorkspaceSection.MY_TASKS)

        assert response.cache_state == CacheState.STALE
        assert response.computed_at == clock.now
        assert store.list_calls["employees"] == 2

    def test_failed_refresh_keeps_previous_aggregate(self, context, store):
        previous = asyncio.run(context.workspace.load_workspace())
        store.fail_with = StoreUnavailableError()

        with pytest.raises(StoreUnavailableError):
            asyncio.run(context.workspace.load_workspace(force_refresh=True))

        store.fail_with = None
        assert context.cache.peek() is previous
        assert asyncio.run(context.workspace.load_workspace()) is previous

    def test_session_change_drops_cached_workspace(self, context, store):
        asyncio.run(context.workspace.load_workspace())

        context.identity.login(Identity(uid="u-bob", email="bob@example.com"))
        assert context.cache.state == CacheState.EMPTY

        aggregate = asyncio.run(context.workspace.load_workspace())
        assert aggregate.current_employee.id == "e-bob"
        assert [project.id for project in aggregate.assigned_projects] == ["p4"]

    def test_session_listeners_fire_on_login_and_logout(self, identity):
        provider = SessionIdentityProvider()
        events = []
        provider.add_listener(lambda: events.append(provider.is_logged_in()))

        provider.login(identity)
        provider.clear()

        assert events == [True, False]

    def test_record_mutation_drops_cached_workspace(self, context, store):
        asyncio.run(context.workspace.load_workspace())

        asyncio.run(context.projects.create_project(Project(name="New", team_member_ids=["u-jane"])))
        aggregate = asyncio.run(context.workspace.load_workspace())

        assert store.list_calls["projects"] == 2
        assert "New" in [project.name for project in aggregate.assigned_projects]

    def test_employee_dashboard_uses_workspace(self, context, store):
        dashboard = asyncio.run(context.workspace.load_employee_dashboard())

        assert dashboard.employee.id == "e-jane"
        assert dashboard.active_project_count == 2
        assert dashboard.due_today_count == 1
        assert store.list_calls["invoices"] == 0


class TestSectionRendering:
    """Workspace section views."""

    def test_section_header(self, context):
        view = _section(context, WorkspaceSection.TIME_SHEET).view

        assert view.section == WorkspaceSection.TIME_SHEET
        assert view.title == "Time Sheet"
        assert view.status_message == "Showing Time Sheet"
        assert view.work_status == "Clocked In"

    def test_my_tasks(self, context):
        view = _section(context, WorkspaceSection.MY_TASKS).view

        assert [(card.title, card.value) for card in view.cards] == [
            ("Tasks", "2"),
            ("Due Today", "1"),
            ("Overdue", "1"),
        ]
        assert [(item.title, item.meta, item.badge) for item in view.items] == [
            ("Website", "Overdue by 1 day • Progress 40%", "HIGH"),
            ("Mobile", "Due today • Progress 10%", "OPEN"),
        ]

    def test_my_projects(self, context):
        view = _section(context, WorkspaceSection.MY_PROJECTS).view

        assert [card.value for card in view.cards] == ["3", "2", "1"]
        assert view.items[0].title == "Website"
        assert view.items[0].meta == "Status: IN_PROGRESS • Due Mar 14, 2026"
        assert view.items[0].badge == "40%"

    def test_time_sheet(self, context):
        view = _section(context, WorkspaceSection.TIME_SHEET).view

        assert [card.value for card in view.cards] == ["16h", "24h", "2"]
        assert [item.title for item in view.items] == [
            "Weekly check-in",
            "Time allocation",
            "Log hours: Website",
            "Log hours: Mobile",
        ]

    def test_requests(self, context):
        view = _section(context, WorkspaceSection.REQUESTS).view

        assert view.title == "Leave Requests"
        assert view.cards[0].value == "ACTIVE"
        assert view.items[-1].meta == "Your current recorded status is: ACTIVE"

    def test_documents(self, context):
        view = _section(context, WorkspaceSection.DOCUMENTS).view

        assert view.cards[0].value == "3"
        assert len(view.items) == 6
        assert view.items[3].title == "Project Brief: Website"
        assert view.items[3].meta == "Latest update Mar 15, 2026"

    def test_team(self, context):
        view = _section(context, WorkspaceSection.TEAM).view

        assert [(card.title, card.value) for card in view.cards] == [
            ("Department", "ENGINEERING"),
            ("Members", "2"),
            ("Shared Projects", "3"),
        ]
        assert [(item.title, item.meta, item.badge) for item in view.items] == [
            ("Amy Adams", "Designer • amy@example.com", "ACTIVE"),
            ("Bob Brown", "QA • bob@example.com", "ACTIVE"),
        ]

    def test_profile(self, context):
        view = _section(context, WorkspaceSection.PROFILE).view

        assert [card.value for card in view.cards] == ["Engineering", "Developer", "ACTIVE"]
        assert [(item.title, item.meta) for item in view.items] == [
            ("Name", "Jane Doe"),
            ("Email", "jane@example.com"),
            ("Phone", "N/A"),
            ("Employee ID", "e-jane"),
        ]


class TestUnmatchedIdentity:
    """Workspace of an identity without an employee record."""

    @pytest.fixture
    def stranger_context(self, settings, store, clock):
        context = build_context(settings, store=store, clock=clock)
        context.identity.login(Identity(uid="u-ghost", email="ghost@example.com"))
        return context

    def test_profile_unavailable(self, stranger_context):
        view = _section(stranger_context, WorkspaceSection.PROFILE).view

        assert view.work_status == "Status Unavailable"
        assert [(card.title, card.value) for card in view.cards] == [("Profile", "Unavailable")]
        assert view.items[0].title == "Profile not found"

    def test_requests_status_unknown(self, stranger_context):
        view = _section(stranger_context, WorkspaceSection.REQUESTS).view
        assert view.cards[0].value == "UNKNOWN"

    def test_empty_task_list(self, stranger_context):
        view = _section(stranger_context, WorkspaceSection.MY_TASKS).view
        assert [item.title for item in view.items] == ["No assigned tasks"]

    def test_team_spans_all_departments(self, stranger_context):
        aggregate = asyncio.run(stranger_context.workspace.load_workspace())

        members = team_members(aggregate)

        assert [member.id for member in members] == ["e-amy", "e-bob", "e-jane", "e-sue"]


class TestSectionNames:
    """Section name resolution."""

    @pytest.mark.parametrize(
        "value,section",
        [
            ("team", WorkspaceSection.TEAM),
            (" PROFILE ", WorkspaceSection.PROFILE),
            ("time_sheet", WorkspaceSection.TIME_SHEET),
            ("payroll", WorkspaceSection.MY_TASKS),
            (None, WorkspaceSection.MY_TASKS),
        ],
    )
    def test_resolve(self, value, section):
        assert WorkspaceSection.resolve(value) == section

    @pytest.mark.parametrize(
        "status,label",
        [
            (EmployeeStatus.ACTIVE, "Clocked In"),
            (EmployeeStatus.ON_LEAVE, "On Leave"),
            (EmployeeStatus.TERMINATED, "Inactive"),
        ],
    )
    def test_work_status_label(self, status, label):
        assert work_status_label(Employee(id="e1", status=status)) == label

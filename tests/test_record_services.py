"""Employee, project and invoice service tests."""

import asyncio

import pytest

from workforce_api.exceptions import (
    EmployeeNotFoundError,
    InvoiceNotFoundError,
    ProjectNotFoundError,
)
from workforce_api.models.domain.employee import Employee, EmployeeStatus
from workforce_api.models.domain.invoice import Invoice
from workforce_api.models.domain.project import Project
from workforce_api.models.domain.workspace import WorkspaceAggregate
from workforce_api.repositories.memory_store import InMemoryDirectoryStore
from workforce_api.services.cache_service import CacheState, WorkspaceCache
from workforce_api.services.employee_service import EmployeeService
from workforce_api.services.finance_service import FinanceService
from workforce_api.services.project_service import ProjectService


@pytest.fixture
def warm_cache(clock) -> WorkspaceCache:
    cache = WorkspaceCache(ttl_ms=60_000, clock=clock)

    async def loader():
        return WorkspaceAggregate(identity_uid="u1", computed_at=clock())

    asyncio.run(cache.get(loader))
    return cache


class TestEmployeeService:
    """Employee record operations."""

    def test_create_assigns_id_and_timestamps(self, clock, now, warm_cache):
        service = EmployeeService(InMemoryDirectoryStore(), warm_cache, clock)

        created = asyncio.run(service.create_employee(Employee(first_name="Ann", last_name="Lee")))

        assert created.id
        assert created.created_at == now
        assert created.updated_at == now
        assert warm_cache.state == CacheState.EMPTY

    def test_update_keeps_creation_time(self, clock, now):
        store = InMemoryDirectoryStore(employees=[Employee(id="e1", first_name="Ann", created_at=5)])
        service = EmployeeService(store, clock=clock)
        clock.advance(1000)

        updated = asyncio.run(service.update_employee("e1", Employee(first_name="Anne")))

        assert updated.id == "e1"
        assert updated.created_at == 5
        assert updated.updated_at == now + 1000
        assert asyncio.run(service.get_employee("e1")).first_name == "Anne"

    def test_update_unknown_employee(self, clock):
        service = EmployeeService(InMemoryDirectoryStore(), clock=clock)

        with pytest.raises(EmployeeNotFoundError):
            asyncio.run(service.update_employee("ghost", Employee()))

    def test_delete_invalidates_workspace(self, clock, warm_cache):
        service = EmployeeService(InMemoryDirectoryStore(employees=[Employee(id="e1")]), warm_cache, clock)

        asyncio.run(service.delete_employee("e1"))

        assert warm_cache.state == CacheState.EMPTY
        with pytest.raises(EmployeeNotFoundError):
            asyncio.run(service.get_employee("e1"))

    def test_delete_unknown_employee(self, clock):
        service = EmployeeService(InMemoryDirectoryStore(), clock=clock)

        with pytest.raises(EmployeeNotFoundError):
            asyncio.run(service.delete_employee("ghost"))

    def test_list_active_employees(self, clock):
        store = InMemoryDirectoryStore(
            employees=[
                Employee(id="e1"),
                Employee(id="e2", status=EmployeeStatus.ON_LEAVE),
                Employee(id="e3", status=EmployeeStatus.TERMINATED),
            ]
        )
        service = EmployeeService(store, clock=clock)

        assert [employee.id for employee in asyncio.run(service.list_active_employees())] == ["e1"]
        assert len(asyncio.run(service.list_employees())) == 3


class TestProjectService:
    """Project record operations."""

    def test_create_and_get(self, clock, now, warm_cache):
        service = ProjectService(InMemoryDirectoryStore(), warm_cache, clock)

        created = asyncio.run(service.create_project(Project(name="Alpha", completion_percentage=120)))

        assert created.completion_percentage == 100
        assert created.created_at == now
        assert asyncio.run(service.get_project(created.id)).name == "Alpha"
        assert warm_cache.state == CacheState.EMPTY

    def test_update_invalidates_workspace(self, clock, warm_cache):
        store = InMemoryDirectoryStore(projects=[Project(id="p1", name="Alpha", created_at=7)])
        service = ProjectService(store, warm_cache, clock)

        updated = asyncio.run(service.update_project("p1", Project(name="Beta")))

        assert updated.name == "Beta"
        assert updated.created_at == 7
        assert warm_cache.state == CacheState.EMPTY

    def test_get_unknown_project(self, clock):
        service = ProjectService(InMemoryDirectoryStore(), clock=clock)

        with pytest.raises(ProjectNotFoundError):
            asyncio.run(service.get_project("ghost"))

    def test_delete_unknown_project(self, clock):
        service = ProjectService(InMemoryDirectoryStore(), clock=clock)

        with pytest.raises(ProjectNotFoundError):
            asyncio.run(service.delete_project("ghost"))


class TestFinanceService:
    """Invoice record operations."""

    def test_create_defaults_issue_time(self, clock, now):
        service = FinanceService(InMemoryDirectoryStore(), clock)

        created = asyncio.run(service.create_invoice(Invoice(amount=50.0, issued_at=0)))

        assert created.id
        assert created.issued_at == now
        assert created.paid is False

    def test_create_keeps_given_issue_time(self, clock):
        service = FinanceService(InMemoryDirectoryStore(), clock)

        created = asyncio.run(service.create_invoice(Invoice(id="i1", amount=50.0, issued_at=123)))

        assert created.issued_at == 123

    def test_mark_paid(self, clock):
        service = FinanceService(InMemoryDirectoryStore(invoices=[Invoice(id="i1", amount=10.0)]), clock)

        paid = asyncio.run(service.mark_paid("i1"))

        assert paid.paid is True
        assert asyncio.run(service.get_invoice("i1")).paid is True

    def test_mark_paid_unknown_invoice(self, clock):
        service = FinanceService(InMemoryDirectoryStore(), clock)

        with pytest.raises(InvoiceNotFoundError):
            asyncio.run(service.mark_paid("ghost"))

    def test_update_unknown_invoice(self, clock):
        service = FinanceService(InMemoryDirectoryStore(), clock)

        with pytest.raises(InvoiceNotFoundError):
            asyncio.run(service.update_invoice("ghost", Invoice(amount=1.0)))

    def test_delete(self, clock):
        service = FinanceService(InMemoryDirectoryStore(invoices=[Invoice(id="i1")]), clock)

        asyncio.run(service.delete_invoice("i1"))

        assert asyncio.run(service.list_invoices()) == []

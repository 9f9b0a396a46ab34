"""In-process directory store for development and tests."""

import logging
from collections.abc import Iterable
from typing import TypeVar

from pydantic import BaseModel

from workforce_api.exceptions import (
    EmployeeNotFoundError,
    InvoiceNotFoundError,
    NotFoundError,
    ProjectNotFoundError,
)
from workforce_api.models.domain.employee import Employee
from workforce_api.models.domain.invoice import Invoice
from workforce_api.models.domain.project import Project
from workforce_api.repositories.base import DirectoryStore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class _Collection:
    """Id-keyed records kept in insertion order.

    Records are copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self, not_found: type[NotFoundError]) -> None:
        self._records: dict[str, BaseModel] = {}
        self._not_found = not_found

    def all(self) -> list:
        return [record.model_copy(deep=True) for record in self._records.values()]

    def get(self, record_id: str) -> BaseModel | None:
        record = self._records.get(record_id)
        return record.model_copy(deep=True) if record is not None else None

    def put(self, record: T) -> T:
        self._records[record.id] = record.model_copy(deep=True)
        return record

    def replace(self, record: BaseModel) -> None:
        if record.id not in self._records:
            raise self._not_found(record.id)
        self._records[record.id] = record.model_copy(deep=True)

    def remove(self, record_id: str) -> None:
        if self._records.pop(record_id, None) is None:
            raise self._not_found(record_id)


class InMemoryDirectoryStore(DirectoryStore):
    """Directory store backed by dictionaries."""

    def __init__(
        self,
        employees: Iterable[Employee] = (),
        projects: Iterable[Project] = (),
        invoices: Iterable[Invoice] = (),
    ) -> None:
        """Initialize the store with optional seed records."""
        self._employees = _Collection(EmployeeNotFoundError)
        self._projects = _Collection(ProjectNotFoundError)
        self._invoices = _Collection(InvoiceNotFoundError)
        for employee in employees:
            self._employees.put(employee)
        for project in projects:
            self._projects.put(project)
        for invoice in invoices:
            self._invoices.put(invoice)

    async def list_employees(self) -> list[Employee]:
        employees = self._employees.all()
        logger.debug("Fetched %d employees", len(employees))
        return employees

    async def get_employee(self, employee_id: str) -> Employee | None:
        return self._employees.get(employee_id)

    async def create_employee(self, employee: Employee) -> Employee:
        return self._employees.put(employee)

    async def update_employee(self, employee: Employee) -> None:
        self._employees.replace(employee)

    async def delete_employee(self, employee_id: str) -> None:
        self._employees.remove(employee_id)

    async def list_projects(self) -> list[Project]:
        projects = self._projects.all()
        logger.debug("Fetched %d projects", len(projects))
        return projects

    async def get_project(self, project_id: str) -> Project | None:
        return self._projects.get(project_id)

    async def create_project(self, project: Project) -> Project:
        return self._projects.put(project)

    async def update_project(self, project: Project) -> None:
        self._projects.replace(project)

    async def delete_project(self, project_id: str) -> None:
        self._projects.remove(project_id)

    async def list_invoices(self) -> list[Invoice]:
        invoices = self._invoices.all()
        logger.debug("Fetched %d invoices", len(invoices))
        return invoices

    async def get_invoice(self, invoice_id: str) -> Invoice | None:
        return self._invoices.get(invoice_id)

    async def create_invoice(self, invoice: Invoice) -> Invoice:
        return self._invoices.put(invoice)

    async def update_invoice(self, invoice: Invoice) -> None:
        self._invoices.replace(invoice)

    async def delete_invoice(self, invoice_id: str) -> None:
        self._invoices.remove(invoice_id)

"""Directory store interface."""

from abc import ABC, abstractmethod

from workforce_api.models.domain.employee import Employee
from workforce_api.models.domain.invoice import Invoice
from workforce_api.models.domain.project import Project

EMPLOYEES_COLLECTION = "employees"
PROJECTS_COLLECTION = "projects"
INVOICES_COLLECTION = "invoices"


class DirectoryStore(ABC):
    """Abstract base class for the employee / project / invoice store.

    Every call is a remote round trip that may be slow or fail with
    ``StoreUnavailableError``, ``StoreTimeoutError`` or ``InvalidRecordError``.
    ``get_*`` returns None for unknown ids; ``update_*`` and ``delete_*`` of
    unknown ids raise the matching ``NotFoundError`` subclass.
    """

    # Employees

    @abstractmethod
    async def list_employees(self) -> list[Employee]:
        """Fetch all employees."""
        pass

    @abstractmethod
    async def get_employee(self, employee_id: str) -> Employee | None:
        """Fetch one employee by id."""
        pass

    @abstractmethod
    async def create_employee(self, employee: Employee) -> Employee:
        """Store a new employee.

        Args:
            employee: Employee with its id already assigned

        Returns:
            The stored employee
        """
        pass

    @abstractmethod
    async def update_employee(self, employee: Employee) -> None:
        """Replace an existing employee."""
        pass

    @abstractmethod
    async def delete_employee(self, employee_id: str) -> None:
        """Delete an employee."""
        pass

    # Projects

    @abstractmethod
    async def list_projects(self) -> list[Project]:
        """Fetch all projects."""
        pass

    @abstractmethod
    async def get_project(self, project_id: str) -> Project | None:
        """Fetch one project by id."""
        pass

    @abstractmethod
    async def create_project(self, project: Project) -> Project:
        """Store a new project."""
        pass

    @abstractmethod
    async def update_project(self, project: Project) -> None:
        """Replace an existing project."""
        pass

    @abstractmethod
    async def delete_project(self, project_id: str) -> None:
        """Delete a project."""
        pass

    # Invoices

    @abstractmethod
    async def list_invoices(self) -> list[Invoice]:
        """Fetch all invoices."""
        pass

    @abstractmethod
    async def get_invoice(self, invoice_id: str) -> Invoice | None:
        """Fetch one invoice by id."""
        pass

    @abstractmethod
    async def create_invoice(self, invoice: Invoice) -> Invoice:
        """Store a new invoice."""
        pass

    @abstractmethod
    async def update_invoice(self, invoice: Invoice) -> None:
        """Replace an existing invoice."""
        pass

    @abstractmethod
    async def delete_invoice(self, invoice_id: str) -> None:
        """Delete an invoice."""
        pass

    async def close(self) -> None:
        """Release network resources held by the store."""
        return None

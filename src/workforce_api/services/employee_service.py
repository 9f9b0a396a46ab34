"""Employee record service."""

import logging
import uuid

from workforce_api.exceptions import EmployeeNotFoundError
from workforce_api.models.domain.employee import Employee
from workforce_api.repositories.base import DirectoryStore
from workforce_api.services.cache_service import WorkspaceCache
from workforce_api.utils.clock import Clock, now_millis

logger = logging.getLogger(__name__)


class EmployeeService:
    """Service for employee operations."""

    def __init__(
        self,
        store: DirectoryStore,
        cache: WorkspaceCache | None = None,
        clock: Clock = now_millis,
    ) -> None:
        """Initialize service with the directory store."""
        self.store = store
        self.cache = cache
        self.clock = clock

    def _invalidate(self) -> None:
        if self.cache is not None:
            self.cache.invalidate()

    async def list_employees(self) -> list[Employee]:
        """List all employees in store order."""
        return await self.store.list_employees()

    async def list_active_employees(self) -> list[Employee]:
        """List employees whose status is ACTIVE."""
        return [employee for employee in await self.store.list_employees() if employee.is_active]

    async def get_employee(self, employee_id: str) -> Employee:
        """Get an employee by id.

        Raises:
            EmployeeNotFoundError: If no employee has this id
        """
        employee = await self.store.get_employee(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    async def create_employee(self, employee: Employee) -> Employee:
        """Create an employee.

        A missing id is generated; both timestamps are set to now.

        Args:
            employee: Employee data

        Returns:
            The stored employee
        """
        now = self.clock()
        record = employee.model_copy(
            update={
                "id": employee.id or str(uuid.uuid4()),
                "created_at": now,
                "updated_at": now,
            }
        )
        created = await self.store.create_employee(record)
        logger.info("Created employee %s", created.id)
        self._invalidate()
        return created

    async def update_employee(self, employee_id: str, employee: Employee) -> Employee:
        """Replace an employee, keeping its creation time.

        Raises:
            EmployeeNotFoundError: If no employee has this id
        """
        existing = await self.get_employee(employee_id)
        record = employee.model_copy(
            update={
                "id": employee_id,
                "created_at": existing.created_at,
                "updated_at": self.clock(),
            }
        )
        await self.store.update_employee(record)
        logger.info("Updated employee %s", employee_id)
        self._invalidate()
        return record

    async def delete_employee(self, employee_id: str) -> None:
        """Delete an employee.

        Raises:
            EmployeeNotFoundError: If no employee has this id
        """
        await self.store.delete_employee(employee_id)
        logger.info("Deleted employee %s", employee_id)
        self._invalidate()

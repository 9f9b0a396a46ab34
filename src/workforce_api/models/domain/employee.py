"""Employee domain model."""

from enum import StrEnum

from pydantic import BaseModel, Field


class EmployeeStatus(StrEnum):
    """Employee status enum."""

    ACTIVE = "ACTIVE"
    ON_LEAVE = "ON_LEAVE"
    TERMINATED = "TERMINATED"


class Employee(BaseModel):
    """Employee domain model.

    ``full_name`` is always derived from the name parts and never stored.
    """

    id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    department: str | None = None
    position: str | None = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    salary: float = Field(default=0.0, ge=0)
    hire_date: int = 0
    created_at: int = 0
    updated_at: int = 0

    class Config:
        """Pydantic config."""

        from_attributes = True
        validate_assignment = True

    @property
    def full_name(self) -> str:
        """Get first and last name joined by a single space."""
        return f"{self.first_name or ''} {self.last_name or ''}"

    @property
    def is_active(self) -> bool:
        """Check if the employee is currently active."""
        return self.status == EmployeeStatus.ACTIVE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Employee):
            return NotImplemented
        return self.id == other.id

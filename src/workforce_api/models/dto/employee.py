"""Employee DTOs."""

from pydantic import BaseModel

from workforce_api.models.domain.employee import Employee, EmployeeStatus


class EmployeeResponse(BaseModel):
    """Employee response DTO."""

    id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    full_name: str
    email: str | None = None
    phone: str | None = None
    department: str | None = None
    position: str | None = None
    status: EmployeeStatus
    salary: float
    hire_date: int
    created_at: int
    updated_at: int

    class Config:
        """Pydantic config."""

        from_attributes = True

    @classmethod
    def from_employee(cls, employee: Employee) -> "EmployeeResponse":
        """Build the response, including the derived full name."""
        return cls.model_validate(employee)


class EmployeeListResponse(BaseModel):
    """Employee list response DTO."""

    items: list[EmployeeResponse]
    total: int

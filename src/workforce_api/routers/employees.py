"""Employees router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from workforce_api.dependencies import get_employee_service, require_management
from workforce_api.models.domain.employee import Employee
from workforce_api.models.domain.identity import Identity
from workforce_api.models.dto.employee import EmployeeListResponse, EmployeeResponse
from workforce_api.services.employee_service import EmployeeService

router = APIRouter()


@router.get("", response_model=EmployeeListResponse)
async def list_employees(
    current_user: Annotated[Identity, Depends(require_management)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    active_only: bool = Query(default=False, description="Only ACTIVE employees"),
) -> EmployeeListResponse:
    """List employees."""
    if active_only:
        employees = await employee_service.list_active_employees()
    else:
        employees = await employee_service.list_employees()
    return EmployeeListResponse(
        items=[EmployeeResponse.from_employee(employee) for employee in employees],
        total=len(employees),
    )


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    employee: Employee,
    current_user: Annotated[Identity, Depends(require_management)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Create an employee."""
    created = await employee_service.create_employee(employee)
    return EmployeeResponse.from_employee(created)


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: str,
    current_user: Annotated[Identity, Depends(require_management)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Get one employee."""
    return EmployeeResponse.from_employee(await employee_service.get_employee(employee_id))


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: str,
    employee: Employee,
    current_user: Annotated[Identity, Depends(require_management)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Replace an employee."""
    updated = await employee_service.update_employee(employee_id, employee)
    return EmployeeResponse.from_employee(updated)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: str,
    current_user: Annotated[Identity, Depends(require_management)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> None:
    """Delete an employee."""
    await employee_service.delete_employee(employee_id)

from typing import Any, List

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_employee_service
from app.schemas.employee import (
    DepartmentCountResponse,
    EmployeeActionResponse,
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
)
from app.services.employee_service import EmployeeService

router = APIRouter()

# Fixed paths are declared before "/{employee_id}" so they are not parsed as ids.


@router.get("", response_model=List[EmployeeResponse])
async def read_employees(
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    """
    Retrieve all employees, active or not.
    """
    return await service.get_all()


@router.get("/active", response_model=List[EmployeeResponse])
async def read_active_employees(
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    return await service.get_active()


@router.get("/search", response_model=List[EmployeeResponse])
async def search_employees(
    term: str = Query(..., description="Case-insensitive substring of the first or last name"),
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    return await service.search_by_name(term)


@router.get("/department/{department}", response_model=List[EmployeeResponse])
async def read_employees_by_department(
    department: str,
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    return await service.get_by_department(department)


@router.get("/department/{department}/count", response_model=DepartmentCountResponse)
async def count_employees_by_department(
    department: str,
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    count = await service.count_by_department(department)
    return DepartmentCountResponse(department=department, count=count)


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def read_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    """
    Get employee by ID. Deactivated employees are returned as well.
    """
    return await service.get_by_id(employee_id)


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: EmployeeCreate,
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    return await service.create(payload)


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    """
    Replace all mutable fields of an employee. Omitted optional fields are cleared.
    """
    return await service.update(employee_id, payload)


@router.delete("/{employee_id}", response_model=EmployeeActionResponse)
async def deactivate_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    await service.soft_delete(employee_id)
    return EmployeeActionResponse(message="Employee deactivated successfully", id=str(employee_id))


@router.delete("/{employee_id}/permanent", response_model=EmployeeActionResponse)
async def delete_employee_permanently(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    await service.hard_delete(employee_id)
    return EmployeeActionResponse(message="Employee deleted permanently", id=str(employee_id))


@router.patch("/{employee_id}/toggle-status", response_model=EmployeeResponse)
async def toggle_employee_status(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    return await service.toggle_status(employee_id)

# Services Package

from app.services.employee_service import EmployeeService

__all__ = [
    "EmployeeService",
]

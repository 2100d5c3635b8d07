"""Persistence layer for employee records."""

from app.repositories.employee_repository import EmployeeRepository

__all__ = ["EmployeeRepository"]

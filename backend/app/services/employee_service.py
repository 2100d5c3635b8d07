"""
Employee Service

Business rules for the employee lifecycle:
- create / read / full-replacement update
- soft delete (deactivate) and hard delete (permanent removal)
- status toggling between active and inactive
- department filtering, active listing and name search

Inactive employees stay visible to ``get_by_id``, department filtering and
search; only ``get_active`` excludes them. Store errors are never swallowed;
the only translation added here is a store miss on an id lookup becoming
``EmployeeNotFoundError``.
"""

import logging
from typing import List

from app.core.exceptions import ConcurrentModificationError, EmployeeNotFoundError
from app.models.employee import Employee
from app.repositories.employee_repository import EmployeeRepository
from app.schemas.employee import EmployeeCreate, EmployeeUpdate
from app.schemas.employee_fields import MUTABLE_FIELDS

logger = logging.getLogger("employee_registry.service")


class EmployeeService:
    def __init__(self, repository: EmployeeRepository):
        self.repository = repository

    async def create(self, data: EmployeeCreate) -> Employee:
        employee = Employee(**data.model_dump(), is_active=True)
        employee = await self.repository.save(employee)
        logger.info("Created employee %s", employee.id)
        return employee

    async def get_by_id(self, employee_id: int) -> Employee:
        employee = await self.repository.find_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    async def get_all(self) -> List[Employee]:
        return await self.repository.find_all()

    async def update(self, employee_id: int, data: EmployeeUpdate) -> Employee:
        """
        Replace every mutable field with the value from ``data``.

        There is no partial patch: optional fields missing from ``data`` are
        cleared. When ``data.version`` is given it must match the stored
        version, otherwise nothing is written.
        """
        employee = await self.get_by_id(employee_id)

        if data.version is not None and data.version != employee.version:
            raise ConcurrentModificationError(employee_id, data.version, employee.version)

        for field, value in data.model_dump(include=set(MUTABLE_FIELDS)).items():
            setattr(employee, field, value)

        employee = await self.repository.save(employee)
        logger.info("Updated employee %s", employee_id)
        return employee

    async def soft_delete(self, employee_id: int) -> None:
        employee = await self.get_by_id(employee_id)
        employee.is_active = False
        await self.repository.save(employee)
        logger.info("Deactivated employee %s", employee_id)

    async def hard_delete(self, employee_id: int) -> None:
        # Resolve first so a missing id raises instead of silently succeeding
        await self.get_by_id(employee_id)
        await self.repository.delete_by_id(employee_id)
        logger.info("Permanently deleted employee %s", employee_id)

    async def get_by_department(self, department: str) -> List[Employee]:
        return await self.repository.find_by_department(department)

    async def get_active(self) -> List[Employee]:
        return await self.repository.find_by_active(True)

    async def search_by_name(self, term: str) -> List[Employee]:
        term = (term or "").strip()
        if not term:
            return []
        return await self.repository.search_by_name(term)

    async def toggle_status(self, employee_id: int) -> Employee:
        employee = await self.get_by_id(employee_id)
        employee.is_active = not employee.is_active
        employee = await self.repository.save(employee)
        logger.info("Toggled employee %s to %s", employee_id, "active" if employee.is_active else "inactive")
        return employee

    async def count_by_department(self, department: str) -> int:
        return await self.repository.count_by_department(department)

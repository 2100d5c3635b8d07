"""
SQLAlchemy implementation of the employee record store.

The store assigns ids, enforces email uniqueness for every record (active or
not) and bumps the optimistic-lock version on each write. Database failures are
translated into the domain exceptions from ``app.core.exceptions``.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.core.exceptions import (
    ConcurrentModificationError,
    RecordStoreError,
    UniqueConstraintViolation,
)
from app.models.employee import Employee

logger = logging.getLogger("employee_registry.repository")


class EmployeeRepository:
    """Record store for employees, bound to one async session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, employee: Employee) -> Employee:
        """
        Insert a new employee or persist changes to an existing one.

        A record with ``id`` unset is inserted and receives a database-assigned
        id; otherwise the pending changes of the attached record are flushed.

        Raises:
            UniqueConstraintViolation: the email belongs to another record
            ConcurrentModificationError: the row changed since it was read
            RecordStoreError: any other database failure
        """
        # Rollback expires loaded attributes, so keep what the errors need
        employee_id = employee.id
        email = employee.email

        try:
            # Check before writing so the caller gets the offending value;
            # the unique index still guards against races between requests.
            with self.db.no_autoflush:
                holder = await self.db.scalar(select(Employee).where(Employee.email == email))
            if holder is not None and holder is not employee and holder.id != employee_id:
                await self.db.rollback()
                raise UniqueConstraintViolation("email", email)

            if employee_id is None:
                self.db.add(employee)
            await self.db.commit()
            await self.db.refresh(employee)
        except IntegrityError as e:
            await self.db.rollback()
            if "email" not in str(e.orig).lower():
                logger.error("Integrity error saving employee %s: %s", employee_id, e.orig)
                raise RecordStoreError("save", str(e.orig)) from e
            logger.info("Unique constraint rejected write for email %s", email)
            raise UniqueConstraintViolation("email", email) from e
        except StaleDataError as e:
            await self.db.rollback()
            raise ConcurrentModificationError(employee_id) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Error saving employee %s: %s", employee_id, e)
            raise RecordStoreError("save", str(e)) from e

        return employee

    async def find_by_id(self, employee_id: int) -> Optional[Employee]:
        try:
            return await self.db.get(Employee, employee_id)
        except SQLAlchemyError as e:
            logger.error("Error loading employee %s: %s", employee_id, e)
            raise RecordStoreError("find_by_id", str(e)) from e

    async def find_by_email(self, email: str) -> Optional[Employee]:
        try:
            return await self.db.scalar(select(Employee).where(Employee.email == email))
        except SQLAlchemyError as e:
            logger.error("Error looking up employee by email: %s", e)
            raise RecordStoreError("find_by_email", str(e)) from e

    async def find_all(self) -> List[Employee]:
        return await self._fetch("find_all", select(Employee))

    async def find_by_department(self, department: str) -> List[Employee]:
        return await self._fetch(
            "find_by_department",
            select(Employee).where(Employee.department == department),
        )

    async def find_by_active(self, is_active: bool) -> List[Employee]:
        return await self._fetch(
            "find_by_active",
            select(Employee).where(Employee.is_active.is_(is_active)),
        )

    async def search_by_name(self, term: str) -> List[Employee]:
        """Case-insensitive substring match against first or last name."""
        needle = term.lower()
        query = select(Employee).where(
            or_(
                func.lower(Employee.first_name).contains(needle, autoescape=True),
                func.lower(Employee.last_name).contains(needle, autoescape=True),
            )
        )
        return await self._fetch("search_by_name", query)

    async def count_by_department(self, department: str) -> int:
        try:
            count = await self.db.scalar(
                select(func.count()).select_from(Employee).where(Employee.department == department)
            )
        except SQLAlchemyError as e:
            logger.error("Error counting employees in department %s: %s", department, e)
            raise RecordStoreError("count_by_department", str(e)) from e
        return int(count or 0)

    async def delete_by_id(self, employee_id: int) -> None:
        """Permanently remove the row. Deleting a missing id is not an error here."""
        try:
            await self.db.execute(delete(Employee).where(Employee.id == employee_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Error deleting employee %s: %s", employee_id, e)
            raise RecordStoreError("delete_by_id", str(e)) from e

    async def _fetch(self, operation: str, query) -> List[Employee]:
        try:
            result = await self.db.execute(query.order_by(Employee.id))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Error during %s: %s", operation, e)
            raise RecordStoreError(operation, str(e)) from e

"""
Domain exceptions for the employee registry.

These are independent of the transport: the HTTP layer maps them to status
codes in ``app.main``. Every error carries a human-readable ``message`` and a
machine-readable ``details`` dict.
"""

from typing import Any, Optional


class EmployeeRegistryError(Exception):
    """Base exception for all employee registry errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class EmployeeNotFoundError(EmployeeRegistryError):
    """Raised when an id-keyed operation finds no matching employee."""

    def __init__(self, employee_id: int):
        self.employee_id = employee_id
        super().__init__(
            message=f"Employee not found with id: {employee_id}",
            details={"id": employee_id},
        )


class UniqueConstraintViolation(EmployeeRegistryError):
    """Raised when a write would duplicate a unique field."""

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(
            message=f"An employee with {field} '{value}' already exists",
            details={"field": field, "value": str(value)},
        )


class ConcurrentModificationError(EmployeeRegistryError):
    """Raised when a record changed between being read and being written."""

    def __init__(
        self,
        employee_id: Optional[int],
        expected_version: Optional[int] = None,
        actual_version: Optional[int] = None,
    ):
        self.employee_id = employee_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        message = f"Employee {employee_id} was modified concurrently"
        if expected_version is not None and actual_version is not None:
            message += f" (expected version {expected_version}, found {actual_version})"
        super().__init__(
            message=message,
            details={
                "id": employee_id,
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )


class RecordStoreError(EmployeeRegistryError):
    """Raised when the underlying database fails for reasons other than a domain rule."""

    def __init__(self, operation: str, reason: Optional[str] = None):
        self.operation = operation
        message = f"Record store {operation} failed"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message, details={"operation": operation, "reason": reason}
        )

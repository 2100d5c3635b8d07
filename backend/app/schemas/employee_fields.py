"""
Field definitions for the employee record.

This table is the single description of the employee's persisted fields. The
SQLAlchemy model derives column lengths and nullability from it, and the
pydantic schemas derive max lengths and camelCase wire names from it.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Optional, Tuple

SALARY_PRECISION = 10
SALARY_SCALE = 2


@dataclass(frozen=True)
class FieldSpec:
    name: str
    alias: str
    python_type: type
    required: bool = False
    max_length: Optional[int] = None


EMPLOYEE_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("first_name", "firstName", str, required=True, max_length=100),
    FieldSpec("last_name", "lastName", str, required=True, max_length=100),
    FieldSpec("email", "email", str, required=True, max_length=150),
    FieldSpec("phone", "phone", str, max_length=20),
    FieldSpec("position", "position", str, max_length=100),
    FieldSpec("department", "department", str, max_length=50),
    FieldSpec("hire_date", "hireDate", date),
    FieldSpec("salary", "salary", Decimal),
    FieldSpec("is_active", "isActive", bool),
)

FIELDS_BY_NAME: Dict[str, FieldSpec] = {spec.name: spec for spec in EMPLOYEE_FIELDS}

# Every field replaced wholesale by an update. ``id`` and ``version`` are
# owned by the store and never appear here.
MUTABLE_FIELDS: Tuple[str, ...] = tuple(spec.name for spec in EMPLOYEE_FIELDS)


def max_length(name: str) -> Optional[int]:
    return FIELDS_BY_NAME[name].max_length


def is_required(name: str) -> bool:
    return FIELDS_BY_NAME[name].required

"""
Employee API Schemas

Request/response models for the employee endpoints. Wire names are camelCase
(``firstName``, ``hireDate``, ``isActive``); snake_case is accepted on input.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from app.schemas.employee_fields import (
    FIELDS_BY_NAME,
    SALARY_PRECISION,
    SALARY_SCALE,
    max_length,
)


def _wire_name(field_name: str) -> str:
    spec = FIELDS_BY_NAME.get(field_name)
    return spec.alias if spec else to_camel(field_name)


# Salaries travel as JSON numbers but are held as Decimal internally
Salary = Annotated[
    Decimal,
    Field(max_digits=SALARY_PRECISION, decimal_places=SALARY_SCALE),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class EmployeeBase(BaseModel):
    model_config = ConfigDict(alias_generator=_wire_name, populate_by_name=True)

    first_name: str = Field(..., min_length=1, max_length=max_length("first_name"))
    last_name: str = Field(..., min_length=1, max_length=max_length("last_name"))
    email: str = Field(..., min_length=1, max_length=max_length("email"))
    phone: Optional[str] = Field(None, max_length=max_length("phone"))
    position: Optional[str] = Field(None, max_length=max_length("position"))
    department: Optional[str] = Field(None, max_length=max_length("department"))
    hire_date: Optional[date] = None
    salary: Optional[Salary] = None


class EmployeeCreate(EmployeeBase):
    """Payload for creating an employee. Any client-supplied ``id`` is ignored."""


class EmployeeUpdate(EmployeeBase):
    """
    Full replacement payload. Every mutable field is overwritten, so a caller
    wishing to keep a value must resend it.
    """
    is_active: bool = True
    version: Optional[int] = Field(
        None,
        ge=1,
        description="Version last read by the client; the update is rejected if the record has moved on",
    )


class EmployeeResponse(EmployeeBase):
    model_config = ConfigDict(alias_generator=_wire_name, populate_by_name=True, from_attributes=True)

    id: int
    is_active: bool
    version: int


class EmployeeActionResponse(BaseModel):
    """Confirmation returned by the delete endpoints."""
    message: str
    id: str


class DepartmentCountResponse(BaseModel):
    department: str
    count: int

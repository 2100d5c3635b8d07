"""
Tests for app/schemas/employee.py and app/schemas/employee_fields.py.

Tests cover:
- camelCase aliases with snake_case accepted on input
- Length limits and required fields taken from the field table
- Salary precision and JSON serialization
- Update payload defaults
"""
import pytest
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from pydantic import ValidationError

from app.models.employee import Employee
from app.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from app.schemas.employee_fields import EMPLOYEE_FIELDS, FIELDS_BY_NAME, MUTABLE_FIELDS, max_length


class TestFieldTable:
    """Test the field definitions shared by the model and schemas."""

    def test_store_owned_fields_are_not_mutable(self):
        assert "id" not in MUTABLE_FIELDS
        assert "version" not in MUTABLE_FIELDS
        assert "is_active" in MUTABLE_FIELDS

    def test_model_columns_follow_field_table(self):
        columns = Employee.__table__.columns
        for spec in EMPLOYEE_FIELDS:
            column = columns[spec.name]
            if spec.max_length is not None:
                assert column.type.length == spec.max_length
            if spec.required:
                assert column.nullable is False

    def test_email_is_unique(self):
        assert Employee.__table__.columns["email"].unique is True

    def test_aliases_are_camel_case(self):
        assert FIELDS_BY_NAME["hire_date"].alias == "hireDate"
        assert FIELDS_BY_NAME["is_active"].alias == "isActive"


class TestEmployeeCreate:

    def test_accepts_camel_case(self):
        data = EmployeeCreate.model_validate(
            {"firstName": "Ana", "lastName": "Diaz", "email": "ana@x.com", "hireDate": "2024-01-02"}
        )

        assert data.first_name == "Ana"
        assert data.hire_date == date(2024, 1, 2)

    def test_ignores_client_id(self):
        data = EmployeeCreate.model_validate(
            {"id": 7, "firstName": "Ana", "lastName": "Diaz", "email": "ana@x.com"}
        )

        assert "id" not in data.model_dump()

    @pytest.mark.parametrize("missing", ["firstName", "lastName", "email"])
    def test_required_fields(self, missing):
        payload = {"firstName": "Ana", "lastName": "Diaz", "email": "ana@x.com"}
        del payload[missing]

        with pytest.raises(ValidationError):
            EmployeeCreate.model_validate(payload)

    def test_empty_required_field_rejected(self):
        with pytest.raises(ValidationError):
            EmployeeCreate(first_name="", last_name="Diaz", email="ana@x.com")

    def test_max_lengths_enforced(self):
        EmployeeCreate(first_name="A", last_name="B", email="e", phone="1" * max_length("phone"))

        with pytest.raises(ValidationError):
            EmployeeCreate(first_name="A", last_name="B", email="e", phone="1" * (max_length("phone") + 1))

    def test_salary_precision(self):
        EmployeeCreate(first_name="A", last_name="B", email="e", salary=Decimal("99999999.99"))

        with pytest.raises(ValidationError):
            EmployeeCreate(first_name="A", last_name="B", email="e", salary=Decimal("1.234"))
        with pytest.raises(ValidationError):
            EmployeeCreate(first_name="A", last_name="B", email="e", salary=Decimal("123456789.00"))


class TestEmployeeUpdate:

    def test_defaults(self):
        data = EmployeeUpdate(first_name="A", last_name="B", email="e")

        assert data.is_active is True
        assert data.version is None

    def test_version_must_be_positive(self):
        with pytest.raises(ValidationError):
            EmployeeUpdate(first_name="A", last_name="B", email="e", version=0)


class TestEmployeeResponse:

    def test_serializes_camel_case_with_float_salary(self):
        record = SimpleNamespace(
            id=1,
            first_name="Ana",
            last_name="Diaz",
            email="ana@x.com",
            phone=None,
            position=None,
            department="Eng",
            hire_date=date(2024, 1, 2),
            salary=Decimal("52000.50"),
            is_active=True,
            version=1,
        )

        body = EmployeeResponse.model_validate(record).model_dump(mode="json", by_alias=True)

        assert body["firstName"] == "Ana"
        assert body["hireDate"] == "2024-01-02"
        assert body["isActive"] is True
        assert body["salary"] == 52000.5
        assert "first_name" not in body

    def test_python_dump_keeps_decimal(self):
        response = EmployeeResponse(
            id=1, first_name="A", last_name="B", email="e", salary=Decimal("1.50"), is_active=True, version=1
        )

        assert response.model_dump()["salary"] == Decimal("1.50")

from sqlalchemy import Column, Integer, String, Boolean, Date, Numeric

from app.db.base_class import Base
from app.schemas.employee_fields import (
    SALARY_PRECISION,
    SALARY_SCALE,
    is_required,
    max_length,
)


def _text_column(name: str, **kwargs) -> Column:
    return Column(String(max_length(name)), nullable=not is_required(name), **kwargs)


class Employee(Base):
    id = Column(Integer, primary_key=True, index=True)
    first_name = _text_column("first_name")
    last_name = _text_column("last_name")
    # Unique for every record, active or not
    email = _text_column("email", unique=True, index=True)
    phone = _text_column("phone")
    position = _text_column("position")
    department = _text_column("department", index=True)
    hire_date = Column(Date, nullable=True)
    salary = Column(Numeric(SALARY_PRECISION, SALARY_SCALE), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    # Optimistic lock: every UPDATE is issued as ``WHERE version = <seen>``
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Employee id={self.id} email={self.email!r} active={self.is_active}>"

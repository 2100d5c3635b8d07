from typing import Any
from sqlalchemy.orm import as_declarative, declared_attr


@as_declarative()
class Base:
    id: Any
    __name__: str
    __tablename__: str

    # Plural table names: Employee -> employees
    @declared_attr  # type: ignore[misc]
    def __tablename__(cls) -> str:
        return f"{cls.__name__.lower()}s"

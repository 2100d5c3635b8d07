"""
Shared test fixtures and configuration for the Employee Registry backend tests.
"""
import os
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "true"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_CREATE_TABLES"] = "false"

from app.db.session import Database  # noqa: E402
from app.repositories.employee_repository import EmployeeRepository  # noqa: E402
from app.schemas.employee import EmployeeCreate  # noqa: E402
from app.services.employee_service import EmployeeService  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def database():
    """A fresh in-memory database with the schema created."""
    db = Database(TEST_DATABASE_URL)
    db.connect()
    await db.create_all()
    try:
        yield db
    finally:
        await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session() as session:
        yield session


@pytest.fixture
def repository(db_session):
    return EmployeeRepository(db_session)


@pytest.fixture
def service(repository):
    return EmployeeService(repository)


@pytest_asyncio.fixture
async def client(database):
    """HTTP client bound to the app with the test database injected."""
    from app.main import app

    app.state.database = database
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.state.database = None


@pytest.fixture
def mock_db_session():
    """Create a mock async database session."""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.scalar = AsyncMock()
    session.get = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    session.add = MagicMock()
    session.no_autoflush = MagicMock()
    return session


@pytest.fixture
def mock_repository():
    """Create a mock employee repository."""
    repo = AsyncMock(spec=EmployeeRepository)
    return repo


@pytest.fixture
def mock_request():
    """Create a mock FastAPI request object."""
    request = MagicMock()
    request.cookies = {}
    request.client = MagicMock()
    request.client.host = "127.0.0.1"
    request.headers = {}
    request.url = MagicMock()
    request.url.path = "/api/v1/employees"
    request.method = "GET"
    return request


@pytest.fixture
def ana_payload():
    """Camel-case JSON body as a client would send it."""
    return {
        "firstName": "Ana",
        "lastName": "Diaz",
        "email": "ana@x.com",
        "department": "Eng",
    }


@pytest.fixture
def full_employee_data():
    return EmployeeCreate(
        first_name="John",
        last_name="Doe",
        email="john.doe@example.com",
        phone="+34 600 000 000",
        position="Software Engineer",
        department="Engineering",
        hire_date=date(2023, 3, 15),
        salary=Decimal("75000.50"),
    )

# application_service/tests/conftest.py

import random
import string

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from application_service.api import dependencies
from application_service.config import AppConfig
from application_service.gateways.user_gateway import UserGateway
from application_service.infrastructure.database import create_database
from application_service.infrastructure.security import SecurityService
from application_service.main import Application

TEST_PASSWORD = "testpassword"


def random_suffix(k: int = 10) -> str:
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=k))


@pytest.fixture(scope="function")
def app_config():
    """
    Provide a test configuration with an in-memory SQLite database.
    """
    return AppConfig(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        REDIS_HOST="localhost",
        REDIS_PORT=6379,
        RATE_LIMIT_STORAGE_URL="async+memory://",
        JWT_SECRET="test_secret_key",
        JWT_ALGORITHM="HS256",
        ACCESS_TOKEN_EXPIRE_MINUTES=5,
        BCRYPT_ROUNDS=4,
        PROJECT_NAME="Test Application Service",
        SERVICE_NAME="application-service-test",
    )


@pytest.fixture(scope="function")
async def engine(app_config):
    """Create a SQLAlchemy engine that reuses one in-memory SQLite connection."""
    engine = create_async_engine(
        app_config.DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    await create_database(engine).create_tables()
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(engine):
    """Provide a SQLAlchemy session for testing."""
    async_session_factory = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False
    )
    session = async_session_factory()
    yield session
    await session.close()


@pytest.fixture(scope="function")
def security_service(app_config):
    return SecurityService(app_config)


@pytest.fixture(scope="function")
def override_get_db(db_session):
    """Override the get_session dependency to use the test session."""

    async def _override_get_db():
        yield db_session

    return _override_get_db


@pytest.fixture(scope="function")
async def app(app_config, engine):
    """Create the FastAPI app with the test database and in-memory rate limits."""
    application = Application(config=app_config)
    application.database = create_database(engine)

    return application.create_app()


@pytest.fixture(scope="function")
async def app_with_db(app, override_get_db):
    """Override dependencies to use the test database session."""
    app.dependency_overrides[dependencies.get_session] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client(app_with_db):
    """Provide an HTTP client with the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app_with_db), base_url="http://test"
    ) as ac:
        yield ac


async def _create_user(db_session, security_service, prefix: str):
    suffix = random_suffix()
    user_gateway = UserGateway(db_session)
    user = await user_gateway.create(
        {
            "name": f"{prefix}{suffix}",
            "last_name": "Silva",
            "email": f"{prefix}_{suffix}@example.com",
            "password": security_service.get_password_hash(TEST_PASSWORD),
            "verified": False,
        }
    )
    await db_session.commit()
    return user


@pytest.fixture(scope="function")
async def test_user(db_session, security_service):
    """Create a test user in the database."""
    return await _create_user(db_session, security_service, "Maria")


@pytest.fixture(scope="function")
async def test_user2(db_session, security_service):
    """Create a second test user in the database."""
    return await _create_user(db_session, security_service, "Joao")


@pytest.fixture(scope="function")
def auth_header(test_user, security_service):
    """Provide an authorization header for the first test user."""
    token, _ = security_service.create_access_token(test_user)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def auth_header2(test_user2, security_service):
    token, _ = security_service.create_access_token(test_user2)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
async def test_chat(client, auth_header, test_user2):
    """Create a group chat owned by the first test user with the second as member."""
    response = await client.post(
        "/chats",
        headers=auth_header,
        json={"name": "Carona UFPE", "type": "group", "memberIds": [test_user2.id]},
    )
    assert response.status_code == 201, response.json()
    return response.json()["data"]

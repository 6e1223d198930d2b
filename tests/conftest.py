# File: tests/conftest.py
"""Pytest configuration and fixtures."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import tailordesk.models  # noqa: F401  (registers all tables on Base.metadata)
from tailordesk.core.db import Base, get_db
from tailordesk.main import create_app
from tests.factories import UserFactory

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "testpass123"


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Pin the environment so cookies are not Secure and optional services stay off."""
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("JWT_SECRET", "test-jwt-secret")
    monkeypatch.delenv("BREVO_API_KEY", raising=False)
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    monkeypatch.delenv("SESSION_CLEAR_TIMEOUT_SECONDS", raising=False)


@pytest_asyncio.fixture(scope="function")
async def db_session():
    """Fresh in-memory database and session for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


def override_db(app, db_session: AsyncSession) -> None:
    """Point the app's get_db dependency at the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db


@pytest_asyncio.fixture
async def app(db_session: AsyncSession):
    """Application with the default cookie session backend."""
    app = create_app()
    override_db(app, db_session)
    return app


@pytest_asyncio.fixture
async def client(app):
    """Async test client, unauthenticated until a test logs in."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession):
    """Active user with id 42 and password TEST_PASSWORD."""
    return await UserFactory.create(
        db_session,
        id=42,
        email="owner@example.com",
        name="Ada Stitch",
        password=TEST_PASSWORD,
    )


@pytest_asyncio.fixture
async def logged_in_client(client: AsyncClient, test_user):
    """Client holding the session and auth_token cookies of test_user."""
    response = await client.post(
        "/api/auth/login",
        json={"email": test_user.email, "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    client.login_response = response
    return client

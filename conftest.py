import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from mini_jira.db import models  # noqa: F401
from mini_jira.db.base import Base
from mini_jira.db.database import get_async_session, enable_sqlite_foreign_keys
from mini_jira.main import app
from mini_jira.models.user import User
from mini_jira.repositories.user_repository import UserRepository
from mini_jira.services.security_service import SecurityService


@pytest_asyncio.fixture
async def engine():
    # One in-memory database shared by every session of a test
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(
        engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_async_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_async_session] = override_get_async_session
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a user through the API; returns (user, auth headers)"""
    async def _register(email: str, name: str = "User", password: str = "secret123"):
        response = await client.post(
            "/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return data["user"], {"Authorization": f"Bearer {data['token']}"}

    return _register


@pytest_asyncio.fixture
async def owner(db) -> User:
    return await UserRepository.create(
        db,
        email="owner@x.com",
        password_hash=SecurityService.create_password_hash("secret123"),
        name="Owner",
    )


@pytest_asyncio.fixture
async def other_user(db) -> User:
    return await UserRepository.create(
        db,
        email="other@x.com",
        password_hash=SecurityService.create_password_hash("secret123"),
        name="Other",
    )

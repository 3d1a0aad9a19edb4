"""Test configuration and fixtures for the user directory service."""

import asyncio
import os
from collections.abc import AsyncGenerator, Generator

# Settings are read at import time; point them at throwaway values first
os.environ["ASYNC_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DB_CREATE_TABLES"] = "false"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import NullPool

from user_directory.db.session import DatabaseManager, get_session
from user_directory.main import app


@pytest.fixture
def database_url(tmp_path) -> str:
    """A fresh SQLite file per test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'users.db'}"


@pytest_asyncio.fixture
async def database(database_url: str) -> AsyncGenerator[DatabaseManager, None]:
    """Database with the schema created, for tests running on the pytest-asyncio loop."""
    manager = DatabaseManager(database_url, poolclass=NullPool)
    await manager.create_all()
    yield manager
    await manager.dispose()


@pytest_asyncio.fixture
async def session(database: DatabaseManager) -> AsyncGenerator[AsyncSession, None]:
    async with database.async_session_factory() as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(database_url: str) -> Generator[TestClient, None, None]:
    """Test client whose requests use the per-test SQLite database.

    NullPool keeps connections from leaking between the setup loop and the
    loop TestClient runs the app on.
    """
    manager = DatabaseManager(database_url, poolclass=NullPool)
    asyncio.run(manager.create_all())

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with manager.async_session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_payload() -> dict:
    return {
        "name": "John Doe",
        "email": "john.doe@example.com",
        "roles": ["ROLE_USER"],
    }

"""
Test configuration and fixtures for the Lasting Loves Waitlist API.

Every test gets its own temporary SQLite database and a fresh application
built through ``create_app`` so no state leaks between tests.
"""

import os
import tempfile
from typing import AsyncGenerator, Generator
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

# Point the module-level app at a throwaway database before anything imports it
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{tempfile.mktemp(suffix='.db')}")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="waitlist-logs-"))

from app.main import create_app  # noqa: E402
from app.platform.config import Settings  # noqa: E402
from app.platform.db.session import Database  # noqa: E402
from app.platform.services.email import Mailer  # noqa: E402


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'waitlist.db'}"


@pytest.fixture
def settings(database_url) -> Settings:
    return Settings(
        DATABASE_URL=database_url,
        MAIL_USERNAME="team@lastingloves.test",
        MAIL_PASSWORD="secret",
        EMAIL_RELAY_URL="",
        EMAIL_RELAY_API_KEY="",
        _env_file=None,
    )


@pytest.fixture
def test_app(settings):
    """Create FastAPI test application with the SMTP transport mocked out."""
    app = create_app(settings)
    app.state.mailer = MagicMock(spec=Mailer)
    return app


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """
    Create a test client for making HTTP requests.
    Entering the client runs the lifespan, which creates the tables.
    """
    with TestClient(test_app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def database(database_url) -> AsyncGenerator[Database, None]:
    db = Database(database_url)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database) -> AsyncGenerator[AsyncSession, None]:
    async with database.SessionLocal() as session:
        yield session

"""
Writing Submissions Backend — Test Configuration (conftest.py)
===============================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── sample_submission_data: One submission row as a dict
    ├── make_token: Issues session tokens for arbitrary user ids
    ├── test_client: HTTPX AsyncClient against the real app
    ├── sqlite_session_factory: Throw-away SQLite database with the schema
    └── api_client: HTTPX AsyncClient whose DB dependency uses that database
"""

import os
import tempfile

# Settings are read at import time, so the environment is prepared first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="writing_test_"), "app.db"
)
os.environ["JWT_SECRET"] = "test-secret-used-only-by-the-test-suite"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"

from datetime import datetime, timezone  # noqa: E402
from typing import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.auth import create_access_token  # noqa: E402
from app.database import Base, get_db_session  # noqa: E402
from app.models.writing_submission import WritingSubmission  # noqa: E402, F401


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.all.return_value = [row, ...]
        result = await submission_service.list_submissions(mock_db_session, "user-1")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_submission_data():
    """One projected submission row, shaped like a SQLAlchemy Row."""
    return {
        "id": str(uuid4()),
        "created_at": datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc),
        "difficulty": "B1_BASIC",
        "topic": "Mein Wochenende",
        "prompt_text": "Beschreiben Sie Ihr letztes Wochenende.",
        "user_text": "Am Samstag bin ich mit meinen Freunden ins Kino gegangen.",
        "word_count": 10,
        "evaluation": {"overallScore": 78, "errors": []},
    }


@pytest.fixture
def make_token():
    """Returns a function issuing a valid session token for a user id."""
    return create_access_token


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient routed straight into the FastAPI app.

    Uses the app's own dependencies; tests that need data use api_client.
    """
    from app.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def sqlite_session_factory(tmp_path):
    """
    A fresh SQLite database file with the full schema.

    File-backed (not :memory:) so concurrent requests get separate connections.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'submissions.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield factory

    await engine.dispose()


@pytest_asyncio.fixture
async def api_client(sqlite_session_factory):
    """
    HTTPX AsyncClient whose get_db_session dependency uses the SQLite test database.
    """
    from app.main import app

    async def _override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with sqlite_session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_db_session
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_db_session, None)

"""
Writing Submissions Backend — Database Session Management
==========================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine with connection pooling and a read-only session
       dependency that closes the session after every request.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling Strategy:
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour

    The pool is the only resource shared between concurrent requests.
    Every request borrows one connection through its session and returns it
    when the session closes.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,          # Persistent connections (default: 20)
    max_overflow=settings.db_max_overflow,     # Extra connections for spikes (default: 10)
    pool_pre_ping=settings.db_pool_pre_ping,  # Validate before use (default: True)
    pool_recycle=3600,                         # Recycle after 1 hour

    # Echo SQL only in DEBUG mode
    echo=settings.log_level == "DEBUG",
)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: ORM attributes stay readable after the commit
# that runs when the request finishes
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models share this metadata, which Alembic reads for migrations.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a read-only database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (the handler performs queries)
        3. Always: closes the session, rolling back the implicit transaction
           and returning the connection to the pool

    No commit is issued. Every route served by this backend only reads, so
    all database work happens inside the service call, where failures are
    translated into DatabaseError before the response is produced.

    Example usage in a route:
        @router.get("/submissions")
        async def list_submissions(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        yield session


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()

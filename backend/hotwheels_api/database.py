"""
HotWheels API — Database Session Management
=============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine from settings and hands each request its own
       session. The catalog is read-only: sessions are never committed.
Who:   Used by the catalog route via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

The catalog table is owned by another system (it is loaded out of band),
so there are no ORM models or migrations here; queries are built with
SQLAlchemy Core against the table name from settings.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from hotwheels_api.config import settings


def _engine_options(database_url: str) -> Dict[str, Any]:
    """
    Build create_async_engine() keyword arguments for the given URL.

    SQLite picks its own pool class (and rejects pool_size for in-memory
    databases), so queue pool sizing is only passed to server databases.
    """
    options: Dict[str, Any] = {
        "echo": settings.log_level == "DEBUG",
    }
    if make_url(database_url).get_backend_name() != "sqlite":
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    **_engine_options(settings.database_url),
)

# ── Session Factory ───────────────────────────────────────────────────────
# autoflush off: nothing is ever added to these sessions
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The session is closed (connection returned to the pool) once the
    response has been produced, whether the handler succeeded or not.
    Any open transaction is rolled back on close, which is all a read-only
    request ever needs.

    Example usage in a route:
        @router.get("/{full_path:path}")
        async def dispatch(full_path: str, db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        yield session


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Close all pooled connections. Called from the application lifespan on shutdown."""
    await engine.dispose()

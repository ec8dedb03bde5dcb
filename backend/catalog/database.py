"""
Library Catalog Backend — Database Engine & Session Factory
=============================================================

What:  Async SQLAlchemy engine, session factory, declarative base and the
       FastAPI dependency that hands the factory to route handlers.
How:   Repositories open one short-lived session per data-accessor call from
       `async_session_factory`, so independent reads can be awaited together
       with asyncio.gather (a single AsyncSession cannot run two statements
       concurrently).
Who:   Used by repositories, routes (via Depends) and Alembic.
When:  Engine is created at module import; sessions are created per call.

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from settings and are only
    applied to server databases. SQLite uses SQLAlchemy's default pool.
"""

from typing import Any, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from catalog.config import settings


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine: AsyncEngine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: records stay readable after their session closes,
# which templates rely on when rendering.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Registers every model with a shared metadata object, which Alembic and the
    test suite use to create the schema.
    """
    pass


# ── Session Factory Dependency ────────────────────────────────────────────
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    FastAPI dependency returning the session factory used by repositories.

    Tests override this dependency to point the application at a temporary
    database:

        app.dependency_overrides[get_session_factory] = lambda: test_factory
    """
    return async_session_factory


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Closes all pooled connections. Called from the application lifespan on shutdown."""
    await engine.dispose()

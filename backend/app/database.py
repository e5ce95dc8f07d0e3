"""
WoofPoint Backend — Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, declarative base, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling, provides a session
       dependency that rolls back on error and always closes.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Transaction boundary:
    One session per request. Each mutating service method commits it before
    returning, inside its own SQLAlchemyError handling, so a failed commit
    surfaces as DatabaseError (500) before any response is built. Work done
    after yield in a dependency may run once the response is already sent,
    so get_db_session never commits; it only rolls back and closes.
    A profile update writes the User row and the role-profile row under one
    commit: either both land or neither does.

Connection Pooling Strategy:
    pool_size=20:     Persistent connections for normal load
    max_overflow=10:  Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:    Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

    SQLite URLs (local runs, tests) skip the pool sizing arguments because
    the SQLite dialects choose their own pool class.
"""

from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import DateTime, text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from app.config import settings


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp used for every created_at/updated_at default."""
    return datetime.now(timezone.utc)


def _engine_options(database_url: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if database_url.startswith("sqlite"):
        return options
    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
    )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, which the
# response builders rely on once the service has committed.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with `Base.metadata`, which Alembic reads for
    autogenerate and the test suite uses for `create_all`.
    """
    pass


class TimestampMixin:
    """created_at / updated_at columns shared by every table."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (services commit their own writes)
        3. On error: rolls back whatever the request left uncommitted
        4. Always: closes the session (returns connection to pool)

    Raises:
        Any exception is re-raised for the global error handlers.
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Close all pooled connections; called from the lifespan shutdown."""
    await engine.dispose()

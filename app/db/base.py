"""Async SQLAlchemy engine/session builders, declarative Base, and FastAPI dependencies.

The engine is owned by the application instance (``app.state``), not by this
module: ``create_app`` builds it with :func:`build_engine` and the request
dependencies below read it back from the app.
"""


from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def build_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    engine_kwargs: dict = {
        "pool_pre_ping": True,
        "echo": echo,
    }

    # SQLite (local dev) doesn't support connection pooling parameters
    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}

    return create_async_engine(database_url, **engine_kwargs)

# ---------------------------------------------------------------------------
# Session factory
# ---------------------------------------------------------------------------
def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )

# ---------------------------------------------------------------------------
# Declarative Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """All ORM models inherit from this base."""

# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------
def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    """Return the session factory owned by the running app."""
    return request.app.state.session_factory


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session; roll back on error."""
    async with get_session_factory(request)() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
that the HTTP service uses for database access.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlmodel.ext.asyncio.session import AsyncSession

from agent_guard.server.core.config import settings

from .utils import create_engine, create_sessionmaker

# Create global engine and session factory
engine = create_engine(settings.database_url)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Each request gets its own session; nothing is shared between evaluations.

    Yields:
        AsyncSession: An asynchronous SQLModel session.
    """
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """
    Initialize the database for local development.

    Creates the guard tables when ``AGENT_GUARD_AUTO_CREATE_TABLES`` is enabled.
    In production the schema is owned by the Alembic migration, so this is a
    no-op by default.
    """
    if settings.auto_create_tables:
        from .utils import create_all

        await create_all(engine)

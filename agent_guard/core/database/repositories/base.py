"""
Base repository interfaces and utilities.

This module provides the repository patterns shared by the guard
repositories. Built with async SQLAlchemy; every store failure surfaces as a
``DependencyError`` so callers can fail closed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from agent_guard.core.logging_config import get_logger
from agent_guard.guard.errors import DependencyError

from ..base import _utc_now_naive

logger = get_logger(__name__)

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)

__all__ = [
    "AsyncBaseRepository",
    "AsyncQueryBuilder",
    "EntityType",
    "_utc_now_naive",
    "store_errors",
]


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate database and connection failures into ``DependencyError``.

    Args:
        operation: Short name of the store operation, used in the error message
    """
    try:
        yield
    except (SQLAlchemyError, OSError) as exc:
        logger.error(f"Policy store operation failed: {operation}: {exc}", exc_info=True)
        raise DependencyError(f"Policy store unavailable during {operation}", details={"operation": operation}) from exc


class AsyncBaseRepository(ABC, Generic[EntityType]):
    """Base async repository with the persistence helpers every table needs."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        """Initialize repository with async database session and SQLModel entity class.

        Args:
            session: Async SQLModel Session for database operations
            model: SQLModel entity class for this repository
        """
        self.session = session
        self.model = model

    @abstractmethod
    async def create(self, entity: EntityType) -> EntityType:
        """Create a new entity record.

        Args:
            entity: SQLModel instance to persist

        Returns:
            Persisted entity with generated fields populated
        """

    async def _save(self, entity: EntityType) -> EntityType:
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity


class AsyncQueryBuilder:
    """Utility class for building async SQLModel-based database queries."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Apply filters to a SQLModel select statement.

        ``None`` values are skipped, so optional query parameters can be
        passed straight through.

        Args:
            stmt: SQLModel select statement
            model: SQLModel entity class
            filters: Dictionary of field filters

        Returns:
            Modified select statement with filters applied
        """
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int] = None):
        """Apply pagination to a SQLModel select statement.

        Args:
            stmt: SQLModel select statement
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            Modified select statement with pagination applied
        """
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt

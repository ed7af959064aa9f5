"""
Database layer for Agent Guard.

Structure:
- entities/: SQLModel tables (emergency controls, tool registry, audit log)
- repositories/: Data access layer, one repository per table
- session.py: Global engine and session factory used by the HTTP service
- utils.py: Database utility functions (engine, session factory, create_all)

``session`` is not imported here because it builds an engine from the server
settings at import time; import it explicitly where a global engine is wanted.
"""

from .base import Base
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "create_all",
    "create_engine",
    "create_sessionmaker",
]

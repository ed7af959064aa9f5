"""
Database repository layer using SQLModel.

Modules:
- base: AsyncBaseRepository, AsyncQueryBuilder and store error translation
- emergency_controls: Control registry operations
- tool_registry: Tool registry operations
- audit_log: Append-only audit sink
- bundle: Repository bundle for dependency injection
"""

from .audit_log import AuditLogRepository
from .bundle import GuardRepoBundle, build_guard_repos
from .emergency_controls import ControlRegistryRepository, default_config_for
from .tool_registry import ToolRegistryRepository

__all__ = [
    "AuditLogRepository",
    "ControlRegistryRepository",
    "GuardRepoBundle",
    "ToolRegistryRepository",
    "build_guard_repos",
    "default_config_for",
]

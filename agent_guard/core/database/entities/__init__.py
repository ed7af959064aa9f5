"""
Database entity models.

Each module represents a single table owned by the guard:

- emergency_controls: Per-tenant kill switches, throttles and AI battery
- tool_registry: Per-tenant tool metadata and invocation counters
- audit_log: Append-only record of every policy decision
"""

from . import (
    audit_log,
    emergency_controls,
    tool_registry,
)
from .audit_log import AuditLogEntry
from .emergency_controls import EmergencyControl
from .tool_registry import ToolRegistryEntry

__all__ = [
    "AuditLogEntry",
    "EmergencyControl",
    "ToolRegistryEntry",
    "audit_log",
    "emergency_controls",
    "tool_registry",
]

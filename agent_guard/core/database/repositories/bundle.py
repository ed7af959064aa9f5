"""
Repository bundle for dependency injection.

The gateway and the operator routes receive all three repositories at once,
bound to a single session.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlmodel.ext.asyncio.session import AsyncSession

from .audit_log import AuditLogRepository, Clock
from .base import _utc_now_naive
from .emergency_controls import ControlRegistryRepository
from .tool_registry import ToolRegistryRepository


@dataclass(frozen=True)
class GuardRepoBundle:
    """Convenience bundle of the guard repositories."""

    controls: ControlRegistryRepository
    tools: ToolRegistryRepository
    audit: AuditLogRepository


def build_guard_repos(session: AsyncSession, clock: Clock = _utc_now_naive) -> GuardRepoBundle:
    """Build a ``GuardRepoBundle`` sharing one session.

    Args:
        session: Async session for all repositories
        clock: Timestamp source for audit records

    Returns:
        Bundle containing all repository instances
    """
    return GuardRepoBundle(
        controls=ControlRegistryRepository(session),
        tools=ToolRegistryRepository(session),
        audit=AuditLogRepository(session, clock=clock),
    )

"""
Tool registry repository.

Data access for registered tools. Names are unique per tenant; the
invocation counter is only ever changed by a single atomic ``UPDATE``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from agent_guard.core.models import RiskLevel
from agent_guard.guard.errors import ConflictError

from ..entities.tool_registry import ToolRegistryEntry
from .base import AsyncBaseRepository, _utc_now_naive, store_errors

# Fields an operator may change after registration.
UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "risk_level",
        "max_calls_per_minute",
        "is_active",
        "is_verified",
        "data_scope",
    }
)


class ToolRegistryRepository(AsyncBaseRepository[ToolRegistryEntry]):
    """Repository for the per-tenant tool registry."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ToolRegistryEntry)

    async def create(self, tool: ToolRegistryEntry) -> ToolRegistryEntry:
        """Register a tool.

        Raises:
            ConflictError: A tool with the same name already exists for the tenant
        """
        tool.risk_level = RiskLevel(tool.risk_level).value
        tenant_id, name = tool.tenant_id, tool.name
        with store_errors("create tool"):
            try:
                return await self._save(tool)
            except IntegrityError as exc:
                await self.session.rollback()
                raise ConflictError(
                    f"Tool '{name}' is already registered",
                    details={"tenant_id": tenant_id, "name": name},
                ) from exc

    async def find(self, tenant_id: str, name: str) -> Optional[ToolRegistryEntry]:
        """Find a tool by name within a tenant."""
        stmt = select(ToolRegistryEntry).where(
            ToolRegistryEntry.tenant_id == tenant_id,
            ToolRegistryEntry.name == name,
        )
        with store_errors("find tool"):
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def get_by_id(self, tenant_id: str, tool_id: str) -> Optional[ToolRegistryEntry]:
        stmt = select(ToolRegistryEntry).where(
            ToolRegistryEntry.tenant_id == tenant_id,
            ToolRegistryEntry.id == tool_id,
        )
        with store_errors("get tool"):
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def list(self, tenant_id: str) -> List[ToolRegistryEntry]:
        """List the tools of a tenant ordered by name."""
        stmt = (
            select(ToolRegistryEntry)
            .where(ToolRegistryEntry.tenant_id == tenant_id)
            .order_by(ToolRegistryEntry.name.asc())
        )
        with store_errors("list tools"):
            result = await self.session.exec(stmt)
            return list(result)

    async def update(self, tenant_id: str, tool_id: str, changes: Dict[str, Any]) -> Optional[ToolRegistryEntry]:
        """Apply a partial update to a tool.

        Args:
            tenant_id: Tenant identifier
            tool_id: Tool identifier
            changes: Field values to change; unknown fields are ignored

        Returns:
            The updated tool, or None when it does not exist for the tenant

        Raises:
            ConflictError: The new name collides with another tool of the tenant
        """
        tool = await self.get_by_id(tenant_id, tool_id)
        if tool is None:
            return None
        for key, value in changes.items():
            if key not in UPDATABLE_FIELDS:
                continue
            if key == "risk_level":
                value = RiskLevel(value).value
            setattr(tool, key, value)
        tool.updated_at = _utc_now_naive()
        # The rollback expires the instance, so read the name beforehand
        name = tool.name
        with store_errors("update tool"):
            try:
                return await self._save(tool)
            except IntegrityError as exc:
                await self.session.rollback()
                raise ConflictError(
                    f"Tool '{name}' is already registered",
                    details={"tenant_id": tenant_id, "name": name},
                ) from exc

    async def delete(self, tenant_id: str, tool_id: str) -> bool:
        tool = await self.get_by_id(tenant_id, tool_id)
        if tool is None:
            return False
        with store_errors("delete tool"):
            await self.session.delete(tool)
            await self.session.commit()
        return True

    async def increment_invocations(self, tool_id: str) -> None:
        """Atomically add one to ``total_invocations``."""
        stmt = (
            update(ToolRegistryEntry)
            .where(ToolRegistryEntry.id == tool_id)
            .values(total_invocations=ToolRegistryEntry.total_invocations + 1)
        )
        with store_errors("increment tool invocations"):
            await self.session.execute(stmt)
            await self.session.commit()

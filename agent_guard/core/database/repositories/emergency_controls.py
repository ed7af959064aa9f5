"""
Emergency control repository.

Data access for the control registry. Every query is filtered by tenant.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from agent_guard.core.models import ControlType, normalize_control_config
from agent_guard.guard.errors import GuardValidationError

from ..entities.emergency_controls import EmergencyControl
from .base import AsyncBaseRepository, _utc_now_naive, store_errors


def default_config_for(control_type: ControlType | str) -> Dict[str, Any]:
    """Return a fresh copy of the default config for a control type."""
    return normalize_control_config(control_type, None)


class ControlRegistryRepository(AsyncBaseRepository[EmergencyControl]):
    """Repository for emergency controls."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, EmergencyControl)

    async def create(self, control: EmergencyControl) -> EmergencyControl:
        """Persist a new control with its config validated and defaults for its type filled in.

        Raises:
            ValueError: Unknown control type
            GuardValidationError: Config does not fit the control type
        """
        control.control_type = ControlType(control.control_type).value
        try:
            control.config = normalize_control_config(control.control_type, control.config)
        except ValidationError as e:
            raise GuardValidationError(
                f"Invalid config for {control.control_type}",
                details=e.errors(include_url=False),
            ) from e
        if control.is_engaged and control.triggered_at is None:
            control.triggered_at = _utc_now_naive()
        with store_errors("create control"):
            return await self._save(control)

    async def get_by_id(self, tenant_id: str, control_id: str) -> Optional[EmergencyControl]:
        stmt = select(EmergencyControl).where(
            EmergencyControl.tenant_id == tenant_id,
            EmergencyControl.id == control_id,
        )
        with store_errors("get control"):
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def get(
        self,
        tenant_id: str,
        control_type: ControlType | str,
        target_agent_id: Optional[str] = None,
    ) -> Optional[EmergencyControl]:
        """Get the control of a type for a tenant, optionally scoped to one agent.

        Args:
            tenant_id: Tenant identifier
            control_type: Kind of control
            target_agent_id: Agent the control targets; ``None`` selects the tenant-wide control

        Returns:
            The oldest matching control, or None
        """
        stmt = select(EmergencyControl).where(
            EmergencyControl.tenant_id == tenant_id,
            EmergencyControl.control_type == ControlType(control_type).value,
        )
        if target_agent_id is None:
            stmt = stmt.where(EmergencyControl.target_agent_id.is_(None))
        else:
            stmt = stmt.where(EmergencyControl.target_agent_id == target_agent_id)
        stmt = stmt.order_by(EmergencyControl.created_at.asc()).limit(1)
        with store_errors("get control"):
            result = await self.session.exec(stmt)
            return result.first()

    async def list(self, tenant_id: str) -> List[EmergencyControl]:
        """List every control of a tenant, oldest first."""
        stmt = (
            select(EmergencyControl)
            .where(EmergencyControl.tenant_id == tenant_id)
            .order_by(EmergencyControl.created_at.asc())
        )
        with store_errors("list controls"):
            result = await self.session.exec(stmt)
            return list(result)

    async def list_engaged(self, tenant_id: str) -> List[EmergencyControl]:
        """List the engaged controls of a tenant."""
        stmt = (
            select(EmergencyControl)
            .where(EmergencyControl.tenant_id == tenant_id, EmergencyControl.is_engaged == True)  # noqa: E712
            .order_by(EmergencyControl.created_at.asc())
        )
        with store_errors("list engaged controls"):
            result = await self.session.exec(stmt)
            return list(result)

    async def set_engaged(
        self,
        tenant_id: str,
        control_id: str,
        engaged: bool,
        triggered_by: Optional[str] = None,
    ) -> Optional[EmergencyControl]:
        """Engage or disengage a control.

        Engaging records who triggered it (``"manual"`` when not given) and when;
        disengaging clears both.

        Returns:
            The updated control, or None when it does not exist for the tenant
        """
        control = await self.get_by_id(tenant_id, control_id)
        if control is None:
            return None
        now = _utc_now_naive()
        control.is_engaged = engaged
        if engaged:
            control.triggered_by = triggered_by or "manual"
            control.triggered_at = now
        else:
            control.triggered_by = None
            control.triggered_at = None
        control.updated_at = now
        with store_errors("toggle control"):
            return await self._save(control)

    async def delete(self, tenant_id: str, control_id: str) -> bool:
        control = await self.get_by_id(tenant_id, control_id)
        if control is None:
            return False
        with store_errors("delete control"):
            await self.session.delete(control)
            await self.session.commit()
        return True

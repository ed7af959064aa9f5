"""
Audit log repository.

The audit sink: appends immutable decision records, counts them over a
trailing window for rate limiting, and lists them for the audit viewer.
It exposes no update or delete operation.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from agent_guard.core.models import HumanApproval, RiskFlag

from ..entities.audit_log import AuditLogEntry
from .base import AsyncBaseRepository, AsyncQueryBuilder, _utc_now_naive, store_errors

Clock = Callable[[], datetime]


class AuditLogRepository(AsyncBaseRepository[AuditLogEntry]):
    """Append-only repository for audit records.

    Args:
        session: Async SQLModel session
        clock: Source of naive UTC timestamps for new records
    """

    def __init__(self, session: AsyncSession, clock: Clock = _utc_now_naive) -> None:
        super().__init__(session, AuditLogEntry)
        self.clock = clock

    async def create(self, entry: AuditLogEntry) -> AuditLogEntry:
        with store_errors("append audit record"):
            return await self._save(entry)

    async def append(
        self,
        tenant_id: str,
        action: str,
        risk_flag: RiskFlag | str,
        human_approval: HumanApproval | str,
        agent_id: Optional[str] = None,
        agent_identifier: Optional[str] = None,
        tool_used: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
        cost_units: Optional[float] = None,
    ) -> AuditLogEntry:
        """Append one audit record; the id and timestamp are assigned here."""
        entry = AuditLogEntry(
            tenant_id=tenant_id,
            agent_id=agent_id,
            agent_identifier=agent_identifier,
            tool_used=tool_used,
            action=action,
            risk_flag=RiskFlag(risk_flag).value,
            human_approval=HumanApproval(human_approval).value,
            payload=payload or {},
            cost_units=cost_units,
            created_at=self.clock(),
        )
        return await self.create(entry)

    async def count(self, tenant_id: str, since: datetime, tool_name: Optional[str] = None) -> int:
        """Count a tenant's records created at or after ``since``, optionally for one tool."""
        stmt = (
            select(func.count())
            .select_from(AuditLogEntry)
            .where(AuditLogEntry.tenant_id == tenant_id, AuditLogEntry.created_at >= since)
        )
        if tool_name is not None:
            stmt = stmt.where(AuditLogEntry.tool_used == tool_name)
        with store_errors("count audit records"):
            result = await self.session.exec(stmt)
            return int(result.one())

    async def list(
        self,
        tenant_id: str,
        risk_flag: RiskFlag | str | None = None,
        agent_id: Optional[str] = None,
        limit: int = 50,
    ) -> List[AuditLogEntry]:
        """List a tenant's records newest first, with optional filters."""
        stmt = select(AuditLogEntry).where(AuditLogEntry.tenant_id == tenant_id)
        filters = {
            "risk_flag": RiskFlag(risk_flag).value if risk_flag is not None else None,
            "agent_id": agent_id,
        }
        stmt = AsyncQueryBuilder.apply_filters(stmt, AuditLogEntry, filters)
        stmt = stmt.order_by(AuditLogEntry.created_at.desc())
        stmt = AsyncQueryBuilder.apply_pagination(stmt, limit)
        with store_errors("list audit records"):
            result = await self.session.exec(stmt)
            return list(result)

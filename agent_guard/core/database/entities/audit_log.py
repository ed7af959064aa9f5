"""
Audit log entity models.

This module contains the append-only audit record written for every policy
decision and every operator toggle. Rows are never updated or deleted: ORM
flushes and ORM-enabled bulk statements that would do so are refused.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import uuid4

from sqlalchemy import DateTime, Index, Text, event
from sqlalchemy.orm import ORMExecuteState, Session
from sqlmodel import JSON, Field

from agent_guard.guard.errors import AppendOnlyViolation

from ..base import Base, _utc_now_naive


class AuditLogEntry(Base, table=True):
    """Entity for immutable audit records.

    ``id`` and ``created_at`` are assigned by the audit sink, never by callers.

    Table: ag_agent_audit_log
    """

    __tablename__ = "ag_agent_audit_log"
    __table_args__ = (Index("ix_ag_agent_audit_log_tenant_created", "tenant_id", "created_at"),)

    # Primary identifiers
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True, max_length=64)
    tenant_id: str = Field(index=True, max_length=128)

    # Who acted
    agent_id: Optional[str] = Field(default=None, index=True, max_length=128)
    agent_identifier: Optional[str] = Field(default=None, max_length=256)
    tool_used: Optional[str] = Field(default=None, index=True, max_length=256)

    # What happened
    action: str = Field(sa_type=Text)
    risk_flag: str = Field(default="none", index=True, max_length=16)
    human_approval: str = Field(default="not_required", max_length=16)
    payload: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    cost_units: Optional[float] = Field(default=None)

    # Timestamp
    created_at: datetime = Field(default_factory=_utc_now_naive, sa_type=DateTime())

    def __repr__(self) -> str:
        return f"AuditLogEntry(id={self.id}, tenant_id={self.tenant_id}, risk_flag={self.risk_flag})"


@event.listens_for(AuditLogEntry, "before_update")
def _refuse_update(mapper, connection, target: AuditLogEntry) -> None:
    raise AppendOnlyViolation(f"Audit record {target.id} is immutable")


@event.listens_for(AuditLogEntry, "before_delete")
def _refuse_delete(mapper, connection, target: AuditLogEntry) -> None:
    raise AppendOnlyViolation(f"Audit record {target.id} cannot be deleted")


@event.listens_for(Session, "do_orm_execute")
def _refuse_bulk_mutation(orm_execute_state: ORMExecuteState) -> None:
    if not (orm_execute_state.is_update or orm_execute_state.is_delete):
        return
    if any(mapper.class_ is AuditLogEntry for mapper in orm_execute_state.all_mappers):
        raise AppendOnlyViolation("Bulk update/delete of audit records is not allowed")

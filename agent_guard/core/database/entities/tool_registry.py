"""
Tool registry entity models.

This module contains the database entity describing the tools an agent may
call for a tenant, with their activation, verification and rate limits.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import JSON, Field

from ..base import Base, _utc_now_naive


class ToolRegistryEntry(Base, table=True):
    """Entity for registered tools.

    A tool name is unique within a tenant. ``total_invocations`` only ever
    grows, and is incremented with a single SQL ``UPDATE``.

    Table: ag_tool_registry
    """

    __tablename__ = "ag_tool_registry"
    __table_args__ = (UniqueConstraint("tenant_id", "name", name="uq_ag_tool_registry_tenant_name"),)

    # Primary identifiers
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True, max_length=64)
    tenant_id: str = Field(index=True, max_length=128)
    name: str = Field(max_length=256)
    description: Optional[str] = Field(default=None)

    # Policy
    risk_level: str = Field(default="low", max_length=16)
    max_calls_per_minute: int = Field(default=60)
    is_active: bool = Field(default=True)
    is_verified: bool = Field(default=False)
    data_scope: List[str] = Field(default_factory=list, sa_type=JSON)

    # Counters
    total_invocations: int = Field(default=0)

    # Timestamps
    created_at: datetime = Field(default_factory=_utc_now_naive, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=_utc_now_naive, sa_type=DateTime())

    def __repr__(self) -> str:
        return f"ToolRegistryEntry(id={self.id}, tenant_id={self.tenant_id}, name={self.name})"

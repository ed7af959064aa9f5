"""
Emergency control entity models.

This module contains the database entity for tenant emergency controls:
kill switches (tenant-wide or per agent), the global throttle and the AI
battery. Operators engage and disengage them; the gateway only reads them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import uuid4

from sqlalchemy import DateTime
from sqlmodel import JSON, Field

from ..base import Base, _utc_now_naive


class EmergencyControl(Base, table=True):
    """Entity for tenant emergency controls.

    ``config`` depends on ``control_type``:
    ``global_throttle`` carries ``{max_rpm}``, ``ai_battery`` carries
    ``{max_credits, used_credits, auto_disable}`` and ``kill_switch`` is empty.

    Table: ag_emergency_controls
    """

    __tablename__ = "ag_emergency_controls"

    # Primary identifiers
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True, max_length=64)
    tenant_id: str = Field(index=True, max_length=128)

    # Control definition
    control_type: str = Field(index=True, max_length=32)
    target_agent_id: Optional[str] = Field(default=None, max_length=128)
    is_engaged: bool = Field(default=False, index=True)
    config: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)

    # Trigger bookkeeping
    triggered_by: Optional[str] = Field(default=None, max_length=128)
    triggered_at: Optional[datetime] = Field(default=None, sa_type=DateTime())

    # Timestamps
    created_at: datetime = Field(default_factory=_utc_now_naive, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=_utc_now_naive, sa_type=DateTime())

    def __repr__(self) -> str:
        return (
            f"EmergencyControl(id={self.id}, tenant_id={self.tenant_id}, "
            f"type={self.control_type}, engaged={self.is_engaged})"
        )

"""
API Schemas.

Pydantic models for request validation and response serialization of the
guard endpoints and the operator management surface.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from agent_guard.core.models import ControlType, RiskFlag, RiskLevel, normalize_control_config

# =============================================================================
# Guard
# =============================================================================


class EvaluateResponse(BaseModel):
    """Body of ``POST /guard/evaluate`` responses (200, 403, 429 and 503)."""

    allowed: bool = Field(..., description="Whether the agent may proceed")
    reason: Optional[str] = Field(None, description="Machine-readable denial reason")
    message: Optional[str] = Field(None, description="Non-technical text to show the end user on denial")
    audit_id: Optional[str] = Field(None, description="Audit record of the decision")


# =============================================================================
# Emergency controls
# =============================================================================


class ControlCreate(BaseModel):
    """Input schema for creating an emergency control."""

    control_type: ControlType = Field(..., description="kill_switch, global_throttle or ai_battery")
    target_agent_id: Optional[str] = Field(
        None, max_length=128, description="Agent targeted by a kill switch; omit for tenant-wide"
    )
    is_engaged: bool = Field(False, description="Create the control already engaged")
    config: Optional[Dict[str, Any]] = Field(None, description="Type-specific config; defaults apply when omitted")

    @model_validator(mode="after")
    def _check_config(self) -> "ControlCreate":
        """Validate ``config`` against the schema of ``control_type`` and fill in its defaults."""
        try:
            self.config = normalize_control_config(self.control_type, self.config)
        except ValidationError as e:
            problems = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
            raise ValueError(f"invalid {self.control_type.value} config ({problems})") from e
        return self


class ControlToggle(BaseModel):
    """Optional body of engage/disengage requests."""

    triggered_by: Optional[str] = Field(None, max_length=128, description="Who engaged the control")


class ControlRead(BaseModel):
    """Emergency control as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    control_type: ControlType
    target_agent_id: Optional[str] = None
    is_engaged: bool
    config: Dict[str, Any]
    triggered_by: Optional[str] = None
    triggered_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Tool registry
# =============================================================================


class ToolCreate(BaseModel):
    """Input schema for registering a tool."""

    name: str = Field(..., min_length=1, max_length=256)
    description: Optional[str] = None
    risk_level: RiskLevel = RiskLevel.low
    max_calls_per_minute: int = Field(60, ge=0)
    is_active: bool = True
    is_verified: bool = False
    data_scope: List[str] = Field(default_factory=list)


class ToolUpdate(BaseModel):
    """Partial update of a registered tool; only fields that are set change."""

    name: Optional[str] = Field(None, min_length=1, max_length=256)
    description: Optional[str] = None
    risk_level: Optional[RiskLevel] = None
    max_calls_per_minute: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
    is_verified: Optional[bool] = None
    data_scope: Optional[List[str]] = None


class ToolRead(BaseModel):
    """Registered tool as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    name: str
    description: Optional[str] = None
    risk_level: RiskLevel
    max_calls_per_minute: int
    is_active: bool
    is_verified: bool
    total_invocations: int
    data_scope: List[str]
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Audit log
# =============================================================================


class AuditRecordRead(BaseModel):
    """Audit record as returned by the audit viewer."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    agent_id: Optional[str] = None
    agent_identifier: Optional[str] = None
    tool_used: Optional[str] = None
    action: str
    risk_flag: RiskFlag
    human_approval: str
    payload: Dict[str, Any]
    cost_units: Optional[float] = None
    created_at: datetime

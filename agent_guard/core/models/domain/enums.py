"""Domain enums for guard models."""

from __future__ import annotations

from enum import Enum


class ControlType(str, Enum):
    """
    Kinds of emergency controls an operator can configure for a tenant.

    ``kill_switch`` with no target agent vetoes every action of the tenant;
    with a target it vetoes only that agent.
    """

    kill_switch = "kill_switch"
    global_throttle = "global_throttle"  # config: {max_rpm}
    ai_battery = "ai_battery"  # config: {max_credits, used_credits, auto_disable}


class RiskLevel(str, Enum):
    """Risk classification of a registered tool."""

    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


class RiskFlag(str, Enum):
    """Risk flag stored on each audit record."""

    none = "none"
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


class HumanApproval(str, Enum):
    """Approval state stored on each audit record."""

    approved = "approved"
    denied = "denied"
    pending = "pending"
    not_required = "not_required"


class DecisionKind(str, Enum):
    """
    Outcome category of a gateway decision.

    The kind drives the transport status: ``allowed`` maps to 200, ``policy``
    to 403 and ``rate_limit`` to 429.
    """

    allowed = "allowed"
    policy = "policy"
    rate_limit = "rate_limit"

    @property
    def http_status(self) -> int:
        return {DecisionKind.allowed: 200, DecisionKind.policy: 403, DecisionKind.rate_limit: 429}[self]

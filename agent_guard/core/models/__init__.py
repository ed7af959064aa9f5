"""Core models and schemas shared by the guard and the server."""

from __future__ import annotations

from .base import BaseSchema
from .domain import (
    CONTROL_CONFIG_MODELS,
    BatteryConfig,
    ControlConfig,
    ControlType,
    DecisionKind,
    HumanApproval,
    KillSwitchConfig,
    RiskFlag,
    RiskLevel,
    ThrottleConfig,
    normalize_control_config,
    parse_control_config,
)

__all__ = [
    "BaseSchema",
    "CONTROL_CONFIG_MODELS",
    "BatteryConfig",
    "ControlConfig",
    "ControlType",
    "DecisionKind",
    "HumanApproval",
    "KillSwitchConfig",
    "RiskFlag",
    "RiskLevel",
    "ThrottleConfig",
    "normalize_control_config",
    "parse_control_config",
]

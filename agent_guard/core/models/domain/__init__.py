"""Domain enums and control config schemas used across the guard, the repositories and the API."""

from __future__ import annotations

from .controls import (
    CONTROL_CONFIG_MODELS,
    BatteryConfig,
    ControlConfig,
    KillSwitchConfig,
    ThrottleConfig,
    normalize_control_config,
    parse_control_config,
)
from .enums import ControlType, DecisionKind, HumanApproval, RiskFlag, RiskLevel

__all__ = [
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

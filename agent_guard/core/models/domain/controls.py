"""Per-type config schemas for emergency controls.

Values are strict: a throttle limit sent as ``"5"`` is rejected rather than
coerced, so the gateway only ever compares numbers.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Type

from pydantic import ConfigDict, Field

from ..base import BaseSchema
from .enums import ControlType


class ControlConfig(BaseSchema):
    """Base for control configs: unknown keys and type coercion are rejected."""

    model_config = ConfigDict(extra="forbid", strict=True)


class KillSwitchConfig(ControlConfig):
    """A kill switch takes no settings."""


class ThrottleConfig(ControlConfig):
    max_rpm: int = Field(30, ge=1, description="Evaluations allowed per tenant per rate window")


class BatteryConfig(ControlConfig):
    max_credits: float = Field(1000, ge=0)
    used_credits: float = Field(0, ge=0)
    auto_disable: bool = True


CONTROL_CONFIG_MODELS: Dict[ControlType, Type[ControlConfig]] = {
    ControlType.kill_switch: KillSwitchConfig,
    ControlType.global_throttle: ThrottleConfig,
    ControlType.ai_battery: BatteryConfig,
}


def parse_control_config(control_type: ControlType | str, config: Optional[Mapping[str, Any]]) -> ControlConfig:
    """Validate a raw config against the schema of its control type.

    Missing keys take the type's defaults.

    Raises:
        ValueError: Unknown control type.
        pydantic.ValidationError: The config does not match the schema.
    """
    model = CONTROL_CONFIG_MODELS[ControlType(control_type)]
    return model.model_validate(dict(config or {}))


def normalize_control_config(control_type: ControlType | str, config: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return the validated config of a control as a plain dict, defaults filled in."""
    return parse_control_config(control_type, config).model_dump()

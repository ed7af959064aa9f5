"""
Policy checks run by the gateway.

Each check is an independent coroutine taking the shared ``EvaluationContext``
and returning ``None`` to continue or a ``Denial`` to stop. ``DEFAULT_CHECKS``
fixes the evaluation order; the first denial wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import ValidationError

from agent_guard.core.database.entities import AuditLogEntry, EmergencyControl, ToolRegistryEntry
from agent_guard.core.database.repositories import GuardRepoBundle
from agent_guard.core.logging_config import get_logger
from agent_guard.core.models import (
    BatteryConfig,
    ControlConfig,
    ControlType,
    DecisionKind,
    HumanApproval,
    RiskFlag,
    ThrottleConfig,
)

from .config import GuardConfig
from .errors import DependencyError
from .models import DecisionRequest, Denial
from .threats import detect_exfiltration, detect_injection

logger = get_logger(__name__)

C = TypeVar("C", bound=ControlConfig)


@dataclass
class EvaluationContext:
    """State shared by the checks of a single evaluation."""

    request: DecisionRequest
    repos: GuardRepoBundle
    config: GuardConfig
    now: datetime
    text: str = ""
    engaged_controls: List[EmergencyControl] = field(default_factory=list)
    tool: Optional[ToolRegistryEntry] = None

    @property
    def window_start(self) -> datetime:
        return self.now - timedelta(seconds=self.config.rate_window_seconds)

    @property
    def input_preview(self) -> str:
        return self.text[: self.config.input_preview_chars]

    def engaged(self, control_type: ControlType) -> List[EmergencyControl]:
        return [c for c in self.engaged_controls if c.control_type == control_type.value]


Check = Callable[[EvaluationContext], Awaitable[Optional[Denial]]]


async def record_decision(
    ctx: EvaluationContext,
    action_text: str,
    risk_flag: RiskFlag,
    human_approval: HumanApproval,
    payload: Optional[Dict[str, Any]] = None,
) -> AuditLogEntry:
    """Write one audit record for the request being evaluated."""
    request = ctx.request
    return await ctx.repos.audit.append(
        tenant_id=request.tenant_id,
        agent_id=request.agent_id,
        agent_identifier=request.agent_identifier,
        tool_used=request.tool_name,
        action=action_text,
        risk_flag=risk_flag,
        human_approval=human_approval,
        payload=payload,
    )


async def _count_recent(ctx: EvaluationContext, tool_name: Optional[str] = None) -> Optional[int]:
    """Count recent audit records, or None when the count failed and failing open is enabled."""
    try:
        return await ctx.repos.audit.count(ctx.request.tenant_id, ctx.window_start, tool_name=tool_name)
    except DependencyError:
        if not ctx.config.fail_open_on_count_errors:
            raise
        logger.warning(
            f"Audit count failed for tenant {ctx.request.tenant_id}, treating limit as not reached",
            exc_info=True,
        )
        return None


async def check_global_kill_switch(ctx: EvaluationContext) -> Optional[Denial]:
    for control in ctx.engaged(ControlType.kill_switch):
        if control.target_agent_id is None:
            return Denial(
                reason="Global kill switch engaged",
                action_text=f"BLOCKED: global kill switch - {ctx.request.action}",
                risk_flag=RiskFlag.critical,
            )
    return None


async def check_agent_kill_switch(ctx: EvaluationContext) -> Optional[Denial]:
    agent_id = ctx.request.agent_id
    if not agent_id:
        return None
    for control in ctx.engaged(ControlType.kill_switch):
        if control.target_agent_id == agent_id:
            return Denial(
                reason="Agent kill switch engaged",
                action_text=f"BLOCKED: agent kill switch - {ctx.request.action}",
                risk_flag=RiskFlag.high,
            )
    return None


def _control_config(control: EmergencyControl, model: Type[C]) -> Optional[C]:
    """Parse the stored config of an engaged control; a malformed one is logged and ignored."""
    try:
        return model.model_validate(control.config or {})
    except ValidationError as e:
        logger.error(f"Ignoring {control.control_type} control {control.id} with invalid config: {e.errors()}")
        return None


async def check_ai_battery(ctx: EvaluationContext) -> Optional[Denial]:
    """Deny once an auto-disabling battery has used up its credits.

    A battery without a positive ``max_credits`` never trips.
    """
    for control in ctx.engaged(ControlType.ai_battery):
        config = _control_config(control, BatteryConfig)
        if config is None:
            continue
        if config.auto_disable and config.max_credits > 0 and config.used_credits >= config.max_credits:
            return Denial(
                reason="AI battery depleted",
                action_text=f"BLOCKED: AI battery depleted - {ctx.request.action}",
                risk_flag=RiskFlag.high,
            )
    return None


async def check_global_throttle(ctx: EvaluationContext) -> Optional[Denial]:
    limits = []
    for control in ctx.engaged(ControlType.global_throttle):
        config = _control_config(control, ThrottleConfig)
        if config is not None:
            limits.append(config.max_rpm)
    if not limits:
        return None
    recent = await _count_recent(ctx)
    if recent is None:
        return None
    if recent >= min(limits):
        return Denial(
            reason="Global throttle limit reached",
            action_text=f"THROTTLED: {ctx.request.action}",
            risk_flag=RiskFlag.medium,
            kind=DecisionKind.rate_limit,
        )
    return None


async def check_tool_active(ctx: EvaluationContext) -> Optional[Denial]:
    """Load the named tool and deny when it is disabled. Unregistered tools pass."""
    tool_name = ctx.request.tool_name
    if not tool_name:
        return None
    ctx.tool = await ctx.repos.tools.find(ctx.request.tenant_id, tool_name)
    if ctx.tool is not None and not ctx.tool.is_active:
        return Denial(
            reason=f"Tool '{tool_name}' is disabled",
            action_text=f"BLOCKED: tool disabled - {ctx.request.action}",
            risk_flag=RiskFlag.medium,
        )
    return None


async def flag_unverified_tool(ctx: EvaluationContext) -> Optional[Denial]:
    """Write a pending-approval warning for unverified tools; never denies."""
    if ctx.tool is not None and not ctx.tool.is_verified:
        await record_decision(
            ctx,
            f"WARNING: unverified tool used - {ctx.request.action}",
            RiskFlag.high,
            HumanApproval.pending,
        )
    return None


async def check_tool_rate_limit(ctx: EvaluationContext) -> Optional[Denial]:
    if ctx.tool is None:
        return None
    recent = await _count_recent(ctx, tool_name=ctx.tool.name)
    if recent is not None and recent >= ctx.tool.max_calls_per_minute:
        return Denial(
            reason=f"Tool '{ctx.tool.name}' rate limit exceeded",
            action_text=f"RATE LIMITED: {ctx.tool.name}",
            risk_flag=RiskFlag.medium,
            kind=DecisionKind.rate_limit,
        )
    return None


async def count_tool_invocation(ctx: EvaluationContext) -> Optional[Denial]:
    if ctx.tool is not None:
        await ctx.repos.tools.increment_invocations(ctx.tool.id)
    return None


async def check_prompt_injection(ctx: EvaluationContext) -> Optional[Denial]:
    if not ctx.text:
        return None
    result = detect_injection(ctx.text)
    if result.detected:
        return Denial(
            reason="Prompt injection detected",
            action_text=f"BLOCKED: prompt injection detected - pattern: {result.matched_pattern}",
            risk_flag=RiskFlag.critical,
            payload={"pattern": result.matched_pattern, "input_preview": ctx.input_preview},
        )
    return None


async def check_data_exfiltration(ctx: EvaluationContext) -> Optional[Denial]:
    if ctx.text and detect_exfiltration(ctx.text):
        return Denial(
            reason="Data exfiltration attempt detected",
            action_text="BLOCKED: data exfiltration attempt",
            risk_flag=RiskFlag.critical,
            payload={"input_preview": ctx.input_preview},
        )
    return None


DEFAULT_CHECKS: Tuple[Check, ...] = (
    check_global_kill_switch,
    check_agent_kill_switch,
    check_ai_battery,
    check_global_throttle,
    check_tool_active,
    flag_unverified_tool,
    check_tool_rate_limit,
    count_tool_invocation,
    check_prompt_injection,
    check_data_exfiltration,
)

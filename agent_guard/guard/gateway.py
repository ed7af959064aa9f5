"""
Policy gateway.

``PolicyGateway.evaluate`` is the single entry point callers use before an
agent executes a tool call or talks to a model. It folds over the ordered
checks, stops at the first denial and writes exactly one terminal audit
record per evaluation (plus the optional unverified-tool warning).

Store failures surface as ``DependencyError`` and abort the evaluation, so a
degraded store never results in an allow. Only the two counting checks can be
configured to fail open.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Sequence

from agent_guard.core.database.repositories import GuardRepoBundle
from agent_guard.core.database.repositories.base import _utc_now_naive
from agent_guard.core.logging_config import get_logger
from agent_guard.core.models import DecisionKind, HumanApproval, RiskFlag
from agent_guard.core.monitoring import log_guard_decision

from .checks import DEFAULT_CHECKS, Check, EvaluationContext, record_decision
from .config import GuardConfig
from .models import DecisionRequest, GuardDecision

logger = get_logger(__name__)


class PolicyGateway:
    """Sequences the guard checks and records every decision.

    Args:
        repos: Control, tool and audit repositories bound to one session
        config: Window size, preview length and count failure policy
        clock: Source of naive UTC "now" used for the rate windows
        checks: Ordered checks to run; defaults to ``DEFAULT_CHECKS``
    """

    def __init__(
        self,
        repos: GuardRepoBundle,
        config: Optional[GuardConfig] = None,
        clock: Callable[[], datetime] = _utc_now_naive,
        checks: Sequence[Check] = DEFAULT_CHECKS,
    ) -> None:
        self.repos = repos
        self.config = config or GuardConfig()
        self.clock = clock
        self.checks = tuple(checks)

    async def evaluate(self, request: DecisionRequest) -> GuardDecision:
        """Decide whether an agent action may proceed.

        Args:
            request: The action to evaluate

        Returns:
            The decision; denials are returned, not raised

        Raises:
            DependencyError: The policy store could not be consulted
        """
        ctx = EvaluationContext(
            request=request,
            repos=self.repos,
            config=self.config,
            now=self.clock(),
            text=request.scan_text(),
        )
        ctx.engaged_controls = await self.repos.controls.list_engaged(request.tenant_id)

        for check in self.checks:
            denial = await check(ctx)
            if denial is None:
                continue
            entry = await record_decision(
                ctx, denial.action_text, denial.risk_flag, denial.human_approval, denial.payload
            )
            logger.info(
                f"Denied action for tenant {request.tenant_id} "
                f"(agent={request.agent_id}, tool={request.tool_name}): {denial.reason}"
            )
            log_guard_decision(request.tenant_id, request.action, False, denial.reason, request.tool_name)
            return GuardDecision(allowed=False, reason=denial.reason, kind=denial.kind, audit_id=entry.id)

        entry = await record_decision(
            ctx,
            request.action,
            RiskFlag.none if request.tool_name else RiskFlag.low,
            HumanApproval.not_required,
        )
        logger.debug(f"Allowed action for tenant {request.tenant_id}: {request.action}")
        log_guard_decision(request.tenant_id, request.action, True, None, request.tool_name)
        return GuardDecision(allowed=True, kind=DecisionKind.allowed, audit_id=entry.id)

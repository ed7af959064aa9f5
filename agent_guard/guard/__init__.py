"""
Agent guard: the policy gateway every agent action passes through.

Modules:
- models: DecisionRequest, GuardDecision and check results
- threats: Prompt injection and data exfiltration detection
- checks: The ordered policy checks and the audit recording helper
- gateway: PolicyGateway, the orchestrator callers invoke
- client: Async HTTP client for the guard service
- errors: Error taxonomy shared by the gateway, the service and the client

Only errors, models and config are imported here; import ``gateway`` and
``client`` from their modules.
"""

from .config import GuardConfig
from .errors import (
    AgentGuardError,
    AppendOnlyViolation,
    ConflictError,
    DependencyError,
    GuardValidationError,
    NotFoundError,
    PolicyDenied,
    RateLimited,
)
from .models import ConversationMessage, DecisionRequest, Denial, GuardDecision, InjectionResult

__all__ = [
    "AgentGuardError",
    "AppendOnlyViolation",
    "ConflictError",
    "ConversationMessage",
    "DecisionRequest",
    "Denial",
    "DependencyError",
    "GuardConfig",
    "GuardDecision",
    "GuardValidationError",
    "InjectionResult",
    "NotFoundError",
    "PolicyDenied",
    "RateLimited",
]

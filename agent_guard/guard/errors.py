"""Error types raised by the guard and its client.

Purpose:
- Give every failure a stable ``code``, a ``retryable`` hint and the HTTP
  status the service answers with.
- Keep denials distinct from failures: the gateway returns denials as values;
  ``PolicyDenied`` and ``RateLimited`` are only raised by
  ``AgentGuardClient.ensure_allowed``.

Usage:
- Catch `AgentGuardError` for any guard failure and inspect `code`,
  `http_status` or `details`.
- Treat `DependencyError` as "not allowed": the policy store could not be
  consulted.
"""

from __future__ import annotations

from typing import Any, Optional


class AgentGuardError(Exception):
    """Base error for guard failures.

    Args:
        message: Human-readable error description.
        details: Optional structured context for diagnosis.
    """

    code: str = "agent_guard_error"
    retryable: bool = False
    http_status: int = 500

    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class PolicyDenied(AgentGuardError):
    """Raised when the guard denied an action on policy grounds (HTTP 403).

    Args:
        reason: The denial reason returned by the guard.
        audit_id: Identifier of the audit record of the decision, when known.
    """

    code = "policy_denied"
    http_status = 403

    def __init__(self, reason: str, *, audit_id: Optional[str] = None, details: Optional[Any] = None) -> None:
        super().__init__(reason, details=details)
        self.reason = reason
        self.audit_id = audit_id


class RateLimited(PolicyDenied):
    """Raised when the guard denied an action because a rate limit was reached (HTTP 429)."""

    code = "rate_limited"
    retryable = True
    http_status = 429


class GuardValidationError(AgentGuardError):
    """Raised when a decision request lacks the tenant or the action (HTTP 400)."""

    code = "validation_error"
    http_status = 400


class DependencyError(AgentGuardError):
    """Raised when the policy store is unreachable (HTTP 503)."""

    code = "dependency_unavailable"
    retryable = True
    http_status = 503


class ConflictError(AgentGuardError):
    """Raised when an operator creates something that already exists (HTTP 409)."""

    code = "conflict"
    http_status = 409


class NotFoundError(AgentGuardError):
    """Raised when an operator addresses a control or tool that does not exist (HTTP 404)."""

    code = "not_found"
    http_status = 404


class AppendOnlyViolation(AgentGuardError):
    """Raised when code tries to update or delete an audit record."""

    code = "append_only_violation"

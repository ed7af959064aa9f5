"""Unit tests for the guard error taxonomy."""

import pytest

from agent_guard.guard.errors import (
    AgentGuardError,
    AppendOnlyViolation,
    ConflictError,
    DependencyError,
    GuardValidationError,
    NotFoundError,
    PolicyDenied,
    RateLimited,
)


@pytest.mark.parametrize(
    "error_cls,code,status,retryable",
    [
        (PolicyDenied, "policy_denied", 403, False),
        (RateLimited, "rate_limited", 429, True),
        (GuardValidationError, "validation_error", 400, False),
        (DependencyError, "dependency_unavailable", 503, True),
        (ConflictError, "conflict", 409, False),
        (NotFoundError, "not_found", 404, False),
        (AppendOnlyViolation, "append_only_violation", 500, False),
    ],
)
def test_error_metadata(error_cls, code, status, retryable):
    error = error_cls("boom")

    assert isinstance(error, AgentGuardError)
    assert error.code == code
    assert error.http_status == status
    assert error.retryable is retryable
    assert str(error) == "boom"


def test_rate_limited_is_a_denial():
    """Callers catching PolicyDenied also see rate limits."""
    error = RateLimited("Tool 'x' rate limit exceeded", audit_id="a-1")

    assert isinstance(error, PolicyDenied)
    assert error.reason == "Tool 'x' rate limit exceeded"
    assert error.audit_id == "a-1"


def test_details_are_kept():
    error = DependencyError("down", details={"operation": "count"})

    assert error.details == {"operation": "count"}
    assert error.message == "down"

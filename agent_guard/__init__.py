"""Agent Guard.

This package contains the policy-enforcement gateway every AI agent action of
the business OS must pass through before it may execute a tool call or talk
to a model.

High-level architecture
-----------------------

The gateway is a pipeline of ordered checks over tenant-scoped state that
lives in the shared relational store:

- **Emergency controls**: tenant-wide and per-agent kill switches, the global
  throttle and the AI battery (a prepaid credit cap).
- **Tool registry**: active/verified flags, per-tool rate limits and the
  invocation counter.
- **Threat detection**: cheap regex heuristics for prompt injection and data
  exfiltration in free-text input.
- **Audit log**: an append-only record of every decision.

Core subpackages
----------------

- ``agent_guard.core``: logging, monitoring, SQLModel entities and the
  repositories for controls, tools and the audit log.
- ``agent_guard.guard``: the threat detector, the check functions, the
  ``PolicyGateway`` orchestrator, the error taxonomy and an HTTP client for
  callers.
- ``agent_guard.server``: the FastAPI service exposing the gateway and the
  operator management endpoints.

Typical workflow
----------------

A caller (chat proxy, CEO agent, huddle orchestrator) sends a
``DecisionRequest`` to ``POST /api/v1/guard/evaluate`` (or calls
``PolicyGateway.evaluate`` in-process) and only proceeds when the returned
``GuardDecision`` is allowed. Denials are regular return values; only
infrastructure failures raise.
"""

__version__ = "0.1.0"

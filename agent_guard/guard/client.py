from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from agent_guard.core.models import DecisionKind

from .errors import AgentGuardError, DependencyError, GuardValidationError, PolicyDenied, RateLimited
from .models import DecisionRequest, GuardDecision

EVALUATE_PATH = "/api/v1/guard/evaluate"


class AgentGuardClient:
    """
    Async HTTP client for the guard service.

    Responsibilities:
    - evaluate: submit an action and get the decision back as a value
    - ensure_allowed: same, but raise ``PolicyDenied`` / ``RateLimited`` on denial

    Anything that prevents a verdict (transport failure, 5xx) raises
    ``DependencyError``; callers must treat it as "not allowed".
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    async def __aenter__(self) -> "AgentGuardClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    async def evaluate(self, request: DecisionRequest) -> GuardDecision:
        url = f"{self.base_url}{EVALUATE_PATH}"
        try:
            self._logger.debug(
                "AgentGuardClient.evaluate: POST %s tenant=%s action=%s", url, request.tenant_id, request.action
            )
            r = await self._client.post(
                url,
                headers=self._headers(),
                json=request.model_dump(mode="json", exclude_none=True),
            )
        except httpx.TransportError as e:
            raise DependencyError(f"Guard service unreachable: {e}", details={"url": url}) from e

        body = self._json(r)
        if r.status_code == 200:
            return GuardDecision(allowed=True, kind=DecisionKind.allowed, audit_id=body.get("audit_id"))
        if r.status_code in (403, 429):
            kind = DecisionKind.rate_limit if r.status_code == 429 else DecisionKind.policy
            return GuardDecision(
                allowed=False,
                reason=body.get("reason"),
                kind=kind,
                audit_id=body.get("audit_id"),
            )
        if r.status_code == 400:
            raise GuardValidationError(body.get("error") or "Invalid guard request", details=body)
        if r.status_code >= 500:
            raise DependencyError(f"Guard service failed: {r.status_code}", details=body or r.text)
        raise AgentGuardError(f"Unexpected guard response: {r.status_code}", details=body or r.text)

    async def ensure_allowed(self, request: DecisionRequest) -> GuardDecision:
        """Evaluate and raise when the action is denied.

        Raises:
            RateLimited: A throttle or tool rate limit was reached
            PolicyDenied: Any other denial
            DependencyError: No verdict could be obtained
        """
        decision = await self.evaluate(request)
        if decision.allowed:
            return decision
        reason = decision.reason or "Denied by policy"
        if decision.kind == DecisionKind.rate_limit:
            raise RateLimited(reason, audit_id=decision.audit_id)
        raise PolicyDenied(reason, audit_id=decision.audit_id)

    @staticmethod
    def _json(r: httpx.Response) -> dict:
        try:
            data = r.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

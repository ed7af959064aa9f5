"""
Policy Gateway Endpoint.

Callers (chat proxy, CEO agent, huddle orchestrator) submit every agent
action here before executing it.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from agent_guard.guard.models import DecisionRequest
from agent_guard.server.schemas import EvaluateResponse
from agent_guard.server.services.deps import GatewayDep, GuardConfigDep

router = APIRouter()


@router.post(
    "/evaluate",
    response_model=EvaluateResponse,
    summary="Evaluate Agent Action",
    description="Run the guard checks for an agent action and record the decision.",
    response_description="The decision.",
    responses={
        400: {"description": "tenant_id or action missing"},
        403: {"model": EvaluateResponse, "description": "Denied by policy"},
        429: {"model": EvaluateResponse, "description": "Throttle or tool rate limit reached"},
        503: {"model": EvaluateResponse, "description": "Policy store unavailable"},
    },
)
async def evaluate(request: DecisionRequest, gateway: GatewayDep, config: GuardConfigDep) -> JSONResponse:
    """
    Evaluate an agent action.

    Returns 200 when the action may proceed. Denials come back as 403 (policy)
    or 429 (rate limit) with the machine-readable reason and a message fit for
    end users.
    """
    decision = await gateway.evaluate(request)
    body = EvaluateResponse(
        allowed=decision.allowed,
        reason=decision.reason,
        message=None if decision.allowed else config.blocked_message,
        audit_id=decision.audit_id,
    )
    return JSONResponse(status_code=decision.http_status, content=body.model_dump(exclude_none=True))

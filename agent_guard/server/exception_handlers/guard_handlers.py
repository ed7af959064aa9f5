"""
Guard Error Handlers.

Map the guard error taxonomy and request validation failures to JSON
responses. A dependency failure on the gateway is reported as a denial so a
caller that only reads ``allowed`` still fails closed.
"""

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from agent_guard.core.logging_config import get_logger
from agent_guard.core.monitoring import log_error
from agent_guard.guard.errors import AgentGuardError, DependencyError
from agent_guard.server.core import constant

logger = get_logger(__name__)

EVALUATE_PATH = f"{constant.API_V1_STR}/guard/evaluate"
EVALUATE_REQUIRED_FIELDS = frozenset({"tenant_id", "business_id", "action"})


async def guard_error_handler(request: Request, exc: AgentGuardError) -> JSONResponse:
    """
    Render an ``AgentGuardError`` with its HTTP status and stable code.

    Args:
        request: The HTTP request that caused the exception
        exc: The guard error that was raised

    Returns:
        JSONResponse carrying ``error`` (the code) and ``detail``
    """
    content = {"error": exc.code, "detail": exc.message}
    if isinstance(exc, DependencyError):
        logger.error(f"Policy store unavailable in {request.method} {request.url.path}: {exc.message}")
        log_error(type(exc).__name__, exc.message, {"path": request.url.path, "details": exc.details})
        content.update({"allowed": False, "reason": "Policy store unavailable"})
    else:
        logger.info(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.http_status, content=content)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed requests with 400 instead of FastAPI's default 422.

    On the gateway the error names the required fields when one of them, or the
    whole body, is at fault.
    """
    error = "Invalid request"
    if request.url.path == EVALUATE_PATH and any(_blames_required_field(err) for err in exc.errors()):
        error = "tenant_id and action required"
    logger.info(f"Rejected invalid request {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": error, "detail": jsonable_encoder(exc.errors())})


def _blames_required_field(error: dict) -> bool:
    loc = tuple(error.get("loc") or ())
    if loc[:1] != ("body",):
        return False
    return len(loc) == 1 or loc[1] in EVALUATE_REQUIRED_FIELDS

"""
Logfire reporting for the guard service.

Off unless ``LOGFIRE_ENABLED`` is set and ``LOGFIRE_TOKEN`` is present. When on,
SQLAlchemy, httpx and FastAPI are instrumented (each behind its own
``LOGFIRE_TRACE_*`` flag) and the gateway emits one ``Guard decision`` event
per verdict.

The ``log_*`` helpers never raise: a broken exporter must not change a
decision or an HTTP response.
"""

import logging
import os
from typing import Any, Callable, Dict, List, Optional, Tuple

from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


LOGFIRE_ENABLED = _flag("LOGFIRE_ENABLED", "false")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "agent-guard-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.0.0")

# head: share of traces started; tail: share kept after completion
LOGFIRE_SAMPLE_RATE = float(os.getenv("LOGFIRE_SAMPLE_RATE", "1.0"))
LOGFIRE_TRACE_SAMPLE_RATE = float(os.getenv("LOGFIRE_TRACE_SAMPLE_RATE", "1.0"))

LOGFIRE_TRACE_SQLALCHEMY = _flag("LOGFIRE_TRACE_SQLALCHEMY", "true")
LOGFIRE_TRACE_HTTPX = _flag("LOGFIRE_TRACE_HTTPX", "true")
LOGFIRE_TRACE_FASTAPI = _flag("LOGFIRE_TRACE_FASTAPI", "true")


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Configure Logfire and instrument the libraries the guard talks through.

    Args:
        app: The FastAPI app to trace; FastAPI instrumentation is skipped without it
    """
    if not LOGFIRE_ENABLED:
        logger.info("Logfire disabled; set LOGFIRE_ENABLED=true to report decisions and traces")
        return
    if not LOGFIRE_TOKEN:
        logger.warning("LOGFIRE_ENABLED is set but LOGFIRE_TOKEN is empty; Logfire stays off")
        return

    try:
        import logfire
        from logfire import SamplingOptions
    except ImportError:
        logger.warning("LOGFIRE_ENABLED is set but the logfire package is not installed")
        return

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
            sampling=SamplingOptions(head=LOGFIRE_SAMPLE_RATE, tail=LOGFIRE_TRACE_SAMPLE_RATE),
        )
    except Exception as e:
        logger.error(f"Logfire configuration failed: {e}", exc_info=True)
        return

    instrumentations: List[Tuple[str, bool, Callable[[], Any]]] = [
        ("SQLAlchemy", LOGFIRE_TRACE_SQLALCHEMY, logfire.instrument_sqlalchemy),
        ("HTTPX", LOGFIRE_TRACE_HTTPX, logfire.instrument_httpx),
    ]
    if app is not None:
        instrumentations.append(("FastAPI", LOGFIRE_TRACE_FASTAPI, lambda: logfire.instrument_fastapi(app=app)))
    else:
        logger.debug("No FastAPI app given; endpoint tracing skipped")

    for label, enabled, instrument in instrumentations:
        if not enabled:
            continue
        try:
            instrument()
        except Exception as e:
            logger.warning(f"Logfire: could not instrument {label}: {e}")
        else:
            logger.info(f"Logfire: tracing {label}")

    logger.info(f"Logfire reporting as {LOGFIRE_SERVICE_NAME} ({LOGFIRE_ENVIRONMENT})")


def log_guard_decision(
    tenant_id: str,
    action: str,
    allowed: bool,
    reason: Optional[str] = None,
    tool_name: Optional[str] = None,
) -> None:
    """Emit the ``Guard decision`` event for one verdict of the gateway."""
    try:
        import logfire

        logfire.info(
            "Guard decision",
            tenant_id=tenant_id,
            action=action,
            allowed=allowed,
            reason=reason,
            tool_name=tool_name,
        )
    except Exception:
        logger.debug(f"Guard decision for {tenant_id} not sent to Logfire")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    try:
        import logfire

        logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
    except Exception:
        logger.debug(f"API request {method} {path} not sent to Logfire")


def log_error(error_type: str, error_message: str, context: Optional[Dict[str, Any]] = None) -> None:
    """
    Report a handled failure, such as a policy store outage, to Logfire.

    Args:
        error_type: Exception class name
        error_message: What went wrong
        context: Extra attributes for the event (path, details)
    """
    try:
        import logfire

        logfire.error(f"{error_type}: {error_message}", **(context or {}))
    except Exception:
        logger.debug(f"{error_type} not sent to Logfire")

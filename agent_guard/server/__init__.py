"""
Agent Guard Server Package.

This package contains the HTTP service exposing the policy gateway and the
operator management surface.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    exception_handlers: Mapping of guard errors to JSON responses.
    middleware: Request timing and Logfire reporting.
    services: Dependencies and operator service logic.
"""

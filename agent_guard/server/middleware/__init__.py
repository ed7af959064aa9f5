"""
Middleware modules for the Agent Guard server.

This package contains custom middleware for request timing and Logfire
reporting.
"""

from .logfire_middleware import LogfireMiddleware

__all__ = ["LogfireMiddleware"]

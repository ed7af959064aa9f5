"""
Core utilities and configuration for Agent Guard.

This package provides core functionality including logging configuration,
database setup, and other shared utilities.
"""

from agent_guard.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]

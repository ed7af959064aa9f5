"""
Logging setup for the guard service.

Every module logs through ``get_logger(__name__)``. ``setup_logging`` installs
one console handler on the root logger, plus ``logs/agent_guard.log`` when
file logging is switched on, and quiets the database and HTTP client libraries
so gateway decisions stay readable.

Values come from the server settings (``AGENT_GUARD_LOG_LEVEL``, ``LOG_FORMAT``,
``LOG_FILE_DIR``, ``ENABLE_FILE_LOGGING``). The guard library can be used
without the server, so the same variables are read straight from the
environment when the settings cannot be loaded.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

_TRUTHY = ("true", "1", "yes")


def _load_settings() -> Dict[str, Any]:
    # Imported lazily: the server settings module imports the guard package, which logs.
    try:
        from agent_guard.server.core.config import settings
    except (ImportError, ValueError):
        return {
            "log_level": os.getenv("AGENT_GUARD_LOG_LEVEL", "INFO"),
            "log_format": os.getenv("LOG_FORMAT", "detailed"),
            "log_file_dir": os.getenv("LOG_FILE_DIR", "logs"),
            "enable_file_logging": os.getenv("ENABLE_FILE_LOGGING", "false").lower() in _TRUTHY,
        }
    return {
        "log_level": settings.log_level,
        "log_format": settings.log_format,
        "log_file_dir": settings.log_file_dir,
        "enable_file_logging": settings.enable_file_logging,
    }


_settings = _load_settings()
LOG_LEVEL: str = _settings["log_level"].upper()
LOG_FORMAT: str = _settings["log_format"]
LOG_FILE_DIR: str = _settings["log_file_dir"]
ENABLE_FILE_LOGGING: bool = _settings["enable_file_logging"]

SIMPLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
DETAILED_FORMAT = "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d %(message)s"
JSON_FORMAT = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'

_FORMATS = {"simple": SIMPLE_FORMAT, "detailed": DETAILED_FORMAT, "json": JSON_FORMAT}

# Per-logger levels applied after the handlers are installed
MODULE_LOG_LEVELS = {
    "agent_guard.guard.gateway": "DEBUG",
    "agent_guard.core.database": "INFO",
    "sqlalchemy.engine": "WARNING",
    "aiosqlite": "WARNING",
    "httpx": "WARNING",
    "httpcore": "WARNING",
}


def _format_string(fmt: str) -> str:
    return _FORMATS.get(fmt, DETAILED_FORMAT)


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    (Re)configure the root logger. Safe to call more than once.

    Args:
        log_level: Console level; defaults to ``AGENT_GUARD_LOG_LEVEL``
        log_format: ``simple``, ``detailed`` or ``json``; unknown names fall back to ``detailed``
        enable_file: Allow the file handler; it is only added when ``ENABLE_FILE_LOGGING`` is on too
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT
    formatter = logging.Formatter(_format_string(fmt), datefmt="%Y-%m-%d %H:%M:%S")

    # The root passes everything; each handler filters on its own level
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    to_file = enable_file and ENABLE_FILE_LOGGING
    if to_file:
        log_dir = Path(LOG_FILE_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / "agent_guard.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={fmt}, file_logging={to_file}")


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module; pass ``__name__``."""
    return logging.getLogger(name)


setup_logging()

"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware
(CORS, request timing), registers exception handlers and includes all API
routers.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agent_guard.core.database.session import engine, init_db
from agent_guard.core.logging_config import get_logger, setup_logging
from agent_guard.core.monitoring import initialize_logfire

from .api.v1 import audit, controls, guard, health, tools
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates tables on startup when configured to, and disposes of the engine
    on shutdown.
    """
    # Startup
    try:
        logger.info("Starting up Agent Guard Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down Agent Guard Server...")
    await engine.dispose()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Agent Guard API

    The policy enforcement gateway every AI agent action passes through before
    it executes a tool call or talks to a model, plus the operator surface for
    emergency controls, the tool registry and the audit trail.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(guard.router, prefix=f"{constant.API_V1_STR}/guard", tags=["guard"])
app.include_router(controls.router, prefix=f"{constant.API_V1_STR}/controls", tags=["controls"])
app.include_router(tools.router, prefix=f"{constant.API_V1_STR}/tools", tags=["tools"])
app.include_router(audit.router, prefix=f"{constant.API_V1_STR}/audit", tags=["audit"])


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.server_host, port=settings.server_port)


if __name__ == "__main__":
    run()

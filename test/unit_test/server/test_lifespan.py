"""
Unit tests for FastAPI application lifespan management.

Tests verify that startup initializes the database and that shutdown
disposes of the engine.
"""

from unittest.mock import AsyncMock, patch

from fastapi import FastAPI

from agent_guard.server.main import lifespan


class TestLifespan:
    """Test application startup and shutdown."""

    async def test_startup_initializes_database(self):
        with (
            patch("agent_guard.server.main.init_db", new_callable=AsyncMock) as mock_init_db,
            patch("agent_guard.server.main.engine") as mock_engine,
        ):
            mock_engine.dispose = AsyncMock()

            async with lifespan(FastAPI()):
                mock_init_db.assert_awaited_once()

            mock_engine.dispose.assert_awaited_once()

    async def test_startup_logs_success(self):
        with (
            patch("agent_guard.server.main.init_db", new_callable=AsyncMock),
            patch("agent_guard.server.main.engine") as mock_engine,
            patch("agent_guard.server.main.logger") as mock_logger,
        ):
            mock_engine.dispose = AsyncMock()

            async with lifespan(FastAPI()):
                pass

        calls = [call[0][0] for call in mock_logger.info.call_args_list]
        assert any("Starting up" in call for call in calls)
        assert any("Database initialized successfully" in call for call in calls)
        assert any("Shutting down" in call for call in calls)

    async def test_init_db_failure_is_logged_not_raised(self):
        with (
            patch("agent_guard.server.main.init_db", new_callable=AsyncMock) as mock_init_db,
            patch("agent_guard.server.main.engine") as mock_engine,
            patch("agent_guard.server.main.logger") as mock_logger,
        ):
            mock_init_db.side_effect = Exception("Database connection failed")
            mock_engine.dispose = AsyncMock()

            async with lifespan(FastAPI()):
                pass

        mock_logger.error.assert_called_once()
        assert "Database initialization failed" in mock_logger.error.call_args[0][0]


def test_run_serves_on_configured_address():
    from agent_guard.server.main import app, run, settings

    with patch("agent_guard.server.main.uvicorn.run") as mock_run:
        run()

    mock_run.assert_called_once_with(app, host=settings.server_host, port=settings.server_port)

from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession


@pytest_asyncio.fixture(name="client")
async def client_fixture(session_factory, clock) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client over the app with the test database and clock."""
    from agent_guard.core.database.session import get_session
    from agent_guard.server.main import app
    from agent_guard.server.services.deps import get_clock

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_clock] = lambda: clock

    # ASGITransport does not run the lifespan, so init_db never touches the real engine
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()

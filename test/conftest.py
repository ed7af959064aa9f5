from __future__ import annotations

import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import AsyncGenerator, Iterable

# Point the service at an in-memory database before any settings are loaded.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel.pool import StaticPool

from dotenv import load_dotenv

# Load test/.env early so test fixtures can read overrides via os.getenv
load_dotenv(Path(__file__).resolve().parent / ".env", override=False)

from agent_guard.core.database import create_all, create_sessionmaker
from agent_guard.core.database.repositories import GuardRepoBundle, build_guard_repos
from agent_guard.guard.config import GuardConfig
from agent_guard.guard.gateway import PolicyGateway

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeClock:
    """Deterministic naive-UTC clock shared by the audit sink and the gateway."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    allowed_prefixes: Iterable[str] = (
        "http://mock",
        "https://mock",
        "http://localhost",
        "http://127.0.0.1",
        "http://test",
        "/",  # Allow relative paths (used by ASGI transport)
    )

    orig_sync = httpx._client.Client.request
    orig_async = httpx._client.AsyncClient.request

    def _is_allowed(url_str: str) -> bool:
        return any(url_str.startswith(p) for p in allowed_prefixes)

    def offline_sync(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return orig_sync(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard: {url_str}")

    async def offline_async(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return await orig_async(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard (async): {url_str}")

    monkeypatch.setattr(httpx._client.Client, "request", offline_sync, raising=True)
    monkeypatch.setattr(httpx._client.AsyncClient, "request", offline_async, raising=True)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 1, 12, 0, 0))


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with all guard tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine):
    return create_sessionmaker(engine)


@pytest.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def repos(session: AsyncSession, clock: FakeClock) -> GuardRepoBundle:
    return build_guard_repos(session, clock=clock)


@pytest.fixture
def guard_config() -> GuardConfig:
    return GuardConfig()


@pytest.fixture
def gateway(repos: GuardRepoBundle, guard_config: GuardConfig, clock: FakeClock) -> PolicyGateway:
    return PolicyGateway(repos, config=guard_config, clock=clock)

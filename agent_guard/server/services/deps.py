"""
Request Dependencies.

Every request gets its own session, a repository bundle bound to it and a
gateway built over that bundle. Tests override ``get_session`` and
``get_clock``.
"""

from datetime import datetime
from typing import Annotated, Callable

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from agent_guard.core.database.repositories import GuardRepoBundle, build_guard_repos
from agent_guard.core.database.repositories.base import _utc_now_naive
from agent_guard.core.database.session import get_session
from agent_guard.guard.config import GuardConfig
from agent_guard.guard.gateway import PolicyGateway
from agent_guard.server.core.config import settings

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_clock() -> Callable[[], datetime]:
    return _utc_now_naive


ClockDep = Annotated[Callable[[], datetime], Depends(get_clock)]


def get_guard_config() -> GuardConfig:
    return settings.guard


GuardConfigDep = Annotated[GuardConfig, Depends(get_guard_config)]


def get_repos(session: SessionDep, clock: ClockDep) -> GuardRepoBundle:
    return build_guard_repos(session, clock=clock)


ReposDep = Annotated[GuardRepoBundle, Depends(get_repos)]


def get_gateway(repos: ReposDep, config: GuardConfigDep, clock: ClockDep) -> PolicyGateway:
    return PolicyGateway(repos, config=config, clock=clock)


GatewayDep = Annotated[PolicyGateway, Depends(get_gateway)]

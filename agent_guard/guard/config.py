"""Tunable guard behavior, bound from the server settings."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_BLOCKED_MESSAGE = "This action was blocked by security policy"


class GuardConfig(BaseModel):
    """Policy gateway configuration."""

    rate_window_seconds: int = Field(
        default=60,
        gt=0,
        alias="AGENT_GUARD_RATE_WINDOW_SECONDS",
        description="Trailing window used by the global throttle and per-tool rate limits",
    )
    input_preview_chars: int = Field(
        default=200,
        ge=0,
        alias="AGENT_GUARD_INPUT_PREVIEW_CHARS",
        description="How much of the scanned text is copied into threat audit payloads",
    )
    fail_open_on_count_errors: bool = Field(
        default=False,
        alias="AGENT_GUARD_FAIL_OPEN_ON_COUNT_ERRORS",
        description="Treat a failed throttle or rate-limit count as 'limit not reached' instead of failing closed",
    )
    blocked_message: str = Field(
        default=DEFAULT_BLOCKED_MESSAGE,
        alias="AGENT_GUARD_BLOCKED_MESSAGE",
        description="Non-technical text returned to end users on denial",
    )

    model_config = {"populate_by_name": True}

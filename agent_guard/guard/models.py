"""Request and decision models for the policy gateway."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from agent_guard.core.models import BaseSchema, DecisionKind, HumanApproval, RiskFlag


class ConversationMessage(BaseSchema):
    """A single chat message forwarded for threat scanning."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    role: str = Field(default="user")
    content: str = Field(default="")

    @field_validator("content", mode="before")
    @classmethod
    def _null_content_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class DecisionRequest(BaseSchema):
    """
    An agent action submitted to the gateway for a verdict.

    The legacy wire names ``business_id``, ``agent_nhi`` and ``messages`` are
    accepted as aliases of ``tenant_id``, ``agent_identifier`` and
    ``conversation_messages``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    tenant_id: str = Field(min_length=1, validation_alias=AliasChoices("tenant_id", "business_id"))
    action: str = Field(min_length=1)
    agent_id: Optional[str] = Field(default=None)
    agent_identifier: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("agent_identifier", "agent_nhi")
    )
    tool_name: Optional[str] = Field(default=None)
    user_input: Optional[str] = Field(default=None)
    conversation_messages: Optional[List[ConversationMessage]] = Field(
        default=None, validation_alias=AliasChoices("conversation_messages", "messages")
    )

    def scan_text(self) -> str:
        """Text subject to threat detection: ``user_input``, else all message contents joined by a space."""
        if self.user_input:
            return self.user_input
        if self.conversation_messages:
            return " ".join(message.content for message in self.conversation_messages)
        return ""


class GuardDecision(BaseSchema):
    """The gateway verdict. ``kind`` determines the transport status."""

    allowed: bool
    reason: Optional[str] = None
    kind: DecisionKind = DecisionKind.allowed
    audit_id: Optional[str] = None

    @property
    def http_status(self) -> int:
        return self.kind.http_status


@dataclass(frozen=True)
class Denial:
    """What a failing check reports: the verdict plus the audit record to write."""

    reason: str
    action_text: str
    risk_flag: RiskFlag
    kind: DecisionKind = DecisionKind.policy
    human_approval: HumanApproval = HumanApproval.denied
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class InjectionResult:
    """Outcome of prompt injection detection."""

    detected: bool
    matched_pattern: Optional[str] = None

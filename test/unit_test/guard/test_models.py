"""Unit tests for guard request and decision models."""

import pytest
from pydantic import ValidationError

from agent_guard.core.models import DecisionKind
from agent_guard.guard.models import DecisionRequest, GuardDecision


class TestDecisionRequest:
    """Test DecisionRequest parsing."""

    def test_accepts_legacy_field_names(self):
        request = DecisionRequest.model_validate(
            {
                "business_id": "biz-1",
                "action": "chat",
                "agent_nhi": "nhi://agent/7",
                "messages": [{"role": "user", "content": "hello"}],
            }
        )

        assert request.tenant_id == "biz-1"
        assert request.agent_identifier == "nhi://agent/7"
        assert request.conversation_messages[0].content == "hello"

    def test_null_message_content_reads_as_empty(self):
        request = DecisionRequest.model_validate(
            {"tenant_id": "t", "action": "chat", "messages": [{"role": "tool", "content": None}, {"content": "hi"}]}
        )

        assert [m.content for m in request.conversation_messages] == ["", "hi"]
        assert request.scan_text() == " hi"

    def test_ignores_unknown_fields(self):
        request = DecisionRequest.model_validate({"tenant_id": "t", "action": "a", "extra": 1})

        assert not hasattr(request, "extra")

    @pytest.mark.parametrize(
        "payload",
        [
            {"action": "chat"},
            {"tenant_id": "t"},
            {"tenant_id": "", "action": "chat"},
            {"tenant_id": "t", "action": ""},
        ],
    )
    def test_tenant_and_action_are_required(self, payload):
        with pytest.raises(ValidationError):
            DecisionRequest.model_validate(payload)

    def test_scan_text_prefers_user_input(self):
        request = DecisionRequest(
            tenant_id="t",
            action="a",
            user_input="direct",
            conversation_messages=[{"role": "user", "content": "history"}],
        )

        assert request.scan_text() == "direct"

    def test_scan_text_joins_message_contents(self):
        request = DecisionRequest(
            tenant_id="t",
            action="a",
            user_input="",
            conversation_messages=[
                {"role": "user", "content": "first"},
                {"role": "assistant", "content": "second"},
            ],
        )

        assert request.scan_text() == "first second"

    def test_scan_text_empty_without_input(self):
        assert DecisionRequest(tenant_id="t", action="a").scan_text() == ""


class TestGuardDecision:
    """Test GuardDecision status mapping."""

    @pytest.mark.parametrize(
        "kind,status",
        [(DecisionKind.allowed, 200), (DecisionKind.policy, 403), (DecisionKind.rate_limit, 429)],
    )
    def test_http_status_follows_kind(self, kind, status):
        decision = GuardDecision(allowed=kind == DecisionKind.allowed, kind=kind)

        assert decision.http_status == status

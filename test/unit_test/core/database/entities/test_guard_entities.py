"""Unit tests for the guard entity models."""

from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy import DateTime

from agent_guard.core.database.base import Base
from agent_guard.core.database.entities import AuditLogEntry, EmergencyControl, ToolRegistryEntry


class TestEmergencyControl:
    """Tests for EmergencyControl entity model."""

    def test_defaults(self):
        control = EmergencyControl(tenant_id="t1", control_type="kill_switch")

        assert control.id
        assert control.is_engaged is False
        assert control.target_agent_id is None
        assert control.config == {}
        assert isinstance(control.created_at, datetime)
        assert control.created_at.tzinfo is None

    def test_ids_are_unique(self):
        a = EmergencyControl(tenant_id="t1", control_type="kill_switch")
        b = EmergencyControl(tenant_id="t1", control_type="kill_switch")

        assert a.id != b.id

    def test_repr(self):
        control = EmergencyControl(id="c1", tenant_id="t1", control_type="ai_battery")

        assert repr(control) == "EmergencyControl(id=c1, tenant_id=t1, type=ai_battery, engaged=False)"


class TestToolRegistryEntry:
    """Tests for ToolRegistryEntry entity model."""

    def test_defaults(self):
        tool = ToolRegistryEntry(tenant_id="t1", name="send_email")

        assert tool.risk_level == "low"
        assert tool.max_calls_per_minute == 60
        assert tool.is_active is True
        assert tool.is_verified is False
        assert tool.total_invocations == 0
        assert tool.data_scope == []

    def test_unique_name_per_tenant_constraint(self):
        constraints = {c.name for c in ToolRegistryEntry.__table__.constraints}

        assert "uq_ag_tool_registry_tenant_name" in constraints


class TestAuditLogEntry:
    """Tests for AuditLogEntry entity model."""

    def test_defaults(self):
        entry = AuditLogEntry(tenant_id="t1", action="notify_customer")

        assert entry.risk_flag == "none"
        assert entry.human_approval == "not_required"
        assert entry.payload == {}
        assert entry.cost_units is None


def test_tables_share_one_metadata():
    assert {"ag_emergency_controls", "ag_tool_registry", "ag_agent_audit_log"} <= set(Base.metadata.tables)


@pytest.mark.parametrize(
    "model, column",
    [
        (EmergencyControl, "created_at"),
        (EmergencyControl, "updated_at"),
        (EmergencyControl, "triggered_at"),
        (ToolRegistryEntry, "created_at"),
        (ToolRegistryEntry, "updated_at"),
        (AuditLogEntry, "created_at"),
    ],
)
def test_timestamp_columns_store_naive_utc(model, column):
    col_type = model.__table__.columns[column].type

    assert type(col_type) is DateTime
    assert col_type.timezone is False

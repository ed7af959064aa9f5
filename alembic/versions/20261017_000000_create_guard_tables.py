"""Create guard tables

Revision ID: 20261017_000000
Revises: None
Create Date: 2026-10-17 00:00:00.000000

This is the initial migration for the Agent Guard service. It creates:
- ag_emergency_controls: per-tenant kill switches, throttle and AI battery
- ag_tool_registry: per-tenant tool metadata and invocation counters
- ag_agent_audit_log: append-only decision trail

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261017_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# JSONB on Postgres, plain JSON elsewhere.
JSON_TYPE = sa.JSON().with_variant(JSONB(), "postgresql")


def upgrade() -> None:
    """Create the guard tables."""

    op.create_table(
        "ag_emergency_controls",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("tenant_id", sa.String(128), nullable=False),
        sa.Column("control_type", sa.String(32), nullable=False),
        sa.Column("target_agent_id", sa.String(128), nullable=True),
        sa.Column("is_engaged", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("config", JSON_TYPE, nullable=False),
        sa.Column("triggered_by", sa.String(128), nullable=True),
        sa.Column("triggered_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_ag_emergency_controls_tenant_id", "tenant_id"),
        sa.Index("ix_ag_emergency_controls_control_type", "control_type"),
        sa.Index("ix_ag_emergency_controls_is_engaged", "is_engaged"),
    )

    op.create_table(
        "ag_tool_registry",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("tenant_id", sa.String(128), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("risk_level", sa.String(16), nullable=False, server_default="low"),
        sa.Column("max_calls_per_minute", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("data_scope", JSON_TYPE, nullable=False),
        sa.Column("total_invocations", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", "name", name="uq_ag_tool_registry_tenant_name"),
        sa.Index("ix_ag_tool_registry_tenant_id", "tenant_id"),
    )

    op.create_table(
        "ag_agent_audit_log",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("tenant_id", sa.String(128), nullable=False),
        sa.Column("agent_id", sa.String(128), nullable=True),
        sa.Column("agent_identifier", sa.String(256), nullable=True),
        sa.Column("tool_used", sa.String(256), nullable=True),
        sa.Column("action", sa.Text(), nullable=False),
        sa.Column("risk_flag", sa.String(16), nullable=False, server_default="none"),
        sa.Column("human_approval", sa.String(16), nullable=False, server_default="not_required"),
        sa.Column("payload", JSON_TYPE, nullable=False),
        sa.Column("cost_units", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_ag_agent_audit_log_tenant_id", "tenant_id"),
        sa.Index("ix_ag_agent_audit_log_agent_id", "agent_id"),
        sa.Index("ix_ag_agent_audit_log_tool_used", "tool_used"),
        sa.Index("ix_ag_agent_audit_log_risk_flag", "risk_flag"),
        sa.Index("ix_ag_agent_audit_log_tenant_created", "tenant_id", "created_at"),
    )


def downgrade() -> None:
    """Drop the guard tables."""
    op.drop_table("ag_agent_audit_log")
    op.drop_table("ag_tool_registry")
    op.drop_table("ag_emergency_controls")

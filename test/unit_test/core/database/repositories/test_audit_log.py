"""Unit tests for the append-only audit log repository."""

from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import delete, update

from agent_guard.core.database.entities import AuditLogEntry
from agent_guard.core.database.repositories import AuditLogRepository
from agent_guard.guard.errors import AppendOnlyViolation


class TestAuditLogRepository:
    """Tests for AuditLogRepository operations."""

    def test_exposes_no_mutation_operations(self):
        assert not hasattr(AuditLogRepository, "update")
        assert not hasattr(AuditLogRepository, "delete")

    async def test_append_assigns_id_and_timestamp(self, repos, clock):
        entry = await repos.audit.append(
            "t1",
            "notify_customer",
            "low",
            "not_required",
            agent_id="agent-a",
            agent_identifier="nhi://agent-a",
            tool_used="send_email",
            payload={"k": "v"},
            cost_units=1.5,
        )

        assert entry.id
        assert entry.created_at == clock.now
        assert entry.payload == {"k": "v"}
        assert entry.cost_units == 1.5
        assert entry.risk_flag == "low"

    async def test_naive_timestamps_round_trip_through_the_database(self, repos, session_factory, clock):
        entry = await repos.audit.append("t1", "notify_customer", "low", "not_required")

        async with session_factory() as other:
            stored = await AuditLogRepository(other, clock).list("t1")

        assert [r.id for r in stored] == [entry.id]
        assert stored[0].created_at == clock.now
        assert stored[0].created_at.tzinfo is None

    async def test_append_rejects_unknown_flags(self, repos):
        with pytest.raises(ValueError):
            await repos.audit.append("t1", "a", "severe", "not_required")

    async def test_count_uses_trailing_window(self, repos, clock):
        await repos.audit.append("t1", "old", "low", "not_required")
        clock.advance(30)
        await repos.audit.append("t1", "new", "low", "not_required", tool_used="send_email")
        await repos.audit.append("t2", "other tenant", "low", "not_required")

        assert await repos.audit.count("t1", clock.now - timedelta(seconds=60)) == 2
        assert await repos.audit.count("t1", clock.now - timedelta(seconds=10)) == 1
        assert await repos.audit.count("t1", clock.now - timedelta(seconds=60), tool_name="send_email") == 1
        assert await repos.audit.count("t1", clock.now - timedelta(seconds=60), tool_name="send_sms") == 0

    async def test_list_is_newest_first_and_filtered(self, repos, clock):
        await repos.audit.append("t1", "first", "low", "not_required", agent_id="a")
        clock.advance(1)
        await repos.audit.append("t1", "second", "critical", "denied", agent_id="b")
        clock.advance(1)
        await repos.audit.append("t1", "third", "critical", "denied", agent_id="a")

        assert [r.action for r in await repos.audit.list("t1")] == ["third", "second", "first"]
        assert [r.action for r in await repos.audit.list("t1", risk_flag="critical")] == ["third", "second"]
        assert [r.action for r in await repos.audit.list("t1", agent_id="a")] == ["third", "first"]
        assert [r.action for r in await repos.audit.list("t1", limit=1)] == ["third"]
        assert await repos.audit.list("t2") == []

    async def test_orm_update_is_refused(self, repos, session):
        entry = await repos.audit.append("t1", "a", "low", "not_required")

        entry.action = "rewritten"
        session.add(entry)
        with pytest.raises(AppendOnlyViolation):
            await session.commit()

    async def test_orm_delete_is_refused(self, repos, session):
        entry = await repos.audit.append("t1", "a", "low", "not_required")

        await session.delete(entry)
        with pytest.raises(AppendOnlyViolation):
            await session.commit()

    async def test_bulk_update_and_delete_are_refused(self, repos, session):
        await repos.audit.append("t1", "a", "low", "not_required")

        with pytest.raises(AppendOnlyViolation):
            await session.execute(update(AuditLogEntry).values(action="x"))
        with pytest.raises(AppendOnlyViolation):
            await session.execute(delete(AuditLogEntry))

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

TENANT = "tenant-audit"
EVALUATE = "/api/v1/guard/evaluate"
BASE = f"/api/v1/audit/{TENANT}"


async def evaluate(client: AsyncClient, clock, **body):
    body.setdefault("tenant_id", TENANT)
    response = await client.post(EVALUATE, json=body)
    clock.advance(1)
    return response


async def test_records_are_newest_first(client: AsyncClient, clock):
    for action in ("first", "second", "third"):
        await evaluate(client, clock, action=action)

    actions = [r["action"] for r in (await client.get(BASE)).json()]

    assert actions == ["third", "second", "first"]


async def test_filter_by_critical_risk_flag(client: AsyncClient, clock):
    await evaluate(client, clock, action="chat")
    await evaluate(client, clock, action="chat", user_input="jailbreak please")

    records = (await client.get(BASE, params={"risk_flag": "critical"})).json()

    assert len(records) == 1
    assert records[0]["action"].startswith("BLOCKED: prompt injection detected")
    assert records[0]["payload"]["input_preview"] == "jailbreak please"


async def test_filter_by_agent(client: AsyncClient, clock):
    await evaluate(client, clock, action="chat", agent_id="agent-1")
    await evaluate(client, clock, action="chat", agent_id="agent-2")

    records = (await client.get(BASE, params={"agent_id": "agent-2"})).json()

    assert [r["agent_id"] for r in records] == ["agent-2"]


async def test_limit(client: AsyncClient, clock):
    for i in range(5):
        await evaluate(client, clock, action=f"a{i}")

    records = (await client.get(BASE, params={"limit": 2})).json()

    assert [r["action"] for r in records] == ["a4", "a3"]


@pytest.mark.parametrize("limit", [0, 501])
async def test_limit_out_of_range_is_400(client: AsyncClient, limit):
    response = await client.get(BASE, params={"limit": limit})

    assert response.status_code == 400


async def test_unknown_risk_flag_is_400(client: AsyncClient):
    response = await client.get(BASE, params={"risk_flag": "severe"})

    assert response.status_code == 400


async def test_other_tenants_are_not_visible(client: AsyncClient, clock):
    await evaluate(client, clock, action="chat", tenant_id="someone-else")

    assert (await client.get(BASE)).json() == []


async def test_filter_by_high_risk_flag(client: AsyncClient, clock):
    body = {"control_type": "kill_switch", "target_agent_id": "agent-9"}
    control = (await client.post(f"/api/v1/controls/{TENANT}", json=body)).json()
    await client.post(f"/api/v1/controls/{TENANT}/{control['id']}/engage")
    clock.advance(1)
    await evaluate(client, clock, action="chat", agent_id="agent-9")
    await evaluate(client, clock, action="chat", agent_id="agent-1")

    records = (await client.get(BASE, params={"risk_flag": "high"})).json()

    assert [r["action"] for r in records] == [
        "BLOCKED: agent kill switch - chat",
        "Emergency control ENGAGED",
    ]

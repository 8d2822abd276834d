# tests/integration/test_bet_flow.py
"""Integration tests: record bets, resolve them, settle the week.

Requires a live PostgreSQL + Redis, `alembic upgrade head`, and the default roster
(will, dio, rosen, charlie).
"""

import pytest

pytestmark = [pytest.mark.integration, pytest.mark.asyncio(loop_scope="session")]


async def _create(client, **body) -> dict:
    resp = await client.post("/api/v1/bets", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


class TestWeeklyFlow:
    async def test_group_and_head_to_head_week(self, client, weekend_id):
        group = await _create(
            client, weekend_id=weekend_id, placed_by="will",
            participants=["will", "dio", "rosen", "charlie"],
            amount_per_person=25, odds="-110", selection="Chiefs -3",
        )
        h2h = await _create(
            client, weekend_id=weekend_id, placed_by="dio", betting_mode="head_to_head",
            participants=["dio", "rosen"], amount_per_person=50, selection="Bills ML",
        )
        pending = await _create(
            client, weekend_id=weekend_id, placed_by="charlie",
            participants=["will"], amount_per_person=10, odds=150,
        )

        resp = await client.post(f"/api/v1/bets/{group['id']}/resolve", json={"result": "won"})
        assert resp.status_code == 200
        resp = await client.post(f"/api/v1/bets/{h2h['id']}/resolve", json={"result": "lost"})
        assert resp.status_code == 200

        resp = await client.get("/api/v1/settlements/weekly", params={"weekend_id": weekend_id})
        assert resp.status_code == 200
        data = resp.json()["data"]

        assert data["user_balances"]["rosen"]["net"] == 72.73
        assert data["user_balances"]["will"]["net"] == -68.18
        assert data["summary"]["total_bets"] == 3
        assert data["summary"]["resolved_bets"] == 2
        assert sum(s["amount"] for s in data["settlements"]) == pytest.approx(95.45)
        assert pending["status"] == "active"

    async def test_cancelled_bet_excluded(self, client, weekend_id):
        bets = (await client.get("/api/v1/bets", params={"weekend_id": weekend_id})).json()
        before = (await client.get(
            "/api/v1/settlements/weekly", params={"weekend_id": weekend_id}
        )).json()["data"]["user_balances"]

        extra = await _create(
            client, weekend_id=weekend_id, placed_by="rosen",
            participants=["charlie"], amount_per_person=40, odds=200,
        )
        await client.post(f"/api/v1/bets/{extra['id']}/resolve", json={"result": "won"})
        resp = await client.post(f"/api/v1/bets/{extra['id']}/cancel")
        assert resp.json()["data"]["status"] == "cancelled"

        after = (await client.get(
            "/api/v1/settlements/weekly", params={"weekend_id": weekend_id}
        )).json()["data"]["user_balances"]
        assert after == before
        assert bets["data"]["total"] == 3

    async def test_user_filter(self, client, weekend_id):
        resp = await client.get(
            "/api/v1/bets", params={"weekend_id": weekend_id, "user_id": "rosen"}
        )
        assert resp.status_code == 200
        items = resp.json()["data"]["items"]
        # rosen joined the group bet and the head-to-head, and placed the cancelled one
        assert len(items) == 3
        assert all(b["placed_by"] == "rosen" or "rosen" in b["participants"] for b in items)

    async def test_resolve_cancelled_rejected(self, client, weekend_id):
        bet = await _create(
            client, weekend_id=weekend_id, placed_by="will",
            participants=["dio"], amount_per_person=5, odds=-200,
        )
        await client.post(f"/api/v1/bets/{bet['id']}/cancel")

        resp = await client.post(f"/api/v1/bets/{bet['id']}/resolve", json={"result": "won"})

        assert resp.status_code == 422
        assert resp.json()["code"] == 1002

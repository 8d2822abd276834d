"""Endpoint tests through the ASGI app with repository and session overridden."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.main import app
from src.sb_bet.api.router import get_bet_service
from src.sb_bet.application.service import BetApplicationService
from src.sb_bet.domain.models import Bet
from src.sb_common.database import get_db_session
from src.sb_settlement.api.router import get_settlement_service
from src.sb_settlement.application.service import SettlementApplicationService

ROSTER = ("will", "dio", "rosen", "charlie")


def _make_bet(**kwargs) -> Bet:
    defaults = dict(
        id="bet_1", weekend_id="2025-week-2", status="won", betting_mode="group",
        placed_by="will", participants=["will", "dio", "rosen", "charlie"],
        amount_per_person=Decimal("25"), odds=-110, selection="Chiefs -3",
    )
    defaults.update(kwargs)
    return Bet(**defaults)


@pytest.fixture
def db():
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def mock_repo():
    repo = MagicMock()
    repo.insert_bet = AsyncMock(side_effect=lambda db, bet: bet)
    return repo


@pytest.fixture(autouse=True)
def overrides(db, mock_repo):
    app.dependency_overrides[get_db_session] = lambda: db
    app.dependency_overrides[get_bet_service] = lambda: BetApplicationService(
        repo=mock_repo, roster=ROSTER
    )
    app.dependency_overrides[get_settlement_service] = lambda: SettlementApplicationService(
        repo=mock_repo, roster=ROSTER
    )


class TestHealth:
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestWeeklySettlement:
    async def test_envelope_and_payload(self, client, mock_repo):
        mock_repo.get_bets_for_week = AsyncMock(return_value=[_make_bet()])

        resp = await client.get("/api/v1/settlements/weekly", params={"weekend_id": "2025-week-2"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["code"] == 0
        assert body["request_id"] == resp.headers["x-request-id"]
        data = body["data"]
        assert data["user_balances"]["will"] == {"won": 22.73, "lost": 90.91, "net": -68.18}
        assert data["settlements"][0] == {"from": "will", "to": "dio", "amount": 22.73}
        assert data["summary"]["total_bets"] == 1

    async def test_bad_weekend_id(self, client):
        resp = await client.get("/api/v1/settlements/weekly", params={"weekend_id": "week2"})

        assert resp.status_code == 422
        assert resp.json()["code"] == 2002
        assert resp.json()["data"] is None

    async def test_weekend_id_required(self, client):
        resp = await client.get("/api/v1/settlements/weekly")
        assert resp.status_code == 422


class TestBets:
    async def test_create(self, client, db):
        resp = await client.post("/api/v1/bets", json={
            "weekend_id": "2025-week-2",
            "placed_by": "will",
            "participants": ["dio", "rosen"],
            "amount_per_person": 25,
            "odds": "-110",
            "selection": "Chiefs -3",
        })

        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["status"] == "active"
        assert data["total_amount"] == 50.0
        db.commit.assert_awaited_once()

    async def test_create_unknown_user(self, client):
        resp = await client.post("/api/v1/bets", json={
            "weekend_id": "2025-week-2",
            "placed_by": "mallory",
            "participants": ["dio"],
            "amount_per_person": 25,
            "odds": -110,
        })

        assert resp.status_code == 422
        assert resp.json()["code"] == 1003

    async def test_get_missing(self, client, mock_repo):
        mock_repo.get_bet = AsyncMock(return_value=None)

        resp = await client.get("/api/v1/bets/bet_404")

        assert resp.status_code == 404
        assert resp.json()["code"] == 1001

    async def test_list_for_user(self, client, mock_repo):
        mock_repo.list_bets_for_user = AsyncMock(return_value=[_make_bet()])

        resp = await client.get(
            "/api/v1/bets", params={"weekend_id": "2025-week-2", "user_id": "dio"}
        )

        assert resp.status_code == 200
        assert resp.json()["data"]["total"] == 1

    async def test_resolve(self, client, mock_repo):
        mock_repo.get_bet = AsyncMock(return_value=_make_bet(status="active"))
        mock_repo.update_status = AsyncMock(return_value=_make_bet(status="lost"))

        resp = await client.post("/api/v1/bets/bet_1/resolve", json={"result": "lost"})

        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "lost"

    async def test_resolve_cancelled(self, client, mock_repo):
        mock_repo.get_bet = AsyncMock(return_value=_make_bet(status="cancelled"))

        resp = await client.post("/api/v1/bets/bet_1/resolve", json={"result": "won"})

        assert resp.status_code == 422
        assert resp.json()["code"] == 1002

    async def test_cancel(self, client, mock_repo):
        mock_repo.get_bet = AsyncMock(return_value=_make_bet(status="active"))
        mock_repo.update_status = AsyncMock(return_value=_make_bet(status="cancelled"))

        resp = await client.post("/api/v1/bets/bet_1/cancel")

        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "cancelled"


class TestOdds:
    async def test_payout(self, client):
        resp = await client.get("/api/v1/odds/payout", params={"stake": "110", "odds": "-110"})

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["profit"] == 100.0
        assert data["total_payout"] == 210.0

    async def test_payout_plus_sign_unescaped_in_url(self, client):
        # an unescaped "+" in a query string decodes to a space
        resp = await client.get("/api/v1/odds/payout?stake=100&odds=+150")

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["odds"] == 150
        assert data["profit"] == 150.0
        assert data["total_payout"] == 250.0

    async def test_payout_zero_odds(self, client):
        resp = await client.get("/api/v1/odds/payout", params={"stake": "10", "odds": "+0"})

        assert resp.status_code == 422
        assert resp.json()["code"] == 2001

    async def test_parlay(self, client):
        resp = await client.post("/api/v1/odds/parlay", json={"stake": 10, "legs": [-110, "-110"]})

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["odds"] == 264
        assert data["total_payout"] == 36.4
        assert data["legs"] == [-110, -110]

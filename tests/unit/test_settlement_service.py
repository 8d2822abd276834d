"""Unit tests for SettlementApplicationService and its response schema."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.sb_bet.domain.models import Bet
from src.sb_common.errors import InvalidWeekendIdError
from src.sb_settlement.application.schemas import SettlementOut
from src.sb_settlement.application.service import SettlementApplicationService
from src.sb_settlement.domain.models import Settlement

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
    return MagicMock()


@pytest.fixture
def mock_repo():
    return MagicMock()


class TestGetWeeklySettlement:
    @pytest.mark.asyncio
    async def test_group_week(self, db, mock_repo):
        mock_repo.get_bets_for_week = AsyncMock(return_value=[_make_bet()])
        svc = SettlementApplicationService(repo=mock_repo, roster=ROSTER)

        resp = await svc.get_weekly_settlement(db, "2025-week-2")

        assert resp.weekend_id == "2025-week-2"
        assert resp.user_balances["dio"].won == 22.73
        assert resp.user_balances["will"].lost == 90.91
        assert resp.user_balances["will"].net == -68.18
        assert len(resp.settlements) == 3
        assert resp.summary.total_bets == 1
        assert resp.warnings == []

    @pytest.mark.asyncio
    async def test_weekend_id_canonicalized_before_query(self, db, mock_repo):
        mock_repo.get_bets_for_week = AsyncMock(return_value=[])
        svc = SettlementApplicationService(repo=mock_repo, roster=ROSTER)

        resp = await svc.get_weekly_settlement(db, "2025-week-02")

        mock_repo.get_bets_for_week.assert_awaited_once_with(db, "2025-week-2")
        assert resp.weekend_id == "2025-week-2"

    @pytest.mark.asyncio
    async def test_invalid_weekend_id(self, db, mock_repo):
        mock_repo.get_bets_for_week = AsyncMock()
        svc = SettlementApplicationService(repo=mock_repo, roster=ROSTER)

        with pytest.raises(InvalidWeekendIdError):
            await svc.get_weekly_settlement(db, "week-2")
        mock_repo.get_bets_for_week.assert_not_called()

    @pytest.mark.asyncio
    async def test_storage_error_propagates(self, db, mock_repo):
        mock_repo.get_bets_for_week = AsyncMock(side_effect=RuntimeError("db down"))
        svc = SettlementApplicationService(repo=mock_repo, roster=ROSTER)

        with pytest.raises(RuntimeError):
            await svc.get_weekly_settlement(db, "2025-week-2")

    def test_roster_defaults_to_settings(self, mock_repo):
        from config.settings import settings

        svc = SettlementApplicationService(repo=mock_repo)
        assert svc.roster == tuple(settings.ROSTER)


class TestSettlementSchema:
    def test_from_to_aliases(self) -> None:
        out = SettlementOut.from_domain(
            Settlement(from_user="will", to_user="dio", amount=Decimal("22.7272"))
        )
        assert out.model_dump(by_alias=True) == {"from": "will", "to": "dio", "amount": 22.73}

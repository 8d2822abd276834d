"""SettlementApplicationService — read-only composition layer.

Reads one week of bets and hands them to the pure settlement engine. No
commit/rollback: settlement never writes. A storage failure propagates; there
is no partial-data result that is safe to report as who-owes-whom.
"""

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.sb_bet.domain.repository import BetRepositoryProtocol
from src.sb_bet.infrastructure.persistence import BetRepository
from src.sb_common.week import validate_weekend_id
from src.sb_settlement.application.schemas import WeeklySettlementResponse
from src.sb_settlement.domain.engine import compute_weekly_settlement


class SettlementApplicationService:
    def __init__(
        self,
        repo: BetRepositoryProtocol | None = None,
        roster: Iterable[str] | None = None,
    ) -> None:
        self._repo: BetRepositoryProtocol = repo or BetRepository()
        self._roster: tuple[str, ...] = tuple(settings.ROSTER if roster is None else roster)

    @property
    def roster(self) -> tuple[str, ...]:
        return self._roster

    async def get_weekly_settlement(
        self, db: AsyncSession, weekend_id: str
    ) -> WeeklySettlementResponse:
        weekend_id = validate_weekend_id(weekend_id)
        bets = await self._repo.get_bets_for_week(db, weekend_id)
        result = compute_weekly_settlement(bets, self._roster)
        return WeeklySettlementResponse.from_result(weekend_id, result)

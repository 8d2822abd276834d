"""BetApplicationService — record, list and resolve bets.

Writes (create, resolve, cancel) commit on success and roll back on any
error. Reads run without an explicit transaction.
"""

import logging
from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.sb_bet.application.schemas import (
    BetListResponse,
    BetResponse,
    CreateBetRequest,
    ResolveBetRequest,
)
from src.sb_bet.domain.models import Bet
from src.sb_bet.domain.repository import BetRepositoryProtocol
from src.sb_bet.infrastructure.persistence import BetRepository
from src.sb_common.datetime_utils import utc_now
from src.sb_common.enums import BetStatus, BettingMode, BetType
from src.sb_common.errors import (
    BetNotFoundError,
    BetNotResolvableError,
    InvalidBetError,
    UnknownUserError,
)
from src.sb_common.id_generator import generate_bet_id
from src.sb_common.week import validate_weekend_id
from src.sb_odds.domain.payout import calculate_parlay_odds

logger = logging.getLogger(__name__)


class BetApplicationService:
    def __init__(
        self,
        repo: BetRepositoryProtocol | None = None,
        roster: Iterable[str] | None = None,
    ) -> None:
        self._repo: BetRepositoryProtocol = repo or BetRepository()
        self._roster: frozenset[str] = frozenset(settings.ROSTER if roster is None else roster)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create_bet(self, db: AsyncSession, req: CreateBetRequest) -> BetResponse:
        bet = self._build_bet(req)
        try:
            stored = await self._repo.insert_bet(db, bet)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Bet %s recorded: %s %s by %s, %d participants x %s",
            stored.id, stored.betting_mode, stored.bet_type, stored.placed_by,
            len(stored.participants), stored.amount_per_person,
        )
        return BetResponse.from_domain(stored)

    async def resolve_bet(
        self, db: AsyncSession, bet_id: str, req: ResolveBetRequest
    ) -> BetResponse:
        """Mark a bet won/lost. Re-resolving a resolved bet is allowed (score corrections)."""
        bet = await self._require_bet(db, bet_id)
        if bet.status == BetStatus.CANCELLED.value:
            raise BetNotResolvableError(bet_id, bet.status)
        try:
            updated = await self._repo.update_status(
                db, bet_id, req.result.value, req.note, utc_now()
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        if updated is None:
            raise BetNotFoundError(bet_id)
        logger.info("Bet %s resolved as %s (was %s)", bet_id, req.result.value, bet.status)
        return BetResponse.from_domain(updated)

    async def cancel_bet(self, db: AsyncSession, bet_id: str) -> BetResponse:
        """Cancel a bet; settlement ignores it from then on. Cancelling twice is a no-op."""
        bet = await self._require_bet(db, bet_id)
        if bet.status == BetStatus.CANCELLED.value:
            return BetResponse.from_domain(bet)
        try:
            updated = await self._repo.update_status(
                db, bet_id, BetStatus.CANCELLED.value, bet.result, bet.resolved_at
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        if updated is None:
            raise BetNotFoundError(bet_id)
        logger.info("Bet %s cancelled (was %s)", bet_id, bet.status)
        return BetResponse.from_domain(updated)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_bet(self, db: AsyncSession, bet_id: str) -> BetResponse:
        return BetResponse.from_domain(await self._require_bet(db, bet_id))

    async def list_bets(
        self, db: AsyncSession, weekend_id: str, user_id: str | None = None
    ) -> BetListResponse:
        weekend_id = validate_weekend_id(weekend_id)
        if user_id:
            bets = await self._repo.list_bets_for_user(db, weekend_id, user_id)
        else:
            bets = await self._repo.get_bets_for_week(db, weekend_id)
        items = [BetResponse.from_domain(b) for b in bets]
        return BetListResponse(weekend_id=weekend_id, items=items, total=len(items))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _require_bet(self, db: AsyncSession, bet_id: str) -> Bet:
        bet = await self._repo.get_bet(db, bet_id)
        if bet is None:
            raise BetNotFoundError(bet_id)
        return bet

    def _check_roster(self, users: Iterable[str]) -> None:
        for user_id in users:
            if user_id not in self._roster:
                raise UnknownUserError(user_id)

    def _build_bet(self, req: CreateBetRequest) -> Bet:
        if not req.placed_by:
            raise InvalidBetError("placed_by is required")

        side_a: list[str] | None = None
        side_b: list[str] | None = None
        odds = req.odds
        bet_type = req.bet_type

        if req.betting_mode == BettingMode.HEAD_TO_HEAD.value:
            side_a, side_b = self._head_to_head_sides(req)
            participants = side_a + side_b
        else:
            participants = list(req.participants)
            if not participants:
                raise InvalidBetError("at least one participant is required")
            if len(set(participants)) != len(participants):
                raise InvalidBetError("participants must be unique")
            if req.betting_mode == BettingMode.PARLAY.value:
                bet_type = BetType.PARLAY.value
                if odds is None and req.parlay_leg_odds:
                    odds = calculate_parlay_odds(req.parlay_leg_odds)
            if odds is None:
                raise InvalidBetError("odds are required for group and parlay bets")

        self._check_roster([req.placed_by, *participants])

        return Bet(
            id=generate_bet_id(),
            weekend_id=req.weekend_id,
            status=BetStatus.ACTIVE.value,
            betting_mode=req.betting_mode,
            bet_type=bet_type,
            placed_by=req.placed_by,
            participants=participants,
            side_a=side_a,
            side_b=side_b,
            amount_per_person=req.amount_per_person,
            odds=odds,
            selection=req.selection,
            game_id=req.game_id,
            line=req.line,
            parlay_leg_odds=list(req.parlay_leg_odds),
        )

    @staticmethod
    def _head_to_head_sides(req: CreateBetRequest) -> tuple[list[str], list[str]]:
        """One user per side; the placer is on side A.

        Without explicit sides, participants must be exactly [placer, opponent]
        in either order.
        """
        if req.side_a is None and req.side_b is None:
            others = [p for p in req.participants if p != req.placed_by]
            if len(req.participants) != 2 or len(others) != 1:
                raise InvalidBetError(
                    "head-to-head needs side_a/side_b or exactly two participants incl. placed_by"
                )
            return [req.placed_by], others

        side_a = list(req.side_a or [])
        side_b = list(req.side_b or [])
        if len(side_a) != 1 or len(side_b) != 1:
            raise InvalidBetError("head-to-head sides must have exactly one user each")
        if side_a == side_b:
            raise InvalidBetError("head-to-head sides must be different users")
        if req.placed_by == side_b[0]:
            side_a, side_b = side_b, side_a
        if req.placed_by != side_a[0]:
            raise InvalidBetError("placed_by must be on one of the head-to-head sides")
        return side_a, side_b

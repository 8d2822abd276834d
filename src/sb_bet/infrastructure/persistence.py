"""BetRepository — concrete implementation of BetRepositoryProtocol.

All queries use raw text() SQL (no ORM). participants / side_a / side_b are
TEXT[] columns; asyncpg maps them to and from Python lists.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_bet.domain.models import Bet

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_SELECT_COLUMNS = """
    id, weekend_id, game_id, status, betting_mode, bet_type,
    placed_by, participants, side_a, side_b,
    amount_per_person, odds, selection, line, parlay_leg_odds,
    result, created_at, resolved_at
"""

_GET_BET_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM bets
    WHERE id = :bet_id
""")

_BETS_FOR_WEEK_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM bets
    WHERE weekend_id = :weekend_id
    ORDER BY created_at, id
""")

_BETS_FOR_USER_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM bets
    WHERE weekend_id = :weekend_id
      AND (placed_by = :user_id OR :user_id = ANY(participants))
    ORDER BY created_at, id
""")

_INSERT_BET_SQL = text(f"""
    INSERT INTO bets (id, weekend_id, game_id, status, betting_mode, bet_type,
        placed_by, participants, side_a, side_b,
        amount_per_person, total_amount, odds, selection, line, parlay_leg_odds)
    VALUES (:id, :weekend_id, :game_id, :status, :betting_mode, :bet_type,
        :placed_by, :participants, :side_a, :side_b,
        :amount_per_person, :total_amount, :odds, :selection, :line, :parlay_leg_odds)
    RETURNING {_SELECT_COLUMNS}
""")

_UPDATE_STATUS_SQL = text(f"""
    UPDATE bets
    SET status = :status, result = :result, resolved_at = :resolved_at,
        updated_at = NOW()
    WHERE id = :bet_id
    RETURNING {_SELECT_COLUMNS}
""")

# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_bet(row: Any) -> Bet:
    return Bet(
        id=row.id,
        weekend_id=row.weekend_id,
        game_id=row.game_id,
        status=row.status,
        betting_mode=row.betting_mode,
        bet_type=row.bet_type,
        placed_by=row.placed_by,
        participants=list(row.participants or []),
        side_a=list(row.side_a) if row.side_a is not None else None,
        side_b=list(row.side_b) if row.side_b is not None else None,
        amount_per_person=row.amount_per_person,
        odds=row.odds,
        selection=row.selection or "",
        line=row.line,
        parlay_leg_odds=list(row.parlay_leg_odds or []),
        result=row.result,
        created_at=row.created_at,
        resolved_at=row.resolved_at,
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class BetRepository:
    """Concrete repository. Writes never commit; the application service owns the transaction."""

    async def get_bets_for_week(self, db: AsyncSession, weekend_id: str) -> list[Bet]:
        result = await db.execute(_BETS_FOR_WEEK_SQL, {"weekend_id": weekend_id})
        return [_row_to_bet(row) for row in result.fetchall()]

    async def list_bets_for_user(
        self, db: AsyncSession, weekend_id: str, user_id: str
    ) -> list[Bet]:
        result = await db.execute(
            _BETS_FOR_USER_SQL, {"weekend_id": weekend_id, "user_id": user_id}
        )
        return [_row_to_bet(row) for row in result.fetchall()]

    async def get_bet(self, db: AsyncSession, bet_id: str) -> Bet | None:
        result = await db.execute(_GET_BET_SQL, {"bet_id": bet_id})
        row = result.fetchone()
        return _row_to_bet(row) if row else None

    async def insert_bet(self, db: AsyncSession, bet: Bet) -> Bet:
        result = await db.execute(
            _INSERT_BET_SQL,
            {
                "id": bet.id,
                "weekend_id": bet.weekend_id,
                "game_id": bet.game_id,
                "status": bet.status,
                "betting_mode": bet.betting_mode,
                "bet_type": bet.bet_type,
                "placed_by": bet.placed_by,
                "participants": bet.participants,
                "side_a": bet.side_a,
                "side_b": bet.side_b,
                "amount_per_person": bet.amount_per_person,
                "total_amount": bet.total_amount,
                "odds": bet.odds,
                "selection": bet.selection,
                "line": bet.line,
                "parlay_leg_odds": bet.parlay_leg_odds or None,
            },
        )
        return _row_to_bet(result.fetchone())

    async def update_status(
        self,
        db: AsyncSession,
        bet_id: str,
        status: str,
        result: str | None,
        resolved_at: datetime | None,
    ) -> Bet | None:
        res = await db.execute(
            _UPDATE_STATUS_SQL,
            {
                "bet_id": bet_id,
                "status": status,
                "result": result,
                "resolved_at": resolved_at,
            },
        )
        row = res.fetchone()
        return _row_to_bet(row) if row else None

# src/sb_bet/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

The settlement engine only needs get_bets_for_week; the bet API needs the rest.
Unit tests inject a mock that conforms to this Protocol.
"""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_bet.domain.models import Bet


class BetRepositoryProtocol(Protocol):
    async def get_bets_for_week(
        self,
        db: AsyncSession,
        weekend_id: str,
    ) -> list[Bet]: ...

    async def list_bets_for_user(
        self,
        db: AsyncSession,
        weekend_id: str,
        user_id: str,
    ) -> list[Bet]: ...

    async def get_bet(
        self,
        db: AsyncSession,
        bet_id: str,
    ) -> Bet | None: ...

    async def insert_bet(
        self,
        db: AsyncSession,
        bet: Bet,
    ) -> Bet: ...

    async def update_status(
        self,
        db: AsyncSession,
        bet_id: str,
        status: str,
        result: str | None,
        resolved_at: datetime | None,
    ) -> Bet | None: ...

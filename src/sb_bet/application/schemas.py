from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from src.sb_bet.domain.models import Bet
from src.sb_common.enums import BetResult
from src.sb_common.errors import InvalidOddsError, InvalidWeekendIdError
from src.sb_common.week import validate_weekend_id
from src.sb_odds.domain.payout import parse_odds

BettingModeLiteral = Literal["group", "head_to_head", "parlay"]
BetTypeLiteral = Literal["spread", "over_under", "moneyline", "player_prop", "parlay"]


class CreateBetRequest(BaseModel):
    weekend_id: str
    placed_by: str
    betting_mode: BettingModeLiteral = "group"
    bet_type: BetTypeLiteral = "moneyline"
    game_id: str | None = None
    participants: list[str] = Field(default_factory=list)
    side_a: list[str] | None = None
    side_b: list[str] | None = None
    amount_per_person: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    odds: int | None = None
    parlay_leg_odds: list[int] = Field(default_factory=list)
    selection: str = ""
    line: Decimal | None = None

    @field_validator("weekend_id")
    @classmethod
    def canonical_weekend_id(cls, v: str) -> str:
        try:
            return validate_weekend_id(v)
        except InvalidWeekendIdError as exc:
            raise ValueError(exc.message) from exc

    @field_validator("odds", mode="before")
    @classmethod
    def american_odds(cls, v: object) -> int | None:
        # "+150", "-110", 150 and decimal "2.5" are all accepted
        if v is None or v == "":
            return None
        try:
            return parse_odds(v)  # type: ignore[arg-type]
        except InvalidOddsError as exc:
            raise ValueError(exc.message) from exc

    @field_validator("parlay_leg_odds", mode="before")
    @classmethod
    def leg_odds(cls, v: object) -> list[int]:
        if not v:
            return []
        try:
            return [parse_odds(o) for o in v]  # type: ignore[union-attr]
        except InvalidOddsError as exc:
            raise ValueError(exc.message) from exc

    @field_validator("placed_by", "selection")
    @classmethod
    def strip(cls, v: str) -> str:
        return v.strip()


class ResolveBetRequest(BaseModel):
    result: BetResult
    note: str | None = None


class BetResponse(BaseModel):
    id: str
    weekend_id: str
    game_id: str | None
    status: str
    betting_mode: str
    bet_type: str
    placed_by: str | None
    participants: list[str]
    side_a: list[str] | None
    side_b: list[str] | None
    amount_per_person: float | None
    total_amount: float | None
    odds: int | None
    parlay_leg_odds: list[int]
    selection: str
    line: float | None
    result: str | None
    created_at: datetime | None
    resolved_at: datetime | None

    @classmethod
    def from_domain(cls, bet: Bet) -> "BetResponse":
        def _f(value: Decimal | None) -> float | None:
            return float(value) if value is not None else None

        return cls(
            id=bet.id,
            weekend_id=bet.weekend_id,
            game_id=bet.game_id,
            status=bet.status,
            betting_mode=bet.betting_mode,
            bet_type=bet.bet_type,
            placed_by=bet.placed_by,
            participants=bet.participants,
            side_a=bet.side_a,
            side_b=bet.side_b,
            amount_per_person=_f(bet.amount_per_person),
            total_amount=_f(bet.total_amount),
            odds=bet.odds,
            parlay_leg_odds=bet.parlay_leg_odds,
            selection=bet.selection,
            line=_f(bet.line),
            result=bet.result,
            created_at=bet.created_at,
            resolved_at=bet.resolved_at,
        )


class BetListResponse(BaseModel):
    weekend_id: str
    items: list[BetResponse]
    total: int

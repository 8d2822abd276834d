"""Pydantic schemas for the weekly settlement response.

Money leaves the service as JSON numbers rounded to cents. The domain keeps
exact Decimals; conversion happens only here.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from src.sb_common.money import round_cents
from src.sb_settlement.domain.models import (
    Settlement,
    SettlementResult,
    SettlementSummary,
    SettlementWarning,
    UserBalance,
)


def _money(amount: Decimal) -> float:
    return float(round_cents(amount))


class UserBalanceOut(BaseModel):
    won: float
    lost: float
    net: float

    @classmethod
    def from_domain(cls, balance: UserBalance) -> "UserBalanceOut":
        return cls(won=_money(balance.won), lost=_money(balance.lost), net=_money(balance.net))


class SettlementOut(BaseModel):
    """Serialized with by_alias=True so the keys read "from" / "to"."""

    from_user: str = Field(serialization_alias="from")
    to_user: str = Field(serialization_alias="to")
    amount: float

    @classmethod
    def from_domain(cls, s: Settlement) -> "SettlementOut":
        return cls(from_user=s.from_user, to_user=s.to_user, amount=_money(s.amount))


class SettlementSummaryOut(BaseModel):
    total_won: float
    total_lost: float
    total_net: float
    total_bets: int
    resolved_bets: int

    @classmethod
    def from_domain(cls, s: SettlementSummary) -> "SettlementSummaryOut":
        return cls(
            total_won=_money(s.total_won),
            total_lost=_money(s.total_lost),
            total_net=_money(s.total_net),
            total_bets=s.total_bets,
            resolved_bets=s.resolved_bets,
        )


class SettlementWarningOut(BaseModel):
    code: str
    detail: str
    bet_id: str | None = None
    user_id: str | None = None

    @classmethod
    def from_domain(cls, w: SettlementWarning) -> "SettlementWarningOut":
        return cls(code=w.code, detail=w.detail, bet_id=w.bet_id, user_id=w.user_id)


class WeeklySettlementResponse(BaseModel):
    weekend_id: str
    user_balances: dict[str, UserBalanceOut]
    settlements: list[SettlementOut]
    head_to_head_transfers: list[SettlementOut]
    summary: SettlementSummaryOut
    warnings: list[SettlementWarningOut]

    @classmethod
    def from_result(cls, weekend_id: str, result: SettlementResult) -> "WeeklySettlementResponse":
        return cls(
            weekend_id=weekend_id,
            user_balances={
                user: UserBalanceOut.from_domain(b) for user, b in result.user_balances.items()
            },
            settlements=[SettlementOut.from_domain(s) for s in result.settlements],
            head_to_head_transfers=[
                SettlementOut.from_domain(s) for s in result.head_to_head_transfers
            ],
            summary=SettlementSummaryOut.from_domain(result.summary),
            warnings=[SettlementWarningOut.from_domain(w) for w in result.warnings],
        )

"""Odds calculator endpoints (stateless, no DB).

GET  /odds/payout?stake=25&odds=-110   — profit / total payout preview
POST /odds/parlay                       — combine leg odds, payout at the combined price
"""

from decimal import Decimal

from fastapi import APIRouter, Query, Request
from pydantic import BaseModel, Field

from src.sb_common.money import round_cents
from src.sb_common.response import ApiResponse, success_response
from src.sb_odds.domain.payout import (
    PayoutCalculation,
    calculate_parlay_odds,
    calculate_parlay_payout,
    calculate_payout,
    implied_probability,
    parse_odds,
)

router = APIRouter(prefix="/odds", tags=["odds"])


class PayoutOut(BaseModel):
    stake: float
    odds: int
    profit: float
    total_payout: float
    implied_probability: float

    @classmethod
    def from_calculation(cls, calc: PayoutCalculation) -> "PayoutOut":
        return cls(
            stake=float(round_cents(calc.stake)),
            odds=calc.odds,
            profit=float(round_cents(calc.profit)),
            total_payout=float(round_cents(calc.total_payout)),
            implied_probability=round(float(implied_probability(calc.odds)), 4),
        )


class ParlayRequest(BaseModel):
    stake: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    legs: list[int | str] = Field(min_length=2)


class ParlayOut(PayoutOut):
    legs: list[int]


@router.get("/payout")
async def payout_preview(
    request: Request,
    stake: Decimal = Query(..., gt=0),
    odds: str = Query(..., description="American odds, e.g. -110 or +150"),
) -> ApiResponse:
    calc = calculate_payout(stake, parse_odds(odds))
    return success_response(PayoutOut.from_calculation(calc).model_dump(), request)


@router.post("/parlay")
async def parlay_preview(body: ParlayRequest, request: Request) -> ApiResponse:
    legs = [parse_odds(leg) for leg in body.legs]
    combined = calculate_parlay_odds(legs)
    calc = calculate_parlay_payout(body.stake, combined)
    out = PayoutOut.from_calculation(calc)
    return success_response(ParlayOut(**out.model_dump(), legs=legs).model_dump(), request)


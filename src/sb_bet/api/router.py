"""sb_bet REST endpoints.

POST /bets                      — record a bet (status starts active)
GET  /bets?weekend_id=&user_id= — bets for a week, optionally one user's
GET  /bets/{bet_id}             — one bet
POST /bets/{bet_id}/resolve     — mark won / lost
POST /bets/{bet_id}/cancel      — mark cancelled (settlement ignores it)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_bet.application.schemas import CreateBetRequest, ResolveBetRequest
from src.sb_bet.application.service import BetApplicationService
from src.sb_common.database import get_db_session
from src.sb_common.response import ApiResponse, success_response

router = APIRouter(prefix="/bets", tags=["bets"])

_service = BetApplicationService()


def get_bet_service() -> BetApplicationService:
    return _service


@router.post("", status_code=201)
async def create_bet(
    body: CreateBetRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[BetApplicationService, Depends(get_bet_service)],
) -> ApiResponse:
    result = await service.create_bet(db, body)
    return success_response(result.model_dump(mode="json"), request)


@router.get("")
async def list_bets(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[BetApplicationService, Depends(get_bet_service)],
    weekend_id: str = Query(..., description="Week key, e.g. 2025-week-3"),
    user_id: str | None = Query(None, description="Only bets this user placed or joined"),
) -> ApiResponse:
    result = await service.list_bets(db, weekend_id, user_id)
    return success_response(result.model_dump(mode="json"), request)


@router.get("/{bet_id}")
async def get_bet(
    bet_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[BetApplicationService, Depends(get_bet_service)],
) -> ApiResponse:
    result = await service.get_bet(db, bet_id)
    return success_response(result.model_dump(mode="json"), request)


@router.post("/{bet_id}/resolve")
async def resolve_bet(
    bet_id: str,
    body: ResolveBetRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[BetApplicationService, Depends(get_bet_service)],
) -> ApiResponse:
    result = await service.resolve_bet(db, bet_id, body)
    return success_response(result.model_dump(mode="json"), request)


@router.post("/{bet_id}/cancel")
async def cancel_bet(
    bet_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[BetApplicationService, Depends(get_bet_service)],
) -> ApiResponse:
    result = await service.cancel_bet(db, bet_id)
    return success_response(result.model_dump(mode="json"), request)

"""sb_settlement REST endpoints.

GET /settlements/weekly?weekend_id=2025-week-3   — balances, payments, summary
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_common.database import get_db_session
from src.sb_common.response import ApiResponse, success_response
from src.sb_settlement.application.service import SettlementApplicationService

router = APIRouter(prefix="/settlements", tags=["settlements"])

_service = SettlementApplicationService()


def get_settlement_service() -> SettlementApplicationService:
    return _service


@router.get("/weekly")
async def get_weekly_settlement(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[SettlementApplicationService, Depends(get_settlement_service)],
    weekend_id: str = Query(..., description="Week key, e.g. 2025-week-3"),
) -> ApiResponse:
    result = await service.get_weekly_settlement(db, weekend_id)
    return success_response(result.model_dump(by_alias=True), request)

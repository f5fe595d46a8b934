"""
PaddyHub Backend: Stock Route Handlers
======================================

What:  Stock ledger endpoints.
    GET  /api/stocks/all     every entry, Date text descending
    GET  /api/stocks/daily   Mon..Sun weight report
    POST /api/stocks         append one entry (201)

Who:   Called by the purchase dashboard and its volume chart.
"""

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from paddyhub.database import get_stock_session
from paddyhub.routes.payload import read_payload
from paddyhub.schemas.common import ErrorResponse
from paddyhub.schemas.stock import DailyVolume, StockRecord
from paddyhub.services.stock_service import stock_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stocks", tags=["Stocks"])


@router.get(
    "/all",
    response_model=List[StockRecord],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List every stock entry",
    description=(
        "Entries are sorted by the Date text, descending. The comparison is "
        "lexical, so only zero-padded ISO dates come out in calendar order."
    ),
)
async def list_stocks(
    db: AsyncSession = Depends(get_stock_session),
) -> List[StockRecord]:
    return await stock_service.list_all(db)


@router.get(
    "/daily",
    response_model=List[DailyVolume],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="Weight received per weekday",
    description=(
        "Seven entries, Mon through Sun, each summing the Weight of every "
        "entry whose Date falls on that weekday. Missing or zero weights "
        "count as 60; unparseable dates are skipped."
    ),
)
async def daily_volume(
    db: AsyncSession = Depends(get_stock_session),
) -> List[DailyVolume]:
    return await stock_service.daily_volume(db)


@router.post(
    "",
    status_code=201,
    response_model=StockRecord,
    responses={400: {"description": "Invalid entry or store error", "model": ErrorResponse}},
    summary="Append a stock entry",
)
async def create_stock(
    payload: Optional[Any] = Depends(read_payload),
    db: AsyncSession = Depends(get_stock_session),
) -> StockRecord:
    return await stock_service.create(db, payload)

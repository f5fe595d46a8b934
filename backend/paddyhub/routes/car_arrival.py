"""
PaddyHub Backend: Car Arrival Route Handlers
============================================

What:  GET /carArrival (current board) and POST /carArrival (overwrite it).
Who:   Called by the gate dashboard every time the yard board changes.

Note the path: these routes predate the /api prefix and stay at the root
so existing dashboard builds keep working.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from paddyhub.database import get_car_session
from paddyhub.exceptions import ValidationError
from paddyhub.routes.payload import read_payload
from paddyhub.schemas.car_arrival import (
    CarArrivalResponse,
    CarArrivalUpdate,
    SaveResponse,
)
from paddyhub.schemas.common import ErrorResponse
from paddyhub.services.car_arrival_service import car_arrival_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Car Arrival"])


@router.get(
    "/carArrival",
    response_model=CarArrivalResponse,
    response_model_exclude_none=True,
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="Current car-arrival board",
)
async def get_car_arrival(
    db: AsyncSession = Depends(get_car_session),
) -> CarArrivalResponse:
    """Returns the saved board, or {"history": [], "logs": []} if none exists."""
    return await car_arrival_service.get_current(db)


@router.post(
    "/carArrival",
    response_model=SaveResponse,
    responses={
        400: {"description": "history or logs is not an array", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Overwrite the car-arrival board",
)
async def save_car_arrival(
    payload: Optional[Any] = Depends(read_payload),
    db: AsyncSession = Depends(get_car_session),
) -> SaveResponse:
    """
    Replace history and logs of the current board.

    Both fields must be arrays; anything else is rejected with 400 before
    the store is touched, so the saved board stays as it was.
    """
    try:
        update = CarArrivalUpdate.model_validate(payload if payload is not None else {})
    except PydanticValidationError:
        raise ValidationError(message="history and logs must be arrays")

    await car_arrival_service.save(db, history=update.history, logs=update.logs)
    return SaveResponse(success=True)

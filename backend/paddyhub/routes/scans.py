"""
PaddyHub Backend: QR Scan Route Handlers
========================================

What:  POST /api/scans stores a scan, GET /api/scans lists them newest first.
Who:   Called by the handheld QR scanner app.
"""

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from paddyhub.database import get_qr_session
from paddyhub.routes.payload import read_payload
from paddyhub.schemas.common import ErrorResponse
from paddyhub.schemas.scan import ScanCreatedResponse, ScanRecord
from paddyhub.services.scan_service import scan_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Scans"])


@router.post(
    "/scans",
    status_code=201,
    response_model=ScanCreatedResponse,
    responses={
        400: {"description": "Empty or missing body", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Store a QR scan",
)
async def create_scan(
    payload: Optional[Any] = Depends(read_payload),
    db: AsyncSession = Depends(get_qr_session),
) -> ScanCreatedResponse:
    record = await scan_service.create(db, payload)
    return ScanCreatedResponse(message="Data saved", data=record)


@router.get(
    "/scans",
    response_model=List[ScanRecord],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List all QR scans, newest first",
)
async def list_scans(
    db: AsyncSession = Depends(get_qr_session),
) -> List[ScanRecord]:
    return await scan_service.list_all(db)

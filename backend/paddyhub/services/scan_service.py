"""
PaddyHub Backend: Scan Service
==============================

What:  Stores QR scans as opaque documents and lists them newest first.
Who:   Called by the /api/scans route handlers.

Error Handling Strategy:
    An empty or non-object body is a client error (400 "No data received").
    Store failures become StoreError with passthrough set, so the client sees
    the underlying reason next to the generic "Server error" message.
"""

import logging
from typing import Any, List

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from paddyhub.exceptions import StoreError, ValidationError
from paddyhub.models.scan import Scan
from paddyhub.schemas.scan import ScanRecord, scan_to_record

logger = logging.getLogger(__name__)


class ScanService:

    async def create(self, db: AsyncSession, document: Any) -> ScanRecord:
        """
        Persist one scan document exactly as received.

        Args:
            db: Session on the QR store
            document: Decoded request body; must be a non-empty object

        Raises:
            ValidationError: Body missing, empty or not an object (→ 400)
            StoreError: Insert failed (→ 500)
        """
        if not isinstance(document, dict) or not document:
            raise ValidationError(message="No data received", field="body")

        try:
            scan = Scan(document=document)
            db.add(scan)
            await db.flush()
        except Exception as e:
            logger.error("Failed to store scan: %s", str(e), exc_info=True)
            raise StoreError(message="Server error", reason=str(e), passthrough=True)

        logger.info("Scan %s stored (%d fields)", scan.id, len(document))
        return scan_to_record(scan)

    async def list_all(self, db: AsyncSession) -> List[ScanRecord]:
        """Every scan, most recently inserted first."""
        try:
            result = await db.execute(select(Scan).order_by(desc(Scan.id)))
            scans = result.scalars().all()
        except Exception as e:
            logger.error("Failed to list scans: %s", str(e), exc_info=True)
            raise StoreError(message="Server error", reason=str(e), passthrough=True)

        return [scan_to_record(scan) for scan in scans]


scan_service = ScanService()

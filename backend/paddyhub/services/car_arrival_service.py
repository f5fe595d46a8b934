"""
PaddyHub Backend: Car Arrival Service
=====================================

What:  Reads and overwrites the single current car-arrival board.
How:   The board lives in one row keyed by CURRENT_SLOT. Writes are a single
       INSERT .. ON CONFLICT DO UPDATE, so the first write creates the row
       and every later write replaces history, logs and timestamp in place.

Concurrency:
    The upsert is one statement. Two writers racing each other both land;
    the last one to commit wins, and neither is silently dropped halfway
    through a read-modify-write.
"""

import logging
from datetime import datetime, timezone
from typing import Any, List

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from paddyhub.exceptions import StoreError
from paddyhub.models.car_arrival import CURRENT_SLOT, CarArrival
from paddyhub.schemas.car_arrival import CarArrivalResponse

logger = logging.getLogger(__name__)

# Dialects with native INSERT .. ON CONFLICT support
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CarArrivalService:
    """Stateless; receives the session for each call."""

    async def get_current(self, db: AsyncSession) -> CarArrivalResponse:
        """
        Return the current board, or empty history/logs if none was saved.

        Raises:
            StoreError: The query failed (→ 500 "Failed to fetch data")
        """
        try:
            result = await db.execute(
                select(CarArrival).where(CarArrival.slot == CURRENT_SLOT)
            )
            board = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Failed to fetch car arrival board: %s", str(e), exc_info=True)
            raise StoreError(
                message="Failed to fetch data",
                reason=str(e),
                context={"error_type": type(e).__name__},
            )

        if board is None:
            return CarArrivalResponse()
        return CarArrivalResponse.model_validate(board)

    async def save(self, db: AsyncSession, history: List[Any], logs: List[Any]) -> None:
        """
        Overwrite the current board with the given history and logs.

        Raises:
            StoreError: The upsert failed (→ 500 "Failed to save data")
        """
        dialect = db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            logger.error("Car arrival board cannot be saved on dialect '%s'", dialect)
            raise StoreError(
                message="Failed to save data",
                reason=f"No atomic upsert for dialect '{dialect}'",
            )

        try:
            now = datetime.now(timezone.utc)
            stmt = insert(CarArrival).values(
                slot=CURRENT_SLOT,
                history=history,
                logs=logs,
                timestamp=now,
                created_at=now,
                updated_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=[CarArrival.slot],
                set_={
                    "history": stmt.excluded.history,
                    "logs": stmt.excluded.logs,
                    "timestamp": stmt.excluded.timestamp,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
            await db.execute(stmt)
        except Exception as e:
            logger.error("Failed to save car arrival board: %s", str(e), exc_info=True)
            raise StoreError(
                message="Failed to save data",
                reason=str(e),
                context={"error_type": type(e).__name__},
            )

        logger.info(
            "Car arrival board saved: %d history entries, %d log entries",
            len(history),
            len(logs),
        )


car_arrival_service = CarArrivalService()

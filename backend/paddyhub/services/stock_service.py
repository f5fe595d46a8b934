"""
PaddyHub Backend: Stock Service
===============================

What:  Appends stock entries, lists them, and builds the weekday report.
Who:   Called by the /api/stocks route handlers.

Ordering of the full listing:
    Entries are ordered by their Date *text*, descending, using plain
    code-point comparison. "2024-01-10" sorts above "2024-01-09", but
    non-padded or non-ISO dates sort lexically, not chronologically
    ("9/1/2024" above "10/1/2024"). Entries without a Date come last.
    Sorting happens here rather than in SQL so the order does not depend on
    the database collation.
"""

import logging
from typing import Any, List, Sequence

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from paddyhub.exceptions import StoreError, ValidationError
from paddyhub.models.stock import Stock
from paddyhub.schemas.stock import DailyVolume, StockCreate, StockRecord
from paddyhub.services.aggregation import aggregate_daily_volume

logger = logging.getLogger(__name__)


def sort_by_date_text(stocks: Sequence[Stock]) -> List[Stock]:
    """Lexical Date-descending order; entries with no Date last."""
    return sorted(
        stocks,
        key=lambda stock: (stock.date is not None, stock.date or ""),
        reverse=True,
    )


def _describe_errors(exc: PydanticValidationError) -> List[dict]:
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]) or "body",
            "message": error["msg"],
        }
        for error in exc.errors()
    ]


class StockService:

    async def _load_all(self, db: AsyncSession) -> Sequence[Stock]:
        result = await db.execute(select(Stock))
        return result.scalars().all()

    async def list_all(self, db: AsyncSession) -> List[StockRecord]:
        """
        All entries, Date text descending.

        Raises:
            StoreError: Query failed (→ 500, reason passed through)
        """
        try:
            stocks = await self._load_all(db)
        except Exception as e:
            logger.error("Failed to list stocks: %s", str(e), exc_info=True)
            raise StoreError(message="Failed to list stock entries", reason=str(e), passthrough=True)

        return [StockRecord.model_validate(stock) for stock in sort_by_date_text(stocks)]

    async def daily_volume(self, db: AsyncSession) -> List[DailyVolume]:
        """
        The Mon..Sun weight report over every stored entry.

        Raises:
            StoreError: Query failed (→ 500 "Server error")
        """
        try:
            stocks = await self._load_all(db)
        except Exception as e:
            logger.error("Failed to load stocks for daily volume: %s", str(e), exc_info=True)
            raise StoreError(message="Server error", reason=str(e))

        return [DailyVolume(**bucket) for bucket in aggregate_daily_volume(stocks)]

    async def create(self, db: AsyncSession, payload: Any) -> StockRecord:
        """
        Validate, coerce and append one stock entry.

        Both rejected payloads and store failures are reported as 400.

        Raises:
            ValidationError: Payload is not an object or a field cannot be coerced
            StoreError: Insert failed (status 400, reason passed through)
        """
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise ValidationError(message="Stock entry must be a JSON object", field="body")

        try:
            entry = StockCreate.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(
                message="Invalid stock entry",
                context={"errors": _describe_errors(e)},
            )

        try:
            stock = Stock(**entry.model_dump())
            db.add(stock)
            await db.flush()
        except Exception as e:
            logger.error("Failed to store stock entry: %s", str(e), exc_info=True)
            raise StoreError(
                message="Failed to save stock entry",
                reason=str(e),
                status_code=400,
                passthrough=True,
            )

        logger.info("Stock entry %s stored (date=%s, weight=%s)", stock.id, stock.date, stock.weight)
        return StockRecord.model_validate(stock)


stock_service = StockService()

"""
PaddyHub Backend: Stock SQLAlchemy Model
========================================

What:  One paddy delivery unloaded into stock.
How:   Columns mirror the purchase sheet. Every field is optional and there
       is no uniqueness rule: records are only ever appended.

Why `date` is text:
    The sheet sends whatever date text the operator typed. It is stored as
    is; the daily report parses it, and the full listing sorts it lexically.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from paddyhub.database import StockBase


class Stock(StockBase):
    __tablename__ = "stocks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    last_update: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    date: Mapped[Optional[str]] = mapped_column(Text, nullable=True, index=True)
    type: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    bags: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    car_no: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    party_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    unloader_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Stock(id={self.id}, date='{self.date}', weight={self.weight})>"

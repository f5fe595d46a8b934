"""
PaddyHub Backend: CarArrival SQLAlchemy Model
=============================================

What:  The single "current" car-arrival board: the yard history and the
       gate log the dashboard keeps overwriting.
Why one row:
    The dashboard only ever reads the latest board. Keying the row by a
    fixed slot turns "find latest, then overwrite" into one atomic upsert,
    so two concurrent writers can no longer interleave and lose an update.
"""

from datetime import datetime, timezone
from typing import Any, List

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from paddyhub.database import CarBase

CURRENT_SLOT = "current"

# JSONB on PostgreSQL, plain JSON everywhere else
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CarArrival(CarBase):
    __tablename__ = "car_arrivals"

    slot: Mapped[str] = mapped_column(
        String(32),
        primary_key=True,
        default=CURRENT_SLOT,
        comment="Fixed key of the single current board",
    )

    # When the board was last written; the legacy "most recent" ordering key
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    # Opaque entries, stored in the order the client sent them
    history: Mapped[List[Any]] = mapped_column(JSONDocument, nullable=False, default=list)
    logs: Mapped[List[Any]] = mapped_column(JSONDocument, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    def __repr__(self) -> str:
        return (
            f"<CarArrival(slot='{self.slot}', history={len(self.history or [])}, "
            f"logs={len(self.logs or [])}, timestamp='{self.timestamp}')>"
        )

"""
PaddyHub Backend: Scan SQLAlchemy Model
=======================================

What:  One QR scan, persisted exactly as the scanner app posted it.
Why schema-less:
    Scanner payloads vary by label format. The whole object is kept as an
    opaque JSON document; only the id and the arrival time are ours.

Query Patterns:
    - Newest first: ORDER BY id DESC (id is assigned in insertion order)
"""

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from paddyhub.database import QrBase
from paddyhub.models.car_arrival import JSONDocument


class Scan(QrBase):
    __tablename__ = "scans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    document: Mapped[Dict[str, Any]] = mapped_column(
        JSONDocument,
        nullable=False,
        comment="Scan payload as received",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Scan(id={self.id}, keys={sorted(self.document or {})})>"

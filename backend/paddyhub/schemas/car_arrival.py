"""
PaddyHub Backend: CarArrival Schemas
====================================

What:  The board the dashboard writes (`CarArrivalUpdate`) and reads back
       (`CarArrivalResponse`).

Why strict:
    history and logs must arrive as real arrays. Lax mode would happily turn
    a tuple-like or string value into a list; strict mode rejects anything
    that is not already a list.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CarArrivalUpdate(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    history: List[Any]
    logs: List[Any]


class CarArrivalResponse(BaseModel):
    """
    The current board. When nothing has been written yet only the two
    empty arrays are returned (routes drop the None timestamps).
    """
    model_config = ConfigDict(from_attributes=True)

    history: List[Any] = Field(default_factory=list)
    logs: List[Any] = Field(default_factory=list)
    timestamp: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SaveResponse(BaseModel):
    success: bool = True

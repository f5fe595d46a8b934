"""
PaddyHub Backend: Stock Schemas
===============================

What:  Request/response models for stock entries and the weekday report.

Wire names:
    The purchase sheet speaks in capitalised keys (Date, Weight, CarNo...).
    Python attributes stay snake_case; `validation_alias` accepts either
    spelling on input and `serialization_alias` writes the sheet's spelling
    on output.

Coercion:
    Text fields accept numbers ("CarNo": 4512 becomes "4512") and numeric
    fields accept numeric strings ("Bags": "40" becomes 40.0). Values that
    cannot be coerced fail validation. Unknown keys are dropped.

Numbers on the wire:
    Quantities are stored as floats, but whole values are written as JSON
    integers ("Bags": 40, "volume": 0), the way the dashboard receives them
    from JSON.stringify. Fractional values stay floats.
"""

from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer


def _wire(name: str, attribute: str):
    return Field(
        default=None,
        validation_alias=AliasChoices(name, attribute),
        serialization_alias=name,
    )


def whole_as_int(value: Optional[float]) -> Optional[Union[int, float]]:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class StockCreate(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    last_update: Optional[str] = _wire("LastUpdate", "last_update")
    date: Optional[str] = _wire("Date", "date")
    type: Optional[str] = _wire("Type", "type")
    bags: Optional[float] = _wire("Bags", "bags")
    weight: Optional[float] = _wire("Weight", "weight")
    car_no: Optional[str] = _wire("CarNo", "car_no")
    party_name: Optional[str] = _wire("PartyName", "party_name")
    unloader_name: Optional[str] = _wire("UnloaderName", "unloader_name")

    @field_serializer("bags", "weight", when_used="json")
    def _whole_quantities(self, value: Optional[float]) -> Optional[Union[int, float]]:
        return whole_as_int(value)


class StockRecord(StockCreate):
    model_config = ConfigDict(from_attributes=True, coerce_numbers_to_str=True)

    id: int


class DailyVolume(BaseModel):
    """One bucket of the weekday report."""
    day: str = Field(description="English weekday abbreviation, Mon..Sun")
    volume: float = Field(description="Summed weight received on that weekday")

    @field_serializer("volume", when_used="json")
    def _whole_volume(self, value: float) -> Union[int, float]:
        return whole_as_int(value)

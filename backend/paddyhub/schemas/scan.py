"""
PaddyHub Backend: Scan Schemas
==============================

What:  API shape of a stored scan.
How:   A scan goes out as the scanner's own keys, at the top level, plus two
       store fields under reserved names: `_id` (insertion-ordered id) and
       `createdAt` (arrival time, UTC). Store fields win over a payload key
       of the same name.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field

from paddyhub.models.scan import Scan

ScanRecord = Dict[str, Any]


def scan_to_record(scan: Scan) -> ScanRecord:
    record: ScanRecord = dict(scan.document or {})
    record["_id"] = scan.id
    record["createdAt"] = scan.created_at
    return record


class ScanCreatedResponse(BaseModel):
    message: str = Field(default="Data saved")
    data: ScanRecord = Field(description="The stored scan: posted keys plus _id and createdAt")

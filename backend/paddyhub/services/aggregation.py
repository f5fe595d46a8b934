"""
PaddyHub Backend: Weekday Volume Aggregation
============================================

What:  Totals the weight received per weekday across every stock entry.
How:   Seven fixed buckets (Mon..Sun) start at zero. Each entry's Date text is
       parsed, its weekday abbreviation picks the bucket, and its Weight is
       added. The week of the year is ignored; only the weekday matters.

Rules:
    - Output always has exactly seven entries, in Mon..Sun order.
    - A missing, null, zero or NaN Weight counts as FALLBACK_WEIGHT (60).
      Legitimate zero-weight deliveries are therefore reported as 60. The
      dashboard has always worked this way, so it is kept.
    - Entries whose Date cannot be parsed are skipped without error.
    - Pure function of its input. It is recomputed on every request, so a
      concurrent write is either fully counted or not counted at all.

Accepted Date text:
    ISO-8601 dates and datetimes (aware values are moved to UTC first),
    MM/DD/YYYY, YYYY/MM/DD, non-padded YYYY-M-D, "Jan 5, 2024",
    "January 5, 2024", "5 Jan 2024", "5 January 2024", and RFC 2822 strings
    such as "Mon, 01 Jan 2024 10:00:00 GMT".
"""

import logging
import math
from datetime import date, datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Substituted for a missing or falsy Weight
FALLBACK_WEIGHT = 60

_TEXT_FORMATS = (
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%Y-%m-%d",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
)


def _to_date(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


def parse_record_date(text: Optional[str]) -> Optional[date]:
    """
    Parse the free-form Date text of a stock entry.

    Returns:
        The calendar date, or None when the text is empty or unrecognised.
    """
    if not isinstance(text, str):
        return None
    text = text.strip()
    if not text:
        return None

    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return _to_date(datetime.fromisoformat(iso))
    except ValueError:
        pass

    for fmt in _TEXT_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    try:
        return _to_date(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError):
        return None


def weekday_abbreviation(text: Optional[str]) -> Optional[str]:
    """'2024-01-01' -> 'Mon'; None when the date cannot be parsed."""
    parsed = parse_record_date(text)
    if parsed is None:
        return None
    return WEEKDAYS[parsed.weekday()]


def _effective_weight(weight: Any) -> float:
    if isinstance(weight, float) and math.isnan(weight):
        return FALLBACK_WEIGHT
    return weight or FALLBACK_WEIGHT


def aggregate_daily_volume(records: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    Build the seven-bucket weekday report.

    Args:
        records: Stock entries; anything exposing `date` and `weight`
                 attributes (ORM rows, schema instances).

    Returns:
        [{"day": "Mon", "volume": ...}, ..., {"day": "Sun", "volume": ...}]
    """
    totals: Dict[str, float] = {day: 0 for day in WEEKDAYS}
    skipped = 0

    for record in records:
        day = weekday_abbreviation(getattr(record, "date", None))
        if day not in totals:
            skipped += 1
            continue
        totals[day] += _effective_weight(getattr(record, "weight", None))

    if skipped:
        logger.debug("Daily volume: skipped %d entries with unparseable dates", skipped)

    return [{"day": day, "volume": totals[day]} for day in WEEKDAYS]

"""
ISO-8601 helpers shared by slot synthesis, reservation stamping and label rendering.

Instants are always stored as UTC with millisecond precision and a trailing `Z`
(`2025-11-17T01:00:00.000Z`).
"""

from datetime import datetime, timezone
import re
from typing import Optional
import zoneinfo


DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def is_valid_date_str(value: Optional[str]) -> bool:
    return bool(value) and DATE_PATTERN.match(value) is not None  # type: ignore[arg-type]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso_utc(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (
        moment.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')
    )


def parse_iso(value: str) -> Optional[datetime]:
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_time_label(start: str, end: str, *, tz_name: str) -> str:
    """`HH:mm〜HH:mm` in the given timezone; empty when either bound is unparseable."""
    start_at, end_at = parse_iso(start), parse_iso(end)
    if start_at is None or end_at is None:
        return ''
    tz = zoneinfo.ZoneInfo(tz_name)
    return f'{start_at.astimezone(tz):%H:%M}〜{end_at.astimezone(tz):%H:%M}'

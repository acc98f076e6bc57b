"""Fixed daily schedule used when no slot list is persisted for a date."""

from datetime import date as date_type, datetime, time, timedelta
from typing import List
import zoneinfo

from src.platform.exception.exceptions import DomainError
from src.service.line_booking.domain.entity.slot_entity import Slot
from src.service.line_booking.domain.value_object.booking_time import (
    is_valid_date_str,
    to_iso_utc,
)


# Local start hours; each slot lasts one hour
FALLBACK_START_HOURS = (10, 12, 15)
FALLBACK_SLOT_DURATION = timedelta(hours=1)
FALLBACK_CAPACITY = 1


def make_fallback_slot_id(date: str, index: int) -> str:
    return f'S-{date}-{index}'


def generate_fallback_slots(date: str, *, tz_name: str) -> List[Slot]:
    if not is_valid_date_str(date):
        raise DomainError('bad date', 400)
    try:
        day = date_type.fromisoformat(date)
    except ValueError:
        raise DomainError('bad date', 400)

    tz = zoneinfo.ZoneInfo(tz_name)
    slots: List[Slot] = []
    for index, hour in enumerate(FALLBACK_START_HOURS, start=1):
        start_at = datetime.combine(day, time(hour=hour), tzinfo=tz)
        slots.append(
            Slot(
                id=make_fallback_slot_id(date, index),
                start=to_iso_utc(start_at),
                end=to_iso_utc(start_at + FALLBACK_SLOT_DURATION),
                capacity=FALLBACK_CAPACITY,
                remaining=FALLBACK_CAPACITY,
            )
        )
    return slots

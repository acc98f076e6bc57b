from datetime import datetime
from typing import Any, Dict, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.line_booking.domain.enum.reservation_status import ReservationStatus
from src.service.line_booking.domain.value_object.booking_time import (
    is_valid_date_str,
    to_iso_utc,
)


@attrs.define(frozen=True)
class Reservation:
    """Canonical reservation resolved from any stored record"""

    id: str
    slot_id: str
    date: str  # YYYY-MM-DD
    start: str = ''  # ISO
    end: str = ''  # ISO
    name: str = ''
    channel: Optional[str] = None
    note: Optional[str] = None
    created_at: str = ''  # ISO

    @property
    def sort_key(self) -> str:
        return f'{self.date}T{self.start}'

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'id': self.id,
            'slotId': self.slot_id,
            'date': self.date,
            'start': self.start,
            'end': self.end,
            'name': self.name,
        }
        if self.channel is not None:
            data['channel'] = self.channel
        if self.note is not None:
            data['note'] = self.note
        data['createdAt'] = self.created_at
        return data


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


@attrs.define
class ReservationRecord:
    """Reservation as written by the booking flow under `resv:{id}`"""

    id: str
    slot_id: str
    date: str
    start: str
    end: str
    name: str
    source: str
    created_at: str
    status: ReservationStatus = ReservationStatus.RESERVED
    menu_id: Optional[str] = None
    phone: Optional[str] = None
    note: Optional[str] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: str,
        slot_id: str,
        date: str = '',
        start: str = '',
        end: str = '',
        name: Optional[str] = None,
        source: Optional[str] = None,
        menu_id: Optional[str] = None,
        phone: Optional[str] = None,
        note: Optional[str] = None,
        default_name: str,
        default_source: str,
        created_at: datetime,
    ) -> 'ReservationRecord':
        slot_id = (slot_id or '').strip()
        if not slot_id:
            raise DomainError('slotId is required', 400)
        if date and not is_valid_date_str(date):
            raise DomainError('bad date', 400)

        return cls(
            id=id,
            slot_id=slot_id,
            date=date,
            start=start,
            end=end,
            name=_clean(name) or default_name,
            source=_clean(source) or default_source,
            created_at=to_iso_utc(created_at),
            menu_id=_clean(menu_id),
            phone=_clean(phone),
            note=_clean(note),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'id': self.id,
            'slotId': self.slot_id,
            'date': self.date,
            'start': self.start,
            'end': self.end,
            'name': self.name,
            'source': self.source,
        }
        if self.menu_id is not None:
            data['menuId'] = self.menu_id
        if self.phone is not None:
            data['phone'] = self.phone
        if self.note is not None:
            data['note'] = self.note
        data['createdAt'] = self.created_at
        data['status'] = self.status.value
        return data

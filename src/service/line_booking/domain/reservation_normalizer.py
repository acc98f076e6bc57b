"""
Reservation Normalizer

Maps an arbitrary stored JSON object onto a canonical `Reservation`, or rejects it.

Every field is resolved through an ordered chain of accessors. The first accessor
returning a non-missing value (anything but None) wins, so an explicit empty
string still shadows later candidates. A record without a resolvable slotId or
date is not a reservation.
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from numbers import Real
from typing import Any, Optional

import attrs

from src.service.line_booking.domain.entity.reservation_entity import Reservation
from src.service.line_booking.domain.value_object.booking_time import to_iso_utc, utc_now


Accessor = Callable[[Mapping[str, Any]], Any]


def field(name: str) -> Accessor:
    def _get(source: Mapping[str, Any]) -> Any:
        return source.get(name)

    _get.__qualname__ = f'field({name!r})'
    return _get


def nested(parent: str, name: str) -> Accessor:
    def _get(source: Mapping[str, Any]) -> Any:
        inner = source.get(parent)
        return inner.get(name) if isinstance(inner, Mapping) else None

    _get.__qualname__ = f'nested({parent!r}, {name!r})'
    return _get


@attrs.define(frozen=True)
class FieldChain:
    name: str
    accessors: tuple[Accessor, ...]

    def resolve(self, source: Mapping[str, Any]) -> Any:
        for accessor in self.accessors:
            value = accessor(source)
            if value is not None:
                return value
        return None


SLOT_ID_CHAIN = FieldChain(
    'slotId', (field('slotId'), field('slot_id'), field('slotID'), nested('slot', 'id'))
)
START_CHAIN = FieldChain(
    'start',
    (
        field('start'),
        field('startAt'),
        field('start_at'),
        field('from'),
        field('timeStart'),
        nested('slot', 'start'),
    ),
)
END_CHAIN = FieldChain(
    'end',
    (
        field('end'),
        field('endAt'),
        field('end_at'),
        field('to'),
        field('timeEnd'),
        nested('slot', 'end'),
    ),
)
DATE_CHAIN = FieldChain(
    'date', (field('date'), field('day'), field('dateStr'), field('bookingDate'))
)
NAME_CHAIN = FieldChain('name', (field('name'), field('customerName'), field('userName')))
CHANNEL_CHAIN = FieldChain('channel', (field('channel'), field('source')))
NOTE_CHAIN = FieldChain('note', (field('note'), field('memo'), field('message')))
CREATED_AT_CHAIN = FieldChain(
    'createdAt', (field('createdAt'), field('created_at'), field('created'))
)

# YYYY-MM-DD prefix of an ISO timestamp
_DATE_PREFIX_LENGTH = 10


def _scalar_text(value: Any) -> Optional[str]:
    """Strings pass through, numbers are rendered, anything else has no text form."""
    if isinstance(value, str):
        return value
    if isinstance(value, Real) and not isinstance(value, bool):
        return str(value)
    return None


def normalize(
    source: Any,
    fallback_id: str,
    *,
    now: Optional[Callable[[], datetime]] = None,
) -> Optional[Reservation]:
    if not isinstance(source, Mapping):
        return None

    slot_id = _scalar_text(SLOT_ID_CHAIN.resolve(source)) or ''

    raw_start = START_CHAIN.resolve(source)
    raw_end = END_CHAIN.resolve(source)
    start = raw_start if isinstance(raw_start, str) else ''
    end = raw_end if isinstance(raw_end, str) else ''

    date = _scalar_text(DATE_CHAIN.resolve(source)) or ''
    if not date and len(start) >= _DATE_PREFIX_LENGTH:
        date = start[:_DATE_PREFIX_LENGTH]

    if not slot_id or not date:
        return None

    name = _scalar_text(NAME_CHAIN.resolve(source)) or ''
    channel = _scalar_text(CHANNEL_CHAIN.resolve(source))
    note = _scalar_text(NOTE_CHAIN.resolve(source))

    raw_created_at = CREATED_AT_CHAIN.resolve(source)
    if raw_created_at is None:
        raw_created_at = raw_start
    if isinstance(raw_created_at, str) and raw_created_at:
        created_at = raw_created_at
    else:
        created_at = to_iso_utc((now or utc_now)())

    own_id = _scalar_text(source.get('id'))

    return Reservation(
        id=own_id or fallback_id,
        slot_id=slot_id,
        date=date,
        start=start,
        end=end,
        name=name,
        channel=channel,
        note=note,
        created_at=created_at,
    )

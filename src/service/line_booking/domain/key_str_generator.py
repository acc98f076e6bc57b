"""
Logical key layout of the booking keyspace.

- slots:{YYYY-MM-DD}  persisted slot list of a day (JSON array)
- resv:{id}           reservation written by the booking flow (JSON object, 7 day TTL)
"""

import re
from typing import Optional


SLOTS_KEY_PREFIX = 'slots:'
RESERVATION_KEY_PREFIX = 'resv:'

_GENERATED_SLOT_ID = re.compile(r'^S-(\d{4}-\d{2}-\d{2})-\d+$')


def make_slots_key(*, date: str) -> str:
    return f'{SLOTS_KEY_PREFIX}{date}'


def make_reservation_key(*, reservation_id: str) -> str:
    return f'{RESERVATION_KEY_PREFIX}{reservation_id}'


def date_of_generated_slot_id(slot_id: str) -> Optional[str]:
    """Date embedded in a generated `S-{date}-{n}` id; None for any other id."""
    match = _GENERATED_SLOT_ID.match(slot_id)
    return match.group(1) if match else None

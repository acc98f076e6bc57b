"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.line_booking.app.command import (
    create_reservation_use_case,
    notify_reservation_use_case,
    set_slots_use_case,
)
from src.service.line_booking.app.query import (
    dump_kv_use_case,
    get_reservation_use_case,
    list_reservations_use_case,
    list_slots_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    list_slots_use_case,
    set_slots_use_case,
    create_reservation_use_case,
    get_reservation_use_case,
    list_reservations_use_case,
    dump_kv_use_case,
    notify_reservation_use_case,
]

"""Reservation Status Enum"""

from enum import StrEnum


class ReservationStatus(StrEnum):
    RESERVED = 'reserved'

"""Date filtering and canonical ordering of normalized reservations."""

from collections.abc import Iterable
from typing import List, Optional

import attrs

from src.service.line_booking.domain.entity.reservation_entity import Reservation


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    return value or None


@attrs.define(frozen=True)
class ReservationFilter:
    # Dates are fixed-width YYYY-MM-DD so plain string comparison orders them
    exact_date: Optional[str] = attrs.field(default=None, converter=_blank_to_none)
    date_from: Optional[str] = attrs.field(default=None, converter=_blank_to_none)
    date_to: Optional[str] = attrs.field(default=None, converter=_blank_to_none)

    def matches(self, reservation: Reservation) -> bool:
        if self.exact_date and reservation.date != self.exact_date:
            return False
        if self.date_from and reservation.date < self.date_from:
            return False
        if self.date_to and reservation.date > self.date_to:
            return False
        return True


def sort_reservations(reservations: Iterable[Reservation]) -> List[Reservation]:
    """Ascending by `{date}T{start}` in code-point order, ties by id. Locale independent."""
    return sorted(reservations, key=lambda r: (r.sort_key, r.id))

"""
Candidate extraction for stored records.

A stored value may be reservation-shaped itself or wrap the reservation under a
conventional field. Strategies run in a fixed order and the first candidate that
normalizes wins; one store key yields at most one reservation.
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, Optional

import attrs

from src.service.line_booking.domain.entity.reservation_entity import Reservation
from src.service.line_booking.domain.reservation_normalizer import normalize


@attrs.define(frozen=True)
class CandidateStrategy:
    name: str
    extract: Callable[[Any], Optional[Mapping[str, Any]]]


@attrs.define(frozen=True)
class CandidateMatch:
    strategy: str
    reservation: Reservation


def _raw(value: Any) -> Optional[Mapping[str, Any]]:
    return value if isinstance(value, Mapping) else None


def _wrapped(wrapper: str) -> Callable[[Any], Optional[Mapping[str, Any]]]:
    def _extract(value: Any) -> Optional[Mapping[str, Any]]:
        if not isinstance(value, Mapping):
            return None
        inner = value.get(wrapper)
        return inner if isinstance(inner, Mapping) else None

    return _extract


CANDIDATE_STRATEGIES: tuple[CandidateStrategy, ...] = (
    CandidateStrategy('raw', _raw),
    CandidateStrategy('reservation', _wrapped('reservation')),
    CandidateStrategy('data', _wrapped('data')),
    CandidateStrategy('payload', _wrapped('payload')),
    CandidateStrategy('body', _wrapped('body')),
)


def extract_reservation(
    raw: Any,
    key: str,
    *,
    now: Optional[Callable[[], datetime]] = None,
    strategies: tuple[CandidateStrategy, ...] = CANDIDATE_STRATEGIES,
) -> Optional[CandidateMatch]:
    for strategy in strategies:
        candidate = strategy.extract(raw)
        if candidate is None:
            continue
        reservation = normalize(candidate, key, now=now)
        if reservation is not None:
            return CandidateMatch(strategy=strategy.name, reservation=reservation)
    return None

import time
from typing import Callable, List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.line_booking.app.interface.i_kv_store import IKvStore
from src.service.line_booking.domain.candidate_extractor import extract_reservation
from src.service.line_booking.domain.entity.reservation_entity import Reservation
from src.service.line_booking.domain.reservation_query import (
    ReservationFilter,
    sort_reservations,
)
from src.service.line_booking.domain.value_object.booking_time import utc_now


class ListReservationsUseCase:
    """
    Reservation Query Engine

    Scans the whole keyspace, turns each stored value into at most one canonical
    reservation, filters by date and sorts by `{date}T{start}`. Values that do not
    normalize are skipped silently. Read-only.
    """

    def __init__(self, *, kv_store: IKvStore, now: Callable = utc_now) -> None:
        self.kv_store = kv_store
        self.now = now
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        kv_store: IKvStore = Depends(Provide[Container.kv_store]),
    ) -> Self:
        return cls(kv_store=kv_store)

    @Logger.io
    async def list_reservations(
        self,
        *,
        exact_date: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> List[Reservation]:
        reservation_filter = ReservationFilter(
            exact_date=exact_date, date_from=date_from, date_to=date_to
        )
        started = time.perf_counter()

        with self.tracer.start_as_current_span(
            'use_case.list_reservations',
            attributes={
                'filter.date': exact_date or '',
                'filter.from': date_from or '',
                'filter.to': date_to or '',
            },
        ):
            keys = await self.kv_store.list_keys()
            normalized: List[Reservation] = []
            for key in keys:
                raw = await self.kv_store.get_json(key=key)
                match = extract_reservation(raw, key, now=self.now)
                if match is not None:
                    normalized.append(match.reservation)

            reservations = sort_reservations(r for r in normalized if reservation_filter.matches(r))

        metrics.record_listing(
            normalized=len(normalized),
            dropped=len(keys) - len(normalized),
            duration=time.perf_counter() - started,
        )
        Logger.base.info(
            f'📋 [LIST] scanned={len(keys)} normalized={len(normalized)} '
            f'returned={len(reservations)}'
        )
        return reservations

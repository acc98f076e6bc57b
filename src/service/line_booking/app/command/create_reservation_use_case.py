from typing import Any, Callable, Dict, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.line_booking.app.interface.i_kv_store import IKvStore
from src.service.line_booking.app.query.list_slots_use_case import ListSlotsUseCase
from src.service.line_booking.domain.entity.reservation_entity import ReservationRecord
from src.service.line_booking.domain.key_str_generator import (
    date_of_generated_slot_id,
    make_reservation_key,
)
from src.service.line_booking.domain.value_object.booking_time import utc_now


class CreateReservationUseCase:
    """
    Create reservation

    Flow:
    1. Validate slotId (before any write)
    2. Resolve the booking date: explicit date, else the one embedded in a generated slot id
    3. Copy start/end of the slot when the registry knows it
    4. Persist `resv:{id}` with the retention window as expiry

    There is no capacity check and `remaining` is never decremented.
    """

    def __init__(
        self,
        *,
        kv_store: IKvStore,
        slot_registry: ListSlotsUseCase,
        id_factory: Callable[[], str] = lambda: str(uuid_utils.uuid7()),
        now: Callable = utc_now,
    ) -> None:
        self.kv_store = kv_store
        self.slot_registry = slot_registry
        self.id_factory = id_factory
        self.now = now
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        kv_store: IKvStore = Depends(Provide[Container.kv_store]),
    ) -> Self:
        return cls(kv_store=kv_store, slot_registry=ListSlotsUseCase(kv_store=kv_store))

    @Logger.io
    async def create_reservation(
        self,
        *,
        slot_id: str,
        menu_id: Optional[str] = None,
        source: Optional[str] = None,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        note: Optional[str] = None,
        date: Optional[str] = None,
    ) -> Dict[str, Any]:
        slot_id = (slot_id or '').strip()
        if not slot_id:
            raise DomainError('slotId is required', 400)

        reservation_id = self.id_factory()
        with self.tracer.start_as_current_span(
            'use_case.create_reservation',
            attributes={'reservation.id': reservation_id, 'slot.id': slot_id},
        ):
            booking_date = (date or '').strip() or date_of_generated_slot_id(slot_id) or ''
            start = end = ''
            if booking_date:
                # Unknown slots are accepted; start/end stay empty
                slot = await self.slot_registry.find_slot(date=booking_date, slot_id=slot_id)
                if slot is not None:
                    start, end = slot.start, slot.end

            record = ReservationRecord.create(
                id=reservation_id,
                slot_id=slot_id,
                date=booking_date,
                start=start,
                end=end,
                name=name,
                source=source,
                menu_id=menu_id,
                phone=phone,
                note=note,
                default_name=settings.DEFAULT_GUEST_NAME,
                default_source=settings.DEFAULT_RESERVATION_SOURCE,
                created_at=self.now(),
            )
            data = record.to_dict()

            await self.kv_store.put(
                key=make_reservation_key(reservation_id=reservation_id),
                value=data,
                expiration_seconds=settings.RESERVATION_TTL_SECONDS,
            )
            metrics.record_reservation_created(source=record.source)
            Logger.base.info(
                f'📝 [RESERVE] {reservation_id} slot={slot_id} date={booking_date or "-"} '
                f'source={record.source}'
            )
            return data

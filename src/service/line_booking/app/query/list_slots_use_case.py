from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.line_booking.app.interface.i_kv_store import IKvStore
from src.service.line_booking.domain.entity.slot_entity import Slot, parse_slot_list
from src.service.line_booking.domain.key_str_generator import make_slots_key
from src.service.line_booking.domain.slot_schedule import generate_fallback_slots
from src.service.line_booking.domain.value_object.booking_time import is_valid_date_str


class ListSlotsUseCase:
    """
    Slots of a day: the persisted list under `slots:{date}` when it is well-formed,
    otherwise the fixed daily schedule. Never writes back.
    """

    def __init__(self, *, kv_store: IKvStore) -> None:
        self.kv_store = kv_store
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        kv_store: IKvStore = Depends(Provide[Container.kv_store]),
    ) -> Self:
        return cls(kv_store=kv_store)

    @Logger.io
    async def list_slots(self, *, date: str) -> List[Slot]:
        if not is_valid_date_str(date):
            raise DomainError('bad date', 400)

        with self.tracer.start_as_current_span(
            'use_case.list_slots', attributes={'booking.date': date}
        ):
            persisted = parse_slot_list(await self.kv_store.get_json(key=make_slots_key(date=date)))
            if persisted is not None:
                metrics.record_slot_resolution(origin='persisted')
                return persisted

            metrics.record_slot_resolution(origin='generated')
            return generate_fallback_slots(date, tz_name=settings.BOOKING_TIMEZONE)

    async def find_slot(self, *, date: str, slot_id: str) -> Slot | None:
        for slot in await self.list_slots(date=date):
            if slot.id == slot_id:
                return slot
        return None

from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.line_booking.app.interface.i_kv_store import IKvStore
from src.service.line_booking.domain.entity.slot_entity import Slot, slots_to_dicts
from src.service.line_booking.domain.key_str_generator import make_slots_key
from src.service.line_booking.domain.value_object.booking_time import is_valid_date_str


class SetSlotsUseCase:
    def __init__(self, *, kv_store: IKvStore) -> None:
        self.kv_store = kv_store

    @classmethod
    @inject
    def depends(
        cls,
        kv_store: IKvStore = Depends(Provide[Container.kv_store]),
    ) -> Self:
        return cls(kv_store=kv_store)

    @Logger.io
    async def set_slots(self, *, date: str, slots: List[Slot]) -> List[Slot]:
        """Publish the slot list of a day; replaces whatever was persisted before."""
        if not is_valid_date_str(date):
            raise DomainError('bad date', 400)

        seen: set[str] = set()
        for slot in slots:
            if not slot.id.strip():
                raise DomainError('slot id is required', 400)
            if slot.id in seen:
                raise DomainError(f'duplicate slot id: {slot.id}', 400)
            if slot.capacity < 1:
                raise DomainError(f'capacity must be at least 1: {slot.id}', 400)
            if not 0 <= slot.remaining <= slot.capacity:
                raise DomainError(f'remaining must be between 0 and capacity: {slot.id}', 400)
            seen.add(slot.id)

        # Slot lists are operator-managed and never expire
        await self.kv_store.put(key=make_slots_key(date=date), value=slots_to_dicts(slots))
        Logger.base.info(f'🗓 [SLOTS] Published {len(slots)} slots for {date}')
        return slots

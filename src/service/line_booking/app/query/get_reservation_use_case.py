from typing import Any, Dict, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
import orjson

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.line_booking.app.interface.i_kv_store import IKvStore
from src.service.line_booking.domain.key_str_generator import make_reservation_key


class GetReservationUseCase:
    def __init__(self, *, kv_store: IKvStore) -> None:
        self.kv_store = kv_store

    @classmethod
    @inject
    def depends(
        cls,
        kv_store: IKvStore = Depends(Provide[Container.kv_store]),
    ) -> Self:
        return cls(kv_store=kv_store)

    async def find_reservation(self, *, reservation_id: str) -> Optional[Dict[str, Any]]:
        """Stored record of `resv:{id}`; None when absent, expired or not a JSON object."""
        text = await self.kv_store.get_text(key=make_reservation_key(reservation_id=reservation_id))
        if text is None:
            return None
        try:
            record = orjson.loads(text)
        except orjson.JSONDecodeError:
            Logger.base.warning(f'⚠️ [RESERVATION] {reservation_id} holds unparseable text')
            return None
        return record if isinstance(record, dict) else None

    @Logger.io
    async def get_reservation(self, *, reservation_id: str) -> Dict[str, Any]:
        reservation_id = (reservation_id or '').strip()
        if not reservation_id:
            raise DomainError('reservation id is required', 400)

        record = await self.find_reservation(reservation_id=reservation_id)
        if record is None:
            raise NotFoundError('not found')
        return record

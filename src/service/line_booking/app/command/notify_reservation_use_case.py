from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.line_booking.app.interface.i_kv_store import IKvStore
from src.service.line_booking.app.interface.i_reservation_notifier import IReservationNotifier
from src.service.line_booking.app.query.get_reservation_use_case import GetReservationUseCase
from src.service.line_booking.domain.reservation_message import build_reservation_message


class NotifyReservationUseCase:
    """Send the confirmation of a persisted reservation through the notifier."""

    def __init__(
        self,
        *,
        reservation_query: GetReservationUseCase,
        notifier: IReservationNotifier,
    ) -> None:
        self.reservation_query = reservation_query
        self.notifier = notifier

    @classmethod
    @inject
    def depends(
        cls,
        kv_store: IKvStore = Depends(Provide[Container.kv_store]),
        notifier: IReservationNotifier = Depends(Provide[Container.reservation_notifier]),
    ) -> Self:
        return cls(reservation_query=GetReservationUseCase(kv_store=kv_store), notifier=notifier)

    @Logger.io
    async def notify(self, *, reserve_id: str) -> None:
        reserve_id = (reserve_id or '').strip()
        if not reserve_id:
            raise DomainError('reserveId is required', 400)

        record = await self.reservation_query.find_reservation(reservation_id=reserve_id)
        if record is None:
            raise NotFoundError('not found')

        message = build_reservation_message(record, tz_name=settings.BOOKING_TIMEZONE)
        # NotifierError propagates; the reservation itself is left untouched
        await self.notifier.notify(message=message)
        Logger.base.info(f'✅ [NOTIFY] {reserve_id} sent via {self.notifier.channel}')

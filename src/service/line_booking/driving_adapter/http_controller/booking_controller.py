from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import NotifierError
from src.platform.logging.loguru_io import Logger
from src.service.line_booking.app.command.create_reservation_use_case import (
    CreateReservationUseCase,
)
from src.service.line_booking.app.command.notify_reservation_use_case import (
    NotifyReservationUseCase,
)
from src.service.line_booking.app.query.get_reservation_use_case import GetReservationUseCase
from src.service.line_booking.app.query.list_slots_use_case import ListSlotsUseCase
from src.service.line_booking.driving_adapter.http_controller.schema.booking_schema import (
    NotifyRequest,
    NotifyResponse,
    ReserveRequest,
    ReserveResponse,
    SlotListResponse,
    SlotResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('/slots', response_model=SlotListResponse)
@Logger.io
async def list_slots(
    date: str = Query(default='', description='YYYY-MM-DD'),
    use_case: ListSlotsUseCase = Depends(ListSlotsUseCase.depends),
) -> SlotListResponse:
    slots = await use_case.list_slots(date=date)
    return SlotListResponse(
        slots=[SlotResponse.from_slot(slot, tz_name=settings.BOOKING_TIMEZONE) for slot in slots]
    )


@router.post('/reserve', status_code=status.HTTP_200_OK, response_model=ReserveResponse)
@Logger.io
async def reserve(
    request: ReserveRequest,
    use_case: CreateReservationUseCase = Depends(CreateReservationUseCase.depends),
) -> ReserveResponse:
    with tracer.start_as_current_span('controller.reserve') as span:
        span.set_attribute('slot_id', request.slot_id)
        record = await use_case.create_reservation(
            slot_id=request.slot_id,
            menu_id=request.menu_id,
            source=request.source,
            name=request.name,
            phone=request.phone,
            note=request.note,
            date=request.date,
        )
        return ReserveResponse(id=record['id'], reservation=record)


@router.get('/reservations/{reservation_id}')
@Logger.io
async def get_reservation(
    reservation_id: str,
    use_case: GetReservationUseCase = Depends(GetReservationUseCase.depends),
) -> dict:
    return await use_case.get_reservation(reservation_id=reservation_id)


@router.post('/notify', response_model=NotifyResponse)
@Logger.io
async def notify(
    request: NotifyRequest,
    use_case: NotifyReservationUseCase = Depends(NotifyReservationUseCase.depends),
):
    try:
        await use_case.notify(reserve_id=request.reserve_id or '')
    except NotifierError as e:
        # Delivery failure never affects the reservation
        Logger.base.error(f'❌ [NOTIFY] {request.reserve_id}: {e.message}')
        return JSONResponse(status_code=e.status_code, content={'ok': False})
    return NotifyResponse(ok=True)

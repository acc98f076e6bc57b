from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.platform.logging.loguru_io import Logger
from src.service.line_booking.app.command.set_slots_use_case import SetSlotsUseCase
from src.service.line_booking.app.query.dump_kv_use_case import DumpKvUseCase
from src.service.line_booking.app.query.list_reservations_use_case import (
    ListReservationsUseCase,
)
from src.service.line_booking.domain.entity.slot_entity import slots_to_dicts
from src.service.line_booking.driving_adapter.http_controller.schema.booking_schema import (
    KvDumpResponse,
    KvItem,
    ReservationListResponse,
    SetSlotsRequest,
    SetSlotsResponse,
)


router = APIRouter()


@router.get('/reservations', response_model=ReservationListResponse)
@Logger.io
async def list_reservations(
    date: Optional[str] = Query(default=None, description='exact YYYY-MM-DD'),
    date_from: Optional[str] = Query(default=None, alias='from'),
    date_to: Optional[str] = Query(default=None, alias='to'),
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> ReservationListResponse:
    reservations = await use_case.list_reservations(
        exact_date=date, date_from=date_from, date_to=date_to
    )
    return ReservationListResponse(
        reservations=[r.to_dict() for r in reservations],
        count=len(reservations),
        prefix=None,
    )


@router.get('/kv-dump', response_model=KvDumpResponse)
@Logger.io
async def kv_dump(
    prefix: str = '',
    use_case: DumpKvUseCase = Depends(DumpKvUseCase.depends),
) -> KvDumpResponse:
    items = await use_case.dump(prefix=prefix)
    return KvDumpResponse(
        count=len(items),
        prefix=prefix or None,
        items=[KvItem(**item) for item in items],
    )


@router.put('/slots/{date}', response_model=SetSlotsResponse)
@Logger.io
async def set_slots(
    date: str,
    request: SetSlotsRequest,
    use_case: SetSlotsUseCase = Depends(SetSlotsUseCase.depends),
) -> SetSlotsResponse:
    slots = await use_case.set_slots(date=date, slots=[s.to_slot() for s in request.slots])
    return SetSlotsResponse(date=date, slots=slots_to_dicts(slots))

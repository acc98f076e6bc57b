from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.service.line_booking.domain.entity.slot_entity import Slot
from src.service.line_booking.domain.value_object.booking_time import format_time_label


class SlotResponse(BaseModel):
    # Persisted slots may carry fields this service does not model; they pass through
    model_config = ConfigDict(extra='allow')

    id: str
    start: str
    end: str
    capacity: int
    remaining: int
    label: str

    @classmethod
    def from_slot(cls, slot: Slot, *, tz_name: str) -> 'SlotResponse':
        return cls(
            **slot.to_dict(),
            label=format_time_label(slot.start, slot.end, tz_name=tz_name),
        )


class SlotListResponse(BaseModel):
    slots: List[SlotResponse]


class SlotInput(BaseModel):
    model_config = ConfigDict(
        extra='allow',
        json_schema_extra={
            'example': {
                'id': 'S-2025-11-17-1',
                'start': '2025-11-17T01:00:00.000Z',
                'end': '2025-11-17T02:00:00.000Z',
                'capacity': 2,
                'remaining': 2,
            }
        },
    )

    id: str = Field(min_length=1)
    start: str
    end: str
    capacity: int = 1
    remaining: Optional[int] = None  # defaults to capacity

    def to_slot(self) -> Slot:
        return Slot(
            id=self.id,
            start=self.start,
            end=self.end,
            capacity=self.capacity,
            remaining=self.capacity if self.remaining is None else self.remaining,
            extra={k: v for k, v in (self.model_extra or {}).items() if k != 'label'},
        )


class SetSlotsRequest(BaseModel):
    slots: List[SlotInput]


class SetSlotsResponse(BaseModel):
    ok: bool = True
    date: str
    slots: List[Dict[str, Any]]


class ReserveRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'slotId': 'S-2025-11-17-1',
                'name': '山田 太郎',
                'phone': '090-0000-0000',
                'note': '初回です',
            }
        },
    )

    slot_id: str = Field(alias='slotId')
    menu_id: Optional[str] = Field(default=None, alias='menuId')
    source: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    note: Optional[str] = None
    date: Optional[str] = None


class ReserveResponse(BaseModel):
    ok: bool = True
    id: str
    reservation: Dict[str, Any]


class NotifyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reserve_id: Optional[str] = Field(default=None, alias='reserveId')


class NotifyResponse(BaseModel):
    ok: bool


class ReservationListResponse(BaseModel):
    reservations: List[Dict[str, Any]]
    count: int
    prefix: Optional[str] = None


class KvItem(BaseModel):
    key: str
    value: Any = None


class KvDumpResponse(BaseModel):
    count: int
    prefix: Optional[str] = None
    items: List[KvItem]

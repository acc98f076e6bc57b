from typing import Any, Dict, List, Optional, Sequence

import attrs


@attrs.define(frozen=True)
class Slot:
    id: str
    start: str  # ISO
    end: str  # ISO
    capacity: int = 1
    remaining: int = 1
    # Fields of a persisted slot this service does not model, kept for the caller
    extra: Dict[str, Any] = attrs.field(factory=dict, eq=False)

    @classmethod
    def from_dict(cls, data: Any) -> Optional['Slot']:
        """Build from a persisted slot object; None when it is not slot-shaped."""
        if not isinstance(data, dict):
            return None

        slot_id = data.get('id', data.get('slotId'))
        start, end = data.get('start'), data.get('end')
        if not isinstance(slot_id, str | int) or isinstance(slot_id, bool):
            return None
        if not isinstance(start, str) or not isinstance(end, str):
            return None

        capacity = data.get('capacity', 1)
        remaining = data.get('remaining', capacity)
        if not _is_int(capacity) or not _is_int(remaining):
            return None

        known = {'id', 'slotId', 'start', 'end', 'capacity', 'remaining', 'label'}
        return cls(
            id=str(slot_id),
            start=start,
            end=end,
            capacity=capacity,
            remaining=remaining,
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            'id': self.id,
            'start': self.start,
            'end': self.end,
            'capacity': self.capacity,
            'remaining': self.remaining,
        }


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_slot_list(raw: Any) -> Optional[List[Slot]]:
    """A persisted slot list is well-formed only when every item is slot-shaped."""
    if not isinstance(raw, list):
        return None
    slots: List[Slot] = []
    for item in raw:
        slot = Slot.from_dict(item)
        if slot is None:
            return None
        slots.append(slot)
    return slots


def slots_to_dicts(slots: Sequence[Slot]) -> List[Dict[str, Any]]:
    return [slot.to_dict() for slot in slots]

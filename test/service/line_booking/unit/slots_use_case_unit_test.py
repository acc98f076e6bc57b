"""
Unit tests for ListSlotsUseCase and SetSlotsUseCase

Test Coverage:
1. Persisted slot list is returned unchanged
2. Malformed or absent list falls back to the fixed schedule (read-only)
3. Slot publishing validation and persistence without expiry
"""

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.line_booking.app.command.set_slots_use_case import SetSlotsUseCase
from src.service.line_booking.app.query.list_slots_use_case import ListSlotsUseCase
from src.service.line_booking.domain.entity.slot_entity import Slot
from test.service.line_booking.fake_kv_store import FakeKvStore


pytestmark = pytest.mark.unit


class TestListSlots:
    def setup_method(self):
        self.kv_store = FakeKvStore()
        self.use_case = ListSlotsUseCase(kv_store=self.kv_store)

    @pytest.mark.asyncio
    async def test_persisted_slots_win(self):
        # Given
        persisted = [
            {'id': 'X-1', 'start': 's1', 'end': 'e1', 'capacity': 4, 'remaining': 2},
            {'id': 'X-2', 'start': 's2', 'end': 'e2', 'capacity': 1, 'remaining': 0},
        ]
        self.kv_store.seed('slots:2025-11-17', persisted)

        # When
        slots = await self.use_case.list_slots(date='2025-11-17')

        # Then
        assert [s.to_dict() for s in slots] == persisted

    @pytest.mark.asyncio
    async def test_fallback_when_absent(self):
        slots = await self.use_case.list_slots(date='2025-11-17')

        assert [s.id for s in slots] == ['S-2025-11-17-1', 'S-2025-11-17-2', 'S-2025-11-17-3']
        assert all(s.capacity == 1 and s.remaining == 1 for s in slots)

    @pytest.mark.asyncio
    @pytest.mark.parametrize('value', [{'id': 'X'}, 'not json', [{'id': 'X-1'}]])
    async def test_fallback_when_malformed(self, value):
        self.kv_store.seed('slots:2025-11-17', value)

        slots = await self.use_case.list_slots(date='2025-11-17')

        assert slots[0].id == 'S-2025-11-17-1'

    @pytest.mark.asyncio
    async def test_never_writes(self):
        await self.use_case.list_slots(date='2025-11-17')

        assert self.kv_store.data == {}

    @pytest.mark.asyncio
    async def test_bad_date(self):
        with pytest.raises(DomainError, match='bad date'):
            await self.use_case.list_slots(date='tomorrow')

    @pytest.mark.asyncio
    async def test_find_slot(self):
        slot = await self.use_case.find_slot(date='2025-11-17', slot_id='S-2025-11-17-2')

        assert slot is not None
        assert slot.start == '2025-11-17T03:00:00.000Z'
        assert await self.use_case.find_slot(date='2025-11-17', slot_id='nope') is None


class TestSetSlots:
    def setup_method(self):
        self.kv_store = FakeKvStore()
        self.use_case = SetSlotsUseCase(kv_store=self.kv_store)

    @pytest.mark.asyncio
    async def test_persists_without_expiry(self):
        slots = [Slot(id='X-1', start='s', end='e', capacity=2, remaining=1)]

        await self.use_case.set_slots(date='2025-11-17', slots=slots)

        assert self.kv_store.expirations['slots:2025-11-17'] is None
        listed = await ListSlotsUseCase(kv_store=self.kv_store).list_slots(date='2025-11-17')
        assert listed == slots

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'slot,message',
        [
            (Slot(id=' ', start='s', end='e'), 'slot id is required'),
            (Slot(id='X', start='s', end='e', capacity=0, remaining=0), 'capacity'),
            (Slot(id='X', start='s', end='e', capacity=1, remaining=2), 'remaining'),
            (Slot(id='X', start='s', end='e', capacity=1, remaining=-1), 'remaining'),
        ],
    )
    async def test_invalid_slot(self, slot, message):
        with pytest.raises(DomainError, match=message):
            await self.use_case.set_slots(date='2025-11-17', slots=[slot])

        assert self.kv_store.data == {}

    @pytest.mark.asyncio
    async def test_duplicate_ids(self):
        slot = Slot(id='X', start='s', end='e')

        with pytest.raises(DomainError, match='duplicate'):
            await self.use_case.set_slots(date='2025-11-17', slots=[slot, slot])

    @pytest.mark.asyncio
    async def test_bad_date(self):
        with pytest.raises(DomainError, match='bad date'):
            await self.use_case.set_slots(date='2025-11', slots=[])

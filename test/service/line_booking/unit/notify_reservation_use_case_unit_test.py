from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import DomainError, NotFoundError, NotifierError
from src.service.line_booking.app.command.notify_reservation_use_case import (
    NotifyReservationUseCase,
)
from src.service.line_booking.app.query.get_reservation_use_case import GetReservationUseCase
from test.service.line_booking.fake_kv_store import FakeKvStore


pytestmark = pytest.mark.unit

RECORD = {
    'id': 'r-1',
    'slotId': 'S-2025-11-17-1',
    'date': '2025-11-17',
    'start': '2025-11-17T01:00:00.000Z',
    'end': '2025-11-17T02:00:00.000Z',
    'name': 'Taro',
    'source': 'line',
    'createdAt': '2025-11-10T00:00:00.000Z',
    'status': 'reserved',
}


class TestNotifyReservation:
    def setup_method(self):
        self.kv_store = FakeKvStore()
        self.kv_store.seed('resv:r-1', RECORD)
        self.notifier = AsyncMock()
        self.notifier.channel = 'mock'
        self.use_case = NotifyReservationUseCase(
            reservation_query=GetReservationUseCase(kv_store=self.kv_store),
            notifier=self.notifier,
        )

    @pytest.mark.asyncio
    async def test_sends_confirmation(self):
        await self.use_case.notify(reserve_id='r-1')

        self.notifier.notify.assert_awaited_once()
        message = self.notifier.notify.await_args.kwargs['message']
        assert 'Taro' in message
        assert '2025-11-17 10:00〜11:00' in message
        assert 'r-1' in message

    @pytest.mark.asyncio
    async def test_missing_id(self):
        with pytest.raises(DomainError):
            await self.use_case.notify(reserve_id='')

        self.notifier.notify.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_id(self):
        with pytest.raises(NotFoundError):
            await self.use_case.notify(reserve_id='nope')

        self.notifier.notify.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_notifier_failure_leaves_reservation_untouched(self):
        self.notifier.notify.side_effect = NotifierError('LINE Notify answered 500')
        before = dict(self.kv_store.data)

        with pytest.raises(NotifierError):
            await self.use_case.notify(reserve_id='r-1')

        assert self.kv_store.data == before

from urllib.parse import parse_qs

import httpx
import pytest

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import NotifierError
from src.service.line_booking.driven_adapter.notifier.line_notifier_impl import LineNotifierImpl


pytestmark = pytest.mark.unit

ENDPOINT = 'https://notify.example.test/api/notify'


def make_notifier(handler, *, token: str = 'secret-token') -> LineNotifierImpl:
    return LineNotifierImpl(
        settings=Settings(LINE_NOTIFY_ENDPOINT=ENDPOINT, LINE_NOTIFY_TOKEN=token),  # type: ignore[arg-type]
        transport=httpx.MockTransport(handler),
    )


class TestLineNotifier:
    @pytest.mark.asyncio
    async def test_posts_form_with_bearer_token(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={'status': 200, 'message': 'ok'})

        await make_notifier(handler).notify(message='ご予約ありがとうございます')

        assert len(requests) == 1
        request = requests[0]
        assert str(request.url) == ENDPOINT
        assert request.method == 'POST'
        assert request.headers['Authorization'] == 'Bearer secret-token'
        assert parse_qs(request.content.decode()) == {'message': ['ご予約ありがとうございます']}

    @pytest.mark.asyncio
    async def test_non_success_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={'status': 401, 'message': 'Invalid access token'})

        with pytest.raises(NotifierError, match='401'):
            await make_notifier(handler).notify(message='hi')

    @pytest.mark.asyncio
    async def test_transport_failure_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError('connection refused', request=request)

        with pytest.raises(NotifierError) as exc_info:
            await make_notifier(handler).notify(message='hi')

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_missing_token_skips_request(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200)

        with pytest.raises(NotifierError, match='not configured'):
            await make_notifier(handler, token='').notify(message='hi')

        assert requests == []

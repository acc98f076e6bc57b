"""
LINE Notify Implementation

Posts the rendered message as form data to the LINE Notify endpoint with a bearer
token. Any non-2xx answer or transport failure surfaces as NotifierError.
"""

from typing import Optional

import httpx
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import NotifierError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.line_booking.app.interface.i_reservation_notifier import IReservationNotifier


class LineNotifierImpl(IReservationNotifier):
    channel = 'line_notify'

    def __init__(
        self,
        *,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.endpoint = settings.LINE_NOTIFY_ENDPOINT
        self.token = settings.LINE_NOTIFY_TOKEN
        self.timeout = settings.LINE_NOTIFY_TIMEOUT_SECONDS
        self.transport = transport
        self.tracer = trace.get_tracer(__name__)

    async def notify(self, *, message: str) -> None:
        token = self.token.get_secret_value()
        if not token:
            metrics.record_notification(channel=self.channel, success=False)
            raise NotifierError('LINE_NOTIFY_TOKEN is not configured')

        with self.tracer.start_as_current_span(
            'notifier.line_notify',
            attributes={'http.url': self.endpoint, 'message.length': len(message)},
        ):
            try:
                async with httpx.AsyncClient(
                    timeout=self.timeout, transport=self.transport
                ) as client:
                    response = await client.post(
                        self.endpoint,
                        data={'message': message},
                        headers={'Authorization': f'Bearer {token}'},
                    )
            except httpx.HTTPError as e:
                metrics.record_notification(channel=self.channel, success=False)
                Logger.base.error(f'❌ [NOTIFY] LINE Notify unreachable: {e!r}')
                raise NotifierError(f'LINE Notify request failed: {e}') from e

            if not response.is_success:
                metrics.record_notification(channel=self.channel, success=False)
                Logger.base.error(
                    f'❌ [NOTIFY] LINE Notify answered {response.status_code}: {response.text[:200]}'
                )
                raise NotifierError(f'LINE Notify answered {response.status_code}')

            metrics.record_notification(channel=self.channel, success=True)
            Logger.base.info(f'📨 [NOTIFY] LINE Notify delivered ({len(message)} chars)')

import pytest

from src.platform.logging.loguru_io_config import _parse_http_status_level


pytestmark = pytest.mark.unit


class TestParseHttpStatusLevel:
    @pytest.mark.parametrize(
        'status, level',
        [
            (200, 'SUCCESS'),
            (201, 'SUCCESS'),
            (301, 'WARNING'),
            (404, 'ERROR'),
            (422, 'ERROR'),
            (503, 'CRITICAL'),
            (101, 'INFO'),
        ],
    )
    def test_access_line_maps_status_to_level(self, status, level):
        message = f'127.0.0.1 - "POST /line/reservations HTTP/1.1" - {status} - 8ms'

        assert _parse_http_status_level(message) == level

    @pytest.mark.parametrize(
        'message',
        [
            '✅ [LINE Booking] Ready to serve requests',
            'Listening at: http://0.0.0.0:8100',
            '127.0.0.1 - "GET /health HTTP/1.1" 200 8ms',
            '127.0.0.1 - "GET /health HTTP/1.1" - abc - 8ms',
        ],
    )
    def test_other_lines_have_no_http_level(self, message):
        assert _parse_http_status_level(message) is None
